"""Shared response envelope and base model for API schemas."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serialises with camelCase keys; accepts camelCase or snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(CamelModel, Generic[T]):
    success: bool = True
    data: T


class ListResponse(CamelModel, Generic[T]):
    success: bool = True
    count: int
    data: List[T]

    @classmethod
    def of(cls, items: List[T]) -> "ListResponse[T]":
        return cls(count=len(items), data=items)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class EmptyData(BaseModel):
    """Serialises as `{}` for delete/logout responses."""


class MessageResponse(CamelModel):
    success: bool = True
    data: EmptyData = Field(default_factory=EmptyData)
