"""Student administration and self-service profile schemas."""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.core.schemas import CamelModel


def _non_blank_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


class StudentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    registration_number: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=255)
    semester: int = Field(..., ge=1, le=8, description="Semester must be a valid number between 1 and 8")
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _non_blank_name(v)


class StudentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    registration_number: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=255)
    semester: Optional[int] = Field(None, ge=1, le=8)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return _non_blank_name(v)


class ProfileUpdate(CamelModel):
    """Fields a student may change on their own profile."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return _non_blank_name(v)
