from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.core.enums import UserRole
from app.core.schemas import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.STUDENT
    registration_number: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=255)
    semester: Optional[int] = Field(None, ge=1, le=8)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserInfo(CamelModel):
    """Public view of a user. Never carries the password hash."""

    id: UUID
    name: str
    email: EmailStr
    role: UserRole
    registration_number: Optional[str] = None
    course: Optional[str] = None
    semester: Optional[int] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    user: UserInfo


class CurrentUser(CamelModel):
    """Lightweight representation of the authenticated user for role checks."""

    id: UUID
    name: str
    email: str
    role: UserRole
