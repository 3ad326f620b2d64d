import logging
from typing import Optional
from uuid import UUID

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.schemas import AuthResponse, LoginRequest, RegisterRequest, UserInfo
from app.auth.security import create_access_token, hash_password, verify_password
from app.core.config import settings
from app.core.enums import UserRole
from app.core.exceptions import ForbiddenError, ServiceError, ValidationError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "User with this email already exists"
DUPLICATE_REGISTRATION_NUMBER = "Registration number already in use"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_registration_number(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def user_to_info(user: User) -> UserInfo:
    return UserInfo.model_validate(user)


async def ensure_unique_user_fields(
    db: AsyncSession,
    email: Optional[str],
    registration_number: Optional[str],
    exclude_user_id: Optional[UUID] = None,
) -> None:
    """Raise ValidationError naming the field when email or registration number is taken."""
    if email:
        stmt = select(User.id).where(func.lower(User.email) == email)
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != exclude_user_id)
        if (await db.execute(stmt)).first():
            raise ValidationError(DUPLICATE_EMAIL)
    if registration_number:
        stmt = select(User.id).where(User.registration_number == registration_number)
        if exclude_user_id is not None:
            stmt = stmt.where(User.id != exclude_user_id)
        if (await db.execute(stmt)).first():
            raise ValidationError(DUPLICATE_REGISTRATION_NUMBER)


def duplicate_field_error(exc: IntegrityError) -> ServiceError:
    """Map a unique-constraint violation on users to a ValidationError naming the field."""
    detail = str(exc.orig).lower()
    if "registration_number" in detail:
        return ValidationError(DUPLICATE_REGISTRATION_NUMBER)
    if "email" in detail:
        return ValidationError(DUPLICATE_EMAIL)
    return ServiceError("Conflict while saving user", status.HTTP_409_CONFLICT)


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.role)


async def register_user(db: AsyncSession, payload: RegisterRequest) -> AuthResponse:
    if payload.role == UserRole.ADMIN and not settings.allow_admin_registration:
        raise ForbiddenError("Administrator accounts cannot be self-registered")

    email = normalize_email(payload.email)
    registration_number = normalize_registration_number(payload.registration_number)
    await ensure_unique_user_fields(db, email, registration_number)

    user = User(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
        role=payload.role.value,
        registration_number=registration_number,
        course=payload.course,
        semester=payload.semester,
        phone=payload.phone,
        address=payload.address,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise duplicate_field_error(e) from e
    await db.refresh(user)
    logger.info("Registered %s user %s", user.role, user.id)

    return AuthResponse(token=issue_token(user), user=user_to_info(user))


async def login_user(db: AsyncSession, payload: LoginRequest) -> AuthResponse:
    email = normalize_email(payload.email)
    user = (
        await db.execute(select(User).where(func.lower(User.email) == email))
    ).scalar_one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    return AuthResponse(token=issue_token(user), user=user_to_info(user))


async def get_user(db: AsyncSession, user_id: UUID) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise ServiceError("User not found", status.HTTP_404_NOT_FOUND)
    return user
