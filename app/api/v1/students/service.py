"""Student records: admin CRUD and self-service profile."""

import logging
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.auth.schemas import UserInfo
from app.auth.security import hash_password
from app.auth.services import (
    duplicate_field_error,
    ensure_unique_user_fields,
    normalize_email,
    normalize_registration_number,
    user_to_info,
)
from app.core.enums import UserRole
from app.core.exceptions import NotFoundError
from app.core.models import Fee, Payment

from .schemas import ProfileUpdate, StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


async def get_student_or_404(db: AsyncSession, student_id: UUID) -> User:
    student = await db.get(User, student_id)
    if not student or student.role != UserRole.STUDENT.value:
        raise NotFoundError("Student not found")
    return student


async def list_students(db: AsyncSession) -> List[UserInfo]:
    result = await db.execute(
        select(User)
        .where(User.role == UserRole.STUDENT.value)
        .order_by(User.created_at.desc())
    )
    return [user_to_info(u) for u in result.scalars().all()]


async def get_student(db: AsyncSession, student_id: UUID) -> UserInfo:
    return user_to_info(await get_student_or_404(db, student_id))


async def create_student(db: AsyncSession, payload: StudentCreate) -> UserInfo:
    email = normalize_email(payload.email)
    registration_number = normalize_registration_number(payload.registration_number)
    await ensure_unique_user_fields(db, email, registration_number)

    student = User(
        name=payload.name,
        email=email,
        password_hash=hash_password(payload.password),
        role=UserRole.STUDENT.value,
        registration_number=registration_number,
        course=payload.course,
        semester=payload.semester,
        phone=payload.phone,
        address=payload.address,
    )
    db.add(student)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise duplicate_field_error(e) from e
    await db.refresh(student)
    logger.info("Created student %s (%s)", student.id, student.email)
    return user_to_info(student)


async def _apply_user_update(
    db: AsyncSession,
    user: User,
    payload: Union[StudentUpdate, ProfileUpdate],
) -> UserInfo:
    changes = payload.model_dump(exclude_unset=True)
    email: Optional[str] = None
    registration_number: Optional[str] = None
    if changes.get("email") is not None:
        email = changes["email"] = normalize_email(changes["email"])
    if "registration_number" in changes:
        registration_number = changes["registration_number"] = normalize_registration_number(
            changes["registration_number"]
        )
    await ensure_unique_user_fields(db, email, registration_number, exclude_user_id=user.id)

    for field, value in changes.items():
        # Required columns cannot be cleared by sending null
        if value is None and field in ("name", "email", "semester"):
            continue
        setattr(user, field, value)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise duplicate_field_error(e) from e
    await db.refresh(user)
    return user_to_info(user)


async def update_student(db: AsyncSession, student_id: UUID, payload: StudentUpdate) -> UserInfo:
    student = await get_student_or_404(db, student_id)
    return await _apply_user_update(db, student, payload)


async def update_profile(db: AsyncSession, user_id: UUID, payload: ProfileUpdate) -> UserInfo:
    student = await get_student_or_404(db, user_id)
    return await _apply_user_update(db, student, payload)


async def delete_student(db: AsyncSession, student_id: UUID) -> None:
    """Delete the student with their payments and fees in one transaction."""
    student = await get_student_or_404(db, student_id)
    await db.execute(delete(Payment).where(Payment.student_id == student.id))
    await db.execute(delete(Fee).where(Fee.student_id == student.id))
    await db.delete(student)
    await db.commit()
    logger.info("Deleted student %s with their fees and payments", student_id)
