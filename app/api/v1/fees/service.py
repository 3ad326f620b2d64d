"""Fees service: assign fees to students, admin edits, student views. Status follows payments."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.api.v1.students.service import get_student_or_404
from app.auth.services import user_to_info
from app.core.enums import FeeStatus, FeeType
from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.core.models import Fee, Payment

from .resolver import refresh_fee_status, to_decimal, total_completed_payments
from .schemas import FeeCreate, FeeDetail, FeeResponse, FeeUpdate, FeeWithStudent, StudentSummary

logger = logging.getLogger(__name__)


def _fee_to_response(fee: Fee) -> FeeResponse:
    return FeeResponse.model_validate(fee)


def _fee_with_student(fee: Fee) -> FeeWithStudent:
    return FeeWithStudent(
        **FeeResponse.model_validate(fee).model_dump(),
        student=StudentSummary.model_validate(fee.student),
    )


async def get_fee_or_404(db: AsyncSession, fee_id: UUID) -> Fee:
    fee = await db.get(Fee, fee_id)
    if not fee:
        raise NotFoundError("Fee not found")
    return fee


async def get_fee_for_student(db: AsyncSession, student_id: UUID, fee_id: UUID, action: str = "access") -> Fee:
    """Load a fee on behalf of a student. Another student's fee is Forbidden, not NotFound."""
    fee = await get_fee_or_404(db, fee_id)
    if fee.student_id != student_id:
        raise ForbiddenError(f"Not authorized to {action} this fee")
    return fee


# --- Admin ---
async def create_fee(
    db: AsyncSession,
    student_id: UUID,
    payload: FeeCreate,
    created_by: Optional[UUID],
) -> FeeResponse:
    student = await get_student_or_404(db, student_id)
    fee = Fee(
        student_id=student.id,
        amount=payload.amount,
        fee_type=payload.fee_type.value,
        semester=payload.semester,
        due_date=payload.due_date,
        description=payload.description,
        status=FeeStatus.pending.value,
        created_by=created_by,
    )
    db.add(fee)
    await db.commit()
    await db.refresh(fee)
    logger.info("Created %s fee %s of %s for student %s", fee.fee_type, fee.id, fee.amount, student.id)
    return _fee_to_response(fee)


async def list_fees(
    db: AsyncSession,
    status_filter: Optional[FeeStatus] = None,
    fee_type: Optional[FeeType] = None,
    student_id: Optional[UUID] = None,
) -> List[FeeWithStudent]:
    stmt = select(Fee).options(joinedload(Fee.student))
    if status_filter is not None:
        stmt = stmt.where(Fee.status == status_filter.value)
    if fee_type is not None:
        stmt = stmt.where(Fee.fee_type == fee_type.value)
    if student_id is not None:
        stmt = stmt.where(Fee.student_id == student_id)
    stmt = stmt.order_by(Fee.created_at.desc())
    result = await db.execute(stmt)
    return [_fee_with_student(f) for f in result.scalars().all()]


async def get_fee_detail(db: AsyncSession, fee_id: UUID) -> FeeDetail:
    fee = (
        await db.execute(select(Fee).options(joinedload(Fee.student)).where(Fee.id == fee_id))
    ).scalar_one_or_none()
    if not fee:
        raise NotFoundError("Fee not found")
    amount_paid = await total_completed_payments(db, fee.id)
    return FeeDetail(
        **FeeResponse.model_validate(fee).model_dump(),
        student=user_to_info(fee.student),
        amount_paid=amount_paid,
        balance=max(to_decimal(fee.amount) - amount_paid, to_decimal(0)),
    )


async def update_fee(db: AsyncSession, fee_id: UUID, payload: FeeUpdate) -> FeeResponse:
    fee = await get_fee_or_404(db, fee_id)
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field != "description":
            continue
        if field == "fee_type":
            value = value.value
        setattr(fee, field, value)
    # Amount may have moved relative to what has been paid
    old_status = fee.status
    new_status = await refresh_fee_status(db, fee)
    await db.commit()
    await db.refresh(fee)
    logger.info("Updated fee %s (%s); status %s -> %s", fee.id, ", ".join(changes) or "no fields", old_status, new_status.value)
    return _fee_to_response(fee)


async def delete_fee(db: AsyncSession, fee_id: UUID) -> None:
    fee = await get_fee_or_404(db, fee_id)
    has_payments = (
        await db.execute(select(Payment.id).where(Payment.fee_id == fee.id).limit(1))
    ).first()
    if has_payments:
        raise ValidationError("Cannot delete a fee that has payments recorded against it")
    await db.delete(fee)
    await db.commit()
    logger.info("Deleted fee %s", fee_id)


# --- Student ---
async def list_student_fees(db: AsyncSession, student_id: UUID) -> List[FeeResponse]:
    result = await db.execute(
        select(Fee).where(Fee.student_id == student_id).order_by(Fee.due_date, Fee.created_at)
    )
    return [_fee_to_response(f) for f in result.scalars().all()]


async def get_student_fee(db: AsyncSession, student_id: UUID, fee_id: UUID) -> FeeResponse:
    return _fee_to_response(await get_fee_for_student(db, student_id, fee_id))
