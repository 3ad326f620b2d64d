"""Payments service: record payments against fees, payment history, receipts."""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.api.v1.fees.resolver import refresh_fee_status
from app.api.v1.fees.service import get_fee_for_student, get_fee_or_404
from app.core.enums import PaymentStatus
from app.core.exceptions import ForbiddenError, NotFoundError, ServerError
from app.core.models import Fee, Payment

from .receipt import allocate_receipt_number
from .schemas import (
    PaymentCreate,
    PaymentResponse,
    PaymentWithFee,
    PaymentWithStudentAndFee,
    ReceiptResponse,
)

logger = logging.getLogger(__name__)


async def record_payment(
    db: AsyncSession,
    fee_id: UUID,
    payload: PaymentCreate,
    recorded_by: Optional[UUID],
) -> PaymentResponse:
    """
    Insert the payment and re-derive the fee status in a single transaction.
    The fee row is locked (where the backend supports it) so concurrent payments
    against the same fee see each other's amounts.
    """
    fee = (
        await db.execute(
            select(Fee)
            .where(Fee.id == fee_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
    ).scalar_one_or_none()
    if not fee:
        raise NotFoundError("Fee not found")

    receipt_number = await allocate_receipt_number(db)
    payment = Payment(
        student_id=fee.student_id,
        fee_id=fee.id,
        amount=payload.amount,
        payment_method=payload.payment_method.value,
        transaction_id=payload.transaction_id,
        payment_date=datetime.now(timezone.utc),
        status=PaymentStatus.completed.value,
        receipt_number=receipt_number,
        recorded_by=recorded_by,
    )
    db.add(payment)
    old_status = fee.status
    try:
        await db.flush()
        new_status = await refresh_fee_status(db, fee)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.error("Failed to record payment against fee %s: %s", fee_id, e.orig)
        raise ServerError("Could not record payment") from e
    await db.refresh(payment)
    logger.info(
        "Recorded payment %s (%s) of %s against fee %s; fee status %s -> %s",
        payment.id, receipt_number, payment.amount, fee_id, old_status, new_status.value,
    )
    return PaymentResponse.model_validate(payment)


async def pay_fee_as_student(
    db: AsyncSession,
    student_id: UUID,
    fee_id: UUID,
    payload: PaymentCreate,
) -> PaymentResponse:
    await get_fee_for_student(db, student_id, fee_id, action="pay")
    return await record_payment(db, fee_id, payload, recorded_by=student_id)


async def pay_fee_as_admin(
    db: AsyncSession,
    fee_id: UUID,
    payload: PaymentCreate,
    recorded_by: UUID,
) -> PaymentResponse:
    await get_fee_or_404(db, fee_id)
    return await record_payment(db, fee_id, payload, recorded_by=recorded_by)


async def list_all_payments(db: AsyncSession) -> List[PaymentWithStudentAndFee]:
    result = await db.execute(
        select(Payment)
        .options(joinedload(Payment.student), joinedload(Payment.fee))
        .order_by(Payment.payment_date.desc())
    )
    return [PaymentWithStudentAndFee.model_validate(p) for p in result.scalars().all()]


async def list_student_payments(db: AsyncSession, student_id: UUID) -> List[PaymentWithFee]:
    result = await db.execute(
        select(Payment)
        .options(joinedload(Payment.fee))
        .where(Payment.student_id == student_id)
        .order_by(Payment.payment_date.desc())
    )
    return [PaymentWithFee.model_validate(p) for p in result.scalars().all()]


async def _load_payment_for_receipt(db: AsyncSession, payment_id: UUID) -> Payment:
    payment = (
        await db.execute(
            select(Payment)
            .options(joinedload(Payment.student), joinedload(Payment.fee))
            .where(Payment.id == payment_id)
        )
    ).scalar_one_or_none()
    if not payment:
        raise NotFoundError("Payment not found")
    return payment


def _to_receipt(payment: Payment) -> ReceiptResponse:
    return ReceiptResponse(
        receipt_number=payment.receipt_number,
        student_name=payment.student.name,
        registration_number=payment.student.registration_number,
        fee_type=payment.fee.fee_type,
        semester=payment.fee.semester,
        amount=payment.amount,
        payment_date=payment.payment_date,
        payment_method=payment.payment_method,
        transaction_id=payment.transaction_id,
        status=payment.status,
    )


async def get_receipt_for_student(db: AsyncSession, student_id: UUID, payment_id: UUID) -> ReceiptResponse:
    payment = await _load_payment_for_receipt(db, payment_id)
    if payment.student_id != student_id:
        raise ForbiddenError("Not authorized to access this payment")
    return _to_receipt(payment)


async def get_receipt(db: AsyncSession, payment_id: UUID) -> ReceiptResponse:
    return _to_receipt(await _load_payment_for_receipt(db, payment_id))
