"""
Fee status derivation.
A fee's status follows the cumulative sum of its completed payments:
nothing paid -> pending; something but less than the amount -> partial; the full amount or more -> paid.
"""

from decimal import Decimal
from typing import Union
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import FeeStatus, PaymentStatus
from app.core.models import Fee, Payment

Number = Union[Decimal, int, float, str]


def to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


def resolve_fee_status(fee_amount: Number, amount_paid: Number) -> FeeStatus:
    paid = to_decimal(amount_paid)
    if paid >= to_decimal(fee_amount):
        return FeeStatus.paid
    if paid > 0:
        return FeeStatus.partial
    return FeeStatus.pending


async def total_completed_payments(db: AsyncSession, fee_id: UUID) -> Decimal:
    total = (
        await db.execute(
            select(func.coalesce(func.sum(Payment.amount), 0)).where(
                Payment.fee_id == fee_id,
                Payment.status == PaymentStatus.completed.value,
            )
        )
    ).scalar()
    return to_decimal(total)


async def refresh_fee_status(db: AsyncSession, fee: Fee) -> FeeStatus:
    """Recompute fee.status from stored payments. Caller commits."""
    new_status = resolve_fee_status(fee.amount, await total_completed_payments(db, fee.id))
    fee.status = new_status.value
    return new_status
