"""
Dashboard statistics. Computed on every request straight from the tables:
no caching, no pagination, cost grows with the number of rows.
"""

from decimal import Decimal
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.fees.resolver import to_decimal
from app.auth.models import User
from app.core.enums import PaymentStatus, UserRole
from app.core.models import Fee, Payment

from .schemas import FeeStatusSummary, StatisticsResponse


async def count_students(db: AsyncSession) -> int:
    return (
        await db.execute(select(func.count(User.id)).where(User.role == UserRole.STUDENT.value))
    ).scalar_one()


async def count_fees(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(Fee.id)))).scalar_one()


async def fees_by_status(db: AsyncSession) -> List[FeeStatusSummary]:
    result = await db.execute(
        select(
            Fee.status,
            func.count(Fee.id),
            func.coalesce(func.sum(Fee.amount), 0),
        )
        .group_by(Fee.status)
        .order_by(Fee.status)
    )
    return [
        FeeStatusSummary(status=fee_status, count=count, total_amount=to_decimal(amount))
        for fee_status, count, amount in result.all()
    ]


async def count_payments(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(Payment.id)))).scalar_one()


async def total_paid(db: AsyncSession) -> Decimal:
    total = (
        await db.execute(
            select(func.coalesce(func.sum(Payment.amount), 0)).where(
                Payment.status == PaymentStatus.completed.value
            )
        )
    ).scalar()
    return to_decimal(total)


async def get_statistics(db: AsyncSession) -> StatisticsResponse:
    return StatisticsResponse(
        total_students=await count_students(db),
        total_fees=await count_fees(db),
        total_payments=await count_payments(db),
        total_paid=await total_paid(db),
        fees_data=await fees_by_status(db),
    )
