from decimal import Decimal
from typing import List

from app.core.enums import FeeStatus
from app.core.schemas import CamelModel


class FeeStatusSummary(CamelModel):
    status: FeeStatus
    count: int
    total_amount: Decimal


class StatisticsResponse(CamelModel):
    total_students: int
    total_fees: int
    total_payments: int
    total_paid: Decimal
    fees_data: List[FeeStatusSummary]
