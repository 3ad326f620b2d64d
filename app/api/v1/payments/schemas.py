"""Payment and receipt schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.api.v1.fees.schemas import FeeResponse, StudentSummary
from app.core.enums import FeeType, PaymentMethod, PaymentStatus
from app.core.schemas import CamelModel


class PaymentCreate(CamelModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = Field(None, max_length=100)

    @field_validator("transaction_id")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class PaymentResponse(CamelModel):
    id: UUID
    student_id: UUID
    fee_id: UUID
    amount: Decimal
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    payment_date: datetime
    status: PaymentStatus
    receipt_number: str
    recorded_by: Optional[UUID] = None
    created_at: datetime


class PaymentWithFee(PaymentResponse):
    fee: FeeResponse


class PaymentWithStudentAndFee(PaymentWithFee):
    student: StudentSummary


class ReceiptResponse(CamelModel):
    """Read-only printable view of a payment."""

    receipt_number: str
    student_name: str
    registration_number: Optional[str] = None
    fee_type: FeeType
    semester: int
    amount: Decimal
    payment_date: datetime
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    status: PaymentStatus
