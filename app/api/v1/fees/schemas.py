"""Fees schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.auth.schemas import UserInfo
from app.core.enums import FeeStatus, FeeType
from app.core.schemas import CamelModel


class FeeCreate(CamelModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    fee_type: FeeType
    semester: int = Field(..., ge=1, le=8)
    due_date: date
    description: Optional[str] = None


class FeeUpdate(CamelModel):
    """Partial update. status is not accepted; it is re-derived from payments."""

    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    fee_type: Optional[FeeType] = None
    semester: Optional[int] = Field(None, ge=1, le=8)
    due_date: Optional[date] = None
    description: Optional[str] = None


class StudentSummary(CamelModel):
    id: UUID
    name: str
    registration_number: Optional[str] = None


class FeeResponse(CamelModel):
    id: UUID
    student_id: UUID
    amount: Decimal
    fee_type: FeeType
    semester: int
    due_date: date
    status: FeeStatus
    description: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: datetime


class FeeWithStudent(FeeResponse):
    student: StudentSummary


class FeeDetail(FeeResponse):
    student: UserInfo
    amount_paid: Decimal
    balance: Decimal
