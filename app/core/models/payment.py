"""Payment: funds recorded against a fee. Supports partial payments."""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.core.enums import PaymentStatus
from app.db.session import Base


class Payment(Base):
    """Payment against a fee. receipt_number is assigned once at creation and never changes."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_payment_amount_positive"),
        CheckConstraint(
            "payment_method IN ('credit_card','debit_card','bank_transfer','cash','upi')",
            name="chk_payment_method",
        ),
        CheckConstraint("status IN ('completed','pending','failed')", name="chk_payment_status"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    fee_id = Column(UUID(as_uuid=True), ForeignKey("fees.id", ondelete="RESTRICT"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(30), nullable=False)
    transaction_id = Column(String(100), nullable=True)
    payment_date = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    status = Column(String(20), nullable=False, default=PaymentStatus.completed.value)
    receipt_number = Column(String(64), nullable=False, unique=True)
    # Student paying online, or administrator recording a counter payment
    recorded_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    student = relationship("User", foreign_keys=[student_id])
    fee = relationship("Fee", foreign_keys=[fee_id])
    recorded_by_user = relationship("User", foreign_keys=[recorded_by])
