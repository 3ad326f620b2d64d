"""Fee: billable obligation assigned to one student for a semester and fee type."""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.core.enums import FeeStatus
from app.db.session import Base


class Fee(Base):
    """
    Fee assigned by an administrator to a student.
    status is derived from the completed payments recorded against the fee.
    """

    __tablename__ = "fees"
    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_fee_amount_positive"),
        CheckConstraint(
            "fee_type IN ('tuition','hostel','transport','examination','other')",
            name="chk_fee_type",
        ),
        CheckConstraint("semester >= 1 AND semester <= 8", name="chk_fee_semester"),
        CheckConstraint("status IN ('pending','partial','paid')", name="chk_fee_status"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    fee_type = Column(String(20), nullable=False)
    semester = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default=FeeStatus.pending.value, index=True)
    description = Column(Text, nullable=True)
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    student = relationship("User", foreign_keys=[student_id])
    creator = relationship("User", foreign_keys=[created_by])
