import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID

from app.core.enums import UserRole
from app.db.session import Base


class User(Base):
    """Administrator or student account. Students own fees and payments."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin','student')", name="chk_user_role"),
        CheckConstraint(
            "semester IS NULL OR (semester >= 1 AND semester <= 8)",
            name="chk_user_semester",
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    # Stored lower-cased; unique across all users
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.STUDENT.value)
    # Optional, but unique when present (NULLs do not collide)
    registration_number = Column(String(50), nullable=True, unique=True)
    course = Column(String(255), nullable=True)
    semester = Column(Integer, nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
