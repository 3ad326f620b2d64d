from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"


class FeeType(str, Enum):
    TUITION = "tuition"
    HOSTEL = "hostel"
    TRANSPORT = "transport"
    EXAMINATION = "examination"
    OTHER = "other"


class FeeStatus(str, Enum):
    pending = "pending"
    partial = "partial"
    paid = "paid"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    UPI = "upi"


class PaymentStatus(str, Enum):
    completed = "completed"
    pending = "pending"
    failed = "failed"
