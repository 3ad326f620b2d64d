from app.core.models.fee import Fee
from app.core.models.payment import Payment

__all__ = ["Fee", "Payment"]
