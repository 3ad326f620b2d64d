"""
Receipt number generation.
Format: <prefix>-<creation time in epoch milliseconds>-<random 0..999>, e.g. RCP-1760870400123-42.
Collisions are improbable but possible; allocation checks the store and retries a bounded number of times,
and the unique constraint on payments.receipt_number stays the last line of defence.
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ServerError
from app.core.models import Payment

logger = logging.getLogger(__name__)


def generate_receipt_number(prefix: Optional[str] = None, now: Optional[datetime] = None) -> str:
    """
    Build a human-readable receipt number.

    Examples:
        RCP-1760870400123-7
        RCP-1760870400123-981
    """
    if prefix is None:
        prefix = settings.receipt_prefix
    moment = now or datetime.now(timezone.utc)
    millis = int(moment.timestamp() * 1000)
    return f"{prefix}-{millis}-{secrets.randbelow(1000)}"


async def allocate_receipt_number(db: AsyncSession, max_attempts: Optional[int] = None) -> str:
    """Return a receipt number not yet present in the payments table."""
    if max_attempts is None:
        max_attempts = settings.receipt_max_attempts
    for attempt in range(1, max_attempts + 1):
        candidate = generate_receipt_number()
        taken = (
            await db.execute(select(Payment.id).where(Payment.receipt_number == candidate))
        ).first()
        if not taken:
            return candidate
        logger.warning("Receipt number collision on %s (attempt %d/%d)", candidate, attempt, max_attempts)
    raise ServerError("Could not allocate a unique receipt number")
