from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from uuid import UUID

import bcrypt
from jose import jwt

from app.core.config import settings

_ENCODING = "utf-8"


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(plain_password.encode(_ENCODING), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode(_ENCODING), password_hash.encode(_ENCODING))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(
    user_id: UUID, role: str, *, expires_minutes: Optional[int] = None
) -> str:
    """Signed JWT whose `sub` is the user id; `role` is informational, the user row is authoritative."""
    lifetime = timedelta(
        minutes=settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    )
    claims = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict:
    """Raises jose.JWTError when the signature is wrong or the token expired."""
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
    )
