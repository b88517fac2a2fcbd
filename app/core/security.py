"""
Token handling for the HTTP boundary.

Tokens are issued by the identity service; this module only encodes
(for that service and for tests) and decodes them.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from app.core.config import settings
from app.core.errors import AuthenticationError


def create_access_token(user_id: int, role: str, expires_hours: int = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=expires_hours or settings.JWT_EXPIRY_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")
