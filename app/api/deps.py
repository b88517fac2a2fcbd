import hmac
from typing import Generator, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.core.db import SessionLocal
from app.core.errors import AccessDeniedError, AuthenticationError
from app.core.security import decode_access_token
from app.models.user import User

security = HTTPBearer(auto_error=False)


def get_db() -> Generator:
    try:
        db = SessionLocal()
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Dependency: require an authenticated user."""
    if credentials is None:
        raise AuthenticationError("No token provided")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token")

    user = crud.user.get(db, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise AccessDeniedError("Admin access required")
    return current_user


def require_student(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "student":
        raise AccessDeniedError("Student access required")
    return current_user


def require_payment_gateway(
    x_gateway_key: Optional[str] = Header(None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Payment callbacks come from the gateway (shared key in ``X-Gateway-Key``)
    or from an admin recording an offline payment.
    """
    if x_gateway_key is not None:
        if not hmac.compare_digest(x_gateway_key.encode(), settings.PAYMENT_GATEWAY_SECRET.encode()):
            raise AuthenticationError("Invalid gateway key")
        return None
    return require_admin(get_current_user(credentials, db))
