# File: eventpro/core/security.py
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from eventpro.core.config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed or foreign hash in the database
        return False


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


def generate_reset_token() -> str:
    return secrets.token_urlsafe(32)


def create_session_cookie(session_id: str, expires_at: datetime, settings: Settings) -> str:
    """Sign the session id so the cookie cannot be forged client-side."""
    to_encode = {"sid": session_id, "exp": expires_at}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_cookie(token: str, settings: Settings) -> Optional[str]:
    try:
        payload: Dict[str, Any] = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sid")


def session_expiry(days: int) -> datetime:
    return datetime.utcnow() + timedelta(days=days)


def attendance_code_for(event_id: int, settings: Settings) -> str:
    """Short code attendees of an event type in to record their own attendance."""
    digest = hmac.new(
        settings.SECRET_KEY.encode("utf-8"),
        f"attendance:{event_id}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return digest[:8].upper()


def verify_attendance_code(event_id: int, code: str, settings: Settings) -> bool:
    return hmac.compare_digest(attendance_code_for(event_id, settings), (code or "").strip().upper())
