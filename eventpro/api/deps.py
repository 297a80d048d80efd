from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from eventpro import crud
from eventpro.core.exceptions import NotAuthenticated, PermissionDenied
from eventpro.core.security import decode_session_cookie
from eventpro.db.database import get_db
from eventpro.models.user import User, UserRole
from eventpro.services.event_store import EventStore


def get_store(request: Request) -> EventStore:
    return request.app.state.store


def get_session_id(request: Request) -> Optional[str]:
    """Session id carried by the signed session cookie, if any."""
    settings = request.app.state.settings
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return decode_session_cookie(token, settings)


def get_current_user_optional(
    db: Session = Depends(get_db),
    session_id: Optional[str] = Depends(get_session_id),
) -> Optional[User]:
    if not session_id:
        return None

    user_session = crud.session.get_active(db, session_id=session_id)
    if user_session is None:
        return None

    return crud.user.get(db, user_session.user_id)


def get_current_user(
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    if current_user is None:
        raise NotAuthenticated()
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.ADMIN:
        raise PermissionDenied()
    return current_user


def require_admin_or_speaker(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role not in (UserRole.ADMIN, UserRole.SPEAKER):
        raise PermissionDenied()
    return current_user
