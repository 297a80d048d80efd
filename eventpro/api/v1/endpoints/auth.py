# File: eventpro/api/v1/endpoints/auth.py
from datetime import datetime
from typing import Any, Optional
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _set_session_cookie(request: Request, response: Response, token: str, expires_at: datetime) -> None:
    settings = request.app.state.settings
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int((expires_at - datetime.utcnow()).total_seconds()),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def _open_session(request: Request, response: Response, db: Session, store: EventStore, user: User) -> None:
    token, expires_at = store.start_session(db, user)
    _set_session_cookie(request, response, token, expires_at)


@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register(
    *,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    user_in: schemas.UserRegister,
) -> Any:
    """Create a user account and sign it in"""
    user = store.register_user(db, user_in)
    _open_session(request, response, db, store, user)
    return user


@router.post("/login", response_model=schemas.User)
def login(
    *,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    credentials: schemas.LoginRequest,
) -> Any:
    """Sign in with a username or email address and a password"""
    user = store.authenticate(db, login=credentials.username, password=credentials.password)
    _open_session(request, response, db, store, user)
    logger.info(f"User {user.username} signed in")
    return user


@router.post("/logout", response_model=schemas.MessageResponse)
def logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    session_id: Optional[str] = Depends(deps.get_session_id),
) -> Any:
    if session_id:
        store.end_session(db, session_id)
    response.delete_cookie(request.app.state.settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/user", response_model=schemas.User)
def read_current_user(current_user: User = Depends(deps.get_current_user)) -> Any:
    return current_user


@router.post("/auth/google", response_model=schemas.User)
def google_sign_in(
    *,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    payload: schemas.GoogleSignInRequest,
) -> Any:
    """Sign in with a Google ID token, creating the account on first use"""
    user = store.google_sign_in(db, credential=payload.credential)
    _open_session(request, response, db, store, user)
    logger.info(f"User {user.username} signed in with Google")
    return user
