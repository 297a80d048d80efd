from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.post("/forgot-password", response_model=schemas.MessageResponse)
def forgot_password(
    request: schemas.ForgotPasswordRequest,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
) -> Any:
    """Email a password reset link. The answer is the same whether or not the address is known."""
    store.request_password_reset(db, email=request.email)
    return {"message": "If an account exists with that email, a password reset link has been sent"}


@router.post("/reset-password", response_model=schemas.MessageResponse)
def reset_password(
    request: schemas.ResetPasswordRequest,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
) -> Any:
    store.reset_password(db, token=request.token, password=request.password)
    return {"message": "Password has been reset successfully"}
