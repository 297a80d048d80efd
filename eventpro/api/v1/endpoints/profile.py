from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.get("", response_model=schemas.Profile)
def read_profile(
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Current user with upcoming registrations and attended events"""
    return store.get_profile(db, current_user)


@router.patch("", response_model=schemas.User)
def update_profile(
    *,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    profile_in: schemas.ProfileUpdate,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return store.update_profile(db, current_user, profile_in)


@router.patch("/signature", response_model=schemas.User)
def update_signature(
    *,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    signature_in: schemas.SignatureUpdate,
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Store the signature image used on certificates issued by this user"""
    return store.update_signature(db, current_user, signature_in.signature_image)
