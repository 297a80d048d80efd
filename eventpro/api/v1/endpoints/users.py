from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.get("/users", response_model=List[schemas.User])
def read_users(
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    return store.get_users(db)


@router.post("/users", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    user_in: schemas.UserCreate,
    current_user: User = Depends(deps.require_admin),
) -> Any:
    """Create an account with any role (admin only)"""
    return store.create_user(db, user_in)


@router.get("/speakers", response_model=List[schemas.Speaker])
def read_speakers(
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Speakers with the events they are assigned to"""
    return store.get_speakers(db)


@router.post("/speakers", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_speaker(
    *,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    user_in: schemas.UserRegister,
    current_user: User = Depends(deps.require_admin),
) -> Any:
    return store.create_speaker(db, user_in)
