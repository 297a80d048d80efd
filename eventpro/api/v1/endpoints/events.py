# File: eventpro/api/v1/endpoints/events.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.get("", response_model=List[schemas.Event])
def read_events(
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
) -> Any:
    """All events, most recent date first"""
    return store.get_events(db)


@router.get("/upcoming", response_model=List[schemas.Event])
def read_upcoming_events(
    limit: int = Query(3, ge=1, le=50),
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
) -> Any:
    return store.get_upcoming_events(db, limit=limit)


@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    event_in: schemas.EventCreate,
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    """Create an event together with its topics and speaker assignments"""
    return store.create_event(db, event_in, current_user)


@router.get("/{event_id}", response_model=schemas.EventDetail)
def read_event(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: Optional[User] = Depends(deps.get_current_user_optional),
) -> Any:
    return store.get_event(db, event_id, viewer=current_user)


@router.put("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    event_in: schemas.EventUpdate,
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    return store.update_event(db, event_id, event_in, current_user)


@router.delete("/{event_id}", response_model=schemas.MessageResponse)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    store.delete_event(db, event_id)
    return {"message": "Event deleted successfully"}


# ---------------------------
# Topics
# ---------------------------
@router.get("/{event_id}/topics", response_model=List[schemas.Topic])
def read_event_topics(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
) -> Any:
    return store.get_topics(db, event_id)


@router.post("/{event_id}/topics", response_model=schemas.Topic, status_code=status.HTTP_201_CREATED)
def create_event_topic(
    *,
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    topic_in: schemas.TopicCreate,
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    return store.create_topic(db, event_id, topic_in)
