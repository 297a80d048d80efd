from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.post("/{topic_id}/speakers", response_model=schemas.SpeakerAssignment, status_code=status.HTTP_201_CREATED)
def assign_topic_speaker(
    *,
    topic_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    assignment_in: schemas.SpeakerAssignmentCreate,
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    return store.assign_speaker(db, speaker_id=assignment_in.speaker_id, topic_id=topic_id)
