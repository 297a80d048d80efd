from typing import Any, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.get("/stats", response_model=schemas.DashboardStats)
def read_stats(
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return store.get_dashboard_stats(db)


@router.get("/activity", response_model=List[schemas.ActivityEntry])
def read_recent_activity(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return store.get_recent_activity(db, limit=limit)
