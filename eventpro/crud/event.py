# File: eventpro/crud/event.py
from datetime import date, datetime
from typing import List
from sqlalchemy.orm import Session
from eventpro.crud.base import CRUDBase
from eventpro.models.event import Event
from eventpro.schemas.event import EventCreate, EventUpdate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_all(self, db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.event_date.desc(), Event.id.desc()).all()

    def get_upcoming(self, db: Session, *, today: date, limit: int = 3) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.event_date >= today)
            .order_by(Event.event_date.asc(), Event.start_time.asc())
            .limit(limit)
            .all()
        )

    def create_with_owner(self, db: Session, *, obj_in: EventCreate, created_by_id: int) -> Event:
        event_data = obj_in.dict(exclude={"topics"})
        event_data["created_by_id"] = created_by_id

        db_obj = Event(**event_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_event(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        # Columns are NOT NULL, so explicit nulls leave the value unchanged
        update_data = {key: value for key, value in obj_in.dict(exclude_unset=True).items() if value is not None}
        update_data["updated_at"] = datetime.utcnow()
        return self.update(db, db_obj=db_obj, obj_in=update_data)


event = CRUDEvent(Event)
