# File: eventpro/crud/registration.py
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func, insert, literal, select
from sqlalchemy.orm import Session
from eventpro.models.event import Event
from eventpro.models.event_registration import EventRegistration


class CRUDRegistration:

    def get(self, db: Session, id: int) -> Optional[EventRegistration]:
        return db.query(EventRegistration).filter(EventRegistration.id == id).first()

    def get_by_event_and_user(
        self, db: Session, *, event_id: int, user_id: int
    ) -> Optional[EventRegistration]:
        return (
            db.query(EventRegistration)
            .filter(EventRegistration.event_id == event_id, EventRegistration.user_id == user_id)
            .first()
        )

    def get_by_event(self, db: Session, *, event_id: int) -> List[EventRegistration]:
        return (
            db.query(EventRegistration)
            .filter(EventRegistration.event_id == event_id)
            .order_by(EventRegistration.id)
            .all()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[EventRegistration]:
        return (
            db.query(EventRegistration)
            .filter(EventRegistration.user_id == user_id)
            .order_by(EventRegistration.id)
            .all()
        )

    def get_with_certificates(
        self, db: Session, *, user_id: Optional[int] = None
    ) -> List[EventRegistration]:
        query = db.query(EventRegistration).filter(EventRegistration.certificate_generated.is_(True))
        if user_id is not None:
            query = query.filter(EventRegistration.user_id == user_id)
        return query.order_by(EventRegistration.id).all()

    def count_for_event(self, db: Session, *, event_id: int) -> int:
        return db.query(EventRegistration).filter(EventRegistration.event_id == event_id).count()

    def count(self, db: Session) -> int:
        return db.query(EventRegistration).count()

    def create(self, db: Session, *, event_id: int, user_id: int) -> EventRegistration:
        db_obj = EventRegistration(event_id=event_id, user_id=user_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def create_within_capacity(
        self, db: Session, *, event_id: int, user_id: int
    ) -> Optional[EventRegistration]:
        """
        Insert the registration only while the event is below capacity.

        The event row is locked first (a no-op on SQLite, where writers are
        serialized anyway) and the count is evaluated inside the INSERT, so
        two concurrent callers cannot both take the last seat. Returns None
        when the event is full.
        """
        db.query(Event).filter(Event.id == event_id).with_for_update().first()

        registered = (
            select(func.count(EventRegistration.id))
            .where(EventRegistration.event_id == event_id)
            .scalar_subquery()
        )
        capacity = select(Event.capacity).where(Event.id == event_id).scalar_subquery()
        rows = select(
            literal(event_id),
            literal(user_id),
            literal(False),
            literal(False),
            literal(datetime.utcnow()),
        ).where(registered < capacity)

        result = db.execute(
            insert(EventRegistration).from_select(
                ["event_id", "user_id", "attended", "certificate_generated", "created_at"],
                rows,
            )
        )
        db.commit()
        if result.rowcount == 0:
            return None
        return self.get_by_event_and_user(db, event_id=event_id, user_id=user_id)

    def delete_by_event_and_user(self, db: Session, *, event_id: int, user_id: int) -> bool:
        deleted = (
            db.query(EventRegistration)
            .filter(EventRegistration.event_id == event_id, EventRegistration.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted > 0

    def mark_attended(self, db: Session, *, id: int) -> Optional[EventRegistration]:
        db_obj = self.get(db, id)
        if db_obj is None:
            return None
        db_obj.attended = True
        db_obj.attendance_time = datetime.utcnow()
        db.commit()
        db.refresh(db_obj)
        return db_obj


registration = CRUDRegistration()
