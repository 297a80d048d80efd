# File: eventpro/crud/activity.py
from typing import List
from sqlalchemy.orm import Session, joinedload
from eventpro.models.activity_log import ActivityLog


class CRUDActivity:
    """Append-only: rows are inserted and read, never updated or deleted."""

    def log(self, db: Session, *, user_id: int, action: str, description: str) -> ActivityLog:
        entry = ActivityLog(user_id=user_id, action=action, description=description)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    def get_recent(self, db: Session, *, limit: int = 10) -> List[ActivityLog]:
        return (
            db.query(ActivityLog)
            .options(joinedload(ActivityLog.user))
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .limit(limit)
            .all()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[ActivityLog]:
        return (
            db.query(ActivityLog)
            .filter(ActivityLog.user_id == user_id)
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .all()
        )


activity = CRUDActivity()
