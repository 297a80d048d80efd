# File: eventpro/crud/session.py
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from eventpro.core.security import generate_session_id, session_expiry
from eventpro.models.session import UserSession


class CRUDSession:

    def create(self, db: Session, *, user_id: int, expires_in_days: int) -> UserSession:
        db_obj = UserSession(
            id=generate_session_id(), user_id=user_id, expires_at=session_expiry(expires_in_days)
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_active(self, db: Session, *, session_id: str) -> Optional[UserSession]:
        return (
            db.query(UserSession)
            .filter(UserSession.id == session_id, UserSession.expires_at > datetime.utcnow())
            .first()
        )

    def delete(self, db: Session, *, session_id: str) -> None:
        db.query(UserSession).filter(UserSession.id == session_id).delete(synchronize_session=False)
        db.commit()

    def purge_expired(self, db: Session) -> int:
        removed = (
            db.query(UserSession)
            .filter(UserSession.expires_at <= datetime.utcnow())
            .delete(synchronize_session=False)
        )
        db.commit()
        return removed


session = CRUDSession()
