# File: eventpro/crud/password_reset.py
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session
from eventpro.core.security import generate_reset_token
from eventpro.models.password_reset_token import PasswordResetToken


class CRUDPasswordReset:

    def create(self, db: Session, *, user_id: int, expires_in_minutes: int) -> PasswordResetToken:
        db_obj = PasswordResetToken(
            user_id=user_id,
            token=generate_reset_token(),
            expires_at=datetime.utcnow() + timedelta(minutes=expires_in_minutes),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_valid(self, db: Session, *, token: str) -> Optional[PasswordResetToken]:
        return (
            db.query(PasswordResetToken)
            .filter(
                PasswordResetToken.token == token,
                PasswordResetToken.used.is_(False),
                PasswordResetToken.expires_at > datetime.utcnow(),
            )
            .first()
        )

    def mark_used(self, db: Session, *, db_obj: PasswordResetToken) -> None:
        db_obj.used = True
        db.commit()


password_reset = CRUDPasswordReset()
