# File: eventpro/crud/certificate.py
from typing import Optional
from sqlalchemy.orm import Session
from eventpro.models.certificate import Certificate
from eventpro.models.event_registration import EventRegistration


class CRUDCertificate:

    def issue(
        self,
        db: Session,
        *,
        registration: EventRegistration,
        certificate_url: str,
        speaker_signature: Optional[str] = None,
    ) -> Certificate:
        """Flag the registration and insert its certificate in one commit."""
        registration.certificate_generated = True
        registration.certificate_url = certificate_url
        db_obj = Certificate(
            registration_id=registration.id,
            certificate_url=certificate_url,
            speaker_signature=speaker_signature,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def count(self, db: Session) -> int:
        return db.query(Certificate).count()


certificate = CRUDCertificate()
