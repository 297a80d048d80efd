# File: eventpro/models/certificate.py
from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from eventpro.db.database import Base


class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(Integer, primary_key=True, index=True)
    registration_id = Column(
        Integer, ForeignKey("event_registrations.id"), nullable=False, unique=True, index=True
    )
    certificate_url = Column(Text, nullable=False)
    speaker_signature = Column(Text, nullable=True)  # PNG data URL
    issued_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    registration = relationship("EventRegistration", back_populates="certificate")

    def __repr__(self):
        return f"<Certificate(id={self.id}, registration_id={self.registration_id})>"
