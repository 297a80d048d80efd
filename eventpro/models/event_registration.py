# File: eventpro/models/event_registration.py
from sqlalchemy import Column, Integer, ForeignKey, Boolean, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from eventpro.models.base import BaseModel


class EventRegistration(BaseModel):
    __tablename__ = "event_registrations"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_registration_event_user"),)

    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Attendance
    attended = Column(Boolean, default=False, nullable=False)
    attendance_time = Column(DateTime, nullable=True)

    # Certificate
    certificate_generated = Column(Boolean, default=False, nullable=False)
    certificate_url = Column(Text, nullable=True)

    # Relationships
    event = relationship("Event", back_populates="registrations")
    user = relationship("User", back_populates="registrations")
    certificate = relationship(
        "Certificate", back_populates="registration", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return (
            f"<EventRegistration(id={self.id}, event_id={self.event_id}, user_id={self.user_id}, "
            f"attended={self.attended}, certificate_generated={self.certificate_generated})>"
        )
