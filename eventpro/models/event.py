# File: eventpro/models/event.py
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, ForeignKey, Date, Time, DateTime, Enum
from sqlalchemy.orm import relationship
from eventpro.models.base import BaseModel
from eventpro.models.user import enum_values
import enum


class EventStatus(enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class LocationType(enum.Enum):
    VIRTUAL = "virtual"
    IN_PERSON = "in-person"
    HYBRID = "hybrid"


class Event(BaseModel):
    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    # Location & Logistics
    venue = Column(String(255), nullable=False)
    location_type = Column(
        Enum(LocationType, name="location_type", values_callable=enum_values),
        nullable=False,
    )
    capacity = Column(Integer, nullable=False)
    status = Column(
        Enum(EventStatus, name="event_status", values_callable=enum_values),
        nullable=False,
        default=EventStatus.DRAFT,
    )

    # Metadata
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    created_by = relationship("User", foreign_keys=[created_by_id])
    topics = relationship("Topic", back_populates="event", cascade="all, delete-orphan", order_by="Topic.id")
    registrations = relationship("EventRegistration", back_populates="event", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Event(id={self.id}, title={self.title}, capacity={self.capacity})>"

    @property
    def registration_count(self) -> int:
        return len(self.registrations)

    @property
    def registration_percentage(self) -> int:
        if not self.capacity:
            return 0
        return min(100, round(self.registration_count / self.capacity * 100))
