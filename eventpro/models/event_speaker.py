# File: eventpro/models/event_speaker.py
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from eventpro.models.base import BaseModel


class EventSpeaker(BaseModel):
    """Assignment of a speaker-role user to a topic."""
    __tablename__ = "event_speakers"

    topic_id = Column(Integer, ForeignKey("topics.id"), nullable=False, index=True)
    speaker_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    topic = relationship("Topic", back_populates="speakers")
    speaker = relationship("User", back_populates="speaker_assignments")
