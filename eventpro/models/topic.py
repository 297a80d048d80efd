# File: eventpro/models/topic.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship
from eventpro.models.base import BaseModel


class Topic(BaseModel):
    __tablename__ = "topics"

    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    event = relationship("Event", back_populates="topics")
    speakers = relationship("EventSpeaker", back_populates="topic", cascade="all, delete-orphan")
