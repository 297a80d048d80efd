# File: eventpro/schemas/event.py
from pydantic import BaseModel, validator
from typing import Optional, List, Union
from datetime import datetime, date, time
from eventpro.models.event import EventStatus, LocationType
from eventpro.schemas.user import UserBrief


class TopicCreate(BaseModel):
    title: str
    description: Optional[str] = None
    speaker_id: Optional[Union[int, str]] = None

    @validator("title")
    def validate_title(cls, v):
        if len(v.strip()) < 2:
            raise ValueError("Title must be at least 2 characters")
        return v.strip()

    @validator("speaker_id")
    def normalize_speaker_id(cls, v):
        # The create-event form sends "" or "none" when no speaker is picked
        if v is None or v == "" or v == "none":
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            raise ValueError("Speaker id must be an integer")


class Topic(BaseModel):
    id: int
    event_id: int
    title: str
    description: Optional[str] = None
    speakers: List[UserBrief] = []

    @validator("speakers", pre=True)
    def unwrap_assignments(cls, v):
        # ORM topics expose EventSpeaker rows; the API exposes the speakers
        return [getattr(item, "speaker", item) for item in v or []]

    class Config:
        from_attributes = True


class SpeakerAssignmentCreate(BaseModel):
    speaker_id: int


class SpeakerAssignment(BaseModel):
    id: int
    topic_id: int
    speaker_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class EventBase(BaseModel):
    title: str
    description: str
    event_date: date
    start_time: time
    end_time: time
    venue: str
    location_type: LocationType
    capacity: int
    status: EventStatus = EventStatus.DRAFT

    @validator("title")
    def validate_title(cls, v):
        if len(v.strip()) < 3:
            raise ValueError("Title must be at least 3 characters")
        return v.strip()

    @validator("description")
    def validate_description(cls, v):
        if len(v.strip()) < 10:
            raise ValueError("Description must be at least 10 characters")
        return v

    @validator("capacity")
    def validate_capacity(cls, v):
        if v < 1:
            raise ValueError("Capacity must be at least 1")
        return v


class EventCreate(EventBase):
    topics: List[TopicCreate] = []


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    venue: Optional[str] = None
    location_type: Optional[LocationType] = None
    capacity: Optional[int] = None
    status: Optional[EventStatus] = None

    @validator("title")
    def validate_title(cls, v):
        if v is not None and len(v.strip()) < 3:
            raise ValueError("Title must be at least 3 characters")
        return v.strip() if v is not None else v

    @validator("description")
    def validate_description(cls, v):
        if v is not None and len(v.strip()) < 10:
            raise ValueError("Description must be at least 10 characters")
        return v

    @validator("capacity")
    def validate_capacity(cls, v):
        if v is not None and v < 1:
            raise ValueError("Capacity must be at least 1")
        return v


class Event(EventBase):
    id: int
    created_by_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    registration_count: int = 0
    registration_percentage: int = 0

    class Config:
        from_attributes = True
