# File: eventpro/schemas/registration.py
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from eventpro.schemas.user import UserBrief
from eventpro.schemas.event import Event, Topic


class Registration(BaseModel):
    id: int
    event_id: int
    user_id: int
    attended: bool
    attendance_time: Optional[datetime] = None
    certificate_generated: bool
    certificate_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RegistrationWithUser(Registration):
    user: UserBrief


class EventDetail(Event):
    topics: List[Topic] = []
    registrations: List[RegistrationWithUser] = []

    # Filled in for a signed-in viewer
    is_registered: bool = False
    has_attended: bool = False
    has_certificate: bool = False
    certificate_url: Optional[str] = None


class SelfAttendanceRequest(BaseModel):
    code: str


class AttendanceCode(BaseModel):
    event_id: int
    code: str


class AttendanceResult(BaseModel):
    success: bool
