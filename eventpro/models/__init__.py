from .base import BaseModel
from .user import User, UserRole
from .event import Event, EventStatus, LocationType
from .topic import Topic
from .event_speaker import EventSpeaker
from .event_registration import EventRegistration
from .certificate import Certificate
from .activity_log import ActivityLog
from .session import UserSession
from .password_reset_token import PasswordResetToken

__all__ = [
    "BaseModel", "User", "UserRole", "Event", "EventStatus", "LocationType",
    "Topic", "EventSpeaker", "EventRegistration", "Certificate", "ActivityLog",
    "UserSession", "PasswordResetToken",
]
