from .user import user
from .event import event
from .topic import topic
from .registration import registration
from .certificate import certificate
from .activity import activity
from .session import session
from .password_reset import password_reset

__all__ = ["user", "event", "topic", "registration", "certificate", "activity", "session", "password_reset"]
