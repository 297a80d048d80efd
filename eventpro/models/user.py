# File: eventpro/models/user.py
from sqlalchemy import Column, String, Enum, Text
from sqlalchemy.orm import relationship
from eventpro.models.base import BaseModel
import enum


class UserRole(enum.Enum):
    ADMIN = "admin"
    SPEAKER = "speaker"
    USER = "user"


def enum_values(enum_cls):
    # Persist enum values ("admin") rather than member names ("ADMIN")
    return [member.value for member in enum_cls]


class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="role", values_callable=enum_values),
        nullable=False,
        default=UserRole.USER,
    )

    # Profile fields
    bio = Column(Text, nullable=True)
    profile_image = Column(Text, nullable=True)
    signature_image = Column(Text, nullable=True)  # PNG data URL

    # Relationships
    registrations = relationship("EventRegistration", back_populates="user")
    speaker_assignments = relationship("EventSpeaker", back_populates="speaker")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_speaker(self) -> bool:
        return self.role == UserRole.SPEAKER

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
