# File: eventpro/schemas/user.py
from pydantic import BaseModel, EmailStr, validator
from typing import Optional, List
from datetime import datetime, date, time
from eventpro.models.user import UserRole


class UserBase(BaseModel):
    username: str
    email: EmailStr
    name: str
    bio: Optional[str] = None
    profile_image: Optional[str] = None

    @validator("username")
    def validate_username(cls, v):
        if len(v.strip()) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v.strip()

    @validator("name")
    def validate_name(cls, v):
        if len(v.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v.strip()


class UserRegister(UserBase):
    """Self-service sign-up; the role is always ``user``."""
    password: str

    @validator("password")
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class UserCreate(UserRegister):
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    signature_image: Optional[str] = None


class UserBrief(BaseModel):
    id: int
    name: str
    username: str
    profile_image: Optional[str] = None

    class Config:
        from_attributes = True


class User(BaseModel):
    id: int
    username: str
    email: str
    name: str
    role: UserRole
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    signature_image: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SpeakerEvent(BaseModel):
    id: int
    title: str
    event_date: date


class Speaker(User):
    events: List[SpeakerEvent] = []


# ---------------------------
# Profile
# ---------------------------
class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None

    @validator("name")
    def validate_name(cls, v):
        if v is None:
            return v
        if len(v.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v.strip()

    @validator("new_password")
    def validate_new_password(cls, v):
        if v is not None and len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @validator("confirm_password")
    def passwords_match(cls, v, values):
        if v is not None and values.get("new_password") != v:
            raise ValueError("Passwords do not match")
        return v


class SignatureUpdate(BaseModel):
    signature_image: str

    @validator("signature_image")
    def validate_data_url(cls, v):
        if not v.startswith("data:image/"):
            raise ValueError("Signature must be an image data URL")
        return v


class UpcomingRegistration(BaseModel):
    id: int
    title: str
    event_date: date
    start_time: time
    venue: str


class AttendedEvent(BaseModel):
    id: int
    title: str
    event_date: date
    certificate_url: Optional[str] = None


class Profile(User):
    upcoming_registrations: List[UpcomingRegistration] = []
    attended_events: List[AttendedEvent] = []
