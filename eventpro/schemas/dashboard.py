# File: eventpro/schemas/dashboard.py
from pydantic import BaseModel
from datetime import datetime
from eventpro.schemas.user import UserBrief


class DashboardStats(BaseModel):
    total_events: int
    total_users: int
    total_registrations: int
    certificates_issued: int


class ActivityEntry(BaseModel):
    id: int
    user: UserBrief
    action: str
    description: str
    timestamp: datetime

    class Config:
        from_attributes = True
