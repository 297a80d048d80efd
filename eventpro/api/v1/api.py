# File: eventpro/api/v1/api.py
from fastapi import APIRouter
from eventpro.api.v1.endpoints import (
    auth, password_reset, users, events, topics, registrations, certificates, profile, dashboard,
)

# Create main API router
api_router = APIRouter()

api_router.include_router(auth.router, tags=["authentication"])

api_router.include_router(password_reset.router, tags=["password-reset"])

api_router.include_router(users.router, tags=["users"])

api_router.include_router(events.router, prefix="/events", tags=["events"])

api_router.include_router(topics.router, prefix="/topics", tags=["topics"])

api_router.include_router(registrations.router, tags=["registrations"])

api_router.include_router(certificates.router, tags=["certificates"])

api_router.include_router(profile.router, prefix="/profile", tags=["profile-management"])

api_router.include_router(dashboard.router, tags=["dashboard"])
