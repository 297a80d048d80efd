# File: eventpro/api/v1/endpoints/registrations.py
"""Registration and attendance routes."""
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.core.exceptions import RegistrationNotFound
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.post("/events/{event_id}/register", response_model=schemas.Registration, status_code=status.HTTP_201_CREATED)
def register_for_event(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return store.register(db, current_user, event_id)


@router.delete("/events/{event_id}/register", response_model=schemas.SuccessResponse)
def cancel_event_registration(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    if not store.cancel_registration(db, current_user, event_id):
        raise RegistrationNotFound()
    return {"success": True}


@router.get("/events/{event_id}/registrations", response_model=List[schemas.RegistrationWithUser])
def read_event_registrations(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    return store.get_event_registrations(db, event_id)


# ---------------------------
# Attendance
# ---------------------------
@router.post("/events/{event_id}/attendance/{user_id}", response_model=schemas.AttendanceResult)
def mark_user_attendance(
    event_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    if not store.mark_attendance_for_user(db, event_id=event_id, user_id=user_id):
        raise RegistrationNotFound()
    return {"success": True}


@router.post("/registrations/{registration_id}/attendance", response_model=schemas.AttendanceResult)
def mark_registration_attendance(
    registration_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin),
) -> Any:
    if not store.mark_attendance(db, registration_id):
        raise RegistrationNotFound()
    return {"success": True}


@router.get("/events/{event_id}/attendance-code", response_model=schemas.AttendanceCode)
def read_attendance_code(
    event_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    """Code shown at the venue so attendees can check themselves in"""
    return {"event_id": event_id, "code": store.attendance_code(db, event_id)}


@router.post("/events/{event_id}/self-attendance", response_model=schemas.AttendanceResult)
def self_attendance(
    event_id: int,
    payload: schemas.SelfAttendanceRequest,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return {"success": store.self_attendance(db, current_user, event_id, payload.code)}
