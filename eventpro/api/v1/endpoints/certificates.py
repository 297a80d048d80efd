# File: eventpro/api/v1/endpoints/certificates.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from eventpro import schemas
from eventpro.api import deps
from eventpro.db.database import get_db
from eventpro.models.user import User
from eventpro.services.event_store import EventStore

router = APIRouter()


@router.get("/certificates", response_model=List[schemas.CertificateSummary])
def read_certificates(
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Issued certificates. Admins see every certificate, everyone else their own."""
    if current_user.is_admin:
        return store.get_all_certificates(db)
    return store.get_user_certificates(db, current_user)


@router.post("/events/{event_id}/certificate", response_model=schemas.Certificate, status_code=status.HTTP_201_CREATED)
def generate_own_certificate(
    event_id: int,
    payload: Optional[schemas.CertificateGenerateRequest] = None,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    signature = payload.speaker_signature if payload else None
    return store.generate_certificate_for_user(db, current_user, event_id, signature)


@router.post(
    "/registrations/{registration_id}/certificate",
    response_model=schemas.Certificate,
    status_code=status.HTTP_201_CREATED,
)
def generate_certificate(
    registration_id: int,
    payload: Optional[schemas.CertificateGenerateRequest] = None,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.require_admin_or_speaker),
) -> Any:
    """Issue a certificate for an attended registration, optionally carrying the speaker's signature"""
    signature = (payload.speaker_signature if payload else None) or current_user.signature_image
    return store.generate_certificate(db, registration_id, signature)


@router.get("/certificates/verify/{registration_id}", response_model=schemas.CertificateVerification)
def verify_certificate(
    registration_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
) -> Any:
    return store.verify_certificate(db, registration_id)


@router.get("/certificates/{registration_id}", response_model=schemas.CertificateDocument)
def read_certificate(
    registration_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    return store.get_certificate(db, registration_id, current_user)


@router.get("/certificates/{registration_id}/download")
def download_certificate(
    registration_id: int,
    db: Session = Depends(get_db),
    store: EventStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user),
) -> Response:
    pdf_bytes, filename = store.get_certificate_pdf(db, registration_id, current_user)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
