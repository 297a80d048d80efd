# File: eventpro/schemas/certificate.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime, date


class CertificateGenerateRequest(BaseModel):
    speaker_signature: Optional[str] = None  # PNG data URL


class Certificate(BaseModel):
    id: int
    registration_id: int
    certificate_url: str
    speaker_signature: Optional[str] = None
    issued_at: datetime

    class Config:
        from_attributes = True


class CertificateSummary(BaseModel):
    id: int  # registration id
    event_id: int
    event_title: str
    event_date: date
    user_id: int
    user_name: str
    certificate_url: Optional[str] = None
    issued_at: Optional[datetime] = None
    speaker_signature: Optional[str] = None


class CertificateDocument(CertificateSummary):
    pdf_data_url: str


class CertificateVerification(BaseModel):
    valid: bool
    registration_id: int
    event_title: Optional[str] = None
    user_name: Optional[str] = None
    issued_at: Optional[datetime] = None
