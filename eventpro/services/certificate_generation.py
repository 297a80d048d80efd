"""
Certificate Generation Service

Renders attendance certificates as single-page PDFs with reportlab and
packages them either as raw bytes (downloads) or as data URLs (embedded in
JSON responses).
"""

import base64
import binascii
import io
import logging
from datetime import date, datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, black
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer

logger = logging.getLogger(__name__)

ACCENT = HexColor("#4f46e5")


def decode_data_url(data_url: Optional[str]) -> Optional[bytes]:
    """Return the payload of a base64 ``data:`` URL, or None if it is not one."""
    if not data_url or not data_url.startswith("data:") or "," not in data_url:
        return None
    header, payload = data_url.split(",", 1)
    if ";base64" not in header:
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Ignoring malformed base64 data URL")
        return None


def pdf_to_data_url(pdf_bytes: bytes) -> str:
    return "data:application/pdf;base64," + base64.b64encode(pdf_bytes).decode("ascii")


def _format_date(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%B %d, %Y")
    return str(value or "")


def generate_certificate_pdf(
    *,
    attendee_name: str,
    event_title: str,
    event_date: date,
    venue: str,
    certificate_id: int,
    issued_at: Optional[datetime] = None,
    speaker_name: Optional[str] = None,
    speaker_signature: Optional[str] = None,
    organization_name: str = "EventPro",
) -> bytes:
    """Generate certificate PDF content."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        topMargin=0.8 * inch,
        bottomMargin=0.8 * inch,
        title=f"Certificate - {event_title}",
        author=organization_name,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "CertificateTitle",
        parent=styles["Title"],
        fontSize=30,
        spaceAfter=24,
        alignment=TA_CENTER,
        textColor=ACCENT,
    )
    body_style = ParagraphStyle(
        "CertificateBody",
        parent=styles["Normal"],
        fontSize=13,
        alignment=TA_CENTER,
        textColor=black,
    )
    name_style = ParagraphStyle(
        "AttendeeName",
        parent=styles["Normal"],
        fontSize=24,
        leading=30,
        alignment=TA_CENTER,
        textColor=black,
    )
    event_style = ParagraphStyle(
        "EventTitle",
        parent=styles["Heading2"],
        alignment=TA_CENTER,
        textColor=ACCENT,
    )
    small_style = ParagraphStyle(
        "Small",
        parent=styles["Normal"],
        fontSize=9,
        alignment=TA_CENTER,
        textColor=HexColor("#6b7280"),
    )

    content = [
        Paragraph("CERTIFICATE OF ATTENDANCE", title_style),
        Paragraph("This is to certify that", body_style),
        Spacer(1, 12),
        Paragraph(f"<b>{escape(attendee_name)}</b>", name_style),
        Spacer(1, 12),
        Paragraph("attended", body_style),
        Spacer(1, 6),
        Paragraph(f"<b>{escape(event_title)}</b>", event_style),
        Paragraph(f"held on {_format_date(event_date)} at {escape(venue)}", body_style),
        Spacer(1, 28),
    ]

    signature_bytes = decode_data_url(speaker_signature)
    if signature_bytes:
        try:
            ImageReader(io.BytesIO(signature_bytes)).getSize()
            content.append(Image(io.BytesIO(signature_bytes), width=2.2 * inch, height=0.8 * inch))
        except Exception as e:
            # Issue the certificate without the signature
            logger.warning(f"Could not embed speaker signature: {str(e)}")
    if speaker_name:
        content.append(Paragraph(escape(speaker_name), body_style))
        content.append(Paragraph("Speaker", small_style))
    content.append(Spacer(1, 18))

    issued = _format_date(issued_at or datetime.utcnow())
    content.append(Paragraph(f"Issued {issued} by {escape(organization_name)}", small_style))
    content.append(Paragraph(f"Certificate ID: {certificate_id}", small_style))

    doc.build(content)
    buffer.seek(0)
    logger.info(f"Rendered certificate {certificate_id} for {attendee_name}")
    return buffer.getvalue()
