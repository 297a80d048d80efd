import base64
import io
import smtplib
from datetime import date, datetime, timedelta

import pytest
from jose import jwt
from PIL import Image

from eventpro.core import security
from eventpro.core.email_service import EmailService
from eventpro.core.exceptions import InvalidCredentials
from eventpro.core.sso import GoogleSSO
from eventpro.services.certificate_generation import (
    decode_data_url,
    generate_certificate_pdf,
    pdf_to_data_url,
)


def _png_data_url() -> str:
    buffer = io.BytesIO()
    Image.new("RGBA", (240, 80), (20, 20, 20, 255)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


class TestSecurity:

    def test_password_hash_round_trip(self):
        hashed = security.get_password_hash("s3cret!")
        assert hashed != "s3cret!"
        assert security.verify_password("s3cret!", hashed)
        assert not security.verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert security.verify_password("anything", "not-a-bcrypt-hash") is False

    def test_session_cookie_carries_session_id(self, settings):
        token = security.create_session_cookie("abc123", datetime.utcnow() + timedelta(days=1), settings)
        assert security.decode_session_cookie(token, settings) == "abc123"
        assert jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])["sid"] == "abc123"

    def test_forged_or_expired_cookie_is_rejected(self, settings):
        forged = jwt.encode({"sid": "abc123"}, "some-other-key", algorithm="HS256")
        assert security.decode_session_cookie(forged, settings) is None
        expired = security.create_session_cookie("abc123", datetime.utcnow() - timedelta(minutes=1), settings)
        assert security.decode_session_cookie(expired, settings) is None

    def test_attendance_code_is_stable_per_event(self, settings):
        code = security.attendance_code_for(7, settings)
        assert len(code) == 8
        assert code == code.upper()
        assert code == security.attendance_code_for(7, settings)
        assert code != security.attendance_code_for(8, settings)
        assert security.verify_attendance_code(7, f"  {code.lower()} ", settings)
        assert not security.verify_attendance_code(8, code, settings)


class TestCertificatePdf:

    def test_renders_pdf(self):
        pdf = generate_certificate_pdf(
            attendee_name="Sarah Williams",
            event_title="DevOps Summit <2023>",
            event_date=date(2023, 10, 15),
            venue="Virtual Event",
            certificate_id=12,
        )
        assert pdf.startswith(b"%PDF")

    def test_renders_with_signature(self):
        pdf = generate_certificate_pdf(
            attendee_name="Emily Brown",
            event_title="UX Design Workshop",
            event_date=date(2023, 11, 5),
            venue="Tech Hub, San Francisco",
            certificate_id=3,
            speaker_name="Jane Smith",
            speaker_signature=_png_data_url(),
        )
        assert pdf.startswith(b"%PDF")

    def test_unreadable_signature_is_skipped(self):
        garbage = "data:image/png;base64," + base64.b64encode(b"definitely not a png").decode("ascii")
        pdf = generate_certificate_pdf(
            attendee_name="Robert Johnson",
            event_title="AI and Machine Learning Conference",
            event_date=date(2023, 12, 10),
            venue="Grand Convention Center, New York",
            certificate_id=4,
            speaker_signature=garbage,
        )
        assert pdf.startswith(b"%PDF")

    def test_data_url_helpers(self):
        assert decode_data_url("data:text/plain;base64,aGVsbG8=") == b"hello"
        assert decode_data_url("https://example.com/sig.png") is None
        assert decode_data_url("data:image/png;base64,***") is None
        assert pdf_to_data_url(b"%PDF-1.4").startswith("data:application/pdf;base64,")


class TestEmailService:

    def test_disabled_sending_reports_success(self, settings):
        service = EmailService(settings)
        assert service.send_password_reset_email("sarah@example.com", "http://localhost/auth?token=x")

    def test_smtp_failure_returns_false(self, settings, monkeypatch):
        settings.SEND_EMAILS = True

        def refuse(*args, **kwargs):
            raise smtplib.SMTPConnectError(421, "service not available")

        monkeypatch.setattr(smtplib, "SMTP", refuse)
        service = EmailService(settings)

        assert service.send_registration_confirmation(
            "sarah@example.com", "Sarah", "DevOps Summit", date(2023, 10, 15), "Virtual Event"
        ) is False


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class TestGoogleSSO:

    def test_valid_token(self, settings, monkeypatch):
        settings.GOOGLE_CLIENT_ID = "client-id"
        payload = {"sub": "42", "email": "emily@example.com", "name": "Emily Brown", "aud": "client-id"}
        monkeypatch.setattr("eventpro.core.sso.requests.get", lambda *a, **kw: FakeResponse(200, payload))

        identity = GoogleSSO(settings).verify_token("id-token")

        assert identity == {
            "google_id": "42",
            "email": "emily@example.com",
            "name": "Emily Brown",
            "picture": None,
        }

    def test_wrong_audience(self, settings, monkeypatch):
        settings.GOOGLE_CLIENT_ID = "client-id"
        payload = {"sub": "42", "email": "emily@example.com", "aud": "someone-else"}
        monkeypatch.setattr("eventpro.core.sso.requests.get", lambda *a, **kw: FakeResponse(200, payload))

        with pytest.raises(InvalidCredentials):
            GoogleSSO(settings).verify_token("id-token")

    def test_rejected_token(self, settings, monkeypatch):
        monkeypatch.setattr(
            "eventpro.core.sso.requests.get",
            lambda *a, **kw: FakeResponse(400, {"error": "invalid_token"}),
        )

        with pytest.raises(InvalidCredentials):
            GoogleSSO(settings).verify_token("id-token")
