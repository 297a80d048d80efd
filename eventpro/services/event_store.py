"""
Event Store

The application's domain service. Every route handler goes through an
``EventStore`` instance; it owns the registration -> attendance -> certificate
state machine, the activity log and the dashboard aggregates, plus the event
catalogue and account operations that sit around them.

Each operation takes the request's SQLAlchemy session as its first argument
and commits its own work. The store keeps no per-request state, so a single
instance is built in ``create_app`` and shared by all requests.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventpro import crud
from eventpro.core.config import Settings
from eventpro.core.email_service import EmailService
from eventpro.core.exceptions import (
    AttendanceAlreadyRecorded,
    AttendanceRequired,
    CapacityExceeded,
    CertificateAlreadyIssued,
    CertificateNotFound,
    DuplicateRegistration,
    EmailTaken,
    EventNotFound,
    InvalidAttendanceCode,
    InvalidCredentials,
    InvalidPassword,
    InvalidResetToken,
    PermissionDenied,
    RegistrationNotFound,
    SpeakerRoleRequired,
    TopicNotFound,
    UserNotFound,
    UsernameTaken,
)
from eventpro.core.security import (
    attendance_code_for,
    create_session_cookie,
    verify_attendance_code,
    verify_password,
)
from eventpro.core.sso import GoogleSSO
from eventpro.models.activity_log import ActivityLog
from eventpro.models.certificate import Certificate
from eventpro.models.event import Event
from eventpro.models.event_registration import EventRegistration
from eventpro.models.event_speaker import EventSpeaker
from eventpro.models.topic import Topic
from eventpro.models.user import User, UserRole
from eventpro.schemas.event import EventCreate, EventUpdate, TopicCreate
from eventpro.schemas.user import ProfileUpdate, UserCreate, UserRegister
from eventpro.services.certificate_generation import generate_certificate_pdf, pdf_to_data_url

logger = logging.getLogger(__name__)


class EventStore:

    def __init__(
        self,
        settings: Settings,
        email_service: Optional[EmailService] = None,
        sso: Optional[GoogleSSO] = None,
    ):
        self.settings = settings
        self.email_service = email_service or EmailService(settings)
        self.sso = sso or GoogleSSO(settings)

    # ---------------------------
    # Accounts
    # ---------------------------
    def _ensure_unique_account(self, db: Session, *, username: str, email: str) -> None:
        if crud.user.get_by_username(db, username=username):
            raise UsernameTaken()
        if crud.user.get_by_email(db, email=email):
            raise EmailTaken()

    def register_user(self, db: Session, obj_in: UserRegister) -> User:
        """Self-service sign-up. The role is always ``user``."""
        self._ensure_unique_account(db, username=obj_in.username, email=obj_in.email)
        user_in = UserCreate(**obj_in.dict(), role=UserRole.USER)
        user = crud.user.create(db, obj_in=user_in)
        logger.info(f"Registered new user {user.username} (id={user.id})")
        return user

    def create_user(self, db: Session, obj_in: UserCreate) -> User:
        self._ensure_unique_account(db, username=obj_in.username, email=obj_in.email)
        user = crud.user.create(db, obj_in=obj_in)
        logger.info(f"Created {user.role.value} account {user.username} (id={user.id})")
        return user

    def create_speaker(self, db: Session, obj_in: UserRegister) -> User:
        return self.create_user(db, UserCreate(**obj_in.dict(), role=UserRole.SPEAKER))

    def get_users(self, db: Session) -> List[User]:
        return db.query(User).order_by(User.id).all()

    def authenticate(self, db: Session, *, login: str, password: str) -> User:
        user = crud.user.authenticate(db, login=login, password=password)
        if not user:
            logger.warning(f"Failed login attempt for {login}")
            raise InvalidCredentials()
        return user

    def google_sign_in(self, db: Session, *, credential: str) -> User:
        identity = self.sso.verify_token(credential)
        return crud.user.get_or_create_google_user(db, **identity)

    def start_session(self, db: Session, user: User) -> Tuple[str, datetime]:
        """Open a server-side session and return the signed cookie value and its expiry."""
        removed = crud.session.purge_expired(db)
        if removed:
            logger.debug(f"Purged {removed} expired sessions")
        user_session = crud.session.create(
            db, user_id=user.id, expires_in_days=self.settings.SESSION_EXPIRE_DAYS
        )
        cookie = create_session_cookie(user_session.id, user_session.expires_at, self.settings)
        return cookie, user_session.expires_at

    def end_session(self, db: Session, session_id: str) -> None:
        crud.session.delete(db, session_id=session_id)

    def request_password_reset(self, db: Session, *, email: str) -> None:
        """Email a reset link. Unknown addresses are ignored silently."""
        user = crud.user.get_by_email(db, email=email)
        if not user:
            logger.info(f"Password reset requested for unknown email {email}")
            return

        token = crud.password_reset.create(
            db, user_id=user.id, expires_in_minutes=self.settings.PASSWORD_RESET_EXPIRE_MINUTES
        )
        reset_link = f"{self.settings.password_reset_url}?token={token.token}"
        if not self.email_service.send_password_reset_email(user.email, reset_link):
            logger.error(f"Password reset email could not be delivered to {user.email}")

    def reset_password(self, db: Session, *, token: str, password: str) -> None:
        reset_token = crud.password_reset.get_valid(db, token=token)
        if not reset_token:
            raise InvalidResetToken()

        user = crud.user.get(db, reset_token.user_id)
        if not user:
            raise InvalidResetToken()

        crud.user.update(db, db_obj=user, obj_in={"password": password})
        crud.password_reset.mark_used(db, db_obj=reset_token)
        logger.info(f"Password reset completed for user {user.id}")

    def get_profile(self, db: Session, user: User) -> Dict[str, Any]:
        today = date.today()
        upcoming = []
        attended = []
        for reg in crud.registration.get_by_user(db, user_id=user.id):
            event = reg.event
            if event.event_date >= today:
                upcoming.append({
                    "id": event.id,
                    "title": event.title,
                    "event_date": event.event_date,
                    "start_time": event.start_time,
                    "venue": event.venue,
                })
            if reg.attended:
                attended.append({
                    "id": event.id,
                    "title": event.title,
                    "event_date": event.event_date,
                    "certificate_url": reg.certificate_url,
                })
        upcoming.sort(key=lambda item: (item["event_date"], item["start_time"]))

        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "bio": user.bio,
            "profile_image": user.profile_image,
            "signature_image": user.signature_image,
            "created_at": user.created_at,
            "upcoming_registrations": upcoming,
            "attended_events": attended,
        }

    def update_profile(self, db: Session, user: User, obj_in: ProfileUpdate) -> User:
        update_data = obj_in.dict(exclude_unset=True)
        current_password = update_data.pop("current_password", None)
        new_password = update_data.pop("new_password", None)
        update_data.pop("confirm_password", None)
        for required in ("name", "email"):
            if update_data.get(required, "") is None:
                del update_data[required]

        if new_password:
            if not current_password or not verify_password(current_password, user.hashed_password):
                raise InvalidPassword()
            update_data["password"] = new_password

        email = update_data.get("email")
        if email and email != user.email and crud.user.get_by_email(db, email=email):
            raise EmailTaken()

        return crud.user.update(db, db_obj=user, obj_in=update_data)

    def update_signature(self, db: Session, user: User, signature_image: str) -> User:
        return crud.user.update(db, db_obj=user, obj_in={"signature_image": signature_image})

    # ---------------------------
    # Event catalogue
    # ---------------------------
    def _get_event_or_404(self, db: Session, event_id: int) -> Event:
        event = crud.event.get(db, event_id)
        if not event:
            raise EventNotFound()
        return event

    def _add_topic(self, db: Session, event_id: int, topic_in: TopicCreate) -> Topic:
        topic = crud.topic.create(
            db, event_id=event_id, title=topic_in.title, description=topic_in.description
        )
        if topic_in.speaker_id is not None:
            self.assign_speaker(db, speaker_id=topic_in.speaker_id, topic_id=topic.id)
        return topic

    def create_event(self, db: Session, obj_in: EventCreate, creator: User) -> Event:
        event = crud.event.create_with_owner(db, obj_in=obj_in, created_by_id=creator.id)
        for topic_in in obj_in.topics:
            self._add_topic(db, event.id, topic_in)
        self.log_activity(db, creator.id, "create_event", f'Created new event "{event.title}"')
        db.refresh(event)
        return event

    def update_event(self, db: Session, event_id: int, obj_in: EventUpdate, user: User) -> Event:
        event = self._get_event_or_404(db, event_id)
        event = crud.event.update_event(db, db_obj=event, obj_in=obj_in)
        self.log_activity(db, user.id, "update_event", f'Updated event "{event.title}"')
        return event

    def delete_event(self, db: Session, event_id: int) -> None:
        """Delete an event along with its topics, speaker assignments, registrations and certificates."""
        event = self._get_event_or_404(db, event_id)
        db.delete(event)
        db.commit()
        logger.info(f"Deleted event {event_id}")

    def get_events(self, db: Session) -> List[Event]:
        return crud.event.get_all(db)

    def get_upcoming_events(self, db: Session, limit: int = 3) -> List[Event]:
        return crud.event.get_upcoming(db, today=date.today(), limit=limit)

    def get_event(self, db: Session, event_id: int, viewer: Optional[User] = None) -> Dict[str, Any]:
        """Event detail with topics, registrations and the viewer's own state when signed in."""
        event = self._get_event_or_404(db, event_id)

        own = None
        if viewer is not None:
            own = crud.registration.get_by_event_and_user(db, event_id=event.id, user_id=viewer.id)

        return {
            "id": event.id,
            "title": event.title,
            "description": event.description,
            "event_date": event.event_date,
            "start_time": event.start_time,
            "end_time": event.end_time,
            "venue": event.venue,
            "location_type": event.location_type,
            "capacity": event.capacity,
            "status": event.status,
            "created_by_id": event.created_by_id,
            "created_at": event.created_at,
            "updated_at": event.updated_at,
            "registration_count": event.registration_count,
            "registration_percentage": event.registration_percentage,
            "topics": event.topics,
            "registrations": event.registrations,
            "is_registered": own is not None,
            "has_attended": bool(own and own.attended),
            "has_certificate": bool(own and own.certificate_generated),
            "certificate_url": own.certificate_url if own else None,
        }

    def create_topic(self, db: Session, event_id: int, obj_in: TopicCreate) -> Topic:
        self._get_event_or_404(db, event_id)
        topic = self._add_topic(db, event_id, obj_in)
        db.refresh(topic)
        return topic

    def get_topics(self, db: Session, event_id: int) -> List[Topic]:
        self._get_event_or_404(db, event_id)
        return crud.topic.get_by_event(db, event_id=event_id)

    def assign_speaker(self, db: Session, *, speaker_id: int, topic_id: int) -> EventSpeaker:
        speaker = crud.user.get(db, speaker_id)
        if not speaker:
            raise UserNotFound("Speaker not found")
        if not speaker.is_speaker:
            raise SpeakerRoleRequired()
        if not crud.topic.get(db, topic_id):
            raise TopicNotFound()
        return crud.topic.assign_speaker(db, topic_id=topic_id, speaker_id=speaker_id)

    def get_speakers(self, db: Session) -> List[Dict[str, Any]]:
        speakers = []
        for speaker in crud.user.get_by_role(db, role=UserRole.SPEAKER):
            events: Dict[int, Dict[str, Any]] = {}
            for assignment in speaker.speaker_assignments:
                event = assignment.topic.event
                events.setdefault(
                    event.id, {"id": event.id, "title": event.title, "event_date": event.event_date}
                )
            speakers.append({
                "id": speaker.id,
                "username": speaker.username,
                "email": speaker.email,
                "name": speaker.name,
                "role": speaker.role,
                "bio": speaker.bio,
                "profile_image": speaker.profile_image,
                "signature_image": speaker.signature_image,
                "created_at": speaker.created_at,
                "events": sorted(events.values(), key=lambda item: item["id"]),
            })
        return speakers

    # ---------------------------
    # Registration
    # ---------------------------
    def register(self, db: Session, user: User, event_id: int) -> EventRegistration:
        """
        Register ``user`` for an event.

        Checked in order: an existing registration for the pair, the event's
        existence, then capacity. By default capacity is a count followed by
        an insert, so two concurrent requests for the last seat can both get
        in. With ``ENFORCE_CAPACITY_ATOMICALLY`` the insert itself carries the
        capacity condition.
        """
        if crud.registration.get_by_event_and_user(db, event_id=event_id, user_id=user.id):
            raise DuplicateRegistration()

        event = self._get_event_or_404(db, event_id)

        registered = crud.registration.count_for_event(db, event_id=event.id)
        if registered >= event.capacity:
            raise CapacityExceeded()

        try:
            if self.settings.ENFORCE_CAPACITY_ATOMICALLY:
                reg = crud.registration.create_within_capacity(db, event_id=event.id, user_id=user.id)
                if reg is None:
                    raise CapacityExceeded()
            else:
                reg = crud.registration.create(db, event_id=event.id, user_id=user.id)
        except IntegrityError:
            db.rollback()
            raise DuplicateRegistration()

        self.log_activity(db, user.id, "register_event", f'Registered for event "{event.title}"')
        self.email_service.send_registration_confirmation(
            user.email, user.name, event.title, event.event_date, event.venue
        )
        return reg

    def cancel_registration(self, db: Session, user: User, event_id: int) -> bool:
        """Returns False when there was nothing to cancel."""
        reg = crud.registration.get_by_event_and_user(db, event_id=event_id, user_id=user.id)
        if not reg:
            return False
        if reg.attended:
            raise AttendanceAlreadyRecorded()

        title = reg.event.title
        if not crud.registration.delete_by_event_and_user(db, event_id=event_id, user_id=user.id):
            return False
        self.log_activity(db, user.id, "cancel_registration", f'Cancelled registration for event "{title}"')
        return True

    def get_registration(self, db: Session, registration_id: int) -> Optional[EventRegistration]:
        return crud.registration.get(db, registration_id)

    def get_event_registrations(self, db: Session, event_id: int) -> List[EventRegistration]:
        self._get_event_or_404(db, event_id)
        return crud.registration.get_by_event(db, event_id=event_id)

    def get_user_registrations(self, db: Session, user: User) -> List[EventRegistration]:
        return crud.registration.get_by_user(db, user_id=user.id)

    # ---------------------------
    # Attendance
    # ---------------------------
    def mark_attendance(self, db: Session, registration_id: int) -> bool:
        """
        Record attendance for a registration. Marking again overwrites the
        attendance time. Returns False, logging nothing, when the registration
        does not exist.
        """
        reg = crud.registration.mark_attended(db, id=registration_id)
        if reg is None:
            return False
        self.log_activity(db, reg.user_id, "mark_attendance", f'Marked attendance for "{reg.event.title}"')
        return True

    def mark_attendance_for_user(self, db: Session, *, event_id: int, user_id: int) -> bool:
        reg = crud.registration.get_by_event_and_user(db, event_id=event_id, user_id=user_id)
        if not reg:
            return False
        return self.mark_attendance(db, reg.id)

    def attendance_code(self, db: Session, event_id: int) -> str:
        event = self._get_event_or_404(db, event_id)
        return attendance_code_for(event.id, self.settings)

    def self_attendance(self, db: Session, user: User, event_id: int, code: str) -> bool:
        event = self._get_event_or_404(db, event_id)
        reg = crud.registration.get_by_event_and_user(db, event_id=event.id, user_id=user.id)
        if not reg:
            raise RegistrationNotFound("You are not registered for this event")
        if not verify_attendance_code(event.id, code, self.settings):
            raise InvalidAttendanceCode()
        return self.mark_attendance(db, reg.id)

    # ---------------------------
    # Certificates
    # ---------------------------
    def generate_certificate(
        self, db: Session, registration_id: int, speaker_signature: Optional[str] = None
    ) -> Certificate:
        reg = crud.registration.get(db, registration_id)
        if not reg:
            raise RegistrationNotFound()
        if not reg.attended:
            raise AttendanceRequired()
        if reg.certificate_generated:
            raise CertificateAlreadyIssued()

        certificate_url = f"/certificates/{reg.id}"
        try:
            certificate = crud.certificate.issue(
                db,
                registration=reg,
                certificate_url=certificate_url,
                speaker_signature=speaker_signature,
            )
        except IntegrityError:
            db.rollback()
            raise CertificateAlreadyIssued()

        self.log_activity(
            db, reg.user_id, "generate_certificate", f'Generated certificate for "{reg.event.title}"'
        )
        return certificate

    def generate_certificate_for_user(
        self, db: Session, user: User, event_id: int, speaker_signature: Optional[str] = None
    ) -> Certificate:
        reg = crud.registration.get_by_event_and_user(db, event_id=event_id, user_id=user.id)
        if not reg:
            raise RegistrationNotFound()
        return self.generate_certificate(db, reg.id, speaker_signature)

    def _certificate_summary(self, reg: EventRegistration) -> Dict[str, Any]:
        cert = reg.certificate
        return {
            "id": reg.id,
            "event_id": reg.event_id,
            "event_title": reg.event.title,
            "event_date": reg.event.event_date,
            "user_id": reg.user_id,
            "user_name": reg.user.name,
            "certificate_url": reg.certificate_url,
            "issued_at": cert.issued_at if cert else None,
            "speaker_signature": cert.speaker_signature if cert else None,
        }

    def get_user_certificates(self, db: Session, user: User) -> List[Dict[str, Any]]:
        regs = crud.registration.get_with_certificates(db, user_id=user.id)
        return [self._certificate_summary(reg) for reg in regs]

    def get_all_certificates(self, db: Session) -> List[Dict[str, Any]]:
        return [self._certificate_summary(reg) for reg in crud.registration.get_with_certificates(db)]

    def _get_issued_registration(self, db: Session, registration_id: int, viewer: User) -> EventRegistration:
        reg = crud.registration.get(db, registration_id)
        if not reg or not reg.certificate_generated:
            raise CertificateNotFound()
        if reg.user_id != viewer.id and not viewer.is_admin:
            raise PermissionDenied("You can only access your own certificates")
        return reg

    def _render(self, reg: EventRegistration) -> bytes:
        speaker_name = None
        for topic in reg.event.topics:
            if topic.speakers:
                speaker_name = topic.speakers[0].speaker.name
                break
        cert = reg.certificate
        return generate_certificate_pdf(
            attendee_name=reg.user.name,
            event_title=reg.event.title,
            event_date=reg.event.event_date,
            venue=reg.event.venue,
            certificate_id=reg.id,
            issued_at=cert.issued_at if cert else None,
            speaker_name=speaker_name,
            speaker_signature=cert.speaker_signature if cert else None,
            organization_name=self.settings.ORGANIZATION_NAME,
        )

    def get_certificate(self, db: Session, registration_id: int, viewer: User) -> Dict[str, Any]:
        reg = self._get_issued_registration(db, registration_id, viewer)
        document = self._certificate_summary(reg)
        document["pdf_data_url"] = pdf_to_data_url(self._render(reg))
        return document

    def get_certificate_pdf(self, db: Session, registration_id: int, viewer: User) -> Tuple[bytes, str]:
        reg = self._get_issued_registration(db, registration_id, viewer)
        filename = f"certificate-{reg.id}.pdf"
        return self._render(reg), filename

    def verify_certificate(self, db: Session, registration_id: int) -> Dict[str, Any]:
        reg = crud.registration.get(db, registration_id)
        if not reg or not reg.certificate_generated:
            return {"valid": False, "registration_id": registration_id}
        return {
            "valid": True,
            "registration_id": reg.id,
            "event_title": reg.event.title,
            "user_name": reg.user.name,
            "issued_at": reg.certificate.issued_at if reg.certificate else None,
        }

    # ---------------------------
    # Activity & dashboard
    # ---------------------------
    def log_activity(self, db: Session, user_id: int, action: str, description: str) -> ActivityLog:
        entry = crud.activity.log(db, user_id=user_id, action=action, description=description)
        logger.info(f"Activity [{action}] user={user_id}: {description}")
        return entry

    def get_recent_activity(self, db: Session, limit: int = 10) -> List[ActivityLog]:
        return crud.activity.get_recent(db, limit=limit)

    def get_dashboard_stats(self, db: Session) -> Dict[str, int]:
        return {
            "total_events": crud.event.count(db),
            "total_users": crud.user.count(db),
            "total_registrations": crud.registration.count(db),
            "certificates_issued": crud.certificate.count(db),
        }
