# File: eventpro/core/exceptions.py
"""
Domain errors raised by the event store and the auth layer.

Each error carries the HTTP status it maps to; ``eventpro.main`` turns any
``EventProError`` into a ``{"message": ...}`` response with that status.
"""
from fastapi import status


class EventProError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request could not be processed"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


# ---------------------------
# Authorization
# ---------------------------
class NotAuthenticated(EventProError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentials(EventProError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid username or password"


class PermissionDenied(EventProError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


# ---------------------------
# Not found
# ---------------------------
class NotFoundError(EventProError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class EventNotFound(NotFoundError):
    message = "Event not found"


class RegistrationNotFound(NotFoundError):
    message = "Registration not found"


class UserNotFound(NotFoundError):
    message = "User not found"


class TopicNotFound(NotFoundError):
    message = "Topic not found"


class CertificateNotFound(NotFoundError):
    message = "Certificate not found"


# ---------------------------
# Domain rule violations
# ---------------------------
class DomainRuleViolation(EventProError):
    status_code = status.HTTP_409_CONFLICT


class DuplicateRegistration(DomainRuleViolation):
    message = "User is already registered for this event"


class CapacityExceeded(DomainRuleViolation):
    message = "Event has reached maximum capacity"


class AttendanceRequired(DomainRuleViolation):
    message = "Attendance must be marked before generating certificate"


class CertificateAlreadyIssued(DomainRuleViolation):
    message = "Certificate already generated"


class AttendanceAlreadyRecorded(DomainRuleViolation):
    message = "Registration cannot be cancelled after attendance has been marked"


class UsernameTaken(DomainRuleViolation):
    message = "Username already exists"


class EmailTaken(DomainRuleViolation):
    message = "Email already in use"


# ---------------------------
# Bad input that passed schema validation
# ---------------------------
class InvalidAttendanceCode(EventProError):
    message = "Invalid attendance code"


class InvalidResetToken(EventProError):
    message = "Invalid or expired reset token"


class SpeakerRoleRequired(EventProError):
    message = "Assigned user must have the speaker role"


class InvalidPassword(EventProError):
    message = "Current password is incorrect"
