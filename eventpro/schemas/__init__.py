# File: eventpro/schemas/__init__.py
from .user import (
    UserBase, UserRegister, UserCreate, UserUpdate, UserBrief, User,
    Speaker, SpeakerEvent, ProfileUpdate, SignatureUpdate,
    UpcomingRegistration, AttendedEvent, Profile,
)
from .auth import (
    LoginRequest, GoogleSignInRequest, ForgotPasswordRequest, ResetPasswordRequest,
    MessageResponse, SuccessResponse,
)
from .event import (
    TopicCreate, Topic, SpeakerAssignmentCreate, SpeakerAssignment,
    EventBase, EventCreate, EventUpdate, Event,
)
from .registration import (
    Registration, RegistrationWithUser, EventDetail, SelfAttendanceRequest,
    AttendanceCode, AttendanceResult,
)
from .certificate import (
    CertificateGenerateRequest, Certificate, CertificateSummary,
    CertificateDocument, CertificateVerification,
)
from .dashboard import DashboardStats, ActivityEntry
