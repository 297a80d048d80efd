# File: eventpro/schemas/auth.py
from pydantic import BaseModel, EmailStr, validator


class LoginRequest(BaseModel):
    username: str  # username or email address
    password: str


class GoogleSignInRequest(BaseModel):
    credential: str  # Google ID token from the client sign-in button


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str
    password: str

    @validator("password")
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class MessageResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool
