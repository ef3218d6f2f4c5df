"""
Pydantic schemas for identity API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here; the password policy is applied by the
use cases so that its feedback reaches the client.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
EMAIL_MAX_LEN = 254
PASSWORD_MAX_LEN = 128


class SignUpRequest(BaseModel):
    """Request schema for registration.

    Attributes:
        email: Email address.
        password: Plain-text password (checked against the password policy).
        name: Display name.
    """

    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    name: str = Field(..., min_length=1, max_length=100)


class SignInRequest(BaseModel):
    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class VerifyEmailRequest(BaseModel):
    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    token: str = Field(..., min_length=1, max_length=128)


class EmailRequest(BaseModel):
    """Request schema for flows keyed by email only."""

    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)


class ResetPasswordRequest(BaseModel):
    email: str = Field(..., max_length=EMAIL_MAX_LEN, pattern=EMAIL_PATTERN)
    token: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class PasswordStrengthRequest(BaseModel):
    """Request schema for scoring a password.

    Attributes:
        password: Candidate password.
        suggest: Also return a generated strong password.
    """

    password: str = Field(..., max_length=PASSWORD_MAX_LEN)
    suggest: bool = False


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    email_verified: bool
    balance: Decimal
    created_at: datetime


class SignUpResponse(BaseModel):
    message: str
    user: UserResponse


class SignInResponse(BaseModel):
    access_token: str
    token_type: str
    expires_in: int
    user: UserResponse


class SessionResponse(BaseModel):
    user: UserResponse


class PasswordStrengthResponse(BaseModel):
    score: int = Field(..., ge=0, le=100)
    feedback: list[str]
    is_strong: bool
    suggestion: str | None = None
