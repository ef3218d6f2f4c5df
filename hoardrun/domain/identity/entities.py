"""
Domain entities for the identity bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional


class VerificationPurpose(Enum):
    """What a verification token may be used for."""

    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"

    @property
    def lifetime(self) -> timedelta:
        """How long a freshly issued token of this purpose stays valid."""
        if self is VerificationPurpose.EMAIL_VERIFICATION:
            return timedelta(hours=24)
        return timedelta(hours=1)


@dataclass(frozen=True)
class User:
    """A registered customer.

    `balance` is the mobile-money wallet balance, separate from any
    bank account the user holds.
    """

    id: str
    email: str
    name: str
    password_hash: str
    email_verified: bool = False
    phone_number: Optional[str] = None
    balance: Decimal = Decimal("0")
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class VerificationToken:
    """A single-use token, stored only as its SHA-256 hash."""

    token_hash: str
    email: str
    purpose: VerificationPurpose
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class PasswordStrength:
    """Result of evaluating a password against the password policy."""

    score: int
    feedback: list[str]
    is_strong: bool


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity carried by a verified bearer token."""

    id: str
    email: str
    name: Optional[str] = None


@dataclass(frozen=True)
class IssuedToken:
    """A signed access token and its lifetime in seconds."""

    access_token: str
    expires_in: int
    token_type: str = "bearer"
