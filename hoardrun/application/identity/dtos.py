"""
Data Transfer Objects for the identity application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from hoardrun.domain.identity.entities import User


@dataclass(frozen=True)
class UserView:
    """Public projection of a user. Never carries the password hash."""

    id: str
    email: str
    name: str
    email_verified: bool
    balance: Decimal
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            email_verified=user.email_verified,
            balance=user.balance,
            created_at=user.created_at,
        )


@dataclass(frozen=True)
class SignUpCommand:
    """Input DTO for registering a user.

    Attributes:
        email: Email address; normalised to lower case.
        password: Plain-text password, checked against the password policy.
        name: Display name.
    """

    email: str
    password: str
    name: str


@dataclass(frozen=True)
class SignInCommand:
    email: str
    password: str


@dataclass(frozen=True)
class SignInResult:
    """Output DTO for a successful sign-in.

    Attributes:
        access_token: Signed bearer token.
        token_type: Always "bearer".
        expires_in: Token lifetime in seconds.
        user: The signed-in user.
    """

    access_token: str
    token_type: str
    expires_in: int
    user: UserView


@dataclass(frozen=True)
class VerifyEmailCommand:
    email: str
    token: str


@dataclass(frozen=True)
class EmailOnlyCommand:
    """Input DTO for flows keyed by email alone (resend, forgot password)."""

    email: str


@dataclass(frozen=True)
class ResetPasswordCommand:
    email: str
    token: str
    new_password: str
