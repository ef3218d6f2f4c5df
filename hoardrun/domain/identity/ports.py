"""
Port interfaces (ABCs) for the identity bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from hoardrun.domain.identity.entities import (
    AuthenticatedUser,
    IssuedToken,
    User,
    VerificationPurpose,
    VerificationToken,
)


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Return a user by id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Return a user by lower-cased email, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> None:
        """Persist a new user."""
        raise NotImplementedError

    @abstractmethod
    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace the stored password hash of a user."""
        raise NotImplementedError

    @abstractmethod
    def mark_email_verified(self, user_id: str) -> None:
        """Flag the user's email address as verified."""
        raise NotImplementedError

    @abstractmethod
    def adjust_balance(self, user_id: str, delta: Decimal) -> Decimal:
        """Add `delta` (may be negative) to the wallet balance.

        Returns:
            The balance after the adjustment.
        """
        raise NotImplementedError

    @abstractmethod
    def debit(self, user_id: str, amount: Decimal) -> Decimal:
        """Subtract `amount` from the wallet if the balance covers it.

        Raises:
            UserNotFoundError: No such user.
            InsufficientFundsError: The wallet balance is below `amount`.
        """
        raise NotImplementedError


class VerificationTokenRepository(ABC):
    """Port for storing hashed verification tokens."""

    @abstractmethod
    def save(self, token: VerificationToken) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, token_hash: str) -> Optional[VerificationToken]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, token_hash: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_for_email(
        self, email: str, purpose: Optional[VerificationPurpose] = None
    ) -> int:
        """Delete all tokens of an email, optionally of one purpose only.

        Returns:
            Number of tokens removed.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_expired(self, now: datetime) -> int:
        """Delete every token that expired before `now`."""
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        raise NotImplementedError


class AccessTokenService(ABC):
    """Port for issuing and verifying bearer tokens."""

    @abstractmethod
    def issue(self, user: User) -> IssuedToken:
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> AuthenticatedUser:
        """Decode and validate a bearer token.

        Raises:
            AuthenticationError: If the token is forged, malformed or expired.
        """
        raise NotImplementedError


class EmailSender(ABC):
    """Port for delivering transactional email."""

    @abstractmethod
    def send(self, to: str, subject: str, html: str, text: str = "") -> str:
        """Send an email and return the provider message id."""
        raise NotImplementedError
