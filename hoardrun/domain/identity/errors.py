"""
Domain-specific errors for the identity bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class IdentityDomainError(Exception):
    """Base error for all identity domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class EmailAlreadyRegisteredError(IdentityDomainError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}")
        self.email = email


class InvalidCredentialsError(IdentityDomainError):
    """Raised when an email/password pair does not match a user."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class WeakPasswordError(IdentityDomainError):
    """Raised when a password fails the password policy."""

    def __init__(self, feedback: list[str]) -> None:
        super().__init__("Password does not meet the password policy")
        self.feedback = feedback


class InvalidVerificationTokenError(IdentityDomainError):
    """Raised when a verification token is unknown, mismatched or expired."""

    def __init__(self, reason: str, expired: bool = False) -> None:
        super().__init__(reason)
        self.expired = expired


class UserNotFoundError(IdentityDomainError):
    """Raised when a user referenced by id or email does not exist."""

    def __init__(self, user_ref: str) -> None:
        super().__init__(f"User not found: {user_ref}")
        self.user_ref = user_ref


class AuthenticationError(IdentityDomainError):
    """Raised when a bearer token is missing, malformed, forged or expired."""
