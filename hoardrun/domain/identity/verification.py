"""
Verification token rules.

Raw tokens are handed to the user by email; only their SHA-256 digest
is ever persisted.
"""

import hashlib
import secrets
from datetime import datetime

from hoardrun.domain.identity.entities import VerificationPurpose, VerificationToken
from hoardrun.domain.identity.errors import InvalidVerificationTokenError

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def new_token(
    email: str, purpose: VerificationPurpose, now: datetime
) -> tuple[str, VerificationToken]:
    """Create a raw token and the record to store for it.

    Returns:
        Tuple of (raw token, VerificationToken keyed by the token hash).
    """
    raw = secrets.token_hex(TOKEN_BYTES)
    record = VerificationToken(
        token_hash=hash_token(raw),
        email=email.lower(),
        purpose=purpose,
        expires_at=now + purpose.lifetime,
        created_at=now,
    )
    return raw, record


def check_token(
    stored: VerificationToken | None,
    email: str,
    purpose: VerificationPurpose,
    now: datetime,
) -> VerificationToken:
    """Validate a looked-up token against the caller's email and purpose.

    Raises:
        InvalidVerificationTokenError: If the token is unknown, belongs to
            another email, has the wrong purpose, or has expired.
    """
    if stored is None:
        raise InvalidVerificationTokenError("Invalid verification token")
    if stored.email != email.lower():
        raise InvalidVerificationTokenError("Token does not match the provided email")
    if stored.purpose is not purpose:
        raise InvalidVerificationTokenError("Invalid token type")
    if stored.is_expired(now):
        raise InvalidVerificationTokenError(
            "Verification token has expired", expired=True
        )
    return stored
