"""
Helpers shared by the token-redeeming identity use cases.
"""

from datetime import datetime, timezone
from typing import Optional

from hoardrun.domain.identity.entities import VerificationPurpose, VerificationToken
from hoardrun.domain.identity.errors import InvalidVerificationTokenError
from hoardrun.domain.identity.verification import check_token


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def token_failure(
    stored: Optional[VerificationToken],
    email: str,
    purpose: VerificationPurpose,
    now: datetime,
) -> Optional[InvalidVerificationTokenError]:
    """Return why a token cannot be redeemed, or None if it can.

    Returned rather than raised so the caller can still commit the
    removal of an expired token before reporting the failure.
    """
    try:
        check_token(stored, email, purpose, now)
    except InvalidVerificationTokenError as exc:
        return exc
    return None
