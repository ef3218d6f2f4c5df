"""
Adapter: JWT access tokens.

Implements AccessTokenService port with PyJWT. Tokens are HS256-signed
and carry sub, email, name, iat and exp claims.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from hoardrun.domain.identity.entities import AuthenticatedUser, IssuedToken, User
from hoardrun.domain.identity.errors import AuthenticationError
from hoardrun.domain.identity.ports import AccessTokenService

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class JwtAccessTokenService(AccessTokenService):
    """Issues and verifies signed bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiry_minutes: int = 60) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expiry = timedelta(minutes=expiry_minutes)

    def issue(self, user: User) -> IssuedToken:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "iat": now,
            "exp": now + self._expiry,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(
            access_token=token, expires_in=int(self._expiry.total_seconds())
        )

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            logger.info("Rejected bearer token: %s", type(exc).__name__)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from exc

        return AuthenticatedUser(
            id=str(payload["sub"]),
            email=payload.get("email", ""),
            name=payload.get("name"),
        )
