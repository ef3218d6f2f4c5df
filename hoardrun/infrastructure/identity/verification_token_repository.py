"""
Adapter: Verification token repository.

Implements VerificationTokenRepository port. Only token hashes are stored.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Connection

from hoardrun.domain.identity.entities import VerificationPurpose, VerificationToken
from hoardrun.domain.identity.ports import VerificationTokenRepository
from hoardrun.infrastructure.persistence.database import as_utc
from hoardrun.infrastructure.persistence.tables import verification_tokens


class VerificationTokenRepositoryAdapter(VerificationTokenRepository):
    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def save(self, token: VerificationToken) -> None:
        self._conn.execute(
            insert(verification_tokens).values(
                token_hash=token.token_hash,
                email=token.email,
                purpose=token.purpose.value,
                expires_at=as_utc(token.expires_at),
                created_at=as_utc(token.created_at),
            )
        )

    def get(self, token_hash: str) -> Optional[VerificationToken]:
        row = self._conn.execute(
            select(verification_tokens).where(
                verification_tokens.c.token_hash == token_hash
            )
        ).first()
        if row is None:
            return None
        return VerificationToken(
            token_hash=row.token_hash,
            email=row.email,
            purpose=VerificationPurpose(row.purpose),
            expires_at=as_utc(row.expires_at),
            created_at=as_utc(row.created_at),
        )

    def delete(self, token_hash: str) -> None:
        self._conn.execute(
            delete(verification_tokens).where(
                verification_tokens.c.token_hash == token_hash
            )
        )

    def delete_for_email(
        self, email: str, purpose: Optional[VerificationPurpose] = None
    ) -> int:
        stmt = delete(verification_tokens).where(
            verification_tokens.c.email == email.lower()
        )
        if purpose is not None:
            stmt = stmt.where(verification_tokens.c.purpose == purpose.value)
        return self._conn.execute(stmt).rowcount

    def delete_expired(self, now: datetime) -> int:
        return self._conn.execute(
            delete(verification_tokens).where(
                verification_tokens.c.expires_at < as_utc(now)
            )
        ).rowcount
