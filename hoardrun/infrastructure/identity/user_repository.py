"""
Adapter: User repository.

Implements UserRepository port over the users table.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection

from hoardrun.domain.banking.errors import InsufficientFundsError
from hoardrun.domain.identity.entities import User
from hoardrun.domain.identity.errors import UserNotFoundError
from hoardrun.domain.identity.ports import UserRepository
from hoardrun.infrastructure.persistence.database import as_utc
from hoardrun.infrastructure.persistence.tables import users


def _to_user(row) -> User:
    return User(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        email_verified=row.email_verified,
        phone_number=row.phone_number,
        balance=Decimal(row.balance),
        created_at=as_utc(row.created_at),
    )


class UserRepositoryAdapter(UserRepository):
    """SQLAlchemy adapter for the users table.

    Bound to the connection of the enclosing unit of work.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def get_by_id(self, user_id: str) -> Optional[User]:
        row = self._conn.execute(select(users).where(users.c.id == user_id)).first()
        return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._conn.execute(
            select(users).where(users.c.email == email.lower())
        ).first()
        return _to_user(row) if row else None

    def add(self, user: User) -> None:
        self._conn.execute(
            insert(users).values(
                id=user.id,
                email=user.email.lower(),
                name=user.name,
                password_hash=user.password_hash,
                email_verified=user.email_verified,
                phone_number=user.phone_number,
                balance=user.balance,
                created_at=as_utc(user.created_at),
            )
        )

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        self._conn.execute(
            update(users).where(users.c.id == user_id).values(password_hash=password_hash)
        )

    def mark_email_verified(self, user_id: str) -> None:
        self._conn.execute(
            update(users).where(users.c.id == user_id).values(email_verified=True)
        )

    def adjust_balance(self, user_id: str, delta: Decimal) -> Decimal:
        result = self._conn.execute(
            update(users)
            .where(users.c.id == user_id)
            .values(balance=users.c.balance + delta)
        )
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)
        balance = self._conn.execute(
            select(users.c.balance).where(users.c.id == user_id)
        ).scalar_one()
        return Decimal(balance)

    def debit(self, user_id: str, amount: Decimal) -> Decimal:
        result = self._conn.execute(
            update(users)
            .where(users.c.id == user_id, users.c.balance >= amount)
            .values(balance=users.c.balance - amount)
        )
        balance = self._conn.execute(
            select(users.c.balance).where(users.c.id == user_id)
        ).scalar_one_or_none()
        if balance is None:
            raise UserNotFoundError(user_id)
        if result.rowcount == 0:
            raise InsufficientFundsError(str(amount), str(Decimal(balance)))
        return Decimal(balance)
