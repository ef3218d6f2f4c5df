"""
Adapter: Account repository.

Implements AccountRepository port over the accounts table.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Connection

from hoardrun.domain.banking.entities import Account, AccountSummary, AccountType
from hoardrun.domain.banking.errors import AccountNotFoundError, InsufficientFundsError
from hoardrun.domain.banking.ports import AccountRepository
from hoardrun.infrastructure.persistence.database import as_utc
from hoardrun.infrastructure.persistence.tables import accounts, transactions


def _to_account(row) -> Account:
    return Account(
        id=row.id,
        user_id=row.user_id,
        type=AccountType(row.type),
        number=row.number,
        currency=row.currency,
        balance=Decimal(row.balance),
        is_active=row.is_active,
        created_at=as_utc(row.created_at),
    )


class AccountRepositoryAdapter(AccountRepository):
    """SQLAlchemy adapter for the accounts table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, account: Account) -> None:
        self._conn.execute(
            insert(accounts).values(
                id=account.id,
                user_id=account.user_id,
                type=account.type.value,
                number=account.number,
                currency=account.currency,
                balance=account.balance,
                is_active=account.is_active,
                created_at=as_utc(account.created_at),
            )
        )

    def get(self, account_id: str) -> Optional[Account]:
        row = self._conn.execute(
            select(accounts).where(accounts.c.id == account_id)
        ).first()
        return _to_account(row) if row else None

    def number_exists(self, number: str) -> bool:
        found = self._conn.execute(
            select(accounts.c.id).where(accounts.c.number == number)
        ).first()
        return found is not None

    def list_for_user(
        self,
        user_id: str,
        account_type: Optional[AccountType] = None,
        is_active: Optional[bool] = None,
    ) -> list[AccountSummary]:
        tx_count = (
            select(func.count(transactions.c.id))
            .where(transactions.c.account_id == accounts.c.id)
            .scalar_subquery()
        )
        stmt = (
            select(accounts, tx_count.label("transaction_count"))
            .where(accounts.c.user_id == user_id)
            .order_by(accounts.c.created_at.desc())
        )
        if account_type is not None:
            stmt = stmt.where(accounts.c.type == account_type.value)
        if is_active is not None:
            stmt = stmt.where(accounts.c.is_active == is_active)

        return [
            AccountSummary(account=_to_account(row), transaction_count=row.transaction_count)
            for row in self._conn.execute(stmt)
        ]

    def first_active_for_user(self, user_id: str) -> Optional[Account]:
        row = self._conn.execute(
            select(accounts)
            .where(accounts.c.user_id == user_id, accounts.c.is_active.is_(True))
            .order_by(accounts.c.created_at.asc())
            .limit(1)
        ).first()
        return _to_account(row) if row else None

    def adjust_balance(self, account_id: str, delta: Decimal) -> Decimal:
        result = self._conn.execute(
            update(accounts)
            .where(accounts.c.id == account_id)
            .values(balance=accounts.c.balance + delta)
        )
        if result.rowcount == 0:
            raise AccountNotFoundError(account_id)
        balance = self._conn.execute(
            select(accounts.c.balance).where(accounts.c.id == account_id)
        ).scalar_one()
        return Decimal(balance)

    def debit(self, account_id: str, amount: Decimal) -> Decimal:
        result = self._conn.execute(
            update(accounts)
            .where(accounts.c.id == account_id, accounts.c.balance >= amount)
            .values(balance=accounts.c.balance - amount)
        )
        balance = self._conn.execute(
            select(accounts.c.balance).where(accounts.c.id == account_id)
        ).scalar_one_or_none()
        if balance is None:
            raise AccountNotFoundError(account_id)
        if result.rowcount == 0:
            raise InsufficientFundsError(str(amount), str(Decimal(balance)))
        return Decimal(balance)
