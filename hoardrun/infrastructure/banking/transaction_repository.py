"""
Adapter: Transaction repository.

Implements TransactionRepository port over the transactions table.
Wallet movements have no account_id; MOMO payments carry the provider
reference in reference_id.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Connection

from hoardrun.domain.banking.entities import (
    Transaction,
    TransactionFilter,
    TransactionStatus,
    TransactionType,
)
from hoardrun.domain.banking.ports import TransactionRepository
from hoardrun.infrastructure.persistence.database import as_utc
from hoardrun.infrastructure.persistence.tables import transactions


def _to_transaction(row) -> Transaction:
    return Transaction(
        id=row.id,
        user_id=row.user_id,
        account_id=row.account_id,
        type=TransactionType(row.type),
        amount=Decimal(row.amount),
        fee=Decimal(row.fee),
        status=TransactionStatus(row.status),
        description=row.description,
        category=row.category,
        provider=row.provider,
        reference_id=row.reference_id,
        created_at=as_utc(row.created_at),
    )


def _conditions(user_id: str, filters: TransactionFilter) -> list:
    conds = [transactions.c.user_id == user_id]
    if filters.account_id is not None:
        conds.append(transactions.c.account_id == filters.account_id)
    if filters.type is not None:
        conds.append(transactions.c.type == filters.type.value)
    if filters.category:
        conds.append(transactions.c.category.ilike(f"%{filters.category}%"))
    if filters.start is not None:
        conds.append(transactions.c.created_at >= as_utc(filters.start))
    if filters.end is not None:
        conds.append(transactions.c.created_at <= as_utc(filters.end))
    return conds


class TransactionRepositoryAdapter(TransactionRepository):
    """SQLAlchemy adapter for the transactions table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, transaction: Transaction) -> None:
        self._conn.execute(
            insert(transactions).values(
                id=transaction.id,
                user_id=transaction.user_id,
                account_id=transaction.account_id,
                type=transaction.type.value,
                amount=transaction.amount,
                fee=transaction.fee,
                status=transaction.status.value,
                description=transaction.description,
                category=transaction.category,
                provider=transaction.provider,
                reference_id=transaction.reference_id,
                created_at=as_utc(transaction.created_at),
            )
        )

    def get(self, transaction_id: str) -> Optional[Transaction]:
        row = self._conn.execute(
            select(transactions).where(transactions.c.id == transaction_id)
        ).first()
        return _to_transaction(row) if row else None

    def get_by_reference(self, reference_id: str) -> Optional[Transaction]:
        row = self._conn.execute(
            select(transactions).where(transactions.c.reference_id == reference_id)
        ).first()
        return _to_transaction(row) if row else None

    def update_status(self, transaction_id: str, status: TransactionStatus) -> None:
        self._conn.execute(
            update(transactions)
            .where(transactions.c.id == transaction_id)
            .values(status=status.value)
        )

    def transition_status(
        self,
        transaction_id: str,
        from_status: TransactionStatus,
        to_status: TransactionStatus,
    ) -> bool:
        result = self._conn.execute(
            update(transactions)
            .where(
                transactions.c.id == transaction_id,
                transactions.c.status == from_status.value,
            )
            .values(status=to_status.value)
        )
        return result.rowcount == 1

    def set_reference(
        self, transaction_id: str, reference_id: str, description: Optional[str] = None
    ) -> None:
        values = {"reference_id": reference_id}
        if description is not None:
            values["description"] = description
        self._conn.execute(
            update(transactions)
            .where(transactions.c.id == transaction_id)
            .values(**values)
        )

    def list_for_user(
        self,
        user_id: str,
        filters: TransactionFilter,
        limit: int,
        offset: int,
    ) -> tuple[list[Transaction], int]:
        conds = _conditions(user_id, filters)
        total = self._conn.execute(
            select(func.count()).select_from(transactions).where(*conds)
        ).scalar_one()
        rows = self._conn.execute(
            select(transactions)
            .where(*conds)
            .order_by(transactions.c.created_at.desc(), transactions.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [_to_transaction(row) for row in rows], total

    def totals_for_user(
        self, user_id: str, filters: TransactionFilter
    ) -> dict[str, Decimal]:
        rows = self._conn.execute(
            select(transactions.c.type, func.sum(transactions.c.amount))
            .where(*_conditions(user_id, filters))
            .group_by(transactions.c.type)
        )
        return {tx_type: Decimal(total or 0) for tx_type, total in rows}

    def count_since(self, user_id: str, since: datetime) -> int:
        return self._conn.execute(
            select(func.count())
            .select_from(transactions)
            .where(
                transactions.c.user_id == user_id,
                transactions.c.created_at >= as_utc(since),
            )
        ).scalar_one()
