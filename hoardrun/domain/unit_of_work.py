"""
Unit of work port.

A unit of work groups repository calls into one atomic database
transaction. Leaving the `with` block normally commits; leaving it with
an exception rolls everything back.

Usage:
    with uow_factory() as uow:
        uow.transactions.update_status(tx.id, TransactionStatus.COMPLETED)
        uow.users.adjust_balance(tx.user_id, tx.amount)
"""

from abc import ABC, abstractmethod

from hoardrun.domain.banking.ports import (
    AccountRepository,
    SavingsContributionRepository,
    SavingsGoalRepository,
    TransactionRepository,
)
from hoardrun.domain.identity.ports import (
    UserRepository,
    VerificationTokenRepository,
)
from hoardrun.domain.payments.ports import AuditLogRepository, TransactionAlertRepository


class UnitOfWork(ABC):
    """Repositories sharing one database transaction."""

    users: UserRepository
    tokens: VerificationTokenRepository
    accounts: AccountRepository
    transactions: TransactionRepository
    savings_goals: SavingsGoalRepository
    contributions: SavingsContributionRepository
    alerts: TransactionAlertRepository
    audit_logs: AuditLogRepository

    @abstractmethod
    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        raise NotImplementedError
