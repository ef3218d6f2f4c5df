"""
Port interfaces (ABCs) for the banking bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from hoardrun.domain.banking.entities import (
    Account,
    AccountSummary,
    AccountType,
    SavingsContribution,
    SavingsGoal,
    Transaction,
    TransactionFilter,
    TransactionStatus,
)


class AccountRepository(ABC):
    """Port for persisting and retrieving bank accounts."""

    @abstractmethod
    def add(self, account: Account) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    @abstractmethod
    def number_exists(self, number: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        account_type: Optional[AccountType] = None,
        is_active: Optional[bool] = None,
    ) -> list[AccountSummary]:
        """Return the user's accounts, newest first, with transaction counts."""
        raise NotImplementedError

    @abstractmethod
    def first_active_for_user(self, user_id: str) -> Optional[Account]:
        """Return the user's oldest active account, or None."""
        raise NotImplementedError

    @abstractmethod
    def adjust_balance(self, account_id: str, delta: Decimal) -> Decimal:
        """Add `delta` (may be negative) to the balance and return the new one."""
        raise NotImplementedError

    @abstractmethod
    def debit(self, account_id: str, amount: Decimal) -> Decimal:
        """Subtract `amount` if the balance covers it and return the new balance.

        The balance check and the write are one statement.

        Raises:
            AccountNotFoundError: No such account.
            InsufficientFundsError: The balance is below `amount`.
        """
        raise NotImplementedError


class TransactionRepository(ABC):
    """Port for persisting and querying transactions."""

    @abstractmethod
    def add(self, transaction: Transaction) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, transaction_id: str) -> Optional[Transaction]:
        raise NotImplementedError

    @abstractmethod
    def get_by_reference(self, reference_id: str) -> Optional[Transaction]:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, transaction_id: str, status: TransactionStatus) -> None:
        raise NotImplementedError

    @abstractmethod
    def transition_status(
        self,
        transaction_id: str,
        from_status: TransactionStatus,
        to_status: TransactionStatus,
    ) -> bool:
        """Move the transaction to `to_status` only if it is in `from_status`.

        Returns:
            True when this call made the change, False when the row was
            already in another status.
        """
        raise NotImplementedError

    @abstractmethod
    def set_reference(
        self, transaction_id: str, reference_id: str, description: Optional[str] = None
    ) -> None:
        """Record the provider reference, optionally rewriting the description."""
        raise NotImplementedError

    @abstractmethod
    def list_for_user(
        self,
        user_id: str,
        filters: TransactionFilter,
        limit: int,
        offset: int,
    ) -> tuple[list[Transaction], int]:
        """Return one page of the user's transactions (newest first) and the total."""
        raise NotImplementedError

    @abstractmethod
    def totals_for_user(
        self, user_id: str, filters: TransactionFilter
    ) -> dict[str, Decimal]:
        """Return summed amounts per transaction type value for the filters."""
        raise NotImplementedError

    @abstractmethod
    def count_since(self, user_id: str, since: datetime) -> int:
        raise NotImplementedError


class SavingsGoalRepository(ABC):
    """Port for persisting savings goals."""

    @abstractmethod
    def add(self, goal: SavingsGoal) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_for_user(self, goal_id: str, user_id: str) -> Optional[SavingsGoal]:
        """Return the goal only when it belongs to `user_id`."""
        raise NotImplementedError

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[SavingsGoal]:
        raise NotImplementedError

    @abstractmethod
    def update(self, goal: SavingsGoal) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, goal_id: str) -> None:
        raise NotImplementedError


class SavingsContributionRepository(ABC):
    """Port for recording contributions to savings goals."""

    @abstractmethod
    def add(self, contribution: SavingsContribution) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_for_goal(self, goal_id: str) -> list[SavingsContribution]:
        raise NotImplementedError
