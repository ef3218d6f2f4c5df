"""
Data Transfer Objects for the banking application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from hoardrun.domain.banking.entities import (
    AccountType,
    ContributionType,
    FundingProvider,
    SavingsGoal,
    Transaction,
    TransactionType,
)


@dataclass(frozen=True)
class CreateAccountCommand:
    user_id: str
    type: AccountType
    currency: str = "USD"


@dataclass(frozen=True)
class ListAccountsQuery:
    user_id: str
    type: Optional[AccountType] = None
    is_active: Optional[bool] = None


@dataclass(frozen=True)
class ProcessTransactionCommand:
    """Input DTO for moving money on one of the user's accounts.

    Attributes:
        user_id: Owner of the account.
        account_id: Account to credit or debit.
        type: Transaction type; decides direction and fee.
        amount: Positive amount, fee excluded.
        description: Optional free text.
        category: Optional spending category.
    """

    user_id: str
    account_id: str
    type: TransactionType
    amount: Decimal
    description: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class ProcessTransactionResult:
    transaction: Transaction
    balance: Decimal


@dataclass(frozen=True)
class TransactionHistoryQuery:
    user_id: str
    account_id: str
    page: int = 1
    limit: int = 10
    type: Optional[TransactionType] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionPage:
    """One page of an account's history.

    Attributes:
        transactions: Newest first.
        total: Matching transactions across all pages.
        pages: Number of pages at this page size.
        current: 1-based page number.
        limit: Page size.
    """

    transactions: list[Transaction]
    total: int
    pages: int
    current: int
    limit: int


@dataclass(frozen=True)
class ListTransactionsQuery:
    user_id: str
    limit: int = 50
    offset: int = 0
    category: Optional[str] = None
    type: Optional[TransactionType] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionListing:
    """Offset-paginated transactions with an income/expense summary.

    The summary covers every transaction matching the filters, not only
    the returned page.
    """

    transactions: list[Transaction]
    total: int
    limit: int
    offset: int
    has_more: bool
    total_income: Decimal
    total_expenses: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class UpdateBalanceCommand:
    user_id: str
    amount: Decimal
    type: TransactionType
    provider: FundingProvider


@dataclass(frozen=True)
class UpdateBalanceResult:
    balance: Decimal
    transaction: Transaction


@dataclass(frozen=True)
class CreateSavingsGoalCommand:
    user_id: str
    name: str
    target_amount: Decimal
    monthly_contribution: Decimal
    category: str
    deadline: date
    is_auto_save: bool = True


@dataclass(frozen=True)
class UpdateSavingsGoalCommand:
    """Partial update; None leaves a field unchanged."""

    user_id: str
    goal_id: str
    name: Optional[str] = None
    target_amount: Optional[Decimal] = None
    monthly_contribution: Optional[Decimal] = None
    category: Optional[str] = None
    deadline: Optional[date] = None
    is_auto_save: Optional[bool] = None


@dataclass(frozen=True)
class ContributeCommand:
    user_id: str
    goal_id: str
    amount: Decimal
    type: ContributionType = ContributionType.MANUAL
    description: Optional[str] = None


@dataclass(frozen=True)
class ContributeResult:
    goal: SavingsGoal
    account_balance: Decimal


@dataclass(frozen=True)
class GoalProgress:
    id: str
    name: str
    current_amount: Decimal
    target_amount: Decimal
    progress_percent: Decimal
    months_remaining: int


@dataclass(frozen=True)
class SavingsAnalytics:
    """Aggregate view over all of a user's savings goals."""

    total_saved: Decimal
    total_target: Decimal
    overall_progress: Decimal
    active_goals: int
    completed_goals: int
    monthly_commitment: Decimal
    goals: list[GoalProgress]


@dataclass(frozen=True)
class SavingsProjectionQuery:
    user_id: str
    goal_id: str
    years: int = 5
    annual_rate: float = 2.0


@dataclass(frozen=True)
class YearBalance:
    year: int
    balance: Decimal


@dataclass(frozen=True)
class SavingsProjection:
    goal_id: str
    annual_rate: float
    months_to_goal: int
    balances: list[YearBalance]
