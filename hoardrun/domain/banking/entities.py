"""
Domain entities for the banking bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountType(Enum):
    """Kind of bank account."""

    SAVINGS = "SAVINGS"
    CHECKING = "CHECKING"
    INVESTMENT = "INVESTMENT"


class TransactionType(Enum):
    """Kind of money movement."""

    SEND = "SEND"
    RECEIVE = "RECEIVE"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"
    PAYMENT = "PAYMENT"
    REFUND = "REFUND"
    FEE = "FEE"


class TransactionStatus(Enum):
    """Lifecycle status of a transaction."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class FundingProvider(Enum):
    """External rail a wallet deposit or withdrawal went through."""

    VISA = "VISA"
    MASTERCARD = "MASTERCARD"
    MOMO = "MOMO"


class SavingsGoalStatus(Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class ContributionType(Enum):
    MANUAL = "MANUAL"
    AUTO = "AUTO"
    BONUS = "BONUS"


@dataclass(frozen=True)
class Account:
    """A bank account owned by a user."""

    id: str
    user_id: str
    type: AccountType
    number: str
    currency: str = "USD"
    balance: Decimal = Decimal("0")
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class AccountSummary:
    """An account together with how many transactions touched it."""

    account: Account
    transaction_count: int


@dataclass(frozen=True)
class Transaction:
    """A single money movement.

    `account_id` is None for movements on the user's wallet balance.
    `reference_id` holds the payment provider's reference, when any.
    """

    id: str
    user_id: str
    type: TransactionType
    amount: Decimal
    status: TransactionStatus
    account_id: Optional[str] = None
    fee: Decimal = Decimal("0")
    description: Optional[str] = None
    category: Optional[str] = None
    provider: Optional[str] = None
    reference_id: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class TransactionFilter:
    """Optional filters for transaction listings."""

    account_id: Optional[str] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class SavingsGoal:
    """A savings target the user contributes towards."""

    id: str
    user_id: str
    name: str
    target_amount: Decimal
    monthly_contribution: Decimal
    category: str
    deadline: date
    current_amount: Decimal = Decimal("0")
    is_auto_save: bool = True
    status: SavingsGoalStatus = SavingsGoalStatus.ACTIVE
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def progress_percent(self) -> Decimal:
        if self.target_amount <= 0:
            return Decimal("0")
        ratio = self.current_amount / self.target_amount * 100
        return min(ratio, Decimal("100")).quantize(Decimal("0.01"))


@dataclass(frozen=True)
class SavingsContribution:
    """Money moved from an account into a savings goal."""

    id: str
    goal_id: str
    amount: Decimal
    type: ContributionType = ContributionType.MANUAL
    description: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)
