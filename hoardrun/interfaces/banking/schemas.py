"""
Pydantic schemas for banking API request/response validation.

These schemas enforce input validation and define the API contract.
All fields use strict typing with constraints.
No business logic belongs here.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from hoardrun.domain.banking.entities import (
    AccountType,
    ContributionType,
    FundingProvider,
    SavingsGoalStatus,
    TransactionStatus,
    TransactionType,
)

CURRENCY_PATTERN = r"^[A-Z]{3}$"
MAX_AMOUNT = Decimal("1000000")


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------


class CreateAccountRequest(BaseModel):
    """Request schema for opening an account.

    Attributes:
        type: SAVINGS, CHECKING or INVESTMENT.
        currency: ISO 4217 code, upper case.
    """

    type: AccountType
    currency: str = Field("USD", pattern=CURRENCY_PATTERN)


class AccountResponse(BaseModel):
    id: str
    type: AccountType
    number: str
    currency: str
    balance: Decimal
    is_active: bool
    created_at: datetime
    transaction_count: int = 0


class AccountListResponse(BaseModel):
    accounts: list[AccountResponse]


# ------------------------------------------------------------------
# Transactions
# ------------------------------------------------------------------


class TransactionRequest(BaseModel):
    """Request schema for applying a transaction to an account.

    Attributes:
        account_id: Account to credit or debit.
        type: Transaction type.
        amount: Amount before fees (0 < amount <= 1,000,000).
        description: Optional free text.
        category: Optional spending category.
    """

    account_id: str = Field(..., min_length=1)
    type: TransactionType
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    description: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=100)


class TransactionResponse(BaseModel):
    id: str
    account_id: str | None
    type: TransactionType
    amount: Decimal
    fee: Decimal
    status: TransactionStatus
    description: str | None
    category: str | None
    provider: str | None
    reference_id: str | None
    created_at: datetime


class ProcessTransactionResponse(BaseModel):
    transaction: TransactionResponse
    balance: Decimal


class PagePagination(BaseModel):
    total: int
    pages: int
    current: int
    limit: int


class TransactionHistoryResponse(BaseModel):
    transactions: list[TransactionResponse]
    pagination: PagePagination


class OffsetPagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class TransactionSummary(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    net_amount: Decimal


class TransactionListResponse(BaseModel):
    data: list[TransactionResponse]
    pagination: OffsetPagination
    summary: TransactionSummary


class BalanceUpdateRequest(BaseModel):
    """Request schema for a wallet deposit or withdrawal."""

    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    type: Literal["DEPOSIT", "WITHDRAWAL"]
    provider: FundingProvider


class BalanceUpdateResponse(BaseModel):
    balance: Decimal
    transaction: TransactionResponse


# ------------------------------------------------------------------
# Savings
# ------------------------------------------------------------------


class CreateSavingsGoalRequest(BaseModel):
    """Request schema for a new savings goal.

    Attributes:
        name: Goal name (1-100 chars).
        target_amount: Amount to reach (>= 1).
        monthly_contribution: Planned monthly deposit (>= 1).
        category: Free-form category, e.g. EMERGENCY or TRAVEL.
        deadline: Target date.
        is_auto_save: Whether monthly contributions are automatic.
    """

    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., ge=1, le=MAX_AMOUNT * 100)
    monthly_contribution: Decimal = Field(..., ge=1, le=MAX_AMOUNT)
    category: str = Field(..., min_length=1, max_length=50)
    deadline: date
    is_auto_save: bool = True


class UpdateSavingsGoalRequest(BaseModel):
    """Partial update; omitted fields keep their value."""

    name: str | None = Field(None, min_length=1, max_length=100)
    target_amount: Decimal | None = Field(None, ge=1, le=MAX_AMOUNT * 100)
    monthly_contribution: Decimal | None = Field(None, ge=1, le=MAX_AMOUNT)
    category: str | None = Field(None, min_length=1, max_length=50)
    deadline: date | None = None
    is_auto_save: bool | None = None


class SavingsGoalResponse(BaseModel):
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    monthly_contribution: Decimal
    category: str
    deadline: date
    is_auto_save: bool
    status: SavingsGoalStatus
    progress: Decimal
    created_at: datetime


class SavingsGoalListResponse(BaseModel):
    goals: list[SavingsGoalResponse]


class ContributeRequest(BaseModel):
    amount: Decimal = Field(..., ge=1, le=MAX_AMOUNT)
    type: ContributionType = ContributionType.MANUAL
    description: str | None = Field(None, max_length=500)


class ContributeResponse(BaseModel):
    goal: SavingsGoalResponse
    account_balance: Decimal


class GoalProgressItem(BaseModel):
    id: str
    name: str
    current_amount: Decimal
    target_amount: Decimal
    progress: Decimal
    months_remaining: int


class SavingsAnalyticsResponse(BaseModel):
    total_saved: Decimal
    total_target: Decimal
    overall_progress: Decimal
    active_goals: int
    completed_goals: int
    monthly_commitment: Decimal
    goals: list[GoalProgressItem]


class YearBalanceItem(BaseModel):
    year: int
    balance: Decimal


class SavingsProjectionResponse(BaseModel):
    goal_id: str
    annual_rate: float
    months_to_goal: int
    projection: list[YearBalanceItem]
