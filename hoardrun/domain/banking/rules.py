"""
Pure banking rules: fees, limits and savings maths.

All money arithmetic uses Decimal and rounds half-up to cents.
"""

import math
import secrets
from decimal import ROUND_HALF_UP, Decimal

from hoardrun.domain.banking.entities import TransactionType
from hoardrun.domain.banking.errors import InvalidAmountError

CENT = Decimal("0.01")
MAX_TRANSACTION_AMOUNT = Decimal("1000000")
ACCOUNT_NUMBER_LENGTH = 10

FEE_RATES: dict[TransactionType, Decimal] = {
    TransactionType.TRANSFER: Decimal("0.001"),
    TransactionType.WITHDRAWAL: Decimal("0.002"),
    TransactionType.PAYMENT: Decimal("0.0015"),
}

INCOME_TYPES = frozenset(
    {TransactionType.DEPOSIT, TransactionType.RECEIVE, TransactionType.REFUND}
)


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_transaction_fee(amount: Decimal, tx_type: TransactionType) -> Decimal:
    """Return the fee charged on top of `amount` for a transaction type."""
    rate = FEE_RATES.get(tx_type, Decimal("0"))
    return to_cents(amount * rate)


def validate_transaction_amount(amount: Decimal) -> None:
    """Reject non-positive amounts and amounts above the per-transaction limit.

    Raises:
        InvalidAmountError: If the amount is out of range.
    """
    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than 0")
    if amount > MAX_TRANSACTION_AMOUNT:
        raise InvalidAmountError("Amount exceeds maximum transaction limit")


def is_income(tx_type: TransactionType) -> bool:
    return tx_type in INCOME_TYPES


def generate_account_number() -> str:
    return "".join(secrets.choice("0123456789") for _ in range(ACCOUNT_NUMBER_LENGTH))


def months_to_goal(
    target: Decimal,
    current: Decimal,
    monthly_contribution: Decimal,
    annual_rate: float = 0.02,
) -> int:
    """Months of contributions needed to reach a savings target.

    Uses the future-value-of-annuity formula with monthly compounding.

    Returns:
        0 when the target is already reached.

    Raises:
        InvalidAmountError: If the monthly contribution is not positive.
    """
    remaining = float(target - current)
    if remaining <= 0:
        return 0
    if monthly_contribution <= 0:
        raise InvalidAmountError("Monthly contribution must be greater than 0")
    monthly = float(monthly_contribution)
    rate = annual_rate / 12
    if rate == 0:
        return math.ceil(remaining / monthly)
    return math.ceil(math.log(1 + remaining * rate / monthly) / math.log(1 + rate))


def savings_projection(
    current: Decimal,
    monthly_contribution: Decimal,
    annual_rate_percent: float,
    years: int,
) -> list[Decimal]:
    """Year-end balances for monthly compounding with monthly deposits."""
    monthly_rate = Decimal(str(annual_rate_percent)) / Decimal("1200")
    balance = current
    projection: list[Decimal] = []
    for month in range(1, years * 12 + 1):
        balance = balance * (1 + monthly_rate) + monthly_contribution
        if month % 12 == 0:
            projection.append(to_cents(balance))
    return projection
