"""
Domain-specific errors for the banking bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class BankingDomainError(Exception):
    """Base error for all banking domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class AccountNotFoundError(BankingDomainError):
    """Raised when an account is missing, inactive or owned by someone else."""

    def __init__(self, account_ref: str) -> None:
        super().__init__(f"Account not found: {account_ref}")
        self.account_ref = account_ref


class InsufficientFundsError(BankingDomainError):
    """Raised when a debit would overdraw an account or wallet."""

    def __init__(self, required: str, available: str) -> None:
        super().__init__(
            f"Insufficient funds: required {required}, available {available}"
        )
        self.required = required
        self.available = available


class InvalidAmountError(BankingDomainError):
    """Raised when a transaction amount is non-positive or above the limit."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SavingsGoalNotFoundError(BankingDomainError):
    """Raised when a savings goal is missing or owned by someone else."""

    def __init__(self, goal_id: str) -> None:
        super().__init__(f"Savings goal not found: {goal_id}")
        self.goal_id = goal_id


class AccountNumberGenerationError(BankingDomainError):
    """Raised when no unique account number could be generated."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Failed to generate a unique account number after {attempts} attempts"
        )
        self.attempts = attempts
