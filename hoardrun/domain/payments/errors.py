"""
Domain-specific errors for the payments bounded context.

Every MOMO failure carries a stable error code and the HTTP status it
should surface as. These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from enum import Enum


class MomoErrorCode(Enum):
    """Stable error codes returned to API clients."""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_PHONE = "INVALID_PHONE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    API_KEY_GENERATION_FAILED = "API_KEY_GENERATION_FAILED"
    AUTH_TOKEN_FAILED = "AUTH_TOKEN_FAILED"
    BALANCE_CHECK_FAILED = "BALANCE_CHECK_FAILED"
    PAYMENT_REQUEST_FAILED = "PAYMENT_REQUEST_FAILED"
    STATUS_CHECK_FAILED = "STATUS_CHECK_FAILED"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
    UNSUPPORTED_CURRENCY = "UNSUPPORTED_CURRENCY"
    EXCHANGE_RATE_FAILED = "EXCHANGE_RATE_FAILED"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class PaymentsDomainError(Exception):
    """Base error for all payments domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class MomoError(PaymentsDomainError):
    """A MOMO operation failed.

    Attributes:
        code: Stable error code.
        status_code: HTTP status to report. Provider failures carry the
            provider's own status.
    """

    def __init__(self, code: MomoErrorCode, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class InvalidPhoneNumberError(MomoError):
    def __init__(self, phone: str, country: str = "") -> None:
        super().__init__(
            MomoErrorCode.INVALID_PHONE, "Invalid phone number format", 400
        )
        self.phone = phone
        self.country = country


class UnsupportedCurrencyError(MomoError):
    def __init__(self, currency: str) -> None:
        super().__init__(
            MomoErrorCode.UNSUPPORTED_CURRENCY, f"Unsupported currency: {currency}", 400
        )
        self.currency = currency


class PaymentTransactionNotFoundError(MomoError):
    def __init__(self, reference_id: str) -> None:
        super().__init__(
            MomoErrorCode.TRANSACTION_NOT_FOUND, "Transaction not found", 404
        )
        self.reference_id = reference_id
