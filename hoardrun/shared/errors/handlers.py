"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses share the ErrorResponse shape: {"error", "detail"?}
plus an optional machine-readable "code".
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hoardrun.domain.banking.errors import (
    AccountNotFoundError,
    AccountNumberGenerationError,
    BankingDomainError,
    InsufficientFundsError,
    InvalidAmountError,
    SavingsGoalNotFoundError,
)
from hoardrun.domain.identity.errors import (
    AuthenticationError,
    EmailAlreadyRegisteredError,
    IdentityDomainError,
    InvalidCredentialsError,
    InvalidVerificationTokenError,
    UserNotFoundError,
    WeakPasswordError,
)
from hoardrun.domain.market.errors import (
    InvalidIntervalError,
    InvalidSymbolError,
    MarketDataUnavailableError,
    MarketDomainError,
    MarketRateLimitError,
    SymbolNotFoundError,
)
from hoardrun.domain.payments.errors import MomoError, PaymentsDomainError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_404 = 404
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500
HTTP_502 = 502
HTTP_503 = 503


def _error_response(
    status_code: int, error: str, detail: str | None = None, **extra: Any
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, Any] = {"error": error}
    if detail:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def _validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    # ------------------------------------------------------------------
    # Request validation
    # ------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report schema violations with their locations."""
        details = _validation_details(exc)
        logger.info("Request validation failed: %d error(s)", len(details))
        return JSONResponse(
            status_code=HTTP_422,
            content={"error": "Invalid input data", "details": details},
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @app.exception_handler(EmailAlreadyRegisteredError)
    async def handle_email_registered(
        _request: Request, _exc: EmailAlreadyRegisteredError
    ) -> JSONResponse:
        logger.info("Sign-up rejected: email already registered")
        return _error_response(HTTP_409, "Email already registered")

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(
        _request: Request, _exc: InvalidCredentialsError
    ) -> JSONResponse:
        return _error_response(HTTP_401, "Invalid credentials")

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        return _error_response(HTTP_401, exc.message)

    @app.exception_handler(WeakPasswordError)
    async def handle_weak_password(
        _request: Request, exc: WeakPasswordError
    ) -> JSONResponse:
        """Return every policy rule the password failed."""
        return _error_response(
            HTTP_422,
            "Password does not meet requirements",
            feedback=exc.feedback,
        )

    @app.exception_handler(InvalidVerificationTokenError)
    async def handle_invalid_token(
        _request: Request, exc: InvalidVerificationTokenError
    ) -> JSONResponse:
        return _error_response(HTTP_400, exc.message, expired=exc.expired)

    @app.exception_handler(UserNotFoundError)
    async def handle_user_not_found(
        _request: Request, _exc: UserNotFoundError
    ) -> JSONResponse:
        return _error_response(HTTP_404, "User not found")

    @app.exception_handler(IdentityDomainError)
    async def handle_identity_error(
        _request: Request, exc: IdentityDomainError
    ) -> JSONResponse:
        logger.error("Identity domain error: %s", exc.message)
        return _error_response(HTTP_400, "Identity error", exc.message)

    # ------------------------------------------------------------------
    # Banking
    # ------------------------------------------------------------------

    @app.exception_handler(AccountNotFoundError)
    async def handle_account_not_found(
        _request: Request, _exc: AccountNotFoundError
    ) -> JSONResponse:
        return _error_response(HTTP_404, "Account not found")

    @app.exception_handler(InsufficientFundsError)
    async def handle_insufficient_funds(
        _request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        logger.info("Insufficient funds: required=%s", exc.required)
        return _error_response(
            HTTP_400,
            "Insufficient funds",
            f"Required {exc.required}, available {exc.available}",
        )

    @app.exception_handler(InvalidAmountError)
    async def handle_invalid_amount(
        _request: Request, exc: InvalidAmountError
    ) -> JSONResponse:
        return _error_response(HTTP_400, "Invalid amount", exc.reason)

    @app.exception_handler(SavingsGoalNotFoundError)
    async def handle_goal_not_found(
        _request: Request, _exc: SavingsGoalNotFoundError
    ) -> JSONResponse:
        return _error_response(HTTP_404, "Savings goal not found")

    @app.exception_handler(AccountNumberGenerationError)
    async def handle_account_number_generation(
        _request: Request, exc: AccountNumberGenerationError
    ) -> JSONResponse:
        logger.error("Account number generation failed after %d attempts", exc.attempts)
        return _error_response(HTTP_500, "Failed to create account")

    @app.exception_handler(BankingDomainError)
    async def handle_banking_error(
        _request: Request, exc: BankingDomainError
    ) -> JSONResponse:
        logger.error("Banking domain error: %s", exc.message)
        return _error_response(HTTP_400, "Banking error", exc.message)

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    @app.exception_handler(MomoError)
    async def handle_momo_error(_request: Request, exc: MomoError) -> JSONResponse:
        """Surface MOMO failures with their stable code and HTTP status."""
        logger.warning("MOMO error: code=%s status=%d", exc.code.value, exc.status_code)
        status = exc.status_code if 400 <= exc.status_code < 600 else HTTP_500
        return _error_response(status, exc.message, code=exc.code.value)

    @app.exception_handler(PaymentsDomainError)
    async def handle_payments_error(
        _request: Request, exc: PaymentsDomainError
    ) -> JSONResponse:
        logger.error("Payments domain error: %s", exc.message)
        return _error_response(HTTP_400, "Payment error", exc.message)

    # ------------------------------------------------------------------
    # Market
    # ------------------------------------------------------------------

    @app.exception_handler(InvalidSymbolError)
    async def handle_invalid_symbol(
        _request: Request, exc: InvalidSymbolError
    ) -> JSONResponse:
        return _error_response(HTTP_400, "Invalid symbol", exc.symbol)

    @app.exception_handler(InvalidIntervalError)
    async def handle_invalid_interval(
        _request: Request, exc: InvalidIntervalError
    ) -> JSONResponse:
        return _error_response(HTTP_400, "Invalid interval", exc.interval)

    @app.exception_handler(SymbolNotFoundError)
    async def handle_symbol_not_found(
        _request: Request, exc: SymbolNotFoundError
    ) -> JSONResponse:
        logger.warning("Symbol not found: %s", exc.symbol)
        return _error_response(HTTP_404, "Symbol not found")

    @app.exception_handler(MarketRateLimitError)
    async def handle_market_rate_limit(
        _request: Request, exc: MarketRateLimitError
    ) -> JSONResponse:
        return _error_response(HTTP_503, exc.message)

    @app.exception_handler(MarketDataUnavailableError)
    async def handle_market_unavailable(
        _request: Request, exc: MarketDataUnavailableError
    ) -> JSONResponse:
        logger.error("Market data unavailable: %s", exc.reason)
        return _error_response(HTTP_502, exc.message)

    @app.exception_handler(MarketDomainError)
    async def handle_market_error(
        _request: Request, exc: MarketDomainError
    ) -> JSONResponse:
        return _error_response(HTTP_400, "Market data error", exc.message)

    # ------------------------------------------------------------------
    # Catch-all
    # ------------------------------------------------------------------

    @app.exception_handler(Exception)
    async def handle_unexpected_error(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never leak internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
