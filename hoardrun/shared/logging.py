"""
Logging configuration for the application.

Sets up structured logging with a consistent format.
Logging must not change program behavior.
Never logs sensitive data (request bodies, secrets, tokens, raw payloads).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PAYMENT_EVENTS_LOGGER = "hoardrun.payments.events"

_payment_logger = logging.getLogger(PAYMENT_EVENTS_LOGGER)


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def mask_phone(phone: str | None) -> str:
    """Mask all but the last four digits of a phone number."""
    if not phone:
        return ""
    if len(phone) <= 4:
        return "*" * len(phone)
    return "*" * (len(phone) - 4) + phone[-4:]


def _format_fields(fields: dict) -> str:
    return " ".join(
        f"{key}={value}" for key, value in sorted(fields.items()) if value is not None
    )


def log_payment_event(event: str, status: str, **fields) -> None:
    """Log a payment lifecycle event on the payment events logger.

    Args:
        event: Event name, e.g. PAYMENT_INITIATED or CALLBACK_PROCESSED.
        status: Outcome or provider status for the event.
        **fields: Extra key/value context. Phone numbers must be masked
            by the caller.
    """
    _payment_logger.info(
        "event=%s status=%s %s", event, status, _format_fields(fields)
    )


def log_payment_error(exc: Exception, **context) -> None:
    """Log a failed payment operation without exposing the payload."""
    _payment_logger.error(
        "event=PAYMENT_ERROR error=%s message=%s %s",
        type(exc).__name__,
        exc,
        _format_fields(context),
    )
