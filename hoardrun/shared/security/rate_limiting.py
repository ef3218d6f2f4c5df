"""
Rate limiting configuration and setup.

Uses slowapi to enforce per-endpoint rate limits, keyed by client address.
Credential and payment endpoints get stricter limits than the default
to slow down brute-force and card/phone enumeration attempts.
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from hoardrun.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMIT = settings.rate_limit_default
AUTH_RATE_LIMIT = settings.rate_limit_auth
PAYMENT_RATE_LIMIT = settings.rate_limit_payments

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_RATE_LIMIT])


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Answer a throttled request with 429 and the limit that was hit."""
    logger.warning(
        "Rate limit hit: path=%s limit=%s", request.url.path, exc.detail
    )
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
