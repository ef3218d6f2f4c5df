"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Logging configuration
- Database schema creation on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from hoardrun.core.config import settings
from hoardrun.infrastructure.persistence.database import init_db
from hoardrun.interfaces.banking.router import router as banking_router
from hoardrun.interfaces.dependencies import get_engine
from hoardrun.interfaces.health import router as health_router
from hoardrun.interfaces.identity.router import router as identity_router
from hoardrun.interfaces.market.router import router as market_router
from hoardrun.interfaces.payments.router import router as payments_router
from hoardrun.shared.errors.handlers import register_error_handlers
from hoardrun.shared.logging import configure_logging
from hoardrun.shared.security.headers import SecurityHeadersMiddleware
from hoardrun.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: create missing tables before serving."""
    engine_provider = app.dependency_overrides.get(get_engine, get_engine)
    init_db(engine_provider())
    missing = settings.missing_required()
    if missing:
        logger.warning("Required settings not configured: %s", ", ".join(missing))
    logger.info("%s %s started (%s)", settings.project_name, settings.version, settings.environment)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(
        SecurityHeadersMiddleware, enable_hsts=settings.environment != "development"
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(identity_router, prefix=API_PREFIX)
    app.include_router(banking_router, prefix=API_PREFIX)
    app.include_router(payments_router, prefix=API_PREFIX)
    app.include_router(market_router, prefix=API_PREFIX)

    return app


app = create_app()
