"""
Shared dependency injection.

Provides the FastAPI dependencies every bounded context needs: the
database engine, the unit-of-work factory, provider adapters built from
settings, and bearer-token authentication. Adapters holding HTTP
connection pools or caches are built once per process.

Tests replace these through `app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Engine

from hoardrun.core.config import settings
from hoardrun.domain.identity.entities import AuthenticatedUser
from hoardrun.domain.identity.errors import AuthenticationError
from hoardrun.domain.identity.ports import (
    AccessTokenService,
    EmailSender,
    PasswordHasher,
)
from hoardrun.domain.market.ports import MarketDataProvider
from hoardrun.domain.payments.ports import ExchangeRateProvider, MomoGateway
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.infrastructure.identity.email_sender import MailgunEmailSender
from hoardrun.infrastructure.identity.jwt_tokens import JwtAccessTokenService
from hoardrun.infrastructure.identity.password_hasher import BcryptPasswordHasher
from hoardrun.infrastructure.market.alpha_vantage_client import AlphaVantageClient
from hoardrun.infrastructure.payments.exchange_rates import HttpExchangeRateProvider
from hoardrun.infrastructure.payments.momo_client import MomoClient
from hoardrun.infrastructure.persistence.database import create_db_engine
from hoardrun.infrastructure.persistence.unit_of_work import unit_of_work_factory
from hoardrun.shared.cache import RedisCache

MISSING_AUTH_HEADER = "Missing or invalid authorization header"

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_engine() -> Engine:
    """Build the SQLAlchemy engine from application settings."""
    return create_db_engine(settings.get_database_url(), echo=settings.debug)


def get_uow_factory(engine: Engine = Depends(get_engine)) -> Callable[[], UnitOfWork]:
    return unit_of_work_factory(engine)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


@lru_cache
def get_token_service() -> AccessTokenService:
    return JwtAccessTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry_minutes=settings.jwt_expiry_minutes,
    )


@lru_cache
def get_email_sender() -> EmailSender:
    return MailgunEmailSender(
        api_key=settings.mailgun_api_key,
        domain=settings.mailgun_domain,
        sender=settings.mailgun_from,
        base_url=settings.mailgun_base_url,
    )


@lru_cache
def get_momo_gateway() -> MomoGateway:
    return MomoClient(
        base_url=settings.momo_api_url,
        primary_key=settings.momo_primary_key,
        user_id=settings.momo_user_id,
        api_key=settings.momo_api_key,
        target_environment=settings.momo_target_environment,
        callback_url=settings.momo_callback_url,
        timeout=settings.momo_timeout_seconds,
    )


@lru_cache
def get_cache() -> RedisCache:
    return RedisCache.from_url(settings.redis_url)


@lru_cache
def get_exchange_rate_provider() -> ExchangeRateProvider:
    return HttpExchangeRateProvider(
        api_url=settings.exchange_rate_api_url,
        api_key=settings.exchange_rate_api_key,
        ttl_seconds=settings.exchange_rate_ttl_seconds,
        cache=get_cache(),
    )


@lru_cache
def get_market_data_provider() -> MarketDataProvider:
    return AlphaVantageClient(
        api_key=settings.alpha_vantage_api_key,
        base_url=settings.alpha_vantage_base_url,
        max_retries=settings.alpha_vantage_max_retries,
        cache=get_cache(),
    )


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Extract the raw bearer token from the Authorization header.

    Raises:
        AuthenticationError: If the header is missing or not a Bearer token.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(MISSING_AUTH_HEADER)
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    token_service: AccessTokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """Resolve the authenticated caller from the bearer token.

    Raises:
        AuthenticationError: If the token is forged, malformed or expired.
    """
    return token_service.verify(token)
