"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. API tests run the
real application with provider adapters replaced by mocks.
"""

import threading
import uuid
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from hoardrun.domain.banking.entities import Account, AccountType
from hoardrun.domain.identity.entities import User
from hoardrun.domain.market.ports import MarketDataProvider
from hoardrun.domain.payments.entities import CollectionBalance, PaymentStatusReport
from hoardrun.domain.payments.ports import ExchangeRateProvider, MomoGateway
from hoardrun.infrastructure.identity.email_sender import LoggingEmailSender
from hoardrun.infrastructure.identity.password_hasher import BcryptPasswordHasher
from hoardrun.infrastructure.persistence.database import create_db_engine, init_db
from hoardrun.infrastructure.persistence.unit_of_work import unit_of_work_factory
from hoardrun.interfaces.dependencies import (
    get_email_sender,
    get_engine,
    get_exchange_rate_provider,
    get_market_data_provider,
    get_momo_gateway,
    get_password_hasher,
    get_token_service,
)
from hoardrun.main import create_app
from hoardrun.shared.security.rate_limiting import limiter

STRONG_PASSWORD = "Tr0ub4dor&Xy!"
REFERENCE_ID = "8f3c2a1e-5b6d-4c7e-9f80-1a2b3c4d5e6f"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """SQLite file database; every thread gets its own connection."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'hoardrun.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def uow_factory(engine):
    return unit_of_work_factory(engine)


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def email_sender() -> LoggingEmailSender:
    return LoggingEmailSender()


@pytest.fixture
def momo_gateway() -> MagicMock:
    gateway = MagicMock(spec=MomoGateway)
    gateway.validate_account_holder.return_value = True
    gateway.request_to_pay.return_value = REFERENCE_ID
    gateway.get_transaction_status.return_value = PaymentStatusReport(
        reference_id=REFERENCE_ID, status="SUCCESSFUL", financial_transaction_id="fin-1"
    )
    gateway.get_account_balance.return_value = CollectionBalance(
        amount=Decimal("1500.00"), currency="EUR"
    )
    return gateway


@pytest.fixture
def exchange_rates() -> MagicMock:
    provider = MagicMock(spec=ExchangeRateProvider)
    provider.convert.side_effect = lambda amount, source, target: amount
    return provider


@pytest.fixture
def market_provider() -> MagicMock:
    return MagicMock(spec=MarketDataProvider)


@pytest.fixture
def app(engine, hasher, email_sender, momo_gateway, exchange_rates, market_provider):
    application = create_app()
    application.dependency_overrides[get_engine] = lambda: engine
    application.dependency_overrides[get_password_hasher] = lambda: hasher
    application.dependency_overrides[get_email_sender] = lambda: email_sender
    application.dependency_overrides[get_momo_gateway] = lambda: momo_gateway
    application.dependency_overrides[get_exchange_rate_provider] = lambda: exchange_rates
    application.dependency_overrides[get_market_data_provider] = lambda: market_provider
    return application


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _make_user(uow_factory, hasher, email="ama@example.com", balance=Decimal("0")) -> User:
    user = User(
        id=str(uuid.uuid4()),
        email=email,
        name="Ama Mensah",
        password_hash=hasher.hash(STRONG_PASSWORD),
        email_verified=True,
        balance=balance,
    )
    with uow_factory() as uow:
        uow.users.add(user)
    return user


def _make_account(uow_factory, user: User, balance=Decimal("0"), number=None) -> Account:
    account = Account(
        id=str(uuid.uuid4()),
        user_id=user.id,
        type=AccountType.CHECKING,
        number=number or str(uuid.uuid4().int)[:10],
        balance=balance,
    )
    with uow_factory() as uow:
        uow.accounts.add(account)
    return account


def _auth_headers(user: User) -> dict[str, str]:
    token = get_token_service().issue(user).access_token
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(uow_factory, hasher) -> User:
    return _make_user(uow_factory, hasher)


@pytest.fixture
def auth_headers(user) -> dict[str, str]:
    return _auth_headers(user)


@pytest.fixture
def make_user(uow_factory, hasher):
    """Factory for extra users: make_user(email=..., balance=...)."""
    return lambda **kwargs: _make_user(uow_factory, hasher, **kwargs)


@pytest.fixture
def make_account(uow_factory):
    """Factory for accounts: make_account(user, balance=...)."""
    return lambda owner, **kwargs: _make_account(uow_factory, owner, **kwargs)


@pytest.fixture
def headers_for():
    return _auth_headers


def rendezvous_after(owner, method_name: str, parties: int = 2):
    """Patch `owner.method_name` so each caller waits for the others after it returns.

    Lines concurrent use cases up between their read and their write.
    """
    barrier = threading.Barrier(parties)
    original = getattr(owner, method_name)

    def wrapper(self, *args, **kwargs):
        value = original(self, *args, **kwargs)
        barrier.wait(timeout=5)
        return value

    return patch.object(owner, method_name, wrapper)


def run_concurrently(call, times: int = 2):
    """Run `call` on `times` threads at once and collect (results, errors)."""
    results, errors = [], []

    def worker():
        try:
            results.append(call())
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(times)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return results, errors
