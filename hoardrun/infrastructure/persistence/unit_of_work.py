"""
Adapter: SQLAlchemy unit of work.

Implements the UnitOfWork port on top of `engine.begin()`: one
connection, one transaction, every repository bound to it. The
transaction commits when the block exits normally and rolls back when
it exits with an exception.
"""

from typing import Callable, Optional

from sqlalchemy.engine import Connection, Engine

from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.infrastructure.banking.account_repository import AccountRepositoryAdapter
from hoardrun.infrastructure.banking.savings_repository import (
    SavingsContributionRepositoryAdapter,
    SavingsGoalRepositoryAdapter,
)
from hoardrun.infrastructure.banking.transaction_repository import (
    TransactionRepositoryAdapter,
)
from hoardrun.infrastructure.identity.user_repository import UserRepositoryAdapter
from hoardrun.infrastructure.identity.verification_token_repository import (
    VerificationTokenRepositoryAdapter,
)
from hoardrun.infrastructure.payments.monitoring_repository import (
    AuditLogRepositoryAdapter,
    TransactionAlertRepositoryAdapter,
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work bound to a single SQLAlchemy transaction."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._transaction = None
        self.connection: Optional[Connection] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._transaction = self._engine.begin()
        conn = self._transaction.__enter__()
        self.connection = conn
        self.users = UserRepositoryAdapter(conn)
        self.tokens = VerificationTokenRepositoryAdapter(conn)
        self.accounts = AccountRepositoryAdapter(conn)
        self.transactions = TransactionRepositoryAdapter(conn)
        self.savings_goals = SavingsGoalRepositoryAdapter(conn)
        self.contributions = SavingsContributionRepositoryAdapter(conn)
        self.alerts = TransactionAlertRepositoryAdapter(conn)
        self.audit_logs = AuditLogRepositoryAdapter(conn)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        transaction, self._transaction = self._transaction, None
        self.connection = None
        transaction.__exit__(exc_type, exc, tb)


def unit_of_work_factory(engine: Engine) -> Callable[[], UnitOfWork]:
    """Return a zero-argument factory producing fresh units of work."""

    def factory() -> UnitOfWork:
        return SqlAlchemyUnitOfWork(engine)

    return factory
