"""
Adapter: Transaction alert and audit log repositories.

Append-only stores written by transaction monitoring.
"""

from sqlalchemy import insert
from sqlalchemy.engine import Connection

from hoardrun.domain.payments.entities import AuditLogEntry, TransactionAlert
from hoardrun.domain.payments.ports import AuditLogRepository, TransactionAlertRepository
from hoardrun.infrastructure.persistence.database import as_utc
from hoardrun.infrastructure.persistence.tables import audit_logs, transaction_alerts


class TransactionAlertRepositoryAdapter(TransactionAlertRepository):
    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, alert: TransactionAlert) -> None:
        self._conn.execute(
            insert(transaction_alerts).values(
                id=alert.id,
                type=alert.type.value,
                severity=alert.severity.value,
                message=alert.message,
                user_id=alert.user_id,
                transaction_id=alert.transaction_id,
                created_at=as_utc(alert.created_at),
            )
        )


class AuditLogRepositoryAdapter(AuditLogRepository):
    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, entry: AuditLogEntry) -> None:
        self._conn.execute(
            insert(audit_logs).values(
                id=entry.id,
                user_id=entry.user_id,
                action=entry.action,
                details=entry.details,
                created_at=as_utc(entry.created_at),
            )
        )
