"""
Use case: Screen a payment for suspicious activity.

Input: Transaction
Output: list[TransactionAlert]
Side effects: Each alert is logged on the payment events logger and
    persisted together with a TRANSACTION_ALERT audit log entry.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from hoardrun.domain.banking.entities import Transaction
from hoardrun.domain.payments.entities import AuditLogEntry, TransactionAlert
from hoardrun.domain.payments.monitoring import (
    FREQUENCY_WINDOW,
    MonitoringThresholds,
    detect_alerts,
)
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.shared.logging import log_payment_event

logger = logging.getLogger(__name__)

ALERT_AUDIT_ACTION = "TRANSACTION_ALERT"


class MonitorTransactionUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        thresholds: MonitoringThresholds = MonitoringThresholds(),
    ) -> None:
        self._uow_factory = uow_factory
        self._thresholds = thresholds

    def execute(self, transaction: Transaction) -> list[TransactionAlert]:
        now = datetime.now(timezone.utc)
        with self._uow_factory() as uow:
            recent = uow.transactions.count_since(
                transaction.user_id, now - FREQUENCY_WINDOW
            )
            alerts = detect_alerts(transaction, recent, self._thresholds, now)
            for alert in alerts:
                uow.alerts.add(alert)
                uow.audit_logs.add(
                    AuditLogEntry(
                        id=str(uuid.uuid4()),
                        user_id=transaction.user_id,
                        action=ALERT_AUDIT_ACTION,
                        details={
                            "transaction_id": transaction.id,
                            "alert_type": alert.type.value,
                            "severity": alert.severity.value,
                            "timestamp": now.isoformat(),
                        },
                        created_at=now,
                    )
                )

        for alert in alerts:
            log_payment_event(
                "ALERT",
                alert.severity.value,
                alert_type=alert.type.value,
                transaction_id=transaction.id,
                user_id=transaction.user_id,
            )
        return alerts
