"""
Transaction monitoring rules.

Flags unusually large transactions and users transacting unusually often.
The rules are pure; persisting and logging the alerts is left to the caller.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from hoardrun.domain.banking.entities import Transaction
from hoardrun.domain.payments.entities import AlertSeverity, AlertType, TransactionAlert

FREQUENCY_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class MonitoringThresholds:
    """Limits above which a transaction raises an alert."""

    large_amount: Decimal = Decimal("5000")
    frequency: int = 10


def detect_alerts(
    transaction: Transaction,
    recent_count: int,
    thresholds: MonitoringThresholds,
    now: datetime,
) -> list[TransactionAlert]:
    """Return the alerts raised by a transaction.

    Args:
        transaction: The transaction being monitored.
        recent_count: Transactions the user made within FREQUENCY_WINDOW.
        thresholds: Alerting limits.
        now: Timestamp stamped on the alerts.
    """
    alerts: list[TransactionAlert] = []
    if transaction.amount > thresholds.large_amount:
        alerts.append(
            TransactionAlert(
                id=str(uuid.uuid4()),
                type=AlertType.LARGE_AMOUNT,
                severity=AlertSeverity.HIGH,
                message=f"Large transaction detected: {transaction.amount}",
                user_id=transaction.user_id,
                transaction_id=transaction.id,
                created_at=now,
            )
        )
    if recent_count > thresholds.frequency:
        alerts.append(
            TransactionAlert(
                id=str(uuid.uuid4()),
                type=AlertType.HIGH_FREQUENCY,
                severity=AlertSeverity.MEDIUM,
                message=(
                    f"High transaction frequency detected for user: "
                    f"{recent_count} in the last 24 hours"
                ),
                user_id=transaction.user_id,
                transaction_id=transaction.id,
                created_at=now,
            )
        )
    return alerts
