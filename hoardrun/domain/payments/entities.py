"""
Domain entities for the payments bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from hoardrun.domain.banking.entities import TransactionStatus

MOMO_PROVIDER = "MOMO"


class MomoCountry(Enum):
    """Countries where MOMO transfers are supported, valued by dialing code."""

    GH = "233"
    UG = "256"
    CM = "237"
    CI = "225"

    @property
    def dialing_code(self) -> str:
        return self.value


class AlertSeverity(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class AlertType(Enum):
    LARGE_AMOUNT = "LARGE_AMOUNT"
    HIGH_FREQUENCY = "HIGH_FREQUENCY"


SUCCESSFUL = "SUCCESSFUL"
FAILED = "FAILED"


def map_provider_status(provider_status: str) -> TransactionStatus:
    """Translate a MOMO request-to-pay status into a transaction status."""
    normalized = (provider_status or "").upper()
    if normalized == SUCCESSFUL:
        return TransactionStatus.COMPLETED
    if normalized == FAILED:
        return TransactionStatus.FAILED
    return TransactionStatus.PENDING


@dataclass(frozen=True)
class PaymentStatusReport:
    """Status of a request-to-pay as reported by the provider."""

    reference_id: str
    status: str
    reason: Optional[str] = None
    financial_transaction_id: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.status.upper() == SUCCESSFUL


@dataclass(frozen=True)
class CollectionBalance:
    """Balance of the merchant's MOMO collection account."""

    amount: Decimal
    currency: str


@dataclass(frozen=True)
class TransactionAlert:
    """A monitoring alert raised for a suspicious transaction."""

    id: str
    type: AlertType
    severity: AlertSeverity
    message: str
    user_id: str
    transaction_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AuditLogEntry:
    """An append-only audit record."""

    id: str
    user_id: str
    action: str
    details: dict
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
