"""
Port interfaces (ABCs) for the payments bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from hoardrun.domain.payments.entities import (
    AuditLogEntry,
    CollectionBalance,
    PaymentStatusReport,
    TransactionAlert,
)


class MomoGateway(ABC):
    """Port for the MTN MOMO collection API.

    Every method raises MomoError when the provider rejects the call.
    """

    @abstractmethod
    def request_to_pay(
        self,
        amount: Decimal,
        currency: str,
        party_id: str,
        payer_message: str,
        external_id: Optional[str] = None,
        payee_note: Optional[str] = None,
    ) -> str:
        """Ask the payer to approve a payment.

        Returns:
            The reference id identifying the request at the provider.
        """
        raise NotImplementedError

    @abstractmethod
    def get_transaction_status(self, reference_id: str) -> PaymentStatusReport:
        raise NotImplementedError

    @abstractmethod
    def validate_account_holder(self, account_holder_id: str, id_type: str = "msisdn") -> bool:
        raise NotImplementedError

    @abstractmethod
    def send_delivery_notification(
        self, reference_id: str, message: str, language: str = "en"
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_account_balance(self) -> CollectionBalance:
        raise NotImplementedError


class ExchangeRateProvider(ABC):
    """Port for currency conversion."""

    @abstractmethod
    def convert(self, amount: Decimal, source: str, target: str) -> Decimal:
        """Convert `amount` from `source` to `target` currency.

        Raises:
            UnsupportedCurrencyError: If either currency is not supported.
            MomoError: If the rate could not be fetched.
        """
        raise NotImplementedError


class TransactionAlertRepository(ABC):
    @abstractmethod
    def add(self, alert: TransactionAlert) -> None:
        raise NotImplementedError


class AuditLogRepository(ABC):
    @abstractmethod
    def add(self, entry: AuditLogEntry) -> None:
        raise NotImplementedError
