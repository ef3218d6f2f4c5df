"""
Data Transfer Objects for the payments application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from hoardrun.domain.banking.entities import TransactionStatus
from hoardrun.domain.payments.entities import MomoCountry


@dataclass(frozen=True)
class RequestPaymentCommand:
    """Input DTO for collecting money from a MOMO wallet into the user's wallet.

    Attributes:
        user_id: User receiving the funds.
        amount: Positive amount in `currency`.
        phone: Payer MSISDN.
        message: Message shown to the payer.
        currency: ISO currency code.
    """

    user_id: str
    amount: Decimal
    phone: str
    message: str
    currency: str = "EUR"


@dataclass(frozen=True)
class SendMoneyCommand:
    """Input DTO for a MOMO transfer paid from the user's account.

    Attributes:
        user_id: Sender.
        amount: Positive amount in `currency`; converted to EUR.
        phone: Recipient number in local or international form.
        country: Recipient's MOMO country.
        description: Optional note.
        currency: Currency of `amount`.
    """

    user_id: str
    amount: Decimal
    phone: str
    country: MomoCountry
    description: Optional[str] = None
    currency: str = "EUR"


@dataclass(frozen=True)
class PaymentInitiated:
    transaction_id: str
    reference_id: str
    amount: Decimal
    currency: str
    status: TransactionStatus = TransactionStatus.PENDING


@dataclass(frozen=True)
class CallbackCommand:
    """Webhook payload sent by MOMO. The status is re-read from the API."""

    reference_id: str
    status: Optional[str] = None


@dataclass(frozen=True)
class CallbackResult:
    """Outcome of processing a callback.

    Attributes:
        transaction_id: Local transaction the callback referred to.
        status: Status after processing.
        balance_applied: Whether a balance changed in this call. False
            for repeated callbacks on an already settled transaction.
    """

    transaction_id: str
    status: TransactionStatus
    balance_applied: bool
