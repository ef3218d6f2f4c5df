"""
Pydantic schemas for MOMO payment API request/response validation.

Phone numbers are checked against the per-country patterns by the use
cases, so the error carries the MOMO error code.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from hoardrun.domain.banking.entities import TransactionStatus

CURRENCY_PATTERN = r"^[A-Z]{3}$"
MAX_AMOUNT = Decimal("1000000")


class RequestPaymentRequest(BaseModel):
    """Request schema for collecting money from a MOMO wallet.

    Attributes:
        amount: Amount to collect.
        phone: Payer MSISDN.
        message: Message shown to the payer.
        currency: ISO currency code.
    """

    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    phone: str = Field(..., min_length=6, max_length=20)
    message: str = Field("Payment request", max_length=160)
    currency: str = Field("EUR", pattern=CURRENCY_PATTERN)


class SendMoneyRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    phone: str = Field(..., min_length=6, max_length=20)
    country: Literal["GH", "UG", "CM", "CI"]
    description: str | None = Field(None, max_length=160)
    currency: str = Field("EUR", pattern=CURRENCY_PATTERN)


class PaymentInitiatedResponse(BaseModel):
    transaction_id: str
    reference_id: str
    amount: Decimal
    currency: str
    status: TransactionStatus


class SendMoneyResponse(BaseModel):
    success: bool
    reference_id: str
    message: str


class PaymentStatusResponse(BaseModel):
    reference_id: str
    status: str
    reason: str | None = None
    financial_transaction_id: str | None = None


class CollectionBalanceResponse(BaseModel):
    amount: Decimal
    currency: str


class CallbackRequest(BaseModel):
    """Webhook body posted by MOMO when a request-to-pay settles."""

    model_config = ConfigDict(populate_by_name=True)

    reference_id: str = Field(..., alias="referenceId", min_length=1, max_length=64)
    status: str | None = None


class CallbackResponse(BaseModel):
    success: bool
