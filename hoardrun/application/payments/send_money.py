"""
Use case: Send money to a MOMO number from the user's account.

Input: SendMoneyCommand (amount, phone, country, description, currency)
Output: PaymentInitiated (amounts in EUR)
Side effects:
    - inserts a PENDING TRANSFER transaction on the user's active account
    - runs transaction monitoring
    - sends a request-to-pay and stores the provider reference
    - on failure after the transaction exists, marks it FAILED
The account is debited only when the provider confirms the payment
(see ProcessCallbackUseCase).
Failure cases: InvalidPhoneNumberError, UnsupportedCurrencyError,
    MomoError (INSUFFICIENT_FUNDS, EXCHANGE_RATE_FAILED,
    PAYMENT_REQUEST_FAILED, ...).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from hoardrun.application.payments.dtos import PaymentInitiated, SendMoneyCommand
from hoardrun.application.payments.monitor_transaction import MonitorTransactionUseCase
from hoardrun.domain.banking.entities import Transaction, TransactionStatus, TransactionType
from hoardrun.domain.banking.rules import to_cents, validate_transaction_amount
from hoardrun.domain.payments.entities import MOMO_PROVIDER
from hoardrun.domain.payments.errors import InvalidPhoneNumberError, MomoError, MomoErrorCode
from hoardrun.domain.payments.phone import format_phone_number, validate_momo_number
from hoardrun.domain.payments.ports import ExchangeRateProvider, MomoGateway
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.shared.logging import log_payment_error, log_payment_event, mask_phone

logger = logging.getLogger(__name__)

SETTLEMENT_CURRENCY = "EUR"
DEFAULT_DESCRIPTION = "MTN MOMO Transfer"
DEFAULT_PAYER_MESSAGE = "Money Transfer"


class SendMoneyUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        gateway: MomoGateway,
        exchange_rates: ExchangeRateProvider,
        monitor: MonitorTransactionUseCase,
    ) -> None:
        self._uow_factory = uow_factory
        self._gateway = gateway
        self._exchange_rates = exchange_rates
        self._monitor = monitor

    def execute(self, command: SendMoneyCommand) -> PaymentInitiated:
        validate_transaction_amount(command.amount)
        if not validate_momo_number(command.phone, command.country):
            raise InvalidPhoneNumberError(command.phone, command.country.name)
        phone = format_phone_number(command.phone, command.country)

        amount = to_cents(
            self._exchange_rates.convert(
                command.amount, command.currency, SETTLEMENT_CURRENCY
            )
        )
        description = f"{command.description or DEFAULT_DESCRIPTION} to {phone}"

        with self._uow_factory() as uow:
            account = uow.accounts.first_active_for_user(command.user_id)
            if account is None or account.balance < amount:
                raise MomoError(
                    MomoErrorCode.INSUFFICIENT_FUNDS, "Insufficient balance", 400
                )
            transaction = Transaction(
                id=str(uuid.uuid4()),
                user_id=command.user_id,
                account_id=account.id,
                type=TransactionType.TRANSFER,
                amount=amount,
                status=TransactionStatus.PENDING,
                description=description,
                provider=MOMO_PROVIDER,
                created_at=datetime.now(timezone.utc),
            )
            uow.transactions.add(transaction)

        try:
            self._monitor.execute(transaction)
            reference_id = self._gateway.request_to_pay(
                amount,
                SETTLEMENT_CURRENCY,
                phone,
                command.description or DEFAULT_PAYER_MESSAGE,
                external_id=transaction.id,
            )
            with self._uow_factory() as uow:
                uow.transactions.set_reference(
                    transaction.id,
                    reference_id,
                    description=f"{description} (Ref: {reference_id})",
                )
        except Exception as exc:
            with self._uow_factory() as uow:
                uow.transactions.update_status(transaction.id, TransactionStatus.FAILED)
            log_payment_error(exc, operation="send_money", transaction_id=transaction.id)
            raise

        log_payment_event(
            "MOMO_TRANSFER",
            "INITIATED",
            reference_id=reference_id,
            transaction_id=transaction.id,
            original_amount=command.amount,
            original_currency=command.currency,
            phone=mask_phone(phone),
        )
        return PaymentInitiated(
            transaction_id=transaction.id,
            reference_id=reference_id,
            amount=amount,
            currency=SETTLEMENT_CURRENCY,
        )
