"""
Use case: Collect money from a MOMO wallet into the user's wallet.

Input: RequestPaymentCommand (amount, phone, message, currency)
Output: PaymentInitiated
Side effects:
    - inserts a PENDING RECEIVE transaction (provider MOMO)
    - checks the payer account holder and sends a request-to-pay whose
      external id is the transaction id
    - stores the provider reference on the transaction
    - on any failure marks the transaction FAILED before re-raising
Failure cases: InvalidAmountError, MomoError (USER_NOT_FOUND,
    INVALID_PHONE, PAYMENT_REQUEST_FAILED, ...).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from hoardrun.application.payments.dtos import PaymentInitiated, RequestPaymentCommand
from hoardrun.domain.banking.entities import Transaction, TransactionStatus, TransactionType
from hoardrun.domain.banking.rules import to_cents, validate_transaction_amount
from hoardrun.domain.payments.entities import MOMO_PROVIDER
from hoardrun.domain.payments.errors import InvalidPhoneNumberError, MomoError, MomoErrorCode
from hoardrun.domain.payments.ports import MomoGateway
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.shared.logging import log_payment_error, log_payment_event, mask_phone

logger = logging.getLogger(__name__)


class RequestPaymentUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork], gateway: MomoGateway) -> None:
        self._uow_factory = uow_factory
        self._gateway = gateway

    def execute(self, command: RequestPaymentCommand) -> PaymentInitiated:
        amount = to_cents(command.amount)
        validate_transaction_amount(amount)

        with self._uow_factory() as uow:
            if uow.users.get_by_id(command.user_id) is None:
                raise MomoError(MomoErrorCode.USER_NOT_FOUND, "User not found", 404)
            transaction = Transaction(
                id=str(uuid.uuid4()),
                user_id=command.user_id,
                type=TransactionType.RECEIVE,
                amount=amount,
                status=TransactionStatus.PENDING,
                description=command.message,
                provider=MOMO_PROVIDER,
                created_at=datetime.now(timezone.utc),
            )
            uow.transactions.add(transaction)

        try:
            if not self._gateway.validate_account_holder(command.phone):
                raise InvalidPhoneNumberError(command.phone)
            reference_id = self._gateway.request_to_pay(
                amount,
                command.currency,
                command.phone,
                command.message,
                external_id=transaction.id,
            )
            with self._uow_factory() as uow:
                uow.transactions.set_reference(transaction.id, reference_id)
        except Exception as exc:
            with self._uow_factory() as uow:
                uow.transactions.update_status(transaction.id, TransactionStatus.FAILED)
            log_payment_error(
                exc, operation="request_payment", transaction_id=transaction.id
            )
            raise

        log_payment_event(
            "MOMO_PAYMENT_REQUEST",
            "INITIATED",
            reference_id=reference_id,
            transaction_id=transaction.id,
            phone=mask_phone(command.phone),
        )
        return PaymentInitiated(
            transaction_id=transaction.id,
            reference_id=reference_id,
            amount=amount,
            currency=command.currency,
        )
