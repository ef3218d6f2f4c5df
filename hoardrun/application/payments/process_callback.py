"""
Use case: Settle a MOMO payment from a provider callback.

Input: CallbackCommand (reference_id, status as reported in the webhook)
Output: CallbackResult

Flow:
    1. The webhook status is not trusted; the status is re-read with
       get_transaction_status(reference_id).
    2. In one unit of work the transaction (looked up by provider
       reference, falling back to its id) gets the mapped status and,
       when the payment succeeded, the balance is adjusted:
       TRANSFER/SEND debit the linked account (or the wallet when there
       is none), RECEIVE credits the wallet. Either both writes commit or
       neither does.
    3. After a successful settlement a delivery notification is sent.
       Its failure is logged and does not undo the settlement.

Only PENDING transactions are settled. The PENDING check and the status
write are one conditional UPDATE, so repeated or concurrent callbacks for
the same reference settle it once.

Failure cases: MomoError (STATUS_CHECK_FAILED), PaymentTransactionNotFoundError.
"""

import logging
from decimal import Decimal
from typing import Callable

from hoardrun.application.payments.dtos import CallbackCommand, CallbackResult
from hoardrun.domain.banking.entities import Transaction, TransactionStatus, TransactionType
from hoardrun.domain.payments.entities import map_provider_status
from hoardrun.domain.payments.errors import PaymentTransactionNotFoundError
from hoardrun.domain.payments.ports import MomoGateway
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.shared.logging import log_payment_error, log_payment_event

logger = logging.getLogger(__name__)

DELIVERY_MESSAGE = "Transfer completed successfully"

DEBIT_TYPES = (TransactionType.TRANSFER, TransactionType.SEND)
CREDIT_TYPES = (TransactionType.RECEIVE,)


class ProcessCallbackUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork], gateway: MomoGateway) -> None:
        self._uow_factory = uow_factory
        self._gateway = gateway

    def execute(self, command: CallbackCommand) -> CallbackResult:
        report = self._gateway.get_transaction_status(command.reference_id)
        new_status = map_provider_status(report.status)

        with self._uow_factory() as uow:
            transaction = uow.transactions.get_by_reference(
                command.reference_id
            ) or uow.transactions.get(command.reference_id)
            if transaction is None:
                raise PaymentTransactionNotFoundError(command.reference_id)

            if transaction.status is not TransactionStatus.PENDING or not (
                uow.transactions.transition_status(
                    transaction.id, TransactionStatus.PENDING, new_status
                )
            ):
                current = uow.transactions.get(transaction.id)
                logger.info(
                    "Callback for settled transaction ignored: id=%s status=%s",
                    transaction.id,
                    current.status.value,
                )
                return CallbackResult(
                    transaction_id=transaction.id,
                    status=current.status,
                    balance_applied=False,
                )

            applied = False
            if report.is_successful:
                applied = self._apply_balance(uow, transaction)

        log_payment_event(
            "CALLBACK_PROCESSED",
            report.status,
            reference_id=command.reference_id,
            transaction_id=transaction.id,
            balance_applied=applied,
        )

        if report.is_successful:
            self._notify(command.reference_id)

        return CallbackResult(
            transaction_id=transaction.id, status=new_status, balance_applied=applied
        )

    def _apply_balance(self, uow: UnitOfWork, transaction: Transaction) -> bool:
        if transaction.type in DEBIT_TYPES:
            debit: Decimal = transaction.amount + transaction.fee
            if transaction.account_id:
                uow.accounts.adjust_balance(transaction.account_id, -debit)
            else:
                uow.users.adjust_balance(transaction.user_id, -debit)
            return True
        if transaction.type in CREDIT_TYPES:
            uow.users.adjust_balance(transaction.user_id, transaction.amount)
            return True
        logger.warning(
            "No balance rule for %s transaction %s",
            transaction.type.value,
            transaction.id,
        )
        return False

    def _notify(self, reference_id: str) -> None:
        try:
            self._gateway.send_delivery_notification(reference_id, DELIVERY_MESSAGE)
        except Exception as exc:
            log_payment_error(exc, operation="delivery_notification", reference_id=reference_id)
