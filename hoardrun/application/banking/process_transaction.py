"""
Use case: Credit or debit one of the user's accounts.

Input: ProcessTransactionCommand
Output: ProcessTransactionResult (transaction, new balance)
Side effects: Inserts a COMPLETED transaction and adjusts the account
    balance in one unit of work. Debits are conditional on the balance
    covering them at write time.
Failure cases: InvalidAmountError, AccountNotFoundError (missing,
    inactive or foreign account), InsufficientFundsError.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from hoardrun.application.banking.dtos import (
    ProcessTransactionCommand,
    ProcessTransactionResult,
)
from hoardrun.domain.banking.entities import Transaction, TransactionStatus
from hoardrun.domain.banking.errors import AccountNotFoundError
from hoardrun.domain.banking.rules import (
    calculate_transaction_fee,
    is_income,
    to_cents,
    validate_transaction_amount,
)
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ProcessTransactionUseCase:
    """Applies a single transaction to an account atomically.

    Income types (deposit, receive, refund) credit the amount. Every other
    type debits the amount plus its fee and must be covered by the balance.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: ProcessTransactionCommand) -> ProcessTransactionResult:
        amount = to_cents(command.amount)
        validate_transaction_amount(amount)
        fee = calculate_transaction_fee(amount, command.type)

        with self._uow_factory() as uow:
            account = uow.accounts.get(command.account_id)
            if (
                account is None
                or account.user_id != command.user_id
                or not account.is_active
            ):
                raise AccountNotFoundError(command.account_id)

            transaction = Transaction(
                id=str(uuid.uuid4()),
                user_id=command.user_id,
                account_id=account.id,
                type=command.type,
                amount=amount,
                fee=fee,
                status=TransactionStatus.COMPLETED,
                description=command.description,
                category=command.category,
                created_at=datetime.now(timezone.utc),
            )
            uow.transactions.add(transaction)
            if is_income(command.type):
                balance = uow.accounts.adjust_balance(account.id, amount)
            else:
                balance = uow.accounts.debit(account.id, amount + fee)

        logger.info(
            "Transaction processed: id=%s type=%s account=%s",
            transaction.id,
            transaction.type.value,
            account.id,
        )
        return ProcessTransactionResult(transaction=transaction, balance=balance)
