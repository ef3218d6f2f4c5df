"""
Use case: Deposit to or withdraw from the user's wallet.

Input: UpdateBalanceCommand (amount, DEPOSIT|WITHDRAWAL, provider)
Output: UpdateBalanceResult (new balance, transaction)
Side effects: Adjusts users.balance and inserts a COMPLETED transaction
    in one unit of work.
Failure cases: InvalidAmountError, UserNotFoundError,
    InsufficientFundsError on an uncovered withdrawal.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from hoardrun.application.banking.dtos import UpdateBalanceCommand, UpdateBalanceResult
from hoardrun.domain.banking.entities import Transaction, TransactionStatus, TransactionType
from hoardrun.domain.banking.errors import InvalidAmountError
from hoardrun.domain.banking.rules import to_cents, validate_transaction_amount
from hoardrun.domain.identity.errors import UserNotFoundError
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

WALLET_TYPES = (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class UpdateBalanceUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: UpdateBalanceCommand) -> UpdateBalanceResult:
        if command.type not in WALLET_TYPES:
            raise InvalidAmountError("Balance updates must be DEPOSIT or WITHDRAWAL")
        amount = to_cents(command.amount)
        validate_transaction_amount(amount)

        with self._uow_factory() as uow:
            user = uow.users.get_by_id(command.user_id)
            if user is None:
                raise UserNotFoundError(command.user_id)

            if command.type is TransactionType.WITHDRAWAL:
                balance = uow.users.debit(user.id, amount)
            else:
                balance = uow.users.adjust_balance(user.id, amount)
            transaction = Transaction(
                id=str(uuid.uuid4()),
                user_id=user.id,
                type=command.type,
                amount=amount,
                status=TransactionStatus.COMPLETED,
                description=f"{command.type.value} via {command.provider.value}",
                provider=command.provider.value,
                created_at=datetime.now(timezone.utc),
            )
            uow.transactions.add(transaction)

        logger.info(
            "Wallet %s: user_id=%s provider=%s",
            command.type.value.lower(),
            user.id,
            command.provider.value,
        )
        return UpdateBalanceResult(balance=balance, transaction=transaction)
