"""
Use case: Open a bank account.

Input: CreateAccountCommand (user_id, type, currency)
Output: Account
Side effects: Inserts the account.
Failure cases: AccountNumberGenerationError if no free number is found.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from hoardrun.application.banking.dtos import CreateAccountCommand
from hoardrun.domain.banking.entities import Account
from hoardrun.domain.banking.errors import AccountNumberGenerationError
from hoardrun.domain.banking.rules import generate_account_number
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

MAX_NUMBER_ATTEMPTS = 10


class CreateAccountUseCase:
    """Creates an empty account with a unique 10-digit number."""

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        number_generator: Callable[[], str] = generate_account_number,
    ) -> None:
        self._uow_factory = uow_factory
        self._number_generator = number_generator

    def execute(self, command: CreateAccountCommand) -> Account:
        """Open the account.

        Raises:
            AccountNumberGenerationError: If every generated number collided.
        """
        with self._uow_factory() as uow:
            number = self._unique_number(uow)
            account = Account(
                id=str(uuid.uuid4()),
                user_id=command.user_id,
                type=command.type,
                number=number,
                currency=command.currency.upper(),
                created_at=datetime.now(timezone.utc),
            )
            uow.accounts.add(account)

        logger.info("Account opened: id=%s type=%s", account.id, account.type.value)
        return account

    def _unique_number(self, uow: UnitOfWork) -> str:
        for _ in range(MAX_NUMBER_ATTEMPTS):
            number = self._number_generator()
            if not uow.accounts.number_exists(number):
                return number
        raise AccountNumberGenerationError(MAX_NUMBER_ATTEMPTS)
