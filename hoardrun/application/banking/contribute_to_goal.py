"""
Use case: Move money from the user's account into a savings goal.

Input: ContributeCommand (goal_id, amount, type, description)
Output: ContributeResult (updated goal, account balance)
Side effects, all in one unit of work:
    - inserts the contribution
    - raises the goal amount, completing the goal when the target is met
    - debits the user's first active account
    - records a COMPLETED TRANSFER transaction in category SAVINGS
Failure cases: InvalidAmountError, SavingsGoalNotFoundError,
    AccountNotFoundError, InsufficientFundsError.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from hoardrun.application.banking.dtos import ContributeCommand, ContributeResult
from hoardrun.domain.banking.entities import (
    SavingsContribution,
    SavingsGoalStatus,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from hoardrun.domain.banking.errors import (
    AccountNotFoundError,
    InvalidAmountError,
    SavingsGoalNotFoundError,
)
from hoardrun.domain.banking.rules import to_cents
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

MIN_CONTRIBUTION = Decimal("1")
SAVINGS_CATEGORY = "SAVINGS"


class ContributeToGoalUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: ContributeCommand) -> ContributeResult:
        if command.amount < MIN_CONTRIBUTION:
            raise InvalidAmountError(f"Contribution must be at least {MIN_CONTRIBUTION}")
        amount = to_cents(command.amount)
        now = datetime.now(timezone.utc)

        with self._uow_factory() as uow:
            goal = uow.savings_goals.get_for_user(command.goal_id, command.user_id)
            if goal is None:
                raise SavingsGoalNotFoundError(command.goal_id)

            account = uow.accounts.first_active_for_user(command.user_id)
            if account is None:
                raise AccountNotFoundError(f"active account of user {command.user_id}")

            uow.contributions.add(
                SavingsContribution(
                    id=str(uuid.uuid4()),
                    goal_id=goal.id,
                    amount=amount,
                    type=command.type,
                    description=command.description,
                    created_at=now,
                )
            )

            current = goal.current_amount + amount
            status = (
                SavingsGoalStatus.COMPLETED
                if current >= goal.target_amount
                else goal.status
            )
            goal = replace(goal, current_amount=current, status=status)
            uow.savings_goals.update(goal)

            balance = uow.accounts.debit(account.id, amount)
            uow.transactions.add(
                Transaction(
                    id=str(uuid.uuid4()),
                    user_id=command.user_id,
                    account_id=account.id,
                    type=TransactionType.TRANSFER,
                    amount=amount,
                    status=TransactionStatus.COMPLETED,
                    description=command.description or f"Contribution to {goal.name}",
                    category=SAVINGS_CATEGORY,
                    created_at=now,
                )
            )

        logger.info(
            "Savings contribution recorded: goal=%s status=%s", goal.id, goal.status.value
        )
        return ContributeResult(goal=goal, account_balance=balance)
