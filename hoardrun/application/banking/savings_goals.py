"""
Use cases: Savings goal management.

List, create, read, update and delete the caller's savings goals.
Goals owned by another user are reported as not found.

Failure cases: SavingsGoalNotFoundError, InvalidAmountError.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from hoardrun.application.banking.dtos import (
    CreateSavingsGoalCommand,
    UpdateSavingsGoalCommand,
)
from hoardrun.domain.banking.entities import SavingsGoal, SavingsGoalStatus
from hoardrun.domain.banking.errors import InvalidAmountError, SavingsGoalNotFoundError
from hoardrun.domain.banking.rules import to_cents
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

MIN_GOAL_AMOUNT = Decimal("1")


def _check_minimum(value: Decimal, field_name: str) -> Decimal:
    if value < MIN_GOAL_AMOUNT:
        raise InvalidAmountError(f"{field_name} must be at least {MIN_GOAL_AMOUNT}")
    return to_cents(value)


def _status_for(current: Decimal, target: Decimal) -> SavingsGoalStatus:
    if current >= target:
        return SavingsGoalStatus.COMPLETED
    return SavingsGoalStatus.ACTIVE


class ListSavingsGoalsUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, user_id: str) -> list[SavingsGoal]:
        with self._uow_factory() as uow:
            return uow.savings_goals.list_for_user(user_id)


class CreateSavingsGoalUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: CreateSavingsGoalCommand) -> SavingsGoal:
        goal = SavingsGoal(
            id=str(uuid.uuid4()),
            user_id=command.user_id,
            name=command.name.strip(),
            target_amount=_check_minimum(command.target_amount, "Target amount"),
            monthly_contribution=_check_minimum(
                command.monthly_contribution, "Monthly contribution"
            ),
            category=command.category,
            deadline=command.deadline,
            is_auto_save=command.is_auto_save,
            created_at=datetime.now(timezone.utc),
        )
        with self._uow_factory() as uow:
            uow.savings_goals.add(goal)
        logger.info("Savings goal created: id=%s", goal.id)
        return goal


class GetSavingsGoalUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, user_id: str, goal_id: str) -> SavingsGoal:
        with self._uow_factory() as uow:
            goal = uow.savings_goals.get_for_user(goal_id, user_id)
        if goal is None:
            raise SavingsGoalNotFoundError(goal_id)
        return goal


class UpdateSavingsGoalUseCase:
    """Applies a partial update; the goal status follows the new target."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, command: UpdateSavingsGoalCommand) -> SavingsGoal:
        changes = {}
        if command.name is not None:
            changes["name"] = command.name.strip()
        if command.target_amount is not None:
            changes["target_amount"] = _check_minimum(command.target_amount, "Target amount")
        if command.monthly_contribution is not None:
            changes["monthly_contribution"] = _check_minimum(
                command.monthly_contribution, "Monthly contribution"
            )
        if command.category is not None:
            changes["category"] = command.category
        if command.deadline is not None:
            changes["deadline"] = command.deadline
        if command.is_auto_save is not None:
            changes["is_auto_save"] = command.is_auto_save

        with self._uow_factory() as uow:
            goal = uow.savings_goals.get_for_user(command.goal_id, command.user_id)
            if goal is None:
                raise SavingsGoalNotFoundError(command.goal_id)
            updated = replace(goal, **changes)
            updated = replace(
                updated,
                status=_status_for(updated.current_amount, updated.target_amount),
            )
            uow.savings_goals.update(updated)

        logger.info("Savings goal updated: id=%s fields=%s", goal.id, sorted(changes))
        return updated


class DeleteSavingsGoalUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, user_id: str, goal_id: str) -> None:
        with self._uow_factory() as uow:
            if uow.savings_goals.get_for_user(goal_id, user_id) is None:
                raise SavingsGoalNotFoundError(goal_id)
            uow.savings_goals.delete(goal_id)
        logger.info("Savings goal deleted: id=%s", goal_id)
