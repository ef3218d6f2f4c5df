"""
Use case: Project a savings goal's balance over the coming years.

Input: SavingsProjectionQuery (goal_id, years, annual_rate percent)
Output: SavingsProjection
Side effects: None.
Failure cases: SavingsGoalNotFoundError.
"""

from typing import Callable

from hoardrun.application.banking.dtos import (
    SavingsProjection,
    SavingsProjectionQuery,
    YearBalance,
)
from hoardrun.domain.banking.errors import SavingsGoalNotFoundError
from hoardrun.domain.banking.rules import months_to_goal, savings_projection
from hoardrun.domain.unit_of_work import UnitOfWork


class ProjectSavingsUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, query: SavingsProjectionQuery) -> SavingsProjection:
        with self._uow_factory() as uow:
            goal = uow.savings_goals.get_for_user(query.goal_id, query.user_id)
        if goal is None:
            raise SavingsGoalNotFoundError(query.goal_id)

        balances = savings_projection(
            goal.current_amount, goal.monthly_contribution, query.annual_rate, query.years
        )
        return SavingsProjection(
            goal_id=goal.id,
            annual_rate=query.annual_rate,
            months_to_goal=months_to_goal(
                goal.target_amount,
                goal.current_amount,
                goal.monthly_contribution,
                annual_rate=query.annual_rate / 100,
            ),
            balances=[
                YearBalance(year=year, balance=balance)
                for year, balance in enumerate(balances, start=1)
            ],
        )
