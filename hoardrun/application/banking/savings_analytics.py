"""
Use case: Summarise progress across all savings goals.

Input: user_id
Output: SavingsAnalytics
Side effects: None.
"""

from decimal import Decimal
from typing import Callable

from hoardrun.application.banking.dtos import GoalProgress, SavingsAnalytics
from hoardrun.domain.banking.entities import SavingsGoalStatus
from hoardrun.domain.banking.rules import months_to_goal
from hoardrun.domain.unit_of_work import UnitOfWork


class SavingsAnalyticsUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, user_id: str) -> SavingsAnalytics:
        with self._uow_factory() as uow:
            goals = uow.savings_goals.list_for_user(user_id)

        total_saved = sum((g.current_amount for g in goals), Decimal("0"))
        total_target = sum((g.target_amount for g in goals), Decimal("0"))
        active = [g for g in goals if g.status is SavingsGoalStatus.ACTIVE]
        overall = (
            (total_saved / total_target * 100).quantize(Decimal("0.01"))
            if total_target > 0
            else Decimal("0")
        )

        return SavingsAnalytics(
            total_saved=total_saved,
            total_target=total_target,
            overall_progress=min(overall, Decimal("100")),
            active_goals=len(active),
            completed_goals=len(goals) - len(active),
            monthly_commitment=sum(
                (g.monthly_contribution for g in active), Decimal("0")
            ),
            goals=[
                GoalProgress(
                    id=g.id,
                    name=g.name,
                    current_amount=g.current_amount,
                    target_amount=g.target_amount,
                    progress_percent=g.progress_percent,
                    months_remaining=months_to_goal(
                        g.target_amount, g.current_amount, g.monthly_contribution
                    ),
                )
                for g in goals
            ],
        )
