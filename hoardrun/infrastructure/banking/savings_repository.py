"""
Adapter: Savings repositories.

Implements SavingsGoalRepository and SavingsContributionRepository ports.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection

from hoardrun.domain.banking.entities import (
    ContributionType,
    SavingsContribution,
    SavingsGoal,
    SavingsGoalStatus,
)
from hoardrun.domain.banking.ports import (
    SavingsContributionRepository,
    SavingsGoalRepository,
)
from hoardrun.infrastructure.persistence.database import as_utc
from hoardrun.infrastructure.persistence.tables import (
    savings_contributions,
    savings_goals,
)


def _to_goal(row) -> SavingsGoal:
    return SavingsGoal(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        target_amount=Decimal(row.target_amount),
        current_amount=Decimal(row.current_amount),
        monthly_contribution=Decimal(row.monthly_contribution),
        category=row.category,
        deadline=row.deadline,
        is_auto_save=row.is_auto_save,
        status=SavingsGoalStatus(row.status),
        created_at=as_utc(row.created_at),
    )


def _goal_values(goal: SavingsGoal) -> dict:
    return {
        "name": goal.name,
        "target_amount": goal.target_amount,
        "current_amount": goal.current_amount,
        "monthly_contribution": goal.monthly_contribution,
        "category": goal.category,
        "deadline": goal.deadline,
        "is_auto_save": goal.is_auto_save,
        "status": goal.status.value,
    }


class SavingsGoalRepositoryAdapter(SavingsGoalRepository):
    """SQLAlchemy adapter for the savings_goals table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, goal: SavingsGoal) -> None:
        self._conn.execute(
            insert(savings_goals).values(
                id=goal.id,
                user_id=goal.user_id,
                created_at=as_utc(goal.created_at),
                **_goal_values(goal),
            )
        )

    def get_for_user(self, goal_id: str, user_id: str) -> Optional[SavingsGoal]:
        row = self._conn.execute(
            select(savings_goals).where(
                savings_goals.c.id == goal_id, savings_goals.c.user_id == user_id
            )
        ).first()
        return _to_goal(row) if row else None

    def list_for_user(self, user_id: str) -> list[SavingsGoal]:
        rows = self._conn.execute(
            select(savings_goals)
            .where(savings_goals.c.user_id == user_id)
            .order_by(savings_goals.c.created_at.desc())
        )
        return [_to_goal(row) for row in rows]

    def update(self, goal: SavingsGoal) -> None:
        self._conn.execute(
            update(savings_goals)
            .where(savings_goals.c.id == goal.id)
            .values(**_goal_values(goal))
        )

    def delete(self, goal_id: str) -> None:
        # SQLite does not enforce ON DELETE CASCADE unless foreign keys are on
        self._conn.execute(
            delete(savings_contributions).where(savings_contributions.c.goal_id == goal_id)
        )
        self._conn.execute(delete(savings_goals).where(savings_goals.c.id == goal_id))


class SavingsContributionRepositoryAdapter(SavingsContributionRepository):
    """SQLAlchemy adapter for the savings_contributions table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, contribution: SavingsContribution) -> None:
        self._conn.execute(
            insert(savings_contributions).values(
                id=contribution.id,
                goal_id=contribution.goal_id,
                amount=contribution.amount,
                type=contribution.type.value,
                description=contribution.description,
                created_at=as_utc(contribution.created_at),
            )
        )

    def list_for_goal(self, goal_id: str) -> list[SavingsContribution]:
        rows = self._conn.execute(
            select(savings_contributions)
            .where(savings_contributions.c.goal_id == goal_id)
            .order_by(savings_contributions.c.created_at.desc())
        )
        return [
            SavingsContribution(
                id=row.id,
                goal_id=row.goal_id,
                amount=Decimal(row.amount),
                type=ContributionType(row.type),
                description=row.description,
                created_at=as_utc(row.created_at),
            )
            for row in rows
        ]
