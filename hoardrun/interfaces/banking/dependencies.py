"""
Dependency injection for the banking bounded context.

Every banking use case needs only the unit-of-work factory.
"""

from typing import Callable

from fastapi import Depends

from hoardrun.application.banking.contribute_to_goal import ContributeToGoalUseCase
from hoardrun.application.banking.create_account import CreateAccountUseCase
from hoardrun.application.banking.get_transaction_history import (
    GetTransactionHistoryUseCase,
)
from hoardrun.application.banking.list_accounts import ListAccountsUseCase
from hoardrun.application.banking.list_transactions import ListTransactionsUseCase
from hoardrun.application.banking.process_transaction import ProcessTransactionUseCase
from hoardrun.application.banking.project_savings import ProjectSavingsUseCase
from hoardrun.application.banking.savings_analytics import SavingsAnalyticsUseCase
from hoardrun.application.banking.savings_goals import (
    CreateSavingsGoalUseCase,
    DeleteSavingsGoalUseCase,
    GetSavingsGoalUseCase,
    ListSavingsGoalsUseCase,
    UpdateSavingsGoalUseCase,
)
from hoardrun.application.banking.update_balance import UpdateBalanceUseCase
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.interfaces.dependencies import get_uow_factory

UowFactory = Callable[[], UnitOfWork]


def get_create_account_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> CreateAccountUseCase:
    return CreateAccountUseCase(uow_factory)


def get_list_accounts_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> ListAccountsUseCase:
    return ListAccountsUseCase(uow_factory)


def get_process_transaction_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> ProcessTransactionUseCase:
    return ProcessTransactionUseCase(uow_factory)


def get_transaction_history_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> GetTransactionHistoryUseCase:
    return GetTransactionHistoryUseCase(uow_factory)


def get_list_transactions_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> ListTransactionsUseCase:
    return ListTransactionsUseCase(uow_factory)


def get_update_balance_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> UpdateBalanceUseCase:
    return UpdateBalanceUseCase(uow_factory)


def get_list_goals_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> ListSavingsGoalsUseCase:
    return ListSavingsGoalsUseCase(uow_factory)


def get_create_goal_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> CreateSavingsGoalUseCase:
    return CreateSavingsGoalUseCase(uow_factory)


def get_goal_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> GetSavingsGoalUseCase:
    return GetSavingsGoalUseCase(uow_factory)


def get_update_goal_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> UpdateSavingsGoalUseCase:
    return UpdateSavingsGoalUseCase(uow_factory)


def get_delete_goal_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> DeleteSavingsGoalUseCase:
    return DeleteSavingsGoalUseCase(uow_factory)


def get_contribute_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> ContributeToGoalUseCase:
    return ContributeToGoalUseCase(uow_factory)


def get_savings_analytics_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> SavingsAnalyticsUseCase:
    return SavingsAnalyticsUseCase(uow_factory)


def get_project_savings_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> ProjectSavingsUseCase:
    return ProjectSavingsUseCase(uow_factory)
