"""
Use case: List a user's accounts.

Input: ListAccountsQuery (user_id, optional type and active filters)
Output: list[AccountSummary], newest first
Side effects: None.
"""

from typing import Callable

from hoardrun.application.banking.dtos import ListAccountsQuery
from hoardrun.domain.banking.entities import AccountSummary
from hoardrun.domain.unit_of_work import UnitOfWork


class ListAccountsUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, query: ListAccountsQuery) -> list[AccountSummary]:
        with self._uow_factory() as uow:
            return uow.accounts.list_for_user(
                query.user_id, account_type=query.type, is_active=query.is_active
            )
