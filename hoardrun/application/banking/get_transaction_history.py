"""
Use case: Page through one account's transactions.

Input: TransactionHistoryQuery (account, page, limit, optional filters)
Output: TransactionPage
Side effects: None.
Failure cases: AccountNotFoundError if the account is not the user's.
"""

import math
from typing import Callable

from hoardrun.application.banking.dtos import TransactionHistoryQuery, TransactionPage
from hoardrun.domain.banking.entities import TransactionFilter
from hoardrun.domain.banking.errors import AccountNotFoundError
from hoardrun.domain.unit_of_work import UnitOfWork


class GetTransactionHistoryUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, query: TransactionHistoryQuery) -> TransactionPage:
        filters = TransactionFilter(
            account_id=query.account_id,
            type=query.type,
            start=query.start,
            end=query.end,
        )
        with self._uow_factory() as uow:
            account = uow.accounts.get(query.account_id)
            if account is None or account.user_id != query.user_id:
                raise AccountNotFoundError(query.account_id)
            transactions, total = uow.transactions.list_for_user(
                query.user_id,
                filters,
                limit=query.limit,
                offset=(query.page - 1) * query.limit,
            )

        return TransactionPage(
            transactions=transactions,
            total=total,
            pages=math.ceil(total / query.limit) if total else 0,
            current=query.page,
            limit=query.limit,
        )
