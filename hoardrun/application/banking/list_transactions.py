"""
Use case: List all of a user's transactions with a cash-flow summary.

Input: ListTransactionsQuery (limit, offset, optional filters)
Output: TransactionListing
Side effects: None.

Income is the sum of income-type amounts (deposit, receive, refund);
expenses are every other type. Both honour the same filters as the page.
"""

from decimal import Decimal
from typing import Callable

from hoardrun.application.banking.dtos import ListTransactionsQuery, TransactionListing
from hoardrun.domain.banking.entities import TransactionFilter, TransactionType
from hoardrun.domain.banking.rules import is_income
from hoardrun.domain.unit_of_work import UnitOfWork


class ListTransactionsUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, query: ListTransactionsQuery) -> TransactionListing:
        filters = TransactionFilter(
            type=query.type,
            category=query.category,
            start=query.start,
            end=query.end,
        )
        with self._uow_factory() as uow:
            transactions, total = uow.transactions.list_for_user(
                query.user_id, filters, limit=query.limit, offset=query.offset
            )
            totals = uow.transactions.totals_for_user(query.user_id, filters)

        income = Decimal("0")
        expenses = Decimal("0")
        for type_value, amount in totals.items():
            if is_income(TransactionType(type_value)):
                income += amount
            else:
                expenses += amount

        return TransactionListing(
            transactions=transactions,
            total=total,
            limit=query.limit,
            offset=query.offset,
            has_more=query.offset + len(transactions) < total,
            total_income=income,
            total_expenses=expenses,
            net_amount=income - expenses,
        )
