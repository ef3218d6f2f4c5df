"""
Tests for the banking application layer (use cases).

Each use case runs against an in-memory database so balance changes
and the transactions that record them can be checked together.
"""

from datetime import date
from decimal import Decimal

import pytest

from hoardrun.application.banking.contribute_to_goal import ContributeToGoalUseCase
from hoardrun.application.banking.create_account import (
    MAX_NUMBER_ATTEMPTS,
    CreateAccountUseCase,
)
from hoardrun.application.banking.dtos import (
    ContributeCommand,
    CreateAccountCommand,
    CreateSavingsGoalCommand,
    ListTransactionsQuery,
    ProcessTransactionCommand,
    SavingsProjectionQuery,
    TransactionHistoryQuery,
    UpdateBalanceCommand,
    UpdateSavingsGoalCommand,
)
from hoardrun.application.banking.get_transaction_history import (
    GetTransactionHistoryUseCase,
)
from hoardrun.application.banking.list_transactions import ListTransactionsUseCase
from hoardrun.application.banking.process_transaction import ProcessTransactionUseCase
from hoardrun.application.banking.project_savings import ProjectSavingsUseCase
from hoardrun.application.banking.savings_analytics import SavingsAnalyticsUseCase
from hoardrun.application.banking.savings_goals import (
    CreateSavingsGoalUseCase,
    DeleteSavingsGoalUseCase,
    GetSavingsGoalUseCase,
    UpdateSavingsGoalUseCase,
)
from hoardrun.application.banking.update_balance import UpdateBalanceUseCase
from hoardrun.domain.banking.entities import (
    AccountType,
    FundingProvider,
    SavingsGoalStatus,
    TransactionFilter,
    TransactionType,
)
from hoardrun.domain.banking.errors import (
    AccountNotFoundError,
    AccountNumberGenerationError,
    InsufficientFundsError,
    InvalidAmountError,
    SavingsGoalNotFoundError,
)
from hoardrun.infrastructure.banking.account_repository import AccountRepositoryAdapter
from hoardrun.infrastructure.identity.user_repository import UserRepositoryAdapter
from conftest import rendezvous_after, run_concurrently


def _process(uow_factory, user, account, tx_type, amount):
    return ProcessTransactionUseCase(uow_factory).execute(
        ProcessTransactionCommand(
            user_id=user.id, account_id=account.id, type=tx_type, amount=Decimal(amount)
        )
    )


def _create_goal(uow_factory, user, target="1000", current_monthly="100"):
    return CreateSavingsGoalUseCase(uow_factory).execute(
        CreateSavingsGoalCommand(
            user_id=user.id,
            name="Emergency fund",
            target_amount=Decimal(target),
            monthly_contribution=Decimal(current_monthly),
            category="Safety",
            deadline=date(2030, 12, 31),
        )
    )


class TestCreateAccountUseCase:
    def test_opens_empty_account(self, uow_factory, user) -> None:
        account = CreateAccountUseCase(uow_factory).execute(
            CreateAccountCommand(user_id=user.id, type=AccountType.SAVINGS, currency="ghs")
        )
        assert account.balance == Decimal("0")
        assert account.currency == "GHS"
        assert len(account.number) == 10

    def test_retries_colliding_numbers(self, uow_factory, user, make_account) -> None:
        make_account(user, number="1111111111")
        numbers = iter(["1111111111", "2222222222"])
        account = CreateAccountUseCase(uow_factory, number_generator=lambda: next(numbers)).execute(
            CreateAccountCommand(user_id=user.id, type=AccountType.CHECKING)
        )
        assert account.number == "2222222222"

    def test_gives_up_after_max_attempts(self, uow_factory, user, make_account) -> None:
        make_account(user, number="1111111111")
        use_case = CreateAccountUseCase(uow_factory, number_generator=lambda: "1111111111")
        with pytest.raises(AccountNumberGenerationError) as info:
            use_case.execute(CreateAccountCommand(user_id=user.id, type=AccountType.CHECKING))
        assert info.value.attempts == MAX_NUMBER_ATTEMPTS


class TestProcessTransactionUseCase:
    """Balance and transaction row move together or not at all."""

    def test_deposit_credits_without_fee(self, uow_factory, user, make_account) -> None:
        account = make_account(user)
        result = _process(uow_factory, user, account, TransactionType.DEPOSIT, "250")
        assert result.balance == Decimal("250.00")
        assert result.transaction.fee == Decimal("0.00")

    def test_withdrawal_debits_amount_plus_fee(self, uow_factory, user, make_account) -> None:
        account = make_account(user, balance=Decimal("1000"))
        result = _process(uow_factory, user, account, TransactionType.WITHDRAWAL, "500")
        assert result.transaction.fee == Decimal("1.00")
        assert result.balance == Decimal("499.00")

    def test_fee_counts_towards_required_balance(self, uow_factory, user, make_account) -> None:
        account = make_account(user, balance=Decimal("100"))
        with pytest.raises(InsufficientFundsError):
            _process(uow_factory, user, account, TransactionType.TRANSFER, "100")

        with uow_factory() as uow:
            assert uow.accounts.get(account.id).balance == Decimal("100")
            _, total = uow.transactions.list_for_user(user.id, TransactionFilter(), 10, 0)
        assert total == 0

    def test_other_users_account_is_not_found(
        self, uow_factory, user, make_user, make_account
    ) -> None:
        stranger = make_user(email="kwame@example.com")
        account = make_account(stranger, balance=Decimal("100"))
        with pytest.raises(AccountNotFoundError):
            _process(uow_factory, user, account, TransactionType.DEPOSIT, "10")

    def test_amount_over_limit_rejected(self, uow_factory, user, make_account) -> None:
        account = make_account(user)
        with pytest.raises(InvalidAmountError):
            _process(uow_factory, user, account, TransactionType.DEPOSIT, "1000001")


class TestTransactionListings:
    def test_history_paginates_newest_first(self, uow_factory, user, make_account) -> None:
        account = make_account(user)
        for amount in ("1", "2", "3"):
            _process(uow_factory, user, account, TransactionType.DEPOSIT, amount)

        page = GetTransactionHistoryUseCase(uow_factory).execute(
            TransactionHistoryQuery(user_id=user.id, account_id=account.id, page=1, limit=2)
        )
        assert page.total == 3
        assert page.pages == 2
        assert [tx.amount for tx in page.transactions] == [Decimal("3"), Decimal("2")]

    def test_history_of_foreign_account_rejected(
        self, uow_factory, user, make_user, make_account
    ) -> None:
        account = make_account(make_user(email="kwame@example.com"))
        with pytest.raises(AccountNotFoundError):
            GetTransactionHistoryUseCase(uow_factory).execute(
                TransactionHistoryQuery(user_id=user.id, account_id=account.id)
            )

    def test_listing_summary_covers_all_matches(self, uow_factory, user, make_account) -> None:
        account = make_account(user)
        _process(uow_factory, user, account, TransactionType.DEPOSIT, "500")
        _process(uow_factory, user, account, TransactionType.PAYMENT, "100")
        _process(uow_factory, user, account, TransactionType.PAYMENT, "50")

        listing = ListTransactionsUseCase(uow_factory).execute(
            ListTransactionsQuery(user_id=user.id, limit=1, offset=0)
        )
        assert len(listing.transactions) == 1
        assert listing.has_more
        assert listing.total_income == Decimal("500")
        assert listing.total_expenses == Decimal("150")
        assert listing.net_amount == Decimal("350")


class TestUpdateBalanceUseCase:
    def test_deposit_records_provider(self, uow_factory, user) -> None:
        result = UpdateBalanceUseCase(uow_factory).execute(
            UpdateBalanceCommand(
                user_id=user.id,
                amount=Decimal("75"),
                type=TransactionType.DEPOSIT,
                provider=FundingProvider.VISA,
            )
        )
        assert result.balance == Decimal("75.00")
        assert result.transaction.description == "DEPOSIT via VISA"
        assert result.transaction.provider == "VISA"

    def test_withdrawal_beyond_balance_rejected(self, uow_factory, user) -> None:
        with pytest.raises(InsufficientFundsError):
            UpdateBalanceUseCase(uow_factory).execute(
                UpdateBalanceCommand(
                    user_id=user.id,
                    amount=Decimal("1"),
                    type=TransactionType.WITHDRAWAL,
                    provider=FundingProvider.MOMO,
                )
            )

    def test_only_wallet_types_allowed(self, uow_factory, user) -> None:
        with pytest.raises(InvalidAmountError):
            UpdateBalanceUseCase(uow_factory).execute(
                UpdateBalanceCommand(
                    user_id=user.id,
                    amount=Decimal("1"),
                    type=TransactionType.TRANSFER,
                    provider=FundingProvider.VISA,
                )
            )


class TestSavingsGoals:
    def test_contribution_moves_money_atomically(self, uow_factory, user, make_account) -> None:
        account = make_account(user, balance=Decimal("300"))
        goal = _create_goal(uow_factory, user, target="250")

        result = ContributeToGoalUseCase(uow_factory).execute(
            ContributeCommand(user_id=user.id, goal_id=goal.id, amount=Decimal("250"))
        )

        assert result.account_balance == Decimal("50.00")
        assert result.goal.current_amount == Decimal("250.00")
        assert result.goal.status is SavingsGoalStatus.COMPLETED
        with uow_factory() as uow:
            assert len(uow.contributions.list_for_goal(goal.id)) == 1
            txs, _ = uow.transactions.list_for_user(user.id, TransactionFilter(), 10, 0)
        assert txs[0].category == "SAVINGS"
        assert txs[0].account_id == account.id

    def test_contribution_needs_funds(self, uow_factory, user, make_account) -> None:
        make_account(user, balance=Decimal("10"))
        goal = _create_goal(uow_factory, user)
        with pytest.raises(InsufficientFundsError):
            ContributeToGoalUseCase(uow_factory).execute(
                ContributeCommand(user_id=user.id, goal_id=goal.id, amount=Decimal("20"))
            )
        assert GetSavingsGoalUseCase(uow_factory).execute(user.id, goal.id).current_amount == 0

    def test_contribution_minimum(self, uow_factory, user) -> None:
        goal = _create_goal(uow_factory, user)
        with pytest.raises(InvalidAmountError):
            ContributeToGoalUseCase(uow_factory).execute(
                ContributeCommand(user_id=user.id, goal_id=goal.id, amount=Decimal("0.50"))
            )

    def test_raising_target_reopens_goal(self, uow_factory, user, make_account) -> None:
        make_account(user, balance=Decimal("500"))
        goal = _create_goal(uow_factory, user, target="100")
        ContributeToGoalUseCase(uow_factory).execute(
            ContributeCommand(user_id=user.id, goal_id=goal.id, amount=Decimal("100"))
        )

        updated = UpdateSavingsGoalUseCase(uow_factory).execute(
            UpdateSavingsGoalCommand(user_id=user.id, goal_id=goal.id, target_amount=Decimal("400"))
        )
        assert updated.status is SavingsGoalStatus.ACTIVE
        assert updated.name == "Emergency fund"

    def test_delete_scoped_to_owner(self, uow_factory, user, make_user) -> None:
        goal = _create_goal(uow_factory, user)
        stranger = make_user(email="kwame@example.com")
        with pytest.raises(SavingsGoalNotFoundError):
            DeleteSavingsGoalUseCase(uow_factory).execute(stranger.id, goal.id)

        DeleteSavingsGoalUseCase(uow_factory).execute(user.id, goal.id)
        with pytest.raises(SavingsGoalNotFoundError):
            GetSavingsGoalUseCase(uow_factory).execute(user.id, goal.id)

    def test_analytics(self, uow_factory, user, make_account) -> None:
        make_account(user, balance=Decimal("1000"))
        first = _create_goal(uow_factory, user, target="200", current_monthly="50")
        _create_goal(uow_factory, user, target="800", current_monthly="100")
        ContributeToGoalUseCase(uow_factory).execute(
            ContributeCommand(user_id=user.id, goal_id=first.id, amount=Decimal("200"))
        )

        analytics = SavingsAnalyticsUseCase(uow_factory).execute(user.id)
        assert analytics.total_saved == Decimal("200.00")
        assert analytics.total_target == Decimal("1000.00")
        assert analytics.overall_progress == Decimal("20.00")
        assert analytics.active_goals == 1
        assert analytics.completed_goals == 1
        assert analytics.monthly_commitment == Decimal("100.00")
        remaining = {g.id: g.months_remaining for g in analytics.goals}
        assert remaining[first.id] == 0

    def test_projection(self, uow_factory, user) -> None:
        goal = _create_goal(uow_factory, user, target="1200", current_monthly="100")
        projection = ProjectSavingsUseCase(uow_factory).execute(
            SavingsProjectionQuery(user_id=user.id, goal_id=goal.id, years=3, annual_rate=0.0)
        )
        assert [b.year for b in projection.balances] == [1, 2, 3]
        assert projection.balances[0].balance == Decimal("1200.00")
        assert projection.months_to_goal == 12


class TestConcurrentDebits:
    """Debits that both passed their read see the balance at write time."""

    @pytest.fixture
    def engine(self, file_engine):
        return file_engine

    def test_simultaneous_withdrawals_cannot_overdraw(
        self, uow_factory, user, make_account
    ) -> None:
        account = make_account(user, balance=Decimal("100"))

        with rendezvous_after(AccountRepositoryAdapter, "get"):
            results, errors = run_concurrently(
                lambda: _process(uow_factory, user, account, TransactionType.WITHDRAWAL, "80")
            )

        assert len(results) == 1
        assert [type(error) for error in errors] == [InsufficientFundsError]
        spent = results[0].transaction.amount + results[0].transaction.fee
        with uow_factory() as uow:
            assert uow.accounts.get(account.id).balance == Decimal("100") - spent
            _, total = uow.transactions.list_for_user(user.id, TransactionFilter(), 10, 0)
        assert total == 1

    def test_simultaneous_wallet_withdrawals_cannot_overdraw(
        self, uow_factory, make_user
    ) -> None:
        owner = make_user(balance=Decimal("50"))
        use_case = UpdateBalanceUseCase(uow_factory)
        command = UpdateBalanceCommand(
            user_id=owner.id,
            amount=Decimal("30"),
            type=TransactionType.WITHDRAWAL,
            provider=FundingProvider.VISA,
        )

        with rendezvous_after(UserRepositoryAdapter, "get_by_id"):
            results, errors = run_concurrently(lambda: use_case.execute(command))

        assert [result.balance for result in results] == [Decimal("20")]
        assert [type(error) for error in errors] == [InsufficientFundsError]
