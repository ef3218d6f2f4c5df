"""
FastAPI router for the banking bounded context.

Accounts, transactions, the wallet balance and savings goals. Every
route requires a bearer token and acts on the caller's own data.
All routes delegate to use cases. No business logic here.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from hoardrun.application.banking.contribute_to_goal import ContributeToGoalUseCase
from hoardrun.application.banking.create_account import CreateAccountUseCase
from hoardrun.application.banking.dtos import (
    ContributeCommand,
    CreateAccountCommand,
    CreateSavingsGoalCommand,
    ListAccountsQuery,
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
from hoardrun.domain.banking.entities import (
    Account,
    AccountType,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from hoardrun.domain.identity.entities import AuthenticatedUser
from hoardrun.interfaces.banking.dependencies import (
    get_contribute_use_case,
    get_create_account_use_case,
    get_create_goal_use_case,
    get_delete_goal_use_case,
    get_goal_use_case,
    get_list_accounts_use_case,
    get_list_goals_use_case,
    get_list_transactions_use_case,
    get_process_transaction_use_case,
    get_project_savings_use_case,
    get_savings_analytics_use_case,
    get_transaction_history_use_case,
    get_update_balance_use_case,
    get_update_goal_use_case,
)
from hoardrun.interfaces.banking.schemas import (
    AccountListResponse,
    AccountResponse,
    BalanceUpdateRequest,
    BalanceUpdateResponse,
    ContributeRequest,
    ContributeResponse,
    CreateAccountRequest,
    CreateSavingsGoalRequest,
    GoalProgressItem,
    OffsetPagination,
    PagePagination,
    ProcessTransactionResponse,
    SavingsAnalyticsResponse,
    SavingsGoalListResponse,
    SavingsGoalResponse,
    SavingsProjectionResponse,
    TransactionHistoryResponse,
    TransactionListResponse,
    TransactionRequest,
    TransactionResponse,
    TransactionSummary,
    UpdateSavingsGoalRequest,
    YearBalanceItem,
)
from hoardrun.interfaces.dependencies import get_current_user
from hoardrun.interfaces.schemas import ErrorResponse, MessageResponse

router = APIRouter(tags=["banking"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


def _account_response(account: Account, transaction_count: int = 0) -> AccountResponse:
    return AccountResponse(
        id=account.id,
        type=account.type,
        number=account.number,
        currency=account.currency,
        balance=account.balance,
        is_active=account.is_active,
        created_at=account.created_at,
        transaction_count=transaction_count,
    )


def _transaction_response(tx: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=tx.id,
        account_id=tx.account_id,
        type=tx.type,
        amount=tx.amount,
        fee=tx.fee,
        status=tx.status,
        description=tx.description,
        category=tx.category,
        provider=tx.provider,
        reference_id=tx.reference_id,
        created_at=tx.created_at,
    )


def _goal_response(goal: SavingsGoal) -> SavingsGoalResponse:
    return SavingsGoalResponse(
        id=goal.id,
        name=goal.name,
        target_amount=goal.target_amount,
        current_amount=goal.current_amount,
        monthly_contribution=goal.monthly_contribution,
        category=goal.category,
        deadline=goal.deadline,
        is_auto_save=goal.is_auto_save,
        status=goal.status,
        progress=goal.progress_percent,
        created_at=goal.created_at,
    )


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------


@router.post(
    "/accounts",
    response_model=AccountResponse,
    status_code=201,
    summary="Open an account",
)
def create_account(
    payload: CreateAccountRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateAccountUseCase = Depends(get_create_account_use_case),
) -> AccountResponse:
    account = use_case.execute(
        CreateAccountCommand(user_id=user.id, type=payload.type, currency=payload.currency)
    )
    return _account_response(account)


@router.get(
    "/accounts",
    response_model=AccountListResponse,
    summary="List accounts",
    description="Newest first, each with its transaction count.",
)
def list_accounts(
    type: AccountType | None = Query(None),
    is_active: bool | None = Query(None),
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListAccountsUseCase = Depends(get_list_accounts_use_case),
) -> AccountListResponse:
    summaries = use_case.execute(
        ListAccountsQuery(user_id=user.id, type=type, is_active=is_active)
    )
    return AccountListResponse(
        accounts=[_account_response(s.account, s.transaction_count) for s in summaries]
    )


@router.get(
    "/accounts/{account_id}/transactions",
    response_model=TransactionHistoryResponse,
    responses=NOT_FOUND,
    summary="Account transaction history",
)
def account_transactions(
    account_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    type: TransactionType | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetTransactionHistoryUseCase = Depends(get_transaction_history_use_case),
) -> TransactionHistoryResponse:
    result = use_case.execute(
        TransactionHistoryQuery(
            user_id=user.id,
            account_id=account_id,
            page=page,
            limit=limit,
            type=type,
            start=start_date,
            end=end_date,
        )
    )
    return TransactionHistoryResponse(
        transactions=[_transaction_response(tx) for tx in result.transactions],
        pagination=PagePagination(
            total=result.total,
            pages=result.pages,
            current=result.current,
            limit=result.limit,
        ),
    )


# ------------------------------------------------------------------
# Transactions
# ------------------------------------------------------------------


@router.post(
    "/transactions",
    response_model=ProcessTransactionResponse,
    status_code=201,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Process a transaction",
)
def process_transaction(
    payload: TransactionRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ProcessTransactionUseCase = Depends(get_process_transaction_use_case),
) -> ProcessTransactionResponse:
    result = use_case.execute(
        ProcessTransactionCommand(
            user_id=user.id,
            account_id=payload.account_id,
            type=payload.type,
            amount=payload.amount,
            description=payload.description,
            category=payload.category,
        )
    )
    return ProcessTransactionResponse(
        transaction=_transaction_response(result.transaction), balance=result.balance
    )


@router.get(
    "/transactions",
    response_model=TransactionListResponse,
    summary="List transactions with a cash-flow summary",
)
def list_transactions(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    category: str | None = Query(None, max_length=100),
    type: TransactionType | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> TransactionListResponse:
    result = use_case.execute(
        ListTransactionsQuery(
            user_id=user.id,
            limit=limit,
            offset=offset,
            category=category,
            type=type,
            start=start_date,
            end=end_date,
        )
    )
    return TransactionListResponse(
        data=[_transaction_response(tx) for tx in result.transactions],
        pagination=OffsetPagination(
            total=result.total,
            limit=result.limit,
            offset=result.offset,
            has_more=result.has_more,
        ),
        summary=TransactionSummary(
            total_income=result.total_income,
            total_expenses=result.total_expenses,
            net_amount=result.net_amount,
        ),
    )


@router.post(
    "/users/me/balance",
    response_model=BalanceUpdateResponse,
    responses=BAD_REQUEST,
    summary="Deposit to or withdraw from the wallet",
)
def update_balance(
    payload: BalanceUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: UpdateBalanceUseCase = Depends(get_update_balance_use_case),
) -> BalanceUpdateResponse:
    result = use_case.execute(
        UpdateBalanceCommand(
            user_id=user.id,
            amount=payload.amount,
            type=TransactionType(payload.type),
            provider=payload.provider,
        )
    )
    return BalanceUpdateResponse(
        balance=result.balance, transaction=_transaction_response(result.transaction)
    )


# ------------------------------------------------------------------
# Savings
# ------------------------------------------------------------------


@router.get("/savings", response_model=SavingsGoalListResponse, summary="List savings goals")
def list_goals(
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ListSavingsGoalsUseCase = Depends(get_list_goals_use_case),
) -> SavingsGoalListResponse:
    return SavingsGoalListResponse(goals=[_goal_response(g) for g in use_case.execute(user.id)])


@router.post(
    "/savings",
    response_model=SavingsGoalResponse,
    status_code=201,
    summary="Create a savings goal",
)
def create_goal(
    payload: CreateSavingsGoalRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: CreateSavingsGoalUseCase = Depends(get_create_goal_use_case),
) -> SavingsGoalResponse:
    goal = use_case.execute(
        CreateSavingsGoalCommand(
            user_id=user.id,
            name=payload.name,
            target_amount=payload.target_amount,
            monthly_contribution=payload.monthly_contribution,
            category=payload.category,
            deadline=payload.deadline,
            is_auto_save=payload.is_auto_save,
        )
    )
    return _goal_response(goal)


@router.get(
    "/savings/analytics",
    response_model=SavingsAnalyticsResponse,
    summary="Savings analytics",
)
def savings_analytics(
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: SavingsAnalyticsUseCase = Depends(get_savings_analytics_use_case),
) -> SavingsAnalyticsResponse:
    result = use_case.execute(user.id)
    return SavingsAnalyticsResponse(
        total_saved=result.total_saved,
        total_target=result.total_target,
        overall_progress=result.overall_progress,
        active_goals=result.active_goals,
        completed_goals=result.completed_goals,
        monthly_commitment=result.monthly_commitment,
        goals=[
            GoalProgressItem(
                id=g.id,
                name=g.name,
                current_amount=g.current_amount,
                target_amount=g.target_amount,
                progress=g.progress_percent,
                months_remaining=g.months_remaining,
            )
            for g in result.goals
        ],
    )


@router.get(
    "/savings/{goal_id}",
    response_model=SavingsGoalResponse,
    responses=NOT_FOUND,
    summary="Get a savings goal",
)
def get_goal(
    goal_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetSavingsGoalUseCase = Depends(get_goal_use_case),
) -> SavingsGoalResponse:
    return _goal_response(use_case.execute(user.id, goal_id))


@router.patch(
    "/savings/{goal_id}",
    response_model=SavingsGoalResponse,
    responses=NOT_FOUND,
    summary="Update a savings goal",
)
def update_goal(
    goal_id: str,
    payload: UpdateSavingsGoalRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: UpdateSavingsGoalUseCase = Depends(get_update_goal_use_case),
) -> SavingsGoalResponse:
    goal = use_case.execute(
        UpdateSavingsGoalCommand(
            user_id=user.id,
            goal_id=goal_id,
            name=payload.name,
            target_amount=payload.target_amount,
            monthly_contribution=payload.monthly_contribution,
            category=payload.category,
            deadline=payload.deadline,
            is_auto_save=payload.is_auto_save,
        )
    )
    return _goal_response(goal)


@router.delete(
    "/savings/{goal_id}",
    response_model=MessageResponse,
    responses=NOT_FOUND,
    summary="Delete a savings goal",
)
def delete_goal(
    goal_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: DeleteSavingsGoalUseCase = Depends(get_delete_goal_use_case),
) -> MessageResponse:
    use_case.execute(user.id, goal_id)
    return MessageResponse(message="Savings goal deleted")


@router.post(
    "/savings/{goal_id}/contribute",
    response_model=ContributeResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    summary="Contribute to a savings goal",
)
def contribute(
    goal_id: str,
    payload: ContributeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ContributeToGoalUseCase = Depends(get_contribute_use_case),
) -> ContributeResponse:
    result = use_case.execute(
        ContributeCommand(
            user_id=user.id,
            goal_id=goal_id,
            amount=payload.amount,
            type=payload.type,
            description=payload.description,
        )
    )
    return ContributeResponse(
        goal=_goal_response(result.goal), account_balance=result.account_balance
    )


@router.get(
    "/savings/{goal_id}/projection",
    response_model=SavingsProjectionResponse,
    responses=NOT_FOUND,
    summary="Project a savings goal",
)
def project_goal(
    goal_id: str,
    years: int = Query(5, ge=1, le=50),
    annual_rate: float = Query(2.0, ge=0, le=25),
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: ProjectSavingsUseCase = Depends(get_project_savings_use_case),
) -> SavingsProjectionResponse:
    result = use_case.execute(
        SavingsProjectionQuery(
            user_id=user.id, goal_id=goal_id, years=years, annual_rate=annual_rate
        )
    )
    return SavingsProjectionResponse(
        goal_id=result.goal_id,
        annual_rate=result.annual_rate,
        months_to_goal=result.months_to_goal,
        projection=[YearBalanceItem(year=y.year, balance=y.balance) for y in result.balances],
    )
