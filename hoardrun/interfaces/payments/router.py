"""
FastAPI router for MTN Mobile Money payments.

Collections into the user's wallet, transfers out of the user's
account, provider status lookups and the provider's callback webhook.
The webhook is the only unauthenticated route here.
"""

from fastapi import APIRouter, Depends, Query, Request

from hoardrun.application.payments.dtos import (
    CallbackCommand,
    PaymentInitiated,
    RequestPaymentCommand,
    SendMoneyCommand,
)
from hoardrun.application.payments.payment_status import (
    GetCollectionBalanceUseCase,
    GetPaymentStatusUseCase,
)
from hoardrun.application.payments.process_callback import ProcessCallbackUseCase
from hoardrun.application.payments.request_payment import RequestPaymentUseCase
from hoardrun.application.payments.send_money import SendMoneyUseCase
from hoardrun.domain.identity.entities import AuthenticatedUser
from hoardrun.domain.payments.entities import MomoCountry
from hoardrun.interfaces.dependencies import get_current_user
from hoardrun.interfaces.payments.dependencies import (
    get_collection_balance_use_case,
    get_payment_status_use_case,
    get_process_callback_use_case,
    get_request_payment_use_case,
    get_send_money_use_case,
)
from hoardrun.interfaces.payments.schemas import (
    CallbackRequest,
    CallbackResponse,
    CollectionBalanceResponse,
    PaymentInitiatedResponse,
    PaymentStatusResponse,
    RequestPaymentRequest,
    SendMoneyRequest,
    SendMoneyResponse,
)
from hoardrun.interfaces.schemas import ErrorResponse
from hoardrun.shared.security.rate_limiting import PAYMENT_RATE_LIMIT, limiter

router = APIRouter(prefix="/payments/momo", tags=["payments"])

PAYMENT_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _initiated_response(result: PaymentInitiated) -> PaymentInitiatedResponse:
    return PaymentInitiatedResponse(
        transaction_id=result.transaction_id,
        reference_id=result.reference_id,
        amount=result.amount,
        currency=result.currency,
        status=result.status,
    )


@router.post(
    "",
    response_model=PaymentInitiatedResponse,
    responses=PAYMENT_ERRORS,
    summary="Request a payment from a MOMO wallet",
)
@limiter.limit(PAYMENT_RATE_LIMIT)
def request_payment(
    request: Request,
    payload: RequestPaymentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: RequestPaymentUseCase = Depends(get_request_payment_use_case),
) -> PaymentInitiatedResponse:
    """Ask the payer to approve a collection into the caller's wallet.

    The wallet is credited once the provider reports the payment
    successful through the callback.
    """
    result = use_case.execute(
        RequestPaymentCommand(
            user_id=user.id,
            amount=payload.amount,
            phone=payload.phone,
            message=payload.message,
            currency=payload.currency,
        )
    )
    return _initiated_response(result)


@router.get(
    "",
    response_model=PaymentStatusResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Provider status of a payment",
)
def payment_status(
    reference_id: str = Query(..., min_length=1, max_length=64),
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: GetPaymentStatusUseCase = Depends(get_payment_status_use_case),
) -> PaymentStatusResponse:
    report = use_case.execute(user.id, reference_id)
    return PaymentStatusResponse(
        reference_id=report.reference_id,
        status=report.status,
        reason=report.reason,
        financial_transaction_id=report.financial_transaction_id,
    )


@router.post(
    "/send",
    response_model=SendMoneyResponse,
    responses=PAYMENT_ERRORS,
    summary="Send money to a MOMO wallet",
)
@limiter.limit(PAYMENT_RATE_LIMIT)
def send_money(
    request: Request,
    payload: SendMoneyRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    use_case: SendMoneyUseCase = Depends(get_send_money_use_case),
) -> SendMoneyResponse:
    """Transfer from the caller's first active account.

    The amount is converted to EUR first. The account is debited when
    the provider confirms the transfer.
    """
    result = use_case.execute(
        SendMoneyCommand(
            user_id=user.id,
            amount=payload.amount,
            phone=payload.phone,
            country=MomoCountry[payload.country],
            description=payload.description,
            currency=payload.currency,
        )
    )
    return SendMoneyResponse(
        success=True,
        reference_id=result.reference_id,
        message="Transfer initiated successfully",
    )


@router.post(
    "/callback",
    response_model=CallbackResponse,
    responses={404: {"model": ErrorResponse}},
    summary="MOMO settlement webhook",
)
def momo_callback(
    payload: CallbackRequest,
    use_case: ProcessCallbackUseCase = Depends(get_process_callback_use_case),
) -> CallbackResponse:
    """Settle a pending payment.

    The status in the body is not trusted; it is re-read from the
    provider before any balance changes.
    """
    use_case.execute(
        CallbackCommand(reference_id=payload.reference_id, status=payload.status)
    )
    return CallbackResponse(success=True)


@router.get(
    "/balance",
    response_model=CollectionBalanceResponse,
    responses={502: {"model": ErrorResponse}},
    summary="Balance of the MOMO collection account",
    dependencies=[Depends(get_current_user)],
)
def collection_balance(
    use_case: GetCollectionBalanceUseCase = Depends(get_collection_balance_use_case),
) -> CollectionBalanceResponse:
    balance = use_case.execute()
    return CollectionBalanceResponse(amount=balance.amount, currency=balance.currency)
