"""
Dependency injection for the payments bounded context.

Wires the MOMO gateway, exchange rates and the transaction monitor
into the payment use cases.
"""

from decimal import Decimal

from fastapi import Depends

from hoardrun.application.payments.monitor_transaction import MonitorTransactionUseCase
from hoardrun.application.payments.payment_status import (
    GetCollectionBalanceUseCase,
    GetPaymentStatusUseCase,
)
from hoardrun.application.payments.process_callback import ProcessCallbackUseCase
from hoardrun.application.payments.request_payment import RequestPaymentUseCase
from hoardrun.application.payments.send_money import SendMoneyUseCase
from hoardrun.core.config import settings
from hoardrun.domain.payments.monitoring import MonitoringThresholds
from hoardrun.domain.payments.ports import ExchangeRateProvider, MomoGateway
from hoardrun.interfaces.banking.dependencies import UowFactory
from hoardrun.interfaces.dependencies import (
    get_exchange_rate_provider,
    get_momo_gateway,
    get_uow_factory,
)


def get_monitor_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
) -> MonitorTransactionUseCase:
    thresholds = MonitoringThresholds(
        large_amount=Decimal(str(settings.transaction_amount_threshold)),
        frequency=settings.transaction_frequency_threshold,
    )
    return MonitorTransactionUseCase(uow_factory, thresholds)


def get_request_payment_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
    gateway: MomoGateway = Depends(get_momo_gateway),
) -> RequestPaymentUseCase:
    return RequestPaymentUseCase(uow_factory, gateway)


def get_send_money_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
    gateway: MomoGateway = Depends(get_momo_gateway),
    exchange_rates: ExchangeRateProvider = Depends(get_exchange_rate_provider),
    monitor: MonitorTransactionUseCase = Depends(get_monitor_use_case),
) -> SendMoneyUseCase:
    return SendMoneyUseCase(uow_factory, gateway, exchange_rates, monitor)


def get_payment_status_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
    gateway: MomoGateway = Depends(get_momo_gateway),
) -> GetPaymentStatusUseCase:
    return GetPaymentStatusUseCase(uow_factory, gateway)


def get_collection_balance_use_case(
    gateway: MomoGateway = Depends(get_momo_gateway),
) -> GetCollectionBalanceUseCase:
    return GetCollectionBalanceUseCase(gateway)


def get_process_callback_use_case(
    uow_factory: UowFactory = Depends(get_uow_factory),
    gateway: MomoGateway = Depends(get_momo_gateway),
) -> ProcessCallbackUseCase:
    return ProcessCallbackUseCase(uow_factory, gateway)
