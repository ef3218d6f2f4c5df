"""
Use cases: Query the MOMO provider.

GetPaymentStatusUseCase returns the provider's view of one of the
caller's payments; GetCollectionBalanceUseCase returns the merchant
collection account balance.
"""

from typing import Callable

from hoardrun.domain.payments.entities import CollectionBalance, PaymentStatusReport
from hoardrun.domain.payments.errors import PaymentTransactionNotFoundError
from hoardrun.domain.payments.ports import MomoGateway
from hoardrun.domain.unit_of_work import UnitOfWork


class GetPaymentStatusUseCase:
    def __init__(self, uow_factory: Callable[[], UnitOfWork], gateway: MomoGateway) -> None:
        self._uow_factory = uow_factory
        self._gateway = gateway

    def execute(self, user_id: str, reference_id: str) -> PaymentStatusReport:
        """Return the provider status of a payment the user initiated.

        Raises:
            PaymentTransactionNotFoundError: If no payment of the user has
                this reference.
        """
        with self._uow_factory() as uow:
            transaction = uow.transactions.get_by_reference(reference_id)
        if transaction is None or transaction.user_id != user_id:
            raise PaymentTransactionNotFoundError(reference_id)
        return self._gateway.get_transaction_status(reference_id)


class GetCollectionBalanceUseCase:
    def __init__(self, gateway: MomoGateway) -> None:
        self._gateway = gateway

    def execute(self) -> CollectionBalance:
        return self._gateway.get_account_balance()
