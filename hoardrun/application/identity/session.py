"""
Use case: Resolve the user behind a bearer token.

Input: raw bearer token
Output: UserView
Side effects: None.
Failure cases: AuthenticationError when the token is invalid or its
    user no longer exists.
"""

from typing import Callable

from hoardrun.application.identity.dtos import UserView
from hoardrun.domain.identity.errors import AuthenticationError
from hoardrun.domain.identity.ports import AccessTokenService
from hoardrun.domain.unit_of_work import UnitOfWork


class GetCurrentSessionUseCase:
    def __init__(
        self, uow_factory: Callable[[], UnitOfWork], token_service: AccessTokenService
    ) -> None:
        self._uow_factory = uow_factory
        self._token_service = token_service

    def execute(self, token: str) -> UserView:
        identity = self._token_service.verify(token)
        with self._uow_factory() as uow:
            user = uow.users.get_by_id(identity.id)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return UserView.from_user(user)
