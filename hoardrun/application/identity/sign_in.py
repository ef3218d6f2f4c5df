"""
Use case: Authenticate with email and password.

Input: SignInCommand (email, password)
Output: SignInResult (bearer token + user)
Side effects: None.
Failure cases: InvalidCredentialsError for an unknown email or a wrong
    password alike.
"""

import logging
from typing import Callable

from hoardrun.application.identity.dtos import SignInCommand, SignInResult, UserView
from hoardrun.domain.identity.errors import InvalidCredentialsError
from hoardrun.domain.identity.ports import AccessTokenService, PasswordHasher
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SignInUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        hasher: PasswordHasher,
        token_service: AccessTokenService,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._token_service = token_service

    def execute(self, command: SignInCommand) -> SignInResult:
        with self._uow_factory() as uow:
            user = uow.users.get_by_email(command.email.strip().lower())

        if user is None or not self._hasher.verify(command.password, user.password_hash):
            logger.info("Failed sign-in attempt")
            raise InvalidCredentialsError()

        issued = self._token_service.issue(user)
        logger.info("User signed in: id=%s", user.id)
        return SignInResult(
            access_token=issued.access_token,
            token_type=issued.token_type,
            expires_in=issued.expires_in,
            user=UserView.from_user(user),
        )
