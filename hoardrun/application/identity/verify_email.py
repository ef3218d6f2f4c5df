"""
Use case: Confirm an email address with a verification token.

Input: VerifyEmailCommand (email, token)
Output: UserView of the verified user
Side effects: Marks the user verified and deletes the token. An expired
    token is deleted too.
Failure cases: InvalidVerificationTokenError (unknown, mismatched email,
    wrong purpose, expired), UserNotFoundError.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable

from hoardrun.application.identity.dtos import UserView, VerifyEmailCommand
from hoardrun.application.identity.tokens import token_failure, utcnow
from hoardrun.domain.identity.entities import VerificationPurpose
from hoardrun.domain.identity.errors import UserNotFoundError
from hoardrun.domain.identity.verification import hash_token
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    def execute(self, command: VerifyEmailCommand) -> UserView:
        email = command.email.strip().lower()
        token_hash = hash_token(command.token)

        with self._uow_factory() as uow:
            stored = uow.tokens.get(token_hash)
            failure = token_failure(
                stored, email, VerificationPurpose.EMAIL_VERIFICATION, self._clock()
            )
            if failure is not None and failure.expired:
                uow.tokens.delete(token_hash)
            if failure is None:
                user = uow.users.get_by_email(email)
                if user is None:
                    raise UserNotFoundError(email)
                uow.users.mark_email_verified(user.id)
                uow.tokens.delete(token_hash)

        if failure is not None:
            logger.info("Email verification rejected: %s", failure.message)
            raise failure

        logger.info("Email verified: user_id=%s", user.id)
        return UserView.from_user(replace(user, email_verified=True))
