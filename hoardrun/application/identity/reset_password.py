"""
Use case: Complete a password reset.

Input: ResetPasswordCommand (email, token, new_password)
Output: None
Side effects: Replaces the password hash and deletes the user's reset
    tokens in one unit of work.
Failure cases: WeakPasswordError, InvalidVerificationTokenError,
    UserNotFoundError.
"""

import logging
from datetime import datetime
from typing import Callable

from hoardrun.application.identity.dtos import ResetPasswordCommand
from hoardrun.application.identity.tokens import token_failure, utcnow
from hoardrun.domain.identity.entities import VerificationPurpose
from hoardrun.domain.identity.errors import UserNotFoundError, WeakPasswordError
from hoardrun.domain.identity.password_policy import DEFAULT_POLICY, PasswordPolicy
from hoardrun.domain.identity.ports import PasswordHasher
from hoardrun.domain.identity.verification import hash_token
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        hasher: PasswordHasher,
        policy: PasswordPolicy = DEFAULT_POLICY,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._policy = policy
        self._clock = clock

    def execute(self, command: ResetPasswordCommand) -> None:
        strength = self._policy.evaluate(command.new_password)
        if not strength.is_strong:
            raise WeakPasswordError(strength.feedback)

        email = command.email.strip().lower()
        token_hash = hash_token(command.token)

        with self._uow_factory() as uow:
            stored = uow.tokens.get(token_hash)
            failure = token_failure(
                stored, email, VerificationPurpose.PASSWORD_RESET, self._clock()
            )
            if failure is not None and failure.expired:
                uow.tokens.delete(token_hash)
            if failure is None:
                user = uow.users.get_by_email(email)
                if user is None:
                    raise UserNotFoundError(email)
                uow.users.set_password_hash(user.id, self._hasher.hash(command.new_password))
                uow.tokens.delete_for_email(email, VerificationPurpose.PASSWORD_RESET)

        if failure is not None:
            logger.info("Password reset rejected: %s", failure.message)
            raise failure
        logger.info("Password reset completed: user_id=%s", user.id)
