"""
Use case: Register a new user.

Input: SignUpCommand (email, password, name)
Output: UserView
Side effects: Inserts the user and an email-verification token in one
    unit of work, then emails the raw token to the user.
Failure cases: EmailAlreadyRegisteredError, WeakPasswordError.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable

from hoardrun.application.identity.dtos import SignUpCommand, UserView
from hoardrun.application.identity.emails import verification_email
from hoardrun.application.identity.tokens import utcnow
from hoardrun.domain.identity.entities import User, VerificationPurpose
from hoardrun.domain.identity.errors import EmailAlreadyRegisteredError, WeakPasswordError
from hoardrun.domain.identity.password_policy import DEFAULT_POLICY, PasswordPolicy
from hoardrun.domain.identity.ports import EmailSender, PasswordHasher
from hoardrun.domain.identity.verification import new_token
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SignUpUseCase:
    """Creates an unverified user and starts email verification."""

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        hasher: PasswordHasher,
        email_sender: EmailSender,
        app_url: str,
        policy: PasswordPolicy = DEFAULT_POLICY,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = hasher
        self._email_sender = email_sender
        self._app_url = app_url
        self._policy = policy
        self._clock = clock

    def execute(self, command: SignUpCommand) -> UserView:
        """Register the user described by `command`.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account.
            WeakPasswordError: If the password fails the password policy.
        """
        email = command.email.strip().lower()
        now = self._clock()

        with self._uow_factory() as uow:
            if uow.users.get_by_email(email) is not None:
                raise EmailAlreadyRegisteredError(email)

            strength = self._policy.evaluate(command.password)
            if not strength.is_strong:
                raise WeakPasswordError(strength.feedback)

            user = User(
                id=str(uuid.uuid4()),
                email=email,
                name=command.name.strip(),
                password_hash=self._hasher.hash(command.password),
                created_at=now,
            )
            uow.users.add(user)
            raw_token, token = new_token(email, VerificationPurpose.EMAIL_VERIFICATION, now)
            uow.tokens.save(token)

        logger.info("User registered: id=%s", user.id)
        subject, html, text = verification_email(self._app_url, user.name, email, raw_token)
        try:
            self._email_sender.send(email, subject, html, text)
        except Exception:
            logger.exception("Verification email not sent: user_id=%s", user.id)

        return UserView.from_user(user)
