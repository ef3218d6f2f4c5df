"""
Use case: Send a fresh email-verification token.

Input: EmailOnlyCommand (email)
Output: None
Side effects: Revokes the user's earlier verification tokens, purges
    expired tokens, stores a new one and emails it.
Failure cases: None. Unknown or already verified emails are ignored so
    the endpoint cannot be used to probe for accounts.
"""

import logging
from datetime import datetime
from typing import Callable

from hoardrun.application.identity.dtos import EmailOnlyCommand
from hoardrun.application.identity.emails import verification_email
from hoardrun.application.identity.tokens import utcnow
from hoardrun.domain.identity.entities import VerificationPurpose
from hoardrun.domain.identity.ports import EmailSender
from hoardrun.domain.identity.verification import new_token
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        email_sender: EmailSender,
        app_url: str,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._uow_factory = uow_factory
        self._email_sender = email_sender
        self._app_url = app_url
        self._clock = clock

    def execute(self, command: EmailOnlyCommand) -> None:
        email = command.email.strip().lower()
        now = self._clock()

        with self._uow_factory() as uow:
            user = uow.users.get_by_email(email)
            if user is None or user.email_verified:
                logger.info("Verification resend skipped")
                return
            revoked = uow.tokens.delete_for_email(
                email, VerificationPurpose.EMAIL_VERIFICATION
            )
            uow.tokens.delete_expired(now)
            raw_token, token = new_token(email, VerificationPurpose.EMAIL_VERIFICATION, now)
            uow.tokens.save(token)

        logger.info("Verification token reissued: user_id=%s revoked=%d", user.id, revoked)
        subject, html, text = verification_email(self._app_url, user.name, email, raw_token)
        self._email_sender.send(email, subject, html, text)
