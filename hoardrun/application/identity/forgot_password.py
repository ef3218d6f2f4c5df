"""
Use case: Start a password reset.

Input: EmailOnlyCommand (email)
Output: The generic confirmation message
Side effects: For a known user, replaces any outstanding reset token with
    a new one and emails it.
Failure cases: None. The same message is returned whether or not the
    email has an account.
"""

import logging
from datetime import datetime
from typing import Callable

from hoardrun.application.identity.dtos import EmailOnlyCommand
from hoardrun.application.identity.emails import password_reset_email
from hoardrun.application.identity.tokens import utcnow
from hoardrun.domain.identity.entities import VerificationPurpose
from hoardrun.domain.identity.ports import EmailSender
from hoardrun.domain.identity.verification import new_token
from hoardrun.domain.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If an account exists for this email, a password reset link has been sent."
)


class ForgotPasswordUseCase:
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

    def execute(self, command: EmailOnlyCommand) -> str:
        email = command.email.strip().lower()
        now = self._clock()

        with self._uow_factory() as uow:
            user = uow.users.get_by_email(email)
            if user is None:
                return RESET_REQUESTED_MESSAGE
            uow.tokens.delete_for_email(email, VerificationPurpose.PASSWORD_RESET)
            raw_token, token = new_token(email, VerificationPurpose.PASSWORD_RESET, now)
            uow.tokens.save(token)

        subject, html, text = password_reset_email(self._app_url, user.name, email, raw_token)
        try:
            self._email_sender.send(email, subject, html, text)
        except Exception:
            logger.exception("Password reset email not sent: user_id=%s", user.id)
        logger.info("Password reset requested: user_id=%s", user.id)
        return RESET_REQUESTED_MESSAGE
