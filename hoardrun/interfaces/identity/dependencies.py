"""
Dependency injection for the identity bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the identity context.
"""

from typing import Callable

from fastapi import Depends

from hoardrun.application.identity.evaluate_password import EvaluatePasswordUseCase
from hoardrun.application.identity.forgot_password import ForgotPasswordUseCase
from hoardrun.application.identity.resend_verification import ResendVerificationUseCase
from hoardrun.application.identity.reset_password import ResetPasswordUseCase
from hoardrun.application.identity.session import GetCurrentSessionUseCase
from hoardrun.application.identity.sign_in import SignInUseCase
from hoardrun.application.identity.sign_up import SignUpUseCase
from hoardrun.application.identity.verify_email import VerifyEmailUseCase
from hoardrun.core.config import settings
from hoardrun.domain.identity.ports import AccessTokenService, EmailSender, PasswordHasher
from hoardrun.domain.unit_of_work import UnitOfWork
from hoardrun.interfaces.dependencies import (
    get_email_sender,
    get_password_hasher,
    get_token_service,
    get_uow_factory,
)


def get_sign_up_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    hasher: PasswordHasher = Depends(get_password_hasher),
    email_sender: EmailSender = Depends(get_email_sender),
) -> SignUpUseCase:
    return SignUpUseCase(uow_factory, hasher, email_sender, app_url=settings.app_url)


def get_sign_in_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: AccessTokenService = Depends(get_token_service),
) -> SignInUseCase:
    return SignInUseCase(uow_factory, hasher, token_service)


def get_verify_email_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
) -> VerifyEmailUseCase:
    return VerifyEmailUseCase(uow_factory)


def get_resend_verification_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ResendVerificationUseCase:
    return ResendVerificationUseCase(uow_factory, email_sender, app_url=settings.app_url)


def get_forgot_password_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ForgotPasswordUseCase:
    return ForgotPasswordUseCase(uow_factory, email_sender, app_url=settings.app_url)


def get_reset_password_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> ResetPasswordUseCase:
    return ResetPasswordUseCase(uow_factory, hasher)


def get_session_use_case(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    token_service: AccessTokenService = Depends(get_token_service),
) -> GetCurrentSessionUseCase:
    return GetCurrentSessionUseCase(uow_factory, token_service)


def get_evaluate_password_use_case() -> EvaluatePasswordUseCase:
    return EvaluatePasswordUseCase()
