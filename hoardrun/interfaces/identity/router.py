"""
FastAPI router for the identity bounded context.

All routes delegate to use cases. No business logic here.
Credential-handling routes are rate limited per client address.
"""

from fastapi import APIRouter, Depends, Request

from hoardrun.application.identity.dtos import (
    EmailOnlyCommand,
    ResetPasswordCommand,
    SignInCommand,
    SignUpCommand,
    UserView,
    VerifyEmailCommand,
)
from hoardrun.application.identity.evaluate_password import EvaluatePasswordUseCase
from hoardrun.application.identity.forgot_password import ForgotPasswordUseCase
from hoardrun.application.identity.resend_verification import ResendVerificationUseCase
from hoardrun.application.identity.reset_password import ResetPasswordUseCase
from hoardrun.application.identity.session import GetCurrentSessionUseCase
from hoardrun.application.identity.sign_in import SignInUseCase
from hoardrun.application.identity.sign_up import SignUpUseCase
from hoardrun.application.identity.verify_email import VerifyEmailUseCase
from hoardrun.interfaces.dependencies import get_bearer_token
from hoardrun.interfaces.identity.dependencies import (
    get_evaluate_password_use_case,
    get_forgot_password_use_case,
    get_resend_verification_use_case,
    get_reset_password_use_case,
    get_session_use_case,
    get_sign_in_use_case,
    get_sign_up_use_case,
    get_verify_email_use_case,
)
from hoardrun.interfaces.identity.schemas import (
    EmailRequest,
    PasswordStrengthRequest,
    PasswordStrengthResponse,
    ResetPasswordRequest,
    SessionResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserResponse,
    VerifyEmailRequest,
)
from hoardrun.interfaces.schemas import ErrorResponse, MessageResponse
from hoardrun.shared.security.rate_limiting import AUTH_RATE_LIMIT, limiter

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_response(user: UserView) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        email_verified=user.email_verified,
        balance=user.balance,
        created_at=user.created_at,
    )


@router.post(
    "/sign-up",
    response_model=SignUpResponse,
    status_code=201,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Register a user",
)
@limiter.limit(AUTH_RATE_LIMIT)
def sign_up(
    request: Request,
    payload: SignUpRequest,
    use_case: SignUpUseCase = Depends(get_sign_up_use_case),
) -> SignUpResponse:
    """Create an account and send the email verification link."""
    user = use_case.execute(
        SignUpCommand(email=payload.email, password=payload.password, name=payload.name)
    )
    return SignUpResponse(
        message="Account created. Check your email to verify your address.",
        user=_user_response(user),
    )


@router.post(
    "/sign-in",
    response_model=SignInResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Sign in with email and password",
)
@limiter.limit(AUTH_RATE_LIMIT)
def sign_in(
    request: Request,
    payload: SignInRequest,
    use_case: SignInUseCase = Depends(get_sign_in_use_case),
) -> SignInResponse:
    result = use_case.execute(SignInCommand(email=payload.email, password=payload.password))
    return SignInResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_in=result.expires_in,
        user=_user_response(result.user),
    )


@router.post(
    "/verify-email",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Verify an email address",
)
def verify_email(
    payload: VerifyEmailRequest,
    use_case: VerifyEmailUseCase = Depends(get_verify_email_use_case),
) -> SessionResponse:
    user = use_case.execute(VerifyEmailCommand(email=payload.email, token=payload.token))
    return SessionResponse(user=_user_response(user))


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    summary="Resend the verification email",
)
@limiter.limit(AUTH_RATE_LIMIT)
def resend_verification(
    request: Request,
    payload: EmailRequest,
    use_case: ResendVerificationUseCase = Depends(get_resend_verification_use_case),
) -> MessageResponse:
    use_case.execute(EmailOnlyCommand(email=payload.email))
    return MessageResponse(
        message="If the account exists and is unverified, a new verification email has been sent."
    )


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Request a password reset link",
)
@limiter.limit(AUTH_RATE_LIMIT)
def forgot_password(
    request: Request,
    payload: EmailRequest,
    use_case: ForgotPasswordUseCase = Depends(get_forgot_password_use_case),
) -> MessageResponse:
    return MessageResponse(message=use_case.execute(EmailOnlyCommand(email=payload.email)))


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Set a new password with a reset token",
)
@limiter.limit(AUTH_RATE_LIMIT)
def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
) -> MessageResponse:
    use_case.execute(
        ResetPasswordCommand(
            email=payload.email, token=payload.token, new_password=payload.new_password
        )
    )
    return MessageResponse(message="Password has been reset successfully")


@router.get(
    "/session",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Current session",
)
def current_session(
    token: str = Depends(get_bearer_token),
    use_case: GetCurrentSessionUseCase = Depends(get_session_use_case),
) -> SessionResponse:
    return SessionResponse(user=_user_response(use_case.execute(token)))


@router.post(
    "/password-strength",
    response_model=PasswordStrengthResponse,
    summary="Score a password against the password policy",
)
def password_strength(
    payload: PasswordStrengthRequest,
    use_case: EvaluatePasswordUseCase = Depends(get_evaluate_password_use_case),
) -> PasswordStrengthResponse:
    strength = use_case.execute(payload.password)
    return PasswordStrengthResponse(
        score=strength.score,
        feedback=strength.feedback,
        is_strong=strength.is_strong,
        suggestion=use_case.suggest() if payload.suggest else None,
    )
