"""
Tests for the identity application layer (use cases).

Use cases run against an in-memory database with the development email
sender; the clock is injected where expiry matters.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from hoardrun.application.identity.dtos import (
    EmailOnlyCommand,
    ResetPasswordCommand,
    SignInCommand,
    SignUpCommand,
    VerifyEmailCommand,
)
from hoardrun.application.identity.forgot_password import (
    RESET_REQUESTED_MESSAGE,
    ForgotPasswordUseCase,
)
from hoardrun.application.identity.resend_verification import ResendVerificationUseCase
from hoardrun.application.identity.reset_password import ResetPasswordUseCase
from hoardrun.application.identity.session import GetCurrentSessionUseCase
from hoardrun.application.identity.sign_in import SignInUseCase
from hoardrun.application.identity.sign_up import SignUpUseCase
from hoardrun.application.identity.verify_email import VerifyEmailUseCase
from hoardrun.domain.identity.errors import (
    AuthenticationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidVerificationTokenError,
    WeakPasswordError,
)
from hoardrun.domain.identity.verification import hash_token
from hoardrun.infrastructure.identity.jwt_tokens import JwtAccessTokenService

PASSWORD = "Tr0ub4dor&Xy!"
NEW_PASSWORD = "Gr8-Plum&Vine!"
APP_URL = "https://app.hoardrun.test"


def _token_from(message: dict) -> str:
    link = next(line for line in message["text"].splitlines() if line.startswith("http"))
    return parse_qs(urlparse(link).query)["token"][0]


@pytest.fixture
def token_service() -> JwtAccessTokenService:
    return JwtAccessTokenService(secret="test-secret-with-at-least-32-bytes!!", expiry_minutes=5)


@pytest.fixture
def sign_up(uow_factory, hasher, email_sender) -> SignUpUseCase:
    return SignUpUseCase(uow_factory, hasher, email_sender, app_url=APP_URL)


class TestSignUpUseCase:
    def test_creates_unverified_user_and_emails_link(self, sign_up, email_sender) -> None:
        user = sign_up.execute(SignUpCommand(email=" Kofi@Example.com ", password=PASSWORD, name="Kofi"))

        assert user.email == "kofi@example.com"
        assert not user.email_verified
        assert len(email_sender.outbox) == 1
        message = email_sender.outbox[0]
        assert message["to"] == "kofi@example.com"
        assert f"{APP_URL}/verify-email?" in message["text"]

    def test_duplicate_email_rejected(self, sign_up) -> None:
        sign_up.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="Kofi"))
        with pytest.raises(EmailAlreadyRegisteredError):
            sign_up.execute(SignUpCommand(email="KOFI@example.com", password=PASSWORD, name="K"))

    def test_weak_password_rejected_with_feedback(self, sign_up, uow_factory) -> None:
        with pytest.raises(WeakPasswordError) as info:
            sign_up.execute(SignUpCommand(email="kofi@example.com", password="password", name="K"))
        assert "Password is too common" in info.value.feedback
        with uow_factory() as uow:
            assert uow.users.get_by_email("kofi@example.com") is None

    def test_email_failure_does_not_undo_registration(self, uow_factory, hasher) -> None:
        sender = MagicMock()
        sender.send.side_effect = RuntimeError("smtp down")
        use_case = SignUpUseCase(uow_factory, hasher, sender, app_url=APP_URL)

        user = use_case.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="K"))

        with uow_factory() as uow:
            assert uow.users.get_by_id(user.id) is not None


class TestSignInUseCase:
    def test_valid_credentials_issue_token(self, uow_factory, hasher, token_service, user) -> None:
        result = SignInUseCase(uow_factory, hasher, token_service).execute(
            SignInCommand(email="AMA@example.com", password=PASSWORD)
        )
        assert result.user.id == user.id
        assert token_service.verify(result.access_token).id == user.id
        assert result.expires_in == 300

    @pytest.mark.parametrize(
        "email, password",
        [("ama@example.com", "Wrong-Pass-99!"), ("nobody@example.com", PASSWORD)],
    )
    def test_bad_credentials_are_indistinguishable(
        self, uow_factory, hasher, token_service, user, email, password
    ) -> None:
        with pytest.raises(InvalidCredentialsError):
            SignInUseCase(uow_factory, hasher, token_service).execute(
                SignInCommand(email=email, password=password)
            )


class TestVerifyEmailUseCase:
    def test_token_verifies_once(self, sign_up, email_sender, uow_factory) -> None:
        sign_up.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="K"))
        token = _token_from(email_sender.outbox[0])
        use_case = VerifyEmailUseCase(uow_factory)

        user = use_case.execute(VerifyEmailCommand(email="kofi@example.com", token=token))
        assert user.email_verified

        with pytest.raises(InvalidVerificationTokenError):
            use_case.execute(VerifyEmailCommand(email="kofi@example.com", token=token))

    def test_expired_token_is_deleted(self, sign_up, email_sender, uow_factory) -> None:
        sign_up.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="K"))
        token = _token_from(email_sender.outbox[0])
        later = datetime.now(timezone.utc) + timedelta(hours=25)
        use_case = VerifyEmailUseCase(uow_factory, clock=lambda: later)

        with pytest.raises(InvalidVerificationTokenError) as info:
            use_case.execute(VerifyEmailCommand(email="kofi@example.com", token=token))

        assert info.value.expired
        with uow_factory() as uow:
            assert uow.tokens.get(hash_token(token)) is None
            assert not uow.users.get_by_email("kofi@example.com").email_verified

    def test_token_for_other_email_rejected(self, sign_up, email_sender, uow_factory) -> None:
        sign_up.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="K"))
        token = _token_from(email_sender.outbox[0])
        with pytest.raises(InvalidVerificationTokenError):
            VerifyEmailUseCase(uow_factory).execute(
                VerifyEmailCommand(email="ama@example.com", token=token)
            )


class TestResendVerificationUseCase:
    def test_replaces_previous_token(self, sign_up, email_sender, uow_factory) -> None:
        sign_up.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="K"))
        first = _token_from(email_sender.outbox[0])

        ResendVerificationUseCase(uow_factory, email_sender, APP_URL).execute(
            EmailOnlyCommand(email="kofi@example.com")
        )

        second = _token_from(email_sender.outbox[1])
        with uow_factory() as uow:
            assert uow.tokens.get(hash_token(first)) is None
            assert uow.tokens.get(hash_token(second)) is not None

    def test_silent_for_verified_and_unknown_users(self, uow_factory, email_sender, user) -> None:
        use_case = ResendVerificationUseCase(uow_factory, email_sender, APP_URL)
        use_case.execute(EmailOnlyCommand(email=user.email))
        use_case.execute(EmailOnlyCommand(email="ghost@example.com"))
        assert email_sender.outbox == []


class TestPasswordReset:
    def test_full_reset_flow(self, uow_factory, hasher, email_sender, token_service, user) -> None:
        message = ForgotPasswordUseCase(uow_factory, email_sender, APP_URL).execute(
            EmailOnlyCommand(email=user.email)
        )
        assert message == RESET_REQUESTED_MESSAGE
        token = _token_from(email_sender.outbox[0])

        ResetPasswordUseCase(uow_factory, hasher).execute(
            ResetPasswordCommand(email=user.email, token=token, new_password=NEW_PASSWORD)
        )

        sign_in = SignInUseCase(uow_factory, hasher, token_service)
        assert sign_in.execute(SignInCommand(email=user.email, password=NEW_PASSWORD)).user.id == user.id
        with pytest.raises(InvalidCredentialsError):
            sign_in.execute(SignInCommand(email=user.email, password=PASSWORD))

    def test_unknown_email_gets_same_message(self, uow_factory, email_sender) -> None:
        message = ForgotPasswordUseCase(uow_factory, email_sender, APP_URL).execute(
            EmailOnlyCommand(email="ghost@example.com")
        )
        assert message == RESET_REQUESTED_MESSAGE
        assert email_sender.outbox == []

    def test_weak_new_password_rejected(self, uow_factory, hasher, user) -> None:
        with pytest.raises(WeakPasswordError):
            ResetPasswordUseCase(uow_factory, hasher).execute(
                ResetPasswordCommand(email=user.email, token="whatever", new_password="short")
            )

    def test_verification_token_cannot_reset_password(
        self, sign_up, email_sender, uow_factory, hasher
    ) -> None:
        sign_up.execute(SignUpCommand(email="kofi@example.com", password=PASSWORD, name="K"))
        token = _token_from(email_sender.outbox[0])
        with pytest.raises(InvalidVerificationTokenError, match="type"):
            ResetPasswordUseCase(uow_factory, hasher).execute(
                ResetPasswordCommand(email="kofi@example.com", token=token, new_password=NEW_PASSWORD)
            )


class TestGetCurrentSessionUseCase:
    def test_resolves_user(self, uow_factory, token_service, user) -> None:
        token = token_service.issue(user).access_token
        assert GetCurrentSessionUseCase(uow_factory, token_service).execute(token).id == user.id

    def test_forged_token_rejected(self, uow_factory, token_service) -> None:
        with pytest.raises(AuthenticationError):
            GetCurrentSessionUseCase(uow_factory, token_service).execute("not-a-jwt")
