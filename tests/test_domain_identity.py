"""
Tests for the identity domain layer.

Password policy scoring and verification token rules.
"""

from datetime import datetime, timedelta, timezone

import pytest

from hoardrun.domain.identity.entities import VerificationPurpose
from hoardrun.domain.identity.errors import InvalidVerificationTokenError
from hoardrun.domain.identity.password_policy import (
    DEFAULT_POLICY,
    has_repeated_characters,
    has_sequential_characters,
    password_entropy,
)
from hoardrun.domain.identity.verification import check_token, hash_token, new_token

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestPasswordPolicy:
    """Tests for PasswordPolicy.evaluate and generate."""

    def test_strong_password(self) -> None:
        result = DEFAULT_POLICY.evaluate("Tr0ub4dor&Xy!")
        assert result.is_strong
        assert result.feedback == []
        assert result.score == 100

    def test_common_password_is_weak(self) -> None:
        result = DEFAULT_POLICY.evaluate("password123")
        assert not result.is_strong
        assert "Password is too common" in result.feedback
        assert "Password contains a common pattern" in result.feedback

    def test_missing_character_classes_reported(self) -> None:
        result = DEFAULT_POLICY.evaluate("lowercaseonlyword")
        assert "Password must contain at least one uppercase letter" in result.feedback
        assert "Password must contain at least one number" in result.feedback
        assert "Password must contain at least one special character" in result.feedback

    def test_short_password_reported(self) -> None:
        result = DEFAULT_POLICY.evaluate("Ab1!x")
        assert "Password must be at least 12 characters long" in result.feedback

    def test_score_never_negative(self) -> None:
        assert DEFAULT_POLICY.evaluate("").score == 0

    def test_generated_password_is_strong(self) -> None:
        for _ in range(5):
            assert DEFAULT_POLICY.evaluate(DEFAULT_POLICY.generate()).is_strong

    def test_sequences_and_repeats(self) -> None:
        assert has_sequential_characters("xxabcxx")
        assert has_sequential_characters("my789pin")
        assert not has_sequential_characters("Tr0ub4dor")
        assert has_repeated_characters("aaaab")
        assert not has_repeated_characters("aaab")

    def test_entropy(self) -> None:
        assert password_entropy("") == 0.0
        assert password_entropy("abcd") < password_entropy("aB3$")


class TestVerificationTokens:
    def test_only_hash_is_stored(self) -> None:
        raw, record = new_token("Ama@Example.com", VerificationPurpose.EMAIL_VERIFICATION, NOW)
        assert record.token_hash == hash_token(raw)
        assert raw not in record.token_hash
        assert record.email == "ama@example.com"

    def test_lifetimes(self) -> None:
        _, verification = new_token("a@b.co", VerificationPurpose.EMAIL_VERIFICATION, NOW)
        _, reset = new_token("a@b.co", VerificationPurpose.PASSWORD_RESET, NOW)
        assert verification.expires_at == NOW + timedelta(hours=24)
        assert reset.expires_at == NOW + timedelta(hours=1)

    def test_unknown_token(self) -> None:
        with pytest.raises(InvalidVerificationTokenError):
            check_token(None, "a@b.co", VerificationPurpose.EMAIL_VERIFICATION, NOW)

    def test_email_mismatch(self) -> None:
        _, record = new_token("a@b.co", VerificationPurpose.EMAIL_VERIFICATION, NOW)
        with pytest.raises(InvalidVerificationTokenError, match="email"):
            check_token(record, "other@b.co", VerificationPurpose.EMAIL_VERIFICATION, NOW)

    def test_wrong_purpose(self) -> None:
        _, record = new_token("a@b.co", VerificationPurpose.PASSWORD_RESET, NOW)
        with pytest.raises(InvalidVerificationTokenError, match="type"):
            check_token(record, "a@b.co", VerificationPurpose.EMAIL_VERIFICATION, NOW)

    def test_expired(self) -> None:
        _, record = new_token("a@b.co", VerificationPurpose.PASSWORD_RESET, NOW)
        later = NOW + timedelta(hours=2)
        with pytest.raises(InvalidVerificationTokenError) as info:
            check_token(record, "a@b.co", VerificationPurpose.PASSWORD_RESET, later)
        assert info.value.expired

    def test_valid(self) -> None:
        _, record = new_token("a@b.co", VerificationPurpose.EMAIL_VERIFICATION, NOW)
        assert check_token(record, "A@B.co", VerificationPurpose.EMAIL_VERIFICATION, NOW) is record
