"""
Password policy rules.

Scores a password from 0 to 100 and explains every deduction.
A password is strong only when it scores at least 70 and no rule fired.
"""

import math
import re
import secrets
import string
from dataclasses import dataclass

from hoardrun.domain.identity.entities import PasswordStrength

STRONG_SCORE = 70
MIN_ENTROPY_BITS = 50
MAX_REPEATS = 3

COMMON_PATTERNS = [
    re.compile(r"^password\d*$", re.IGNORECASE),
    re.compile(r"^12345\d*$"),
    re.compile(r"^qwerty\d*$", re.IGNORECASE),
    re.compile(r"^letme\w*$", re.IGNORECASE),
    re.compile(r"^welcome\d*$", re.IGNORECASE),
]

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "password123",
        "123456",
        "12345678",
        "qwerty",
        "letmein",
        "iloveyou",
        "admin",
        "welcome",
        "monkey",
    }
)

SEQUENCES = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    "qwertyuiop",
    "asdfghjkl",
    "zxcvbnm",
)

SPECIAL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


@dataclass(frozen=True)
class PasswordPolicy:
    """Configurable password requirements."""

    min_length: int = 12
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_numbers: bool = True
    require_special_chars: bool = True

    def evaluate(self, password: str) -> PasswordStrength:
        """Score a password and collect feedback for every failed rule."""
        feedback: list[str] = []
        score = 100

        if len(password) < self.min_length:
            feedback.append(
                f"Password must be at least {self.min_length} characters long"
            )
            score -= 20

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            feedback.append("Password must contain at least one uppercase letter")
            score -= 15

        if self.require_lowercase and not re.search(r"[a-z]", password):
            feedback.append("Password must contain at least one lowercase letter")
            score -= 15

        if self.require_numbers and not re.search(r"\d", password):
            feedback.append("Password must contain at least one number")
            score -= 15

        if self.require_special_chars and not re.search(r"[^A-Za-z0-9]", password):
            feedback.append("Password must contain at least one special character")
            score -= 15

        if any(pattern.search(password) for pattern in COMMON_PATTERNS):
            feedback.append("Password contains a common pattern")
            score -= 25

        if password.lower() in COMMON_PASSWORDS:
            feedback.append("Password is too common")
            score -= 50

        entropy = password_entropy(password)
        if entropy < MIN_ENTROPY_BITS:
            feedback.append("Password is not complex enough")
            score -= int(min(30, MIN_ENTROPY_BITS - entropy))

        if has_sequential_characters(password):
            feedback.append("Password contains sequential characters")
            score -= 20

        if has_repeated_characters(password):
            feedback.append("Password contains too many repeated characters")
            score -= 20

        score = max(0, min(100, score))
        return PasswordStrength(
            score=score,
            feedback=feedback,
            is_strong=score >= STRONG_SCORE and not feedback,
        )

    def generate(self) -> str:
        """Generate a random password that satisfies every requirement."""
        rng = secrets.SystemRandom()
        required = [
            rng.choice(string.ascii_uppercase),
            rng.choice(string.ascii_lowercase),
            rng.choice(string.digits),
            rng.choice(SPECIAL_CHARS),
        ]
        pool = string.ascii_letters + string.digits + SPECIAL_CHARS
        while True:
            chars = required + [
                rng.choice(pool) for _ in range(max(0, self.min_length - len(required)))
            ]
            rng.shuffle(chars)
            candidate = "".join(chars)
            if self.evaluate(candidate).is_strong:
                return candidate


def password_entropy(password: str) -> float:
    """Return the brute-force entropy of a password in bits."""
    pool = 0
    if re.search(r"[A-Z]", password):
        pool += 26
    if re.search(r"[a-z]", password):
        pool += 26
    if re.search(r"\d", password):
        pool += 10
    if re.search(r"[^A-Za-z0-9]", password):
        pool += 32
    if pool == 0:
        return 0.0
    return len(password) * math.log2(pool)


def has_sequential_characters(password: str) -> bool:
    """True when any 3-character run of a known sequence appears."""
    for sequence in SEQUENCES:
        for i in range(len(sequence) - 2):
            if sequence[i : i + 3] in password:
                return True
    return False


def has_repeated_characters(password: str) -> bool:
    """True when any single character occurs more than three times."""
    counts: dict[str, int] = {}
    for char in password:
        counts[char] = counts.get(char, 0) + 1
        if counts[char] > MAX_REPEATS:
            return True
    return False


DEFAULT_POLICY = PasswordPolicy()
