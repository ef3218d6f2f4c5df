"""
Use case: Score a candidate password, or suggest a strong one.

Input: password (str)
Output: PasswordStrength
Side effects: None.
"""

from hoardrun.domain.identity.entities import PasswordStrength
from hoardrun.domain.identity.password_policy import DEFAULT_POLICY, PasswordPolicy


class EvaluatePasswordUseCase:
    def __init__(self, policy: PasswordPolicy = DEFAULT_POLICY) -> None:
        self._policy = policy

    def execute(self, password: str) -> PasswordStrength:
        return self._policy.evaluate(password)

    def suggest(self) -> str:
        """Return a freshly generated password that passes the policy."""
        return self._policy.generate()
