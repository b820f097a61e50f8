"""Temporary password and opaque token generation."""

from __future__ import annotations

import hmac
import logging

from credential_security.common.logging import log_context

from . import random_source
from .character_classes import GENERATION_POOLS, CharacterClass
from .password_policy import PasswordPolicyValidator

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD_LENGTH = 12
DEFAULT_TOKEN_BYTES = 32
_MAX_ATTEMPTS = 32


class SecureGenerator:
    """Generate policy-compliant passwords and hex tokens from the OS CSPRNG.

    Generated passwords are checked with ``validator`` before they are
    returned, so the generator and the validator always agree on the ruleset.
    """

    def __init__(self, validator: PasswordPolicyValidator | None = None) -> None:
        self.validator = validator or PasswordPolicyValidator()

    def _pool_for(self, character_class: CharacterClass) -> str:
        if character_class is CharacterClass.SPECIAL:
            return self.validator.ruleset.special_characters
        return GENERATION_POOLS[character_class]

    def generate_temporary_password(self, length: int = DEFAULT_PASSWORD_LENGTH) -> str:
        """Return a random password of ``length`` characters that passes validation."""

        ruleset = self.validator.ruleset
        minimum = ruleset.minimum_generated_length
        if length < minimum:
            raise ValueError(f"Temporary password length must be at least {minimum}")

        required_pools = [
            self._pool_for(member) for member in CharacterClass if member in ruleset.required_classes
        ]
        base_pool = "".join(self._pool_for(member) for member in CharacterClass)

        for attempt in range(1, _MAX_ATTEMPTS + 1):
            chars = [random_source.choice(pool) for pool in required_pools]
            chars.extend(random_source.choice(base_pool) for _ in range(length - len(chars)))
            random_source.shuffle(chars)
            candidate = "".join(chars)
            outcome = self.validator.validate(candidate)
            if outcome.compliant:
                return candidate
            logger.debug(
                "generator.password.rejected",
                extra=log_context(attempt=attempt, rule=outcome.rule.value if outcome.rule else None),
            )

        raise RuntimeError("Unable to generate password meeting the password policy.")

    def generate_secure_token(self, byte_length: int = DEFAULT_TOKEN_BYTES) -> str:
        """Return ``byte_length`` random bytes as lowercase hex (``2 * byte_length`` chars)."""

        if byte_length <= 0:
            raise ValueError("Token length must be positive")
        return random_source.token_bytes(byte_length).hex()


def constant_time_compare(left: str, right: str) -> bool:
    """Compare two issued secrets without leaking where they differ.

    Values of different lengths compare unequal rather than raising.
    """

    return hmac.compare_digest(left.encode("utf-8"), right.encode("utf-8"))


__all__ = [
    "DEFAULT_PASSWORD_LENGTH",
    "DEFAULT_TOKEN_BYTES",
    "SecureGenerator",
    "constant_time_compare",
]
