"""Composition root wiring the four credential components to one configuration."""

from __future__ import annotations

from credential_security.core.generator import SecureGenerator, constant_time_compare
from credential_security.core.hashing import CredentialHasher
from credential_security.core.password_policy import (
    PasswordPolicyValidator,
    PolicyRuleSet,
    ValidationOutcome,
)
from credential_security.core.strength import StrengthAssessment, StrengthScorer
from credential_security.settings import CredentialSettings, get_settings


class CredentialSecurityService:
    """Facade over hashing, policy validation, strength scoring and generation.

    A single :class:`PolicyRuleSet` is built from ``settings`` and shared by
    the validator and the generator, so generated passwords always satisfy
    the policy callers validate against.
    """

    def __init__(self, settings: CredentialSettings | None = None) -> None:
        self.settings = settings or get_settings()
        self.ruleset = PolicyRuleSet.from_settings(self.settings)
        self.validator = PasswordPolicyValidator(self.ruleset)
        self.scorer = StrengthScorer(special_characters=self.ruleset.special_characters)
        self.generator = SecureGenerator(self.validator)
        self.hasher = CredentialHasher.from_settings(self.settings)

    # Hashing ----------------------------------------------------------------

    def hash(self, raw: str) -> str:
        return self.hasher.hash(raw)

    def verify(self, raw: str, hashed: str) -> bool:
        return self.hasher.verify(raw, hashed)

    def verify_and_update(self, raw: str, hashed: str) -> tuple[bool, str | None]:
        return self.hasher.verify_and_update(raw, hashed)

    def needs_rehash(self, hashed: str) -> bool:
        return self.hasher.needs_rehash(hashed)

    async def hash_async(self, raw: str) -> str:
        return await self.hasher.hash_async(raw)

    async def verify_async(self, raw: str, hashed: str) -> bool:
        return await self.hasher.verify_async(raw, hashed)

    # Policy and scoring -----------------------------------------------------

    def validate(self, raw: str) -> ValidationOutcome:
        return self.validator.validate(raw)

    def score(self, raw: str) -> StrengthAssessment:
        return self.scorer.score(raw)

    # Generation -------------------------------------------------------------

    def generate_temporary_password(self, length: int | None = None) -> str:
        if length is None:
            # The configured default never drops below what the policy accepts.
            length = max(
                self.settings.temporary_password_length,
                self.ruleset.minimum_generated_length,
            )
        return self.generator.generate_temporary_password(length)

    def constant_time_compare(self, left: str, right: str) -> bool:
        return constant_time_compare(left, right)

    def generate_secure_token(self, byte_length: int | None = None) -> str:
        if byte_length is None:
            byte_length = self.settings.token_bytes
        return self.generator.generate_secure_token(byte_length)

    def close(self) -> None:
        self.hasher.close()

    def __enter__(self) -> CredentialSecurityService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["CredentialSecurityService"]
