"""Password policy rules and the fail-fast validator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from credential_security.common.exceptions import PolicyViolationError
from credential_security.common.logging import log_context

from .character_classes import DEFAULT_SPECIAL_CHARACTERS, CharacterClass, contains_class

if TYPE_CHECKING:
    from credential_security.settings import CredentialSettings

logger = logging.getLogger(__name__)

SECRET_REQUIRED_MESSAGE = "secret required"
DEFAULT_MIN_LENGTH = 8

# Stored lower-cased; candidates are lower-cased before lookup.
DEFAULT_DENYLIST: frozenset[str] = frozenset(
    {
        "12345678",
        "123456789",
        "1234567890",
        "password",
        "password1",
        "password123",
        "password123!",
        "passw0rd",
        "p@ssw0rd",
        "p@ssw0rd1",
        "p@ssw0rd123",
        "qwerty123",
        "qwerty123!",
        "admin123",
        "admin123!",
        "senha123",
        "senha123!",
        "seminario123",
        "jesus123",
        "welcome1",
        "welcome123!",
        "letmein1!",
        "changeme1!",
        "iloveyou1!",
    }
)


class PolicyRule(str, Enum):
    """Identifiers for each policy rule, in evaluation order."""

    SECRET_REQUIRED = "secret_required"
    MIN_LENGTH = "too_short"
    UPPERCASE = "missing_uppercase"
    LOWERCASE = "missing_lowercase"
    DIGIT = "missing_digit"
    SPECIAL = "missing_special"
    DENYLIST = "too_common"


_CLASS_RULES: tuple[tuple[CharacterClass, PolicyRule, str], ...] = (
    (CharacterClass.UPPERCASE, PolicyRule.UPPERCASE, "must contain an uppercase letter"),
    (CharacterClass.LOWERCASE, PolicyRule.LOWERCASE, "must contain a lowercase letter"),
    (CharacterClass.DIGIT, PolicyRule.DIGIT, "must contain a digit"),
    (CharacterClass.SPECIAL, PolicyRule.SPECIAL, "must contain a special character"),
)


@dataclass(frozen=True, slots=True)
class PolicyViolation:
    rule: PolicyRule
    message: str


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Either compliant (``violation is None``) or the first failing rule."""

    violation: PolicyViolation | None = None

    @property
    def compliant(self) -> bool:
        return self.violation is None

    @property
    def rule(self) -> PolicyRule | None:
        return self.violation.rule if self.violation is not None else None

    @property
    def message(self) -> str | None:
        return self.violation.message if self.violation is not None else None

    def raise_for_violation(self) -> None:
        """Raise :class:`PolicyViolationError` when the outcome is not compliant."""

        if self.violation is not None:
            raise PolicyViolationError(self.violation)


COMPLIANT = ValidationOutcome()


@dataclass(frozen=True, slots=True)
class PolicyRuleSet:
    """Immutable password policy shared by the validator and the generator."""

    min_length: int = DEFAULT_MIN_LENGTH
    required_classes: frozenset[CharacterClass] = field(
        default_factory=lambda: frozenset(CharacterClass)
    )
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS
    denylist: frozenset[str] = DEFAULT_DENYLIST

    def __post_init__(self) -> None:
        if self.min_length < 1:
            raise ValueError("min_length must be positive")
        if not self.special_characters:
            raise ValueError("special_characters must not be empty")
        object.__setattr__(self, "required_classes", frozenset(self.required_classes))
        object.__setattr__(
            self,
            "denylist",
            frozenset(entry.lower() for entry in self.denylist if entry),
        )

    @property
    def minimum_generated_length(self) -> int:
        """Shortest length a generated password can have and still comply."""

        return max(self.min_length, len(self.required_classes))

    @classmethod
    def from_settings(cls, settings: CredentialSettings) -> PolicyRuleSet:
        """Build the process-wide ruleset, merging configured denylist sources."""

        denylist = set(DEFAULT_DENYLIST)
        denylist.update(settings.password_denylist)
        if settings.password_denylist_path is not None:
            denylist.update(load_denylist(settings.password_denylist_path))

        ruleset = cls(
            min_length=settings.password_min_length,
            required_classes=frozenset(settings.password_required_classes),
            special_characters=settings.password_special_characters,
            denylist=frozenset(denylist),
        )
        logger.info(
            "policy.ruleset.loaded",
            extra=log_context(
                min_length=ruleset.min_length,
                required_classes=",".join(
                    member.value for member in CharacterClass if member in ruleset.required_classes
                ),
                denylist_entries=len(ruleset.denylist),
            ),
        )
        return ruleset


def load_denylist(path: Path) -> set[str]:
    """Read a newline-delimited denylist, skipping blank lines and ``#`` comments."""

    entries: set[str] = set()
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            entry = line.strip()
            if not entry or entry.startswith("#"):
                continue
            entries.add(entry.lower())
    logger.debug(
        "policy.denylist.loaded",
        extra=log_context(path=str(path), entries=len(entries)),
    )
    return entries


class PasswordPolicyValidator:
    """Evaluate a secret against a :class:`PolicyRuleSet`, stopping at the first failure."""

    def __init__(self, ruleset: PolicyRuleSet | None = None) -> None:
        self.ruleset = ruleset or PolicyRuleSet()

    def validate(self, raw: str) -> ValidationOutcome:
        ruleset = self.ruleset
        if not raw:
            return _violation(PolicyRule.SECRET_REQUIRED, SECRET_REQUIRED_MESSAGE)
        if len(raw) < ruleset.min_length:
            return _violation(
                PolicyRule.MIN_LENGTH,
                f"must be at least {ruleset.min_length} characters",
            )
        for character_class, rule, message in _CLASS_RULES:
            if character_class not in ruleset.required_classes:
                continue
            if not contains_class(
                raw,
                character_class,
                special_characters=ruleset.special_characters,
            ):
                return _violation(rule, message)
        if raw.lower() in ruleset.denylist:
            return _violation(PolicyRule.DENYLIST, "too common, choose a different one")
        return COMPLIANT

    def __call__(self, raw: str) -> ValidationOutcome:
        return self.validate(raw)


def _violation(rule: PolicyRule, message: str) -> ValidationOutcome:
    return ValidationOutcome(PolicyViolation(rule=rule, message=message))


_DEFAULT_VALIDATOR = PasswordPolicyValidator()


def validate(raw: str, ruleset: PolicyRuleSet | None = None) -> ValidationOutcome:
    """Validate ``raw`` against ``ruleset`` (the default policy when omitted)."""

    if ruleset is None:
        return _DEFAULT_VALIDATOR.validate(raw)
    return PasswordPolicyValidator(ruleset).validate(raw)


__all__ = [
    "COMPLIANT",
    "DEFAULT_DENYLIST",
    "DEFAULT_MIN_LENGTH",
    "PasswordPolicyValidator",
    "PolicyRule",
    "PolicyRuleSet",
    "PolicyViolation",
    "SECRET_REQUIRED_MESSAGE",
    "ValidationOutcome",
    "load_denylist",
    "validate",
]
