"""Credential primitives: hashing, policy validation, strength scoring and generation."""

from .character_classes import CharacterClass
from .generator import SecureGenerator, constant_time_compare
from .hashing import CredentialHasher
from .password_policy import (
    PasswordPolicyValidator,
    PolicyRule,
    PolicyRuleSet,
    PolicyViolation,
    ValidationOutcome,
    validate,
)
from .strength import StrengthAssessment, StrengthScorer, score

__all__ = [
    "CharacterClass",
    "CredentialHasher",
    "PasswordPolicyValidator",
    "PolicyRule",
    "PolicyRuleSet",
    "PolicyViolation",
    "SecureGenerator",
    "StrengthAssessment",
    "StrengthScorer",
    "ValidationOutcome",
    "constant_time_compare",
    "score",
    "validate",
]
