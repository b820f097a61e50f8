"""Credential security service: hashing, password policy, strength scoring and generation."""

from .common.exceptions import (
    CredentialSecurityError,
    InputError,
    PolicyViolationError,
    RandomSourceFailure,
)
from .core import (
    CharacterClass,
    CredentialHasher,
    PasswordPolicyValidator,
    PolicyRule,
    PolicyRuleSet,
    PolicyViolation,
    SecureGenerator,
    StrengthAssessment,
    StrengthScorer,
    ValidationOutcome,
)
from .service import CredentialSecurityService
from .settings import CredentialSettings, get_settings, reload_settings

__version__ = "0.1.0"

__all__ = [
    "CharacterClass",
    "CredentialHasher",
    "CredentialSecurityError",
    "CredentialSecurityService",
    "CredentialSettings",
    "InputError",
    "PasswordPolicyValidator",
    "PolicyRule",
    "PolicyRuleSet",
    "PolicyViolation",
    "PolicyViolationError",
    "RandomSourceFailure",
    "SecureGenerator",
    "StrengthAssessment",
    "StrengthScorer",
    "ValidationOutcome",
    "get_settings",
    "reload_settings",
]
