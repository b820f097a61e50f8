"""Exception types raised by the credential service."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from credential_security.core.password_policy import PolicyViolation


class CredentialSecurityError(RuntimeError):
    """Base class for errors raised by the credential service."""


class InputError(CredentialSecurityError, ValueError):
    """A required secret was missing or empty."""


class RandomSourceFailure(CredentialSecurityError):
    """The operating system CSPRNG could not supply entropy."""


class PolicyViolationError(CredentialSecurityError, ValueError):
    """Raised on request when a secret violates the password policy.

    The validator itself returns violations as values; this exception only
    exists for callers that prefer ``outcome.raise_for_violation()``.
    """

    def __init__(self, violation: PolicyViolation) -> None:
        super().__init__(violation.message)
        self.violation = violation
        self.rule = violation.rule


__all__ = [
    "CredentialSecurityError",
    "InputError",
    "PolicyViolationError",
    "RandomSourceFailure",
]
