"""Shared exceptions and logging helpers."""

from .exceptions import (
    CredentialSecurityError,
    InputError,
    PolicyViolationError,
    RandomSourceFailure,
)
from .logging import log_context, setup_logging

__all__ = [
    "CredentialSecurityError",
    "InputError",
    "PolicyViolationError",
    "RandomSourceFailure",
    "log_context",
    "setup_logging",
]
