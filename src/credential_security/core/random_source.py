"""Thin wrappers over the OS CSPRNG.

Every draw goes through :mod:`secrets` (``os.urandom`` underneath). When the
kernel cannot supply entropy the failure surfaces as
:class:`RandomSourceFailure`; there is no fallback to :mod:`random`.
"""

from __future__ import annotations

import secrets
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

from credential_security.common.exceptions import RandomSourceFailure

T = TypeVar("T")

_system_random = secrets.SystemRandom()


def token_bytes(length: int) -> bytes:
    """Return ``length`` random bytes."""

    try:
        return secrets.token_bytes(length)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceFailure("Secure random source unavailable") from exc


def choice(population: Sequence[T]) -> T:
    """Return one uniformly chosen element of ``population``."""

    try:
        return secrets.choice(population)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceFailure("Secure random source unavailable") from exc


def shuffle(items: MutableSequence[T]) -> None:
    """Shuffle ``items`` in place (Fisher-Yates driven by the CSPRNG)."""

    try:
        _system_random.shuffle(items)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceFailure("Secure random source unavailable") from exc


__all__ = ["choice", "shuffle", "token_bytes"]
