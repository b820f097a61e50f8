"""Password hashing helpers (argon2id via pwdlib)."""

from __future__ import annotations

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher

from credential_security.common.exceptions import InputError
from credential_security.common.logging import log_context

from .password_policy import SECRET_REQUIRED_MESSAGE

if TYPE_CHECKING:
    from credential_security.settings import CredentialSettings

logger = logging.getLogger(__name__)

DEFAULT_WORK_FACTOR = 3
DEFAULT_MEMORY_COST = 65536  # KiB
DEFAULT_PARALLELISM = 4
DEFAULT_MAX_CONCURRENCY = 4


class CredentialHasher:
    """Hash and verify secrets with argon2id.

    Encoded credentials follow the PHC string format, e.g.
    ``$argon2id$v=19$m=65536,t=3,p=4$<salt>$<digest>``, so every stored value
    carries the parameters it was produced with. Changing ``work_factor``
    later does not break verification of older credentials.
    """

    def __init__(
        self,
        *,
        work_factor: int = DEFAULT_WORK_FACTOR,
        memory_cost: int = DEFAULT_MEMORY_COST,
        parallelism: int = DEFAULT_PARALLELISM,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if work_factor < 1:
            raise ValueError("work_factor must be at least 1")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.work_factor = work_factor
        self.memory_cost = memory_cost
        self.parallelism = parallelism
        self._hasher = Argon2Hasher(
            time_cost=work_factor,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )
        self._password_hash = PasswordHash((self._hasher,))
        self._executor = ThreadPoolExecutor(
            max_workers=max_concurrency,
            thread_name_prefix="credsec-hash",
        )

    @classmethod
    def from_settings(cls, settings: CredentialSettings) -> CredentialHasher:
        return cls(
            work_factor=settings.work_factor,
            memory_cost=settings.hash_memory_cost,
            parallelism=settings.hash_parallelism,
            max_concurrency=settings.hash_max_concurrency,
        )

    def hash(self, raw: str) -> str:
        """Hash ``raw`` with a fresh random salt."""

        if not raw:
            raise InputError(SECRET_REQUIRED_MESSAGE)

        started = time.perf_counter()
        hashed = self._password_hash.hash(raw)
        logger.debug(
            "credential.hash.completed",
            extra=log_context(
                work_factor=self.work_factor,
                memory_cost=self.memory_cost,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            ),
        )
        return hashed

    def verify(self, raw: str, hashed: str) -> bool:
        """Return ``True`` if ``raw`` matches ``hashed``.

        Malformed or unsupported credentials are reported as a plain mismatch.
        """

        if not raw or not hashed:
            return False
        try:
            return self._password_hash.verify(raw, hashed)
        except (UnknownHashError, ValueError):
            logger.debug("credential.verify.unrecognized")
            return False

    def verify_and_update(self, raw: str, hashed: str) -> tuple[bool, str | None]:
        """Verify ``raw`` and return a fresh credential when ``hashed`` is outdated."""

        if not raw or not hashed:
            return False, None
        try:
            verified, updated = self._password_hash.verify_and_update(raw, hashed)
        except (UnknownHashError, ValueError):
            logger.debug("credential.verify.unrecognized")
            return False, None
        if updated is not None:
            logger.info(
                "credential.rehash.issued",
                extra=log_context(work_factor=self.work_factor),
            )
        return verified, updated

    def needs_rehash(self, hashed: str) -> bool:
        """Return ``True`` when ``hashed`` was not produced with the current parameters."""

        if not hashed or not self._hasher.identify(hashed):
            return True
        try:
            return self._hasher.check_needs_rehash(hashed)
        except ValueError:
            return True

    async def hash_async(self, raw: str) -> str:
        """Hash on the bounded worker pool so the event loop stays responsive."""

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.hash, raw)

    async def verify_async(self, raw: str, hashed: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.verify, raw, hashed)

    def close(self) -> None:
        self._executor.shutdown(wait=True)


__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_MEMORY_COST",
    "DEFAULT_PARALLELISM",
    "DEFAULT_WORK_FACTOR",
    "CredentialHasher",
]
