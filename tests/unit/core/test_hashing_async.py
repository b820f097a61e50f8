from __future__ import annotations

import asyncio
import threading

import pytest

from credential_security.common.exceptions import InputError
from credential_security.core.hashing import CredentialHasher

pytestmark = pytest.mark.asyncio

PASSWORD = "TestPassword123!"


async def test_hash_async_round_trip(hasher: CredentialHasher) -> None:
    hashed = await hasher.hash_async(PASSWORD)

    assert await hasher.verify_async(PASSWORD, hashed) is True
    assert await hasher.verify_async("WrongPassword456!", hashed) is False


async def test_hash_async_runs_off_the_event_loop_thread(
    hasher: CredentialHasher,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    loop_thread = threading.get_ident()
    seen: list[int] = []
    original = hasher.hash

    def _record(raw: str) -> str:
        seen.append(threading.get_ident())
        return original(raw)

    monkeypatch.setattr(hasher, "hash", _record)

    await hasher.hash_async(PASSWORD)

    assert seen and seen[0] != loop_thread


async def test_concurrent_hashes_are_unique(hasher: CredentialHasher) -> None:
    results = await asyncio.gather(*(hasher.hash_async(PASSWORD) for _ in range(6)))

    assert len(set(results)) == len(results)
    checks = await asyncio.gather(*(hasher.verify_async(PASSWORD, value) for value in results))
    assert all(checks)


async def test_hash_async_propagates_input_error(hasher: CredentialHasher) -> None:
    with pytest.raises(InputError):
        await hasher.hash_async("")
