"""Shared pytest fixtures for credential service tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from credential_security.core.hashing import CredentialHasher
from credential_security.service import CredentialSecurityService
from credential_security.settings import CredentialSettings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer CREDSEC_* variables from leaking into tests."""

    for key in list(os.environ):
        if key.startswith("CREDSEC_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def fast_settings() -> CredentialSettings:
    """Settings with cheap argon2 parameters so hashing tests stay quick."""

    return CredentialSettings(
        _env_file=None,
        work_factor=1,
        hash_memory_cost=1024,
        hash_parallelism=1,
        hash_max_concurrency=2,
    )


@pytest.fixture()
def hasher(fast_settings: CredentialSettings) -> Iterator[CredentialHasher]:
    instance = CredentialHasher.from_settings(fast_settings)
    yield instance
    instance.close()


@pytest.fixture()
def service(fast_settings: CredentialSettings) -> Iterator[CredentialSecurityService]:
    with CredentialSecurityService(fast_settings) as instance:
        yield instance
