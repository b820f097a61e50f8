"""Credential service settings (Pydantic v2 / pydantic-settings)."""

from __future__ import annotations

import json
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import TypeVar

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from credential_security.core.character_classes import (
    DEFAULT_SPECIAL_CHARACTERS,
    CharacterClass,
)
from credential_security.core.generator import (
    DEFAULT_PASSWORD_LENGTH,
    DEFAULT_TOKEN_BYTES,
)
from credential_security.core.hashing import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_MEMORY_COST,
    DEFAULT_PARALLELISM,
    DEFAULT_WORK_FACTOR,
)
from credential_security.core.password_policy import DEFAULT_MIN_LENGTH

ALLOWED_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
ALLOWED_LOG_FORMATS = frozenset({"console", "json"})

T = TypeVar("T")

def credential_settings_config(
    *,
    env_file: str | Path | None = ".env",
    enable_decoding: bool = True,
) -> SettingsConfigDict:
    """Return the standard ``BaseSettings`` config dict for the service."""

    return SettingsConfigDict(
        env_file=str(env_file) if env_file is not None else None,
        env_file_encoding="utf-8",
        env_prefix="CREDSEC_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        enable_decoding=enable_decoding,
        str_strip_whitespace=True,
    )


def create_settings_accessors(
    settings_type: type[T],
) -> tuple[Callable[[], T], Callable[[], T]]:
    """Create ``get_settings`` and ``reload_settings`` helpers for a settings class."""

    @lru_cache(maxsize=1)
    def _build() -> T:
        return settings_type()

    def get_settings() -> T:
        return _build()

    def reload_settings() -> T:
        _build.cache_clear()
        return _build()

    return get_settings, reload_settings


def normalize_log_format(value: str, *, env_var: str = "CREDSEC_LOG_FORMAT") -> str:
    normalized = value.strip().lower()
    if normalized not in ALLOWED_LOG_FORMATS:
        allowed = ", ".join(sorted(ALLOWED_LOG_FORMATS))
        raise ValueError(f"{env_var} must be one of: {allowed}.")
    return normalized


def normalize_log_level(value: str | None, *, env_var: str) -> str | None:
    if value is None:
        return None
    normalized = value.strip().upper()
    if normalized not in ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(ALLOWED_LOG_LEVELS))
        raise ValueError(f"{env_var} must be one of: {allowed}.")
    return normalized


def _split_list(value: object) -> object:
    """Accept JSON arrays or comma-separated strings for list settings."""

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return parsed
        return [item.strip() for item in raw.split(",") if item.strip()]
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    return value


# ---- Settings ---------------------------------------------------------------


class CredentialSettings(BaseSettings):
    """Credential service settings loaded from CREDSEC_* environment variables."""

    model_config = credential_settings_config(enable_decoding=False)

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # Hashing (argon2id)
    work_factor: int = Field(DEFAULT_WORK_FACTOR, ge=1, le=64)
    hash_memory_cost: int = Field(DEFAULT_MEMORY_COST, ge=8)
    hash_parallelism: int = Field(DEFAULT_PARALLELISM, ge=1, le=64)
    hash_max_concurrency: int = Field(DEFAULT_MAX_CONCURRENCY, ge=1)

    # Password policy
    password_min_length: int = Field(DEFAULT_MIN_LENGTH, ge=1)
    password_required_classes: list[CharacterClass] = Field(
        default_factory=lambda: list(CharacterClass)
    )
    password_special_characters: str = DEFAULT_SPECIAL_CHARACTERS
    password_denylist: list[str] = Field(default_factory=list)
    password_denylist_path: Path | None = None

    # Generator
    temporary_password_length: int = Field(DEFAULT_PASSWORD_LENGTH, ge=1)
    token_bytes: int = Field(DEFAULT_TOKEN_BYTES, ge=1)

    # ---- Validators ----

    @field_validator("password_required_classes", mode="before")
    @classmethod
    def _parse_required_classes(cls, value: object) -> object:
        parsed = _split_list(value)
        if isinstance(parsed, list):
            return [item.strip().lower() if isinstance(item, str) else item for item in parsed]
        return parsed

    @field_validator("password_denylist", mode="before")
    @classmethod
    def _parse_denylist(cls, value: object) -> object:
        if value is None:
            return []
        return _split_list(value)

    @field_validator("password_special_characters", mode="before")
    @classmethod
    def _require_special_characters(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            raise ValueError("CREDSEC_PASSWORD_SPECIAL_CHARACTERS must not be empty.")
        return value

    @model_validator(mode="after")
    def _finalize(self) -> CredentialSettings:
        self.log_format = normalize_log_format(self.log_format)

        normalized_log_level = normalize_log_level(self.log_level, env_var="CREDSEC_LOG_LEVEL")
        if normalized_log_level is None:
            raise ValueError("CREDSEC_LOG_LEVEL must not be empty.")
        self.log_level = normalized_log_level

        # argon2 requires at least 8 KiB of memory per lane.
        if self.hash_memory_cost < 8 * self.hash_parallelism:
            raise ValueError(
                "CREDSEC_HASH_MEMORY_COST must be at least 8 x CREDSEC_HASH_PARALLELISM."
            )

        # Keep declaration order stable and drop duplicates.
        requested = set(self.password_required_classes)
        self.password_required_classes = [
            member for member in CharacterClass if member in requested
        ]

        if self.password_denylist_path is not None and not self.password_denylist_path.is_file():
            raise ValueError(
                f"CREDSEC_PASSWORD_DENYLIST_PATH does not exist: {self.password_denylist_path}"
            )
        return self


get_settings, reload_settings = create_settings_accessors(CredentialSettings)


__all__ = [
    "CredentialSettings",
    "credential_settings_config",
    "create_settings_accessors",
    "get_settings",
    "normalize_log_format",
    "normalize_log_level",
    "reload_settings",
]
