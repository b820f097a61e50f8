"""Logging configuration and helpers for the credential service.

Two output formats are supported:

* human-readable console logs, and
* structured JSON logs for production ingestion.

Modules log dotted event names (``credential.hash.completed``) and attach
structured fields through :func:`log_context`. Raw secrets and stored hashes
must never be passed as log fields.

Everything uses the standard :mod:`logging` library.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from credential_security.settings import CredentialSettings

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SERVICE_NAME = "credential-security"

# Attributes that are already handled by logging and should not be copied into
# the extra key=value list.
_STANDARD_ATTRS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
    "taskName",
}

_CONFIGURED_FLAG = "_credsec_configured"


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class ConsoleLogFormatter(logging.Formatter):
    """Render log records as single-line console output.

    Example line:

        2026-10-18T09:14:03.120Z INFO  credential_security.core.hashing
        credential.hash.completed duration_ms=41.7 work_factor=3
    """

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s %(levelname)-5s %(name)s %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _utc_timestamp(record)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _record_extras(record)
        if not extras:
            return line
        fields = " ".join(
            f"{key}={_format_extra_value(value)}" for key, value in sorted(extras.items())
        )
        return f"{line} {fields}"


class JsonLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_timestamp(record),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
            **_record_extras(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def setup_logging(settings: CredentialSettings) -> None:
    """Configure root logging for a process embedding the credential service.

    Installs a single StreamHandler on the root logger using the format and
    level from ``settings``. Calling it again swaps the formatter and level
    without stacking handlers.
    """
    root_logger = logging.getLogger()
    level = getattr(logging, settings.log_level)

    configured = getattr(root_logger, _CONFIGURED_FLAG, False)
    if not configured or not root_logger.handlers:
        # Replace existing handlers once to avoid duplicate output.
        root_logger.handlers = [logging.StreamHandler()]
        setattr(root_logger, _CONFIGURED_FLAG, True)
    else:
        root_logger.handlers = [root_logger.handlers[0]]

    handler = root_logger.handlers[0]
    handler.setFormatter(_build_formatter(settings.log_format))
    root_logger.setLevel(level)

    package_logger = logging.getLogger("credential_security")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


def log_context(**extra: Any) -> dict[str, Any]:
    """Build a consistent `extra` payload for structured logs.

    ``None`` values are dropped so optional fields do not clutter output.

    Example:
        logger.info(
            "credential.hash.completed",
            extra=log_context(work_factor=3, duration_ms=41.7),
        )
    """
    return {key: value for key, value in extra.items() if value is not None}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _format_extra_value(value: Any) -> str:
    return "null" if value is None else str(value)


def _utc_timestamp(record: logging.LogRecord) -> str:
    """Millisecond-precision UTC timestamp, e.g. ``2026-10-18T09:14:03.120Z``."""
    created = datetime.fromtimestamp(record.created, tz=UTC)
    return f"{created:%Y-%m-%dT%H:%M:%S}.{int(record.msecs):03d}Z"


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonLogFormatter()
    return ConsoleLogFormatter()


__all__ = [
    "ConsoleLogFormatter",
    "JsonLogFormatter",
    "log_context",
    "setup_logging",
]
