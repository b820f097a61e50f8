from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from credential_security.common.logging import (
    ConsoleLogFormatter,
    JsonLogFormatter,
    log_context,
    setup_logging,
)
from credential_security.settings import CredentialSettings


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="credential_security.core.hashing",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="credential.hash.completed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture()
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    flag = getattr(root, "_credsec_configured", None)
    yield
    root.handlers = handlers
    root.setLevel(level)
    if flag is None:
        if hasattr(root, "_credsec_configured"):
            delattr(root, "_credsec_configured")
    else:
        root._credsec_configured = flag


def test_console_formatter_appends_sorted_extras() -> None:
    line = ConsoleLogFormatter().format(_record(work_factor=3, duration_ms=1.5, rule=None))

    assert "INFO " in line
    assert "credential_security.core.hashing credential.hash.completed" in line
    assert line.endswith("duration_ms=1.5 rule=null work_factor=3")


def test_console_formatter_uses_utc_millis() -> None:
    line = ConsoleLogFormatter().format(_record())

    timestamp = line.split(" ", 1)[0]
    assert timestamp.endswith("Z")
    assert "." in timestamp


def test_console_and_json_share_timestamp_format() -> None:
    record = _record()
    record.created = 0.25
    record.msecs = 250.0

    console_timestamp = ConsoleLogFormatter().format(record).split(" ", 1)[0]
    json_timestamp = json.loads(JsonLogFormatter().format(record))["timestamp"]

    assert console_timestamp == json_timestamp == "1970-01-01T00:00:00.250Z"


def test_json_formatter_emits_one_object() -> None:
    payload = json.loads(JsonLogFormatter().format(_record(work_factor=3)))

    assert payload["service"] == "credential-security"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "credential_security.core.hashing"
    assert payload["message"] == "credential.hash.completed"
    assert payload["work_factor"] == 3


def test_log_context_drops_none_values() -> None:
    assert log_context(attempt=1, rule=None) == {"attempt": 1}


@pytest.mark.usefixtures("_restore_root_logger")
def test_setup_logging_installs_single_handler() -> None:
    settings = CredentialSettings(_env_file=None, log_format="json", log_level="warning")

    setup_logging(settings)
    setup_logging(settings)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonLogFormatter)
    assert root.level == logging.WARNING


@pytest.mark.usefixtures("_restore_root_logger")
def test_setup_logging_switches_formatter() -> None:
    setup_logging(CredentialSettings(_env_file=None, log_format="json"))
    setup_logging(CredentialSettings(_env_file=None, log_format="console"))

    root = logging.getLogger()
    assert isinstance(root.handlers[0].formatter, ConsoleLogFormatter)
    assert root.level == logging.INFO
