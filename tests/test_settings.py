"""Tests for environment settings and structured logging."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from rou_lease.config.settings import AppSettings
from rou_lease.exceptions import InputError
from rou_lease.logging_config import (
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings.from_env({})
        assert settings.history_limit == 10
        assert settings.log_level == "INFO"
        assert settings.currency_label == ""
        assert settings.storage_path.name == "store.json"

    def test_env_overrides(self, tmp_path):
        settings = AppSettings.from_env({
            "ROU_LEASE_STORAGE_PATH": str(tmp_path / "s.json"),
            "ROU_LEASE_HISTORY_LIMIT": "25",
            "ROU_LEASE_CURRENCY_LABEL": "KRW",
            "UNRELATED": "x",
        })
        assert settings.storage_path == Path(tmp_path / "s.json")
        assert settings.history_limit == 25
        assert settings.currency_label == "KRW"

    def test_limit_out_of_range(self):
        with pytest.raises(ValidationError):
            AppSettings.from_env({"ROU_LEASE_HISTORY_LIMIT": "0"})


# ═══════════════════════════════════════════════════════════════════════════
# Logging
# ═══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    reset_logging()
    configure_logging(level="DEBUG", stream=stream)
    yield stream
    reset_logging()


def _records(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestLogging:
    def test_namespace(self):
        assert get_logger("engine").name == "rou_lease.engine"
        assert get_logger("rou_lease.api").name == "rou_lease.api"

    def test_json_line_with_extras(self, log_stream):
        get_logger("engine").info("lease_calculated", extra={"periods": 24})

        (record,) = _records(log_stream)
        assert record["level"] == "INFO"
        assert record["logger"] == "rou_lease.engine"
        assert record["message"] == "lease_calculated"
        assert record["periods"] == 24

    def test_exception_code_included(self, log_stream):
        try:
            raise InputError(["Start date is required."])
        except InputError:
            get_logger("engine").exception("contract_rejected")

        (record,) = _records(log_stream)
        assert record["exc_type"] == "InputError"
        assert record["exc_code"] == "INVALID_INPUT"
        assert "traceback" in record

    def test_configure_is_idempotent(self, log_stream):
        configure_logging(level="DEBUG", stream=io.StringIO())
        structured = [
            h for h in logging.getLogger("rou_lease").handlers
            if isinstance(h.formatter, StructuredFormatter)
        ]
        assert len(structured) == 1

        get_logger("engine").info("once")
        assert len(_records(log_stream)) == 1
