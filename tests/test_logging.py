"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from app.utils.logging import StructuredLogFormatter
from app.utils.logging import clear_request_context
from app.utils.logging import get_logger
from app.utils.logging import log_response
from app.utils.logging import mask_pii
from app.utils.logging import set_request_context


def _record(level: int = logging.INFO, msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", level, __file__, 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _reset_context():
    yield
    clear_request_context()


class TestMaskPii:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("", "***"),
            ("abc", "a***"),
            ("4f1c2b9e-0000", "4f1c***"),
        ],
    )
    def test_masking(self, value: str, expected: str) -> None:
        assert mask_pii(value) == expected


class TestStructuredLogFormatter:
    def test_basic_fields(self) -> None:
        payload = json.loads(StructuredLogFormatter().format(_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.test"
        assert payload["message"] == "hello"
        assert "source" not in payload
        assert "extra" not in payload

    def test_extra_fields_are_grouped(self) -> None:
        payload = json.loads(
            StructuredLogFormatter().format(_record(backend_status=503))
        )

        assert payload["extra"] == {"backend_status": 503}

    def test_warning_includes_source(self) -> None:
        payload = json.loads(StructuredLogFormatter().format(_record(logging.WARNING)))

        assert payload["source"]["line"] == 10

    def test_request_context(self) -> None:
        set_request_context("req-1", "proxy-trackier")

        payload = json.loads(StructuredLogFormatter().format(_record()))

        assert payload["request_id"] == "req-1"
        assert payload["function"] == "proxy-trackier"

    def test_exception_info(self) -> None:
        try:
            raise ValueError("bad value")
        except ValueError:
            record = _record(logging.ERROR)
            record.exc_info = sys.exc_info()

        payload = json.loads(StructuredLogFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad value"


class TestContextLogger:
    def test_adapter_context_is_merged(self, caplog) -> None:
        logger = get_logger("app.test.adapter", route="trackier-trigger")

        with caplog.at_level(logging.INFO, logger="app.test.adapter"):
            logger.info("forwarded", extra={"status": 200})

        (record,) = caplog.records
        assert record.route == "trackier-trigger"
        assert record.status == 200

    def test_call_extra_wins(self, caplog) -> None:
        logger = get_logger("app.test.adapter", route="a")

        with caplog.at_level(logging.INFO, logger="app.test.adapter"):
            logger.info("x", extra={"route": "b"})

        assert caplog.records[0].route == "b"


class TestLogResponse:
    def test_duration_is_rounded(self, caplog) -> None:
        logger = get_logger("app.test.response")

        with caplog.at_level(logging.INFO, logger="app.test.response"):
            log_response(logger, 200, 12.3456)

        (record,) = caplog.records
        assert record.status_code == 200
        assert record.duration_ms == 12.35

    def test_error_status_logs_warning(self, caplog) -> None:
        logger = get_logger("app.test.response")

        with caplog.at_level(logging.INFO, logger="app.test.response"):
            log_response(logger, 503)

        (record,) = caplog.records
        assert record.levelno == logging.WARNING
        assert not hasattr(record, "duration_ms")
