"""Testes para config.logging (configure_logging, filter e formatter JSON)."""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, NOISY_LIBRARY_LOGGERS, VALID_LOG_LEVELS


def _record(msg: str = "msg", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("INFO", logging.INFO),
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("ERROR", logging.ERROR),
        ],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_existing_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging()

        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_quiets_http_library_loggers(self) -> None:
        configure_logging(level="DEBUG")

        for name in NOISY_LIBRARY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_library_loggers_follow_stricter_level(self) -> None:
        configure_logging(level="ERROR")

        assert logging.getLogger("httpx").level == logging.ERROR

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "pedido_bridge"


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_adds_correlation_id_and_service(self) -> None:
        record = _record()

        assert CorrelationIdFilter("svc", lambda: "corr-123").filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "svc"

    def test_preserves_explicit_correlation_id(self) -> None:
        record = _record()
        record.correlation_id = "explicit-id"

        CorrelationIdFilter("svc", lambda: "from-getter").filter(record)

        assert record.correlation_id == "explicit-id"

    def test_empty_string_without_getter(self) -> None:
        record = _record()

        CorrelationIdFilter("svc").filter(record)

        assert record.correlation_id == ""


class TestJsonFormatter:
    """Formatter JSON."""

    def test_required_fields(self) -> None:
        assert set(REQUIRED_LOG_FIELDS) == {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        }
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_output_is_json_with_renamed_fields(self) -> None:
        record = _record("record_persisted")
        record.correlation_id = "abc-123"
        record.service = "pedido_bridge"
        record.attempts = 2

        output = json.loads(create_json_formatter().format(record))

        assert output["message"] == "record_persisted"
        assert output["level"] == "INFO"
        assert output["logger"] == "test.logger"
        assert output["correlation_id"] == "abc-123"
        assert output["attempts"] == 2


def test_get_logger_returns_named_logger() -> None:
    logger = get_logger("app.services.record_persister")

    assert logger is logging.getLogger("app.services.record_persister")
