"""Tests for structlog configuration helpers."""

import json
import logging
from unittest.mock import Mock

import structlog

from tradedesk_app.logging.config import (
    configure_logging,
    get_logger,
    get_market_logger,
    log_tick_summary,
)


class TestLoggingConfig:
    """Test logging configuration."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_configure_json_logging(self, caplog):
        """JSON output carries the event and bound fields."""
        configure_logging(level="DEBUG", format_json=True)
        caplog.set_level(logging.DEBUG)

        structlog.get_logger("tests.json").info("hello", symbol="AAPL")

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "hello"
        assert payload["symbol"] == "AAPL"
        assert payload["level"] == "info"

    def test_get_logger_returns_logger(self):
        assert get_logger("tests.plain") is not None

    def test_market_logger_binds_subsystem(self):
        configure_logging(level="INFO")
        logger = get_market_logger("tests.market")

        assert structlog.get_context(logger)["subsystem"] == "market_simulator"

    def test_log_tick_summary_fields(self):
        logger = Mock()
        bound = logger.bind.return_value

        log_tick_summary(logger, tick_count=4, symbols_updated=10, duration_ms=1.23456)

        logger.bind.assert_called_once_with(tick_count=4, symbols_updated=10, duration_ms=1.235)
        bound.debug.assert_called_once_with("Market tick applied")

    def test_log_tick_summary_with_context(self):
        logger = Mock()
        bound = logger.bind.return_value

        log_tick_summary(logger, 1, 2, 0.5, context={"reason": "manual"})

        bound.bind.assert_called_once_with(context={"reason": "manual"})
        bound.bind.return_value.debug.assert_called_once()
