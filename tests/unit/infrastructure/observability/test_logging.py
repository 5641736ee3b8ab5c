"""Tests for structured logging."""

import json
import logging
import sys

from tunegate.domain.exceptions import UpstreamUnavailable
from tunegate.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
    configure_logging,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self):
        """Test setting and getting correlation ID."""
        result = set_correlation_id("test-123-abc")
        assert result == "test-123-abc"
        assert get_correlation_id() == "test-123-abc"

    def test_set_correlation_id_generates_uuid_when_none(self):
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_attaches_correlation_id(self):
        """Test that the filter copies the context ID onto the record."""
        set_correlation_id("corr-filter")
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "corr-filter"


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self):
        configure_logging(log_level="DEBUG", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() <= logging.DEBUG

    def test_configure_logging_info_level(self):
        configure_logging(log_level="INFO", json_format=False, app_name="test-app")
        assert logging.getLogger("test").getEffectiveLevel() == logging.INFO

    def test_configure_logging_replaces_handlers(self):
        """Calling configure twice must not stack handlers."""
        configure_logging(log_level="INFO", json_format=True, app_name="test-app")
        configure_logging(log_level="INFO", json_format=True, app_name="test-app")
        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, CustomJsonFormatter)

    def test_configure_logging_text_format(self):
        configure_logging(log_level="INFO", json_format=False, app_name="test-app")
        root_logger = logging.getLogger()
        assert isinstance(root_logger.handlers[0].formatter, CompactExceptionFormatter)

    def test_httpx_logger_quieted(self):
        configure_logging(log_level="DEBUG", json_format=False)
        assert logging.getLogger("httpx").level == logging.WARNING


class TestFormatters:
    """Test the JSON and compact formatters."""

    def test_json_formatter_includes_correlation_id(self):
        formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        record = logging.LogRecord(
            "tunegate.test", logging.WARNING, __file__, 10, "page %d failed", (2,), None
        )
        record.correlation_id = "corr-json"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "page 2 failed"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "tunegate.test"
        assert payload["correlation_id"] == "corr-json"

    def test_compact_formatter_shows_chain_root_first(self):
        formatter = CompactExceptionFormatter()
        try:
            try:
                raise TimeoutError("read timed out")
            except TimeoutError as e:
                raise UpstreamUnavailable("catalog request timed out") from e
        except UpstreamUnavailable:
            text = formatter.formatException(sys.exc_info())

        lines = [line for line in text.splitlines() if line.startswith("╰─►")]
        assert lines[0] == "╰─► TimeoutError: read timed out"
        assert lines[1] == "╰─► UpstreamUnavailable: catalog request timed out"
