# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for structured JSON logging."""

import json
import logging
import os
import sys
from io import StringIO
from unittest.mock import patch

import pytest

from goqueue_bridge import JSONFormatter, configure_logging

LOGGER_NAME = "goqueue_bridge_test_json"


@pytest.fixture
def stream():
    yield StringIO()
    target = logging.getLogger(LOGGER_NAME)
    for handler in list(target.handlers):
        target.removeHandler(handler)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_fields(self):
        """Test the structured fields of a formatted record."""
        record = logging.LogRecord(
            name="goqueue_bridge.http_publisher",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Publish %s failed",
            args=("evt",),
            exc_info=None,
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "goqueue_bridge.http_publisher"
        assert entry["message"] == "Publish evt failed"
        assert entry["timestamp"].endswith("Z")
        assert "extra" not in entry

    def test_format_extra_and_exception(self):
        """Test that extra fields and tracebacks are included."""
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()

        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), exc_info)
        record.extra = {"event": "order.created"}

        entry = json.loads(JSONFormatter().format(record))

        assert entry["extra"] == {"event": "order.created"}
        assert "RuntimeError: boom" in entry["exception"]


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_emits_json_lines(self, stream):
        """Test that configured loggers write one JSON object per line."""
        logger = configure_logging(level="DEBUG", name=LOGGER_NAME, stream=stream)
        logger.getChild("sub").debug("hello")

        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "hello"
        assert entry["logger"] == f"{LOGGER_NAME}.sub"

    def test_level_filtering(self, stream):
        """Test that records below the level are dropped."""
        logger = configure_logging(level="WARNING", name=LOGGER_NAME, stream=stream)
        logger.info("quiet")
        logger.warning("loud")

        lines = stream.getvalue().strip().splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["loud"]

    def test_reconfigure_replaces_handler(self, stream):
        """Test that repeated calls do not duplicate output."""
        configure_logging(level="INFO", name=LOGGER_NAME, stream=stream)
        logger = configure_logging(level="INFO", name=LOGGER_NAME, stream=stream)
        logger.info("once")

        assert len(stream.getvalue().strip().splitlines()) == 1

    def test_level_from_env(self, stream):
        """Test that LOG_LEVEL is used when no level is given."""
        with patch.dict(os.environ, {"LOG_LEVEL": "error"}):
            logger = configure_logging(name=LOGGER_NAME, stream=stream)

        assert logger.level == logging.ERROR

    def test_invalid_level(self):
        """Test that unknown levels are rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="LOUD", name=LOGGER_NAME)
