"""Tests for RXT logging setup."""

import io
import json
import logging

import pytest

from rxt.utils.logging import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter():
    record = logging.LogRecord(
        "rxt.operators.sql.extractor", logging.WARNING, __file__, 10, "count failed: %s", ("boom",), None
    )
    record.query = "SELECT 1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "rxt.operators.sql.extractor"
    assert payload["message"] == "count failed: boom"
    assert payload["query"] == "SELECT 1"
    assert payload["timestamp"].endswith("Z")


def test_setup_logging_json(restore_root_logger):
    stream = io.StringIO()
    setup_logging(level="DEBUG", json_format=True, stream=stream)

    logging.getLogger("rxt.test").debug("hello")

    assert len(restore_root_logger.handlers) == 1
    assert json.loads(stream.getvalue())["message"] == "hello"
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_level(restore_root_logger):
    stream = io.StringIO()
    setup_logging(level="WARNING", stream=stream)

    logging.getLogger("rxt.test").info("hidden")
    logging.getLogger("rxt.test").warning("shown")

    assert "hidden" not in stream.getvalue()
    assert "[WARNING] rxt.test: shown" in stream.getvalue()
