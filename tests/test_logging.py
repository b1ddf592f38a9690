import json
import logging

import pytest
import structlog

from pinmap.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    structlog.reset_defaults()
    logging.basicConfig(handlers=[logging.StreamHandler()], force=True)


def test_json_lines_carry_service_and_context(capsys):
    setup_logging(level="INFO", log_format="json")

    structlog.contextvars.bind_contextvars(request_id="rid-1")
    try:
        structlog.get_logger("pinmap.test").info("pin_created", pin_id="p1")
    finally:
        structlog.contextvars.clear_contextvars()

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "pin_created"
    assert record["service"] == "pinmap"
    assert record["request_id"] == "rid-1"
    assert record["pin_id"] == "p1"
    assert record["level"] == "info"


def test_level_filters_records(capsys):
    setup_logging(level="WARNING", log_format="json")

    structlog.get_logger("pinmap.test").info("quiet")
    structlog.get_logger("pinmap.test").warning("loud")

    err = capsys.readouterr().err
    assert "quiet" not in err
    assert "loud" in err


def test_single_stream_handler_installed():
    setup_logging(level="INFO", log_format="json")
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert type(handlers[0]) is logging.StreamHandler
