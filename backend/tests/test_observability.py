"""Structured logging: JSON shape, extra fields, handler replacement."""

import json
import logging

from fever_api.infrastructure import observability
from fever_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        name="fever_api.test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="marked %s", args=("item",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "fever_api.test"
    assert out["message"] == "marked item"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(fever_mark="item", fever_as="read", api_key="secret"),
    ))
    assert out["fever_mark"] == "item"
    assert out["fever_as"] == "read"
    assert "api_key" not in out


def test_setup_logging_replaces_previous_handler():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("DEBUG", "json")
        first = observability._handler
        setup_logging("WARNING", "text")
        second = observability._handler
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert not isinstance(second.formatter, JSONFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
        logging.root.handlers[:] = before
        logging.root.setLevel(level)
