"""Structured logging — JSON formatter fields and idempotent setup."""

import json
import logging

from mixit.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "mixit.test", logging.INFO, __file__, 1, "resolved %s", ("Steam",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "mixit.test"
    assert out["message"] == "resolved Steam"


def test_json_formatter_surfaces_extra_fields():
    out = json.loads(JSONFormatter().format(
        _record(pair_key="a+b", attempt=2, owner_id="u1", unrelated="x"),
    ))
    assert out["pair_key"] == "a+b"
    assert out["attempt"] == 2
    assert out["owner_id"] == "u1"
    assert "unrelated" not in out


def test_setup_logging_installs_one_handler():
    previous_level = logging.root.level
    try:
        setup_logging("DEBUG", "json")
        handler = setup_logging("WARNING", "text")
        ours = [h for h in logging.root.handlers if getattr(h, "_mixit", False)]
        assert ours == [handler]
        assert logging.root.level == logging.WARNING
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        for h in list(logging.root.handlers):
            if getattr(h, "_mixit", False):
                logging.root.removeHandler(h)
        logging.root.setLevel(previous_level)
