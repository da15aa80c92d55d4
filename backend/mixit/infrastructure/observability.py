"""Structured Logging — JSON formatter and setup for engine observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (owner_id, pair_key, element_id, attempt, ...) surfaced when present
    - JSON format by default, human-readable when log_format != "json"
    - setup_logging is idempotent: the Mixit handler is installed at most once
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "owner_id", "pair_key", "element_id", "attempt", "state",
    "error_code", "input_tokens", "output_tokens",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging for the engine and return the installed handler."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_mixit", False):
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler._mixit = True  # type: ignore[attr-defined]
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
