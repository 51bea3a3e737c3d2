"""Structured Logging — JSON formatter and setup for the domain shell.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, field, command, entity_id, error_count) surfaced when present
    - JSON format by default, human-readable ("text") on request
    - Calling setup_logging twice does not duplicate handlers

Design Decisions:
    - EXTRA_KEYS is the one list of structured fields the domain shell passes via extra=
    - Core modules never log; only domain/ (command runner, wallet opening) does
"""

import json
import logging
from datetime import datetime, timezone

from pangolin.config import Settings, get_settings

EXTRA_KEYS: tuple[str, ...] = (
    "error_code", "field", "command", "entity_id", "error_count",
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
        for key in EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


_HANDLER_NAME = "pangolin"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging for the application; returns the installed handler."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """setup_logging driven by PANGOLIN_LOG_LEVEL / PANGOLIN_LOG_FORMAT."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
