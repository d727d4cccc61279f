"""Structured Logging — one root handler, JSON in production, key=value text in development.

Invariants:
    - Every JSON line carries timestamp, level, logger and message
    - Only whitelisted extras are emitted (API path/method/status, push event, role,
      error code, request path, duration); tokens and form values never are
    - HTTP and Socket.IO client libraries log at WARNING or above
    - setup_logging() can run once per app lifespan without stacking handlers

Design Decisions:
    - Handler identified by name so tests and reloads replace it in place
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_KEYS = (
    "api_path", "method", "status_code", "event", "role",
    "error_code", "request_path", "duration_ms",
)

# Per-request chatter from these duplicates our own API/push logs
QUIET_LOGGERS = ("httpx", "httpcore", "socketio", "engineio")

HANDLER_NAME = "binhub"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s%(extras)s"


def _extras(record: logging.LogRecord) -> dict:
    found = {}
    for key in EXTRA_KEYS:
        val = record.__dict__.get(key)
        if val is not None:
            found[key] = val
    return found


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line with the same extras appended as key=value."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        pairs = " ".join(f"{k}={v}" for k, v in _extras(record).items())
        record.extras = f" [{pairs}]" if pairs else ""
        return super().format(record)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install (or replace) the app's root handler."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
