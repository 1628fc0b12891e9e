"""Structured Logging — one JSON object per line, or plain text for local runs.

Invariants:
    - Every JSON line has timestamp (UTC, from the record), level, logger, message
    - Request and calendar context (special_day_id, error_code, path, year,
      month) is copied from `extra=` when present, nothing else is
    - setup_logging is idempotent: calling it again swaps the handler it
      installed before instead of stacking a second one
"""

import json
import logging
from datetime import datetime, timezone

_CONTEXT_FIELDS = ("special_day_id", "error_code", "path", "year", "month")
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_installed: logging.Handler | None = None


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key]) for key in _CONTEXT_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # year/month are ints, special_day_id may be a UUID
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the Keepsake handler on the root logger and return it."""
    global _installed
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root = logging.getLogger()
    if _installed is not None:
        root.removeHandler(_installed)
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    _installed = handler
    return handler
