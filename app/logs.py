"""Logging setup for the scoring service.

Controlled via LOG_FORMAT ("text" or "json") and LOG_LEVEL.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        # user_id, date_key, ... passed through `extra=`
        for key, value in record.__dict__.items():
            if key.startswith("score_"):
                entry[key] = value

        return json.dumps(entry, default=str)


def setup_logging(log_format: str = "text", level: str | int = logging.INFO) -> None:
    """Configure the root logger with either JSON or plaintext output."""
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)
