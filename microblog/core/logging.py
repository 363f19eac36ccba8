"""Microblog Logging Configuration."""

import json
import logging
import sys
from typing import Literal

DEV_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Extra attributes copied into structured output when a call site sets them,
# e.g. logger.warning("...", extra={"status_code": 403, "token_failure": "revoked"})
CONTEXT_FIELDS = ("status_code", "token_failure", "method", "path")

# Library loggers that are noisy at INFO
_QUIET_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "redis", "asyncpg")


class JSONFormatter(logging.Formatter):
    """One JSON object per log line.

    Handles and emails are user-controlled and end up in messages, so every
    value goes through json.dumps() rather than a format string.
    """

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    format_type: Literal["structured", "dev"] = "dev",
) -> None:
    """
    Configure the root logger for the service.

    Args:
        level: Log level name, already validated by Settings
        format_type: 'structured' for JSON lines, 'dev' for readable text
    """
    numeric_level = logging.getLevelName(level.upper())
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.root.handlers = [handler]
    logging.root.setLevel(numeric_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if numeric_level == logging.DEBUG else logging.WARNING
    )

    get_logger("logging").info(f"Logging configured: level={level}, format={format_type}")


def get_logger(name: str) -> logging.Logger:
    """Logger under the microblog namespace."""
    return logging.getLogger(f"microblog.{name}")
