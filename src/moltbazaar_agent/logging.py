"""
JSON log output for the client and the CLI.

Each record is one JSON object per line. Fields passed with ``extra=``
(``method``, ``url``, ``status_code``, ``action``, ``error``) become
top-level keys, so a failed bid can be found by filtering on
``status_code`` without parsing the message.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from moltbazaar_agent.config import LoggingConfig

LOGGER_NAME = "moltbazaar_agent"
LOG_FILENAME = "moltbazaar-agent.log"
LOG_BACKUP_DAYS = 7

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in entry:
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(config: LoggingConfig, stream: IO[str] | None = None) -> logging.Logger:
    """Configure the package logger from the ``logging`` config section.

    Logs go to ``stream`` (stderr by default, keeping stdout free for CLI
    results) and, when ``config.directory`` is set, to a file rotated at
    UTC midnight that keeps a week of history.

    Raises:
        ValueError: If ``config.level`` is not a known level name.
    """
    level_name = config.level.upper()
    level = logging.getLevelNamesMapping().get(level_name)
    if level is None:
        msg = f"Invalid log level: {config.level}"
        raise ValueError(msg)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False

    formatter = JSONFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if config.directory is not None:
        directory = Path(config.directory).expanduser()
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(
            TimedRotatingFileHandler(
                directory / LOG_FILENAME,
                when="midnight",
                backupCount=LOG_BACKUP_DAYS,
                utc=True,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
