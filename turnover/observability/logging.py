"""
Log formatting for the tracker.

The save coalescer writes from its own thread, so every line carries the
thread name alongside the logger. Values passed with ``extra=`` (ranges,
row counts) are emitted as top-level JSON keys.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord has; anything else on a record came from extra=
_STANDARD_ATTRS = frozenset(logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__) | {"message"}

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, thread, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        entry.update(_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Single-line format for a terminal; the thread is shown when it is not the main one."""

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        thread = "" if record.threadName == "MainThread" else f" ({record.threadName})"
        line = f"{when} {record.levelname:<7} {record.name}{thread}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", json_format: bool | None = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: One of LEVELS, case-insensitive
        json_format: Force JSON (True) or human (False) output. None picks
            human output when stderr is a terminal.
    """
    level = level.upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}, expected one of {', '.join(LEVELS)}")
    if json_format is None:
        json_format = not sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)

    # googleapiclient logs discovery details at INFO
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
