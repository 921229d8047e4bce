"""
Logging setup for applications embedding the parser.

The library itself only logs through ``logging.getLogger(__name__)`` loggers
under the ``splitparse`` namespace and never configures handlers on import.
Call ``setup_logging`` from application code to get console output, either
human-readable or as JSON Lines.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

ROOT_LOGGER_NAME = "splitparse"


class JSONLFormatter(logging.Formatter):
    """
    Formats log records as JSON Lines.

    Example output:
    {"timestamp":"2024-01-15T10:30:45.123Z","level":"INFO","logger":"splitparse.core.parser","message":"Parsed run"}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, separators=(",", ":"))


class ConsoleFormatter(logging.Formatter):
    """Human-readable single line format."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-7s [%(name)s] %(message)s")


def setup_logging(
    level: int = logging.INFO,
    stream: TextIO | None = None,
    json_lines: bool = False,
) -> logging.Logger:
    """
    Attach a single stream handler to the ``splitparse`` logger.

    Args:
        level: Minimum log level
        stream: Output stream, stderr by default
        json_lines: Emit JSON Lines instead of plain text

    Returns:
        The configured package logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Remove existing handlers
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONLFormatter() if json_lines else ConsoleFormatter())
    handler.setLevel(level)
    root_logger.addHandler(handler)

    return root_logger
