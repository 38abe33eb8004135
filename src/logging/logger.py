# src/logging/logger.py — v2
"""Log setup for build runs: stderr plus an optional size-rotated file.

Records carry the running command and the file being processed (see
logging.context), rendered either as one JSON object per line or as a
short text line.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

from cnchar_data.logging.context import get_context

ROOT_LOGGER = "cnchar_data"

_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*([KMG])B\s*$", re.IGNORECASE)


def parse_size(size: str) -> int:
    """'10MB' -> 10485760. Units: KB, MB, GB."""
    match = _SIZE_PATTERN.match(size)
    if match is None:
        raise ValueError(f"Invalid size format: {size!r}. Use e.g. '10MB'.")
    exponent = "KMG".index(match.group(2).upper()) + 1
    return int(match.group(1)) * 1024**exponent


def rotating_file_handler(
    log_file: str | Path, rotation: str = "10MB", retention: int = 5,
) -> RotatingFileHandler:
    """File handler rolling over at ``rotation`` bytes, keeping ``retention`` backups."""
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=parse_size(rotation), backupCount=retention, encoding="utf-8",
    )


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """``12:00:01 [INFO    ] [voice] (hello.mp3) message``"""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = " ".join(
            part for part in (
                datetime.fromtimestamp(record.created).strftime("%H:%M:%S"),
                f"[{record.levelname:8s}]",
                f"[{ctx.command}]" if ctx.command else "",
                f"({ctx.source_file})" if ctx.source_file else "",
                record.getMessage(),
            ) if part
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    retention: int = 5,
) -> None:
    """(Re)configure the ``cnchar_data`` logger; safe to call more than once."""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for old in root.handlers:
        old.close()
    root.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(rotating_file_handler(log_file, rotation, retention))

    formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
