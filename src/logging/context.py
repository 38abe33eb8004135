# src/logging/context.py — v1
"""Contextual logging support: attach the running command and current file to log records."""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

_command: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "command", default=None
)
_source_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source_file", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    command: str | None = None
    source_file: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(command=_command.get(), source_file=_source_file.get())


def set_command_context(command: str) -> None:
    """Set run-level context (called once per top-level run)."""
    _command.set(command)


@contextmanager
def source_file_context(filename: str) -> Iterator[None]:
    """Tag every record logged inside the block with ``filename``."""
    token = _source_file.set(filename)
    try:
        yield
    finally:
        _source_file.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _command.set(None)
    _source_file.set(None)
