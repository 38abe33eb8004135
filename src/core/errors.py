# src/core/errors.py — v1
"""Error hierarchy for data preparation runs.

Two kinds of failure exist:

- RecoverableError: a single input file could not be read or parsed.
  DirectoryAggregator absorbs these, records the file as skipped and
  moves on to the next entry.
- FatalError: the run cannot produce its output (missing source
  directory, unwritable output, unknown restore key). Nothing absorbs
  these; the CLI logs them and exits non-zero.
"""

from __future__ import annotations

from pathlib import Path


class DataPrepError(Exception):
    """Base class for all data preparation errors."""


class RecoverableError(DataPrepError):
    """Per-file failure. Skipped by the aggregator, never escalated there."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path.name}: {message}")


class ParseError(RecoverableError):
    """File content is not valid JSON."""


class FileReadError(RecoverableError):
    """File could not be read or decoded."""


class FatalError(DataPrepError):
    """Aborts the whole run."""


class DirectoryNotFoundError(FatalError):
    """Source directory does not exist or is not a directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)
        super().__init__(f"Source directory does not exist: {self.directory}")


class InputNotFoundError(FatalError):
    """Single input file of a run does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Input file does not exist: {self.path}")


class OutputWriteError(FatalError):
    """Output file could not be written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to write {self.path}: {reason}")


class KeyNotFoundError(FatalError, KeyError):
    """Requested key is absent from an aggregate document."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key not found: {key}")

    def __str__(self) -> str:
        return self.args[0]


class PayloadDecodeError(FatalError):
    """Stored payload is not a decodable audio record."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Cannot decode payload for {key!r}: {reason}")
