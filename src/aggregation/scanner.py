# src/aggregation/scanner.py — v1
"""Directory aggregator: scan a directory, transform each matching file,
collect the results into one AggregateDocument keyed by filename stem.

Workflow:
    1. Check the source directory exists (fatal otherwise, no partial output)
    2. List entries in directory-listing order, keep those whose extension
       matches the filter case-insensitively
    3. Run the transform on each candidate; a RecoverableError skips that
       file and the scan continues
    4. Return an AggregationResult (document + skipped files)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from cnchar_data.core.errors import DirectoryNotFoundError, RecoverableError
from cnchar_data.core.models import (
    AggregationResult,
    CandidateFile,
    DrawRecord,
    SkippedFile,
    VoiceRecord,
)
from cnchar_data.logging.context import source_file_context

logger = logging.getLogger(__name__)

Transform = Callable[[Path], DrawRecord | VoiceRecord]


def normalize_extension(extension: str) -> str:
    """'.JSON', 'json' and '.json' all normalize to '.json'."""
    ext = extension.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


class DirectoryAggregator:
    """Merge every file of one extension in a directory into a single document."""

    def __init__(self, extension: str, transform: Transform) -> None:
        self._extension = normalize_extension(extension)
        self._transform = transform

    @property
    def extension(self) -> str:
        return self._extension

    def scan(self, directory: Path) -> list[CandidateFile]:
        """List matching files without reading them.

        Raises:
            DirectoryNotFoundError: If ``directory`` is missing or not a directory.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise DirectoryNotFoundError(directory)

        candidates: list[CandidateFile] = []
        for path in directory.iterdir():
            if path.suffix.lower() != self._extension:
                continue
            candidates.append(
                CandidateFile(path=path, filename=path.name, key=path.stem)
            )
        return candidates

    def aggregate(self, directory: Path) -> AggregationResult:
        """Scan ``directory`` and transform every candidate into a record."""
        candidates = self.scan(directory)
        logger.info(
            "Found %d %s files in %s", len(candidates), self._extension, directory,
        )

        result = AggregationResult(
            directory=str(directory),
            extension=self._extension,
            candidates_found=len(candidates),
        )

        for candidate in candidates:
            with source_file_context(candidate.filename):
                try:
                    record = self._transform(candidate.path)
                except RecoverableError as exc:
                    logger.error("Failed to process %s: %s", candidate.filename, exc)
                    result.skipped.append(
                        SkippedFile(filename=candidate.filename, reason=str(exc))
                    )
                    continue

                if result.document.add(candidate.key, record):
                    logger.warning(
                        "Duplicate key %r: %s replaces the previous value",
                        candidate.key, candidate.filename,
                    )
                logger.info("Processed %s -> %s", candidate.filename, candidate.key)

        return result


def aggregate(
    directory: Path, extension: str, transform: Transform,
) -> AggregationResult:
    """Functional shortcut for ``DirectoryAggregator(extension, transform).aggregate(directory)``."""
    return DirectoryAggregator(extension, transform).aggregate(directory)
