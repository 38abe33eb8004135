# src/storage/json_writer.py — v1
"""JSON document output: indented aggregate files and minified copies.

Documents are serialized fully in memory and written with a single call.
Non-ASCII characters are kept literal (stroke data is keyed by CJK
characters) and the output is UTF-8.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from cnchar_data.core.errors import InputNotFoundError, OutputWriteError, ParseError
from cnchar_data.core.models import AggregateDocument
from cnchar_data.transforms.json_transform import loads_strict

logger = logging.getLogger(__name__)

COMPACT_SEPARATORS = (",", ":")


def dumps_document(data: AggregateDocument | Any, indent: int | None = 2) -> str:
    """Serialize a document (or any JSON value) to text.

    ``indent=None`` produces the minimal-whitespace form.
    """
    if isinstance(data, AggregateDocument):
        data = data.to_json_obj()
    if indent is None:
        return json.dumps(
            data, ensure_ascii=False, allow_nan=False, separators=COMPACT_SEPARATORS,
        )
    return json.dumps(data, ensure_ascii=False, allow_nan=False, indent=indent)


def write_text(path: Path, text: str) -> int:
    """Write ``text`` to ``path`` (overwriting) and return the byte count.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    path = Path(path)
    payload = text.encode("utf-8")
    try:
        path.write_bytes(payload)
    except OSError as exc:
        raise OutputWriteError(path, str(exc)) from exc
    return len(payload)


def write_document(
    data: AggregateDocument | Any, path: Path, indent: int = 2,
) -> int:
    """Write ``data`` as indented JSON to ``path``. Returns bytes written."""
    written = write_text(path, dumps_document(data, indent=indent))
    logger.info("Saved %s (%d bytes)", path, written)
    return written


def minified_path(path: Path) -> Path:
    """Sibling path for the minified copy: voice_data.json -> voice_data.min.json."""
    path = Path(path)
    return path.with_name(f"{path.stem}.min{path.suffix or '.json'}")


def compact(input_path: Path, output_path: Path | None = None) -> Path:
    """Re-serialize the JSON document at ``input_path`` without whitespace.

    Single input, single output: any failure aborts.

    Returns:
        Path of the minified file.

    Raises:
        InputNotFoundError: If ``input_path`` does not exist.
        ParseError: If the input is not valid JSON.
        OutputWriteError: If the output cannot be written.
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else minified_path(input_path)

    if not input_path.is_file():
        raise InputNotFoundError(input_path)

    try:
        data = loads_strict(input_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ParseError(input_path, f"not UTF-8 text ({exc})") from exc
    except ValueError as exc:
        raise ParseError(input_path, f"invalid JSON ({exc})") from exc

    written = write_text(output_path, dumps_document(data, indent=None))
    logger.info("Minified %s -> %s (%d bytes)", input_path, output_path, written)
    return output_path
