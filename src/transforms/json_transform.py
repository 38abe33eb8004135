# src/transforms/json_transform.py — v1
"""Parse one stroke-drawing JSON file into a DrawRecord.

Parsing is strict: ``NaN``, ``Infinity`` and numbers that overflow a float
are rejected, since the app reads these files with ``JSON.parse``.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from cnchar_data.core.errors import FileReadError, ParseError
from cnchar_data.core.models import DrawRecord


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard token {token}")


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {token}")
    return value


def loads_strict(text: str) -> Any:
    """``json.loads`` limited to standard JSON. Raises ValueError otherwise."""
    return json.loads(
        text, parse_constant=_reject_constant, parse_float=_finite_float,
    )


def load_json(path: Path) -> DrawRecord:
    """Read ``path`` as UTF-8 text and parse it as JSON.

    Raises:
        FileReadError: If the file cannot be read or is not valid UTF-8.
        ParseError: If the content is not valid standard JSON.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(path, str(exc)) from exc

    try:
        content = loads_strict(text)
    except ValueError as exc:
        raise ParseError(path, f"invalid JSON ({exc})") from exc

    return DrawRecord(content=content)
