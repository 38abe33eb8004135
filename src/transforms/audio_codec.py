# src/transforms/audio_codec.py — v1
"""Audio clip <-> base64 record conversion.

``encode_audio`` turns one mp3 file into a VoiceRecord; ``restore_audio``
is its exact inverse and writes the original bytes back to disk.
Decoding uses strict base64 so a corrupted payload fails loudly instead of
producing a truncated file.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from cnchar_data.config.settings import Settings
from cnchar_data.core.errors import (
    FileReadError,
    KeyNotFoundError,
    OutputWriteError,
    PayloadDecodeError,
)
from cnchar_data.core.models import AggregateDocument, VoiceRecord

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def size_in_mb(size_bytes: int) -> float:
    """Bytes to megabytes, rounded to 2 decimals."""
    return round(size_bytes / BYTES_PER_MB, 2)


def encode_bytes(raw: bytes, original_name: str) -> VoiceRecord:
    """Build a VoiceRecord from raw bytes already in memory."""
    return VoiceRecord(
        data=base64.b64encode(raw).decode("ascii"),
        original_name=original_name,
        size=len(raw),
        size_mb=size_in_mb(len(raw)),
    )


def encode_audio(path: Path) -> VoiceRecord:
    """Read ``path`` as bytes and encode it into a VoiceRecord.

    Raises:
        FileReadError: If the file cannot be read.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise FileReadError(path, str(exc)) from exc

    logger.info("Processing %s (%.2fMB)", path.name, size_in_mb(len(raw)))
    return encode_bytes(raw, path.name)


def decode_payload(record: VoiceRecord, key: str = "") -> bytes:
    """Decode the base64 payload of ``record`` back to the original bytes."""
    try:
        return base64.b64decode(record.data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise PayloadDecodeError(key or record.original_name, str(exc)) from exc


def _lookup(
    document: AggregateDocument | Mapping[str, Any], key: str,
) -> VoiceRecord:
    if key not in document:
        raise KeyNotFoundError(key)
    value = document[key]
    if isinstance(value, VoiceRecord):
        return value
    if isinstance(value, Mapping):
        try:
            return VoiceRecord.model_validate(value)
        except ValueError as exc:
            raise PayloadDecodeError(key, "not a voice record") from exc
    raise PayloadDecodeError(key, f"not a voice record ({type(value).__name__})")


def restore_audio(
    document: AggregateDocument | Mapping[str, Any],
    key: str,
    output_dir: Path | None = None,
    settings: Settings | None = None,
) -> Path:
    """Write the audio file stored under ``key`` to ``output_dir/originalName``.

    ``document`` is either an in-memory AggregateDocument or the plain dict
    loaded from a voice_data.json file. ``output_dir`` defaults to the
    ``restore_dir`` setting and is created with its parents when missing.

    Returns:
        Path of the restored file.

    Raises:
        KeyNotFoundError: If ``key`` is not in ``document``.
        PayloadDecodeError: If the stored value is not a decodable voice record.
        OutputWriteError: If the file cannot be written.
    """
    record = _lookup(document, key)
    raw = decode_payload(record, key)

    if output_dir is None:
        output_dir = (settings or Settings()).restore_dir
    output_dir = Path(output_dir)
    output_path = output_dir / record.original_name
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(raw)
    except OSError as exc:
        raise OutputWriteError(output_path, str(exc)) from exc

    logger.info("Restored %s (%d bytes)", output_path, len(raw))
    return output_path
