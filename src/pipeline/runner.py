# src/pipeline/runner.py — v1
"""Top-level runs: draw merge, voice encoding, minify.

Each run resolves its paths from Settings, aggregates (or reads) its
input, writes one output file and returns a RunReport whose ``preview``
lines are meant for the console. Fatal errors propagate to the caller.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from cnchar_data.aggregation.scanner import DirectoryAggregator
from cnchar_data.config.settings import Settings
from cnchar_data.core.models import AggregateDocument, RunReport, VoiceRecord
from cnchar_data.logging.context import set_command_context
from cnchar_data.stats.summary import format_summary, summarize
from cnchar_data.storage.json_writer import compact, dumps_document, write_document
from cnchar_data.transforms.audio_codec import encode_audio, size_in_mb
from cnchar_data.transforms.json_transform import load_json

logger = logging.getLogger(__name__)


def run_draw(settings: Settings) -> RunReport:
    """Merge every stroke JSON file of ``draw_input_dir`` into ``draw_output_file``."""
    set_command_context("draw")
    t0 = time.perf_counter()
    logger.info("Merging JSON files from %s", settings.draw_input_dir)

    aggregator = DirectoryAggregator(settings.draw_extension, load_json)
    result = aggregator.aggregate(settings.draw_input_dir)
    logger.info("Merge complete: %d files", len(result.document))

    written = write_document(
        result.document, settings.draw_output_file, indent=settings.json_indent,
    )

    text = dumps_document(result.document, indent=settings.json_indent)
    preview = ["Preview:", text[: settings.preview_chars] + "..."]

    return RunReport(
        command="draw",
        input_path=str(settings.draw_input_dir),
        output_path=str(settings.draw_output_file),
        record_count=len(result.document),
        skipped=result.skipped,
        output_size_bytes=written,
        duration_seconds=round(time.perf_counter() - t0, 2),
        preview=preview,
    )


def voice_preview(document: AggregateDocument) -> dict[str, dict[str, object]]:
    """Per-record metadata without the base64 payload."""
    preview: dict[str, dict[str, object]] = {}
    for key, rec in document.records.items():
        if not isinstance(rec, VoiceRecord):
            continue
        preview[key] = {
            "originalName": rec.original_name,
            "sizeMB": rec.size_mb,
            "mimeType": rec.mime_type,
            "dataLength": len(rec.data),
        }
    return preview


def run_voice(settings: Settings) -> RunReport:
    """Encode every mp3 of ``voice_input_dir`` into ``voice_output_file``."""
    set_command_context("voice")
    t0 = time.perf_counter()
    logger.info("Encoding audio files from %s", settings.voice_input_dir)
    logger.warning(
        "Base64-embedding audio inflates size by about a third; "
        "the whole document is held in memory"
    )

    aggregator = DirectoryAggregator(settings.voice_extension, encode_audio)
    result = aggregator.aggregate(settings.voice_input_dir)

    summary = summarize(result.document)
    lines = format_summary(summary)
    for line in lines[1:]:
        logger.info(line)

    written = write_document(
        result.document, settings.voice_output_file, indent=settings.json_indent,
    )
    logger.info("Output size: %.2fMB", size_in_mb(written))

    preview = lines + [
        f"Output size:     {size_in_mb(written):.2f}MB",
        "=== Preview ===",
        json.dumps(voice_preview(result.document), ensure_ascii=False, indent=2),
    ]

    return RunReport(
        command="voice",
        input_path=str(settings.voice_input_dir),
        output_path=str(settings.voice_output_file),
        record_count=len(result.document),
        skipped=result.skipped,
        output_size_bytes=written,
        duration_seconds=round(time.perf_counter() - t0, 2),
        preview=preview,
    )


def run_minify(settings: Settings) -> RunReport:
    """Write a whitespace-free copy of ``minify_input_file``."""
    set_command_context("minify")
    t0 = time.perf_counter()

    output_path = compact(settings.minify_input_file, settings.minify_output_file)
    input_size = Path(settings.minify_input_file).stat().st_size
    output_size = output_path.stat().st_size

    preview = [
        f"Minified JSON saved to {output_path}",
        f"  {input_size} bytes -> {output_size} bytes",
    ]

    return RunReport(
        command="minify",
        input_path=str(settings.minify_input_file),
        output_path=str(output_path),
        record_count=1,
        output_size_bytes=output_size,
        duration_seconds=round(time.perf_counter() - t0, 2),
        preview=preview,
    )
