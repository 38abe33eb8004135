# src/stats/summary.py — v1
"""Statistics over a voice AggregateDocument."""

from __future__ import annotations

from cnchar_data.core.models import AggregateDocument, StatisticsSummary, VoiceRecord


def summarize(document: AggregateDocument) -> StatisticsSummary:
    """Count, total and average size of the voice records in ``document``.

    Totals are summed from the per-record ``sizeMB`` values and rounded to
    2 decimals for display; each record's ``size`` keeps the exact byte count.
    Non-voice records are ignored.
    """
    voice = [
        (key, rec) for key, rec in document.records.items()
        if isinstance(rec, VoiceRecord)
    ]
    count = len(voice)
    total_mb = sum(rec.size_mb for _, rec in voice)
    average_mb = round(total_mb / count, 2) if count > 0 else 0.0

    return StatisticsSummary(
        total_files=count,
        total_size_mb=round(total_mb, 2),
        average_size_mb=average_mb,
        file_keys=[key for key, _ in voice],
    )


def format_summary(summary: StatisticsSummary) -> list[str]:
    """Human-readable report lines."""
    return [
        "=== Statistics ===",
        f"Files processed: {summary.total_files}",
        f"Total size:      {summary.total_size_mb:.2f}MB",
        f"Average size:    {summary.average_size_mb:.2f}MB",
        f"Files:           {', '.join(summary.file_keys)}",
    ]
