# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

Record variants are tagged by ``kind`` so a document can hold either shape,
but the tag is never serialized: the JSON written to disk keeps the exact
layout consumed by the app (verbatim content for draw files, the
``data/originalName/size/sizeMB/mimeType/encoding`` object for voice files).
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

AUDIO_MIME_TYPE = "audio/mpeg"
PAYLOAD_ENCODING = "base64"


# === SCAN ===


class CandidateFile(BaseModel):
    """A directory entry whose extension matches the scan filter."""

    path: Path
    filename: str
    key: str


# === RECORDS ===


class DrawRecord(BaseModel):
    """Verbatim parsed content of one stroke-drawing JSON file."""

    kind: Literal["draw"] = Field(default="draw", exclude=True)
    content: Any

    def to_json_value(self) -> Any:
        return self.content


class VoiceRecord(BaseModel):
    """Base64-embedded audio clip with size and mime metadata."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["voice"] = Field(default="voice", exclude=True)
    data: str
    original_name: str = Field(alias="originalName", min_length=1)
    size: int = Field(ge=0)
    size_mb: float = Field(alias="sizeMB", ge=0)
    mime_type: Literal["audio/mpeg"] = Field(default=AUDIO_MIME_TYPE, alias="mimeType")
    encoding: Literal["base64"] = PAYLOAD_ENCODING

    @field_validator("original_name")
    @classmethod
    def validate_original_name(cls, v: str) -> str:
        """Restores write to ``<dir>/<original_name>``: no path components allowed."""
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"originalName must be a bare filename, got {v!r}")
        return v

    def to_json_value(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


AggregateRecord = Annotated[DrawRecord | VoiceRecord, Field(discriminator="kind")]


class AggregateDocument(BaseModel):
    """Mapping of filename stem to record, in insertion (listing) order."""

    records: dict[str, AggregateRecord] = Field(default_factory=dict)

    def add(self, key: str, record: DrawRecord | VoiceRecord) -> bool:
        """Insert or overwrite ``key``. Returns True if a prior value was replaced."""
        replaced = key in self.records
        self.records[key] = record
        return replaced

    def keys(self) -> list[str]:
        return list(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, key: object) -> bool:
        return key in self.records

    def __getitem__(self, key: str) -> DrawRecord | VoiceRecord:
        return self.records[key]

    def to_json_obj(self) -> dict[str, Any]:
        """Plain JSON-compatible dict in the on-disk record shape."""
        return {key: rec.to_json_value() for key, rec in self.records.items()}

    @classmethod
    def from_voice_json(cls, data: Mapping[str, Any]) -> AggregateDocument:
        """Rebuild a voice document from its on-disk JSON form."""
        doc = cls()
        for key, value in data.items():
            doc.add(key, VoiceRecord.model_validate(value))
        return doc


# === RESULTS ===


class SkippedFile(BaseModel):
    """A file dropped from an aggregation because of a recoverable error."""

    filename: str
    reason: str


class AggregationResult(BaseModel):
    """Outcome of one directory aggregation."""

    directory: str
    extension: str
    candidates_found: int
    document: AggregateDocument = Field(default_factory=AggregateDocument)
    skipped: list[SkippedFile] = Field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.candidates_found - len(self.skipped)

    @property
    def errors(self) -> int:
        return len(self.skipped)


class StatisticsSummary(BaseModel):
    """Read-only statistics over a voice document."""

    model_config = ConfigDict(frozen=True)

    total_files: int
    total_size_mb: float
    average_size_mb: float
    file_keys: list[str] = Field(default_factory=list)


class RunReport(BaseModel):
    """Summary of a completed top-level run."""

    command: Literal["draw", "voice", "minify"]
    input_path: str
    output_path: str
    record_count: int
    skipped: list[SkippedFile] = Field(default_factory=list)
    output_size_bytes: int
    duration_seconds: float
    preview: list[str] = Field(default_factory=list)
