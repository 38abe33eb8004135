# tests/unit/core/test_models.py — v1
"""Tests for core/models.py — record variants and AggregateDocument."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cnchar_data.core.models import (
    AUDIO_MIME_TYPE,
    AggregateDocument,
    AggregationResult,
    DrawRecord,
    SkippedFile,
    VoiceRecord,
)


def _voice(**overrides) -> VoiceRecord:
    fields = {"data": "AQID", "originalName": "hello.mp3", "size": 3, "sizeMB": 0.0}
    fields.update(overrides)
    return VoiceRecord(**fields)


class TestVoiceRecord:
    def test_alias_and_field_names(self):
        by_alias = _voice()
        by_name = VoiceRecord(data="AQID", original_name="hello.mp3", size=3, size_mb=0.0)
        assert by_alias == by_name

    def test_defaults(self):
        rec = _voice()
        assert rec.mime_type == AUDIO_MIME_TYPE
        assert rec.encoding == "base64"

    def test_json_value_shape(self):
        assert _voice().to_json_value() == {
            "data": "AQID",
            "originalName": "hello.mp3",
            "size": 3,
            "sizeMB": 0.0,
            "mimeType": "audio/mpeg",
            "encoding": "base64",
        }

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            _voice(size=-1)

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            VoiceRecord(data="AQID", size=3, sizeMB=0.0)

    def test_wrong_mime_type_rejected(self):
        with pytest.raises(ValidationError):
            _voice(mimeType="audio/wav")

    @pytest.mark.parametrize("name", ["../evil.mp3", "a/b.mp3", "a\\b.mp3", ".."])
    def test_path_components_rejected(self, name: str):
        with pytest.raises(ValidationError, match="bare filename"):
            _voice(originalName=name)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            _voice().size = 4


class TestDrawRecord:
    def test_verbatim(self):
        content = {"strokes": ["M 0 0"], "nested": {"k": [1, None, True]}}
        assert DrawRecord(content=content).to_json_value() == content

    def test_kind_not_serialized(self):
        assert "kind" not in DrawRecord(content=1).model_dump()


class TestAggregateDocument:
    def test_add_reports_replacement(self):
        doc = AggregateDocument()
        assert doc.add("a", DrawRecord(content=1)) is False
        assert doc.add("a", DrawRecord(content=2)) is True
        assert doc["a"].to_json_value() == 2
        assert len(doc) == 1

    def test_contains_and_keys(self):
        doc = AggregateDocument()
        doc.add("x", DrawRecord(content=None))
        doc.add("y", _voice())
        assert "x" in doc
        assert "z" not in doc
        assert doc.keys() == ["x", "y"]

    def test_to_json_obj_mixed(self):
        doc = AggregateDocument()
        doc.add("x", DrawRecord(content=[1]))
        doc.add("y", _voice())
        obj = doc.to_json_obj()
        assert obj["x"] == [1]
        assert obj["y"]["originalName"] == "hello.mp3"

    def test_from_voice_json(self):
        doc = AggregateDocument.from_voice_json({"hello": _voice().to_json_value()})
        assert isinstance(doc["hello"], VoiceRecord)
        assert doc["hello"].size == 3

    def test_from_voice_json_invalid(self):
        with pytest.raises(ValidationError):
            AggregateDocument.from_voice_json({"hello": {"data": "AQID"}})


class TestAggregationResult:
    def test_counters(self):
        result = AggregationResult(directory="d", extension=".json", candidates_found=3)
        result.skipped.append(SkippedFile(filename="bad.json", reason="boom"))
        assert result.processed == 2
        assert result.errors == 1
