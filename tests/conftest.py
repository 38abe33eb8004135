# tests/conftest.py — v1
"""Shared test fixtures for unit and integration tests.

Provides populated draw/voice source directories and Settings pointed at
temporary paths. All I/O stays inside tmp_path.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cnchar_data.config.settings import Settings
from cnchar_data.logging.context import clear_context

# === FIXTURES: Sample data ===

DRAW_FILES: dict[str, object] = {
    "一": {"strokes": ["M 100 400 L 900 400"], "medians": [[[100, 400], [900, 400]]]},
    "二": {"strokes": ["M 200 300", "M 100 600"], "medians": [[[200, 300]], [[100, 600]]]},
    "a": {"x": 1},
}

VOICE_FILES: dict[str, bytes] = {
    "hello.mp3": b"\x01\x02\x03",
    "ni3.mp3": b"ID3\x03\x00" + bytes(range(256)) * 4,
    "empty.mp3": b"",
}


@pytest.fixture(autouse=True)
def _reset_logging():
    """Fresh log context per test; drop handlers bound to captured streams."""
    clear_context()
    yield
    clear_context()
    root = logging.getLogger("cnchar_data")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def draw_dir(tmp_path: Path) -> Path:
    """Directory of valid stroke JSON files plus one non-matching file."""
    d = tmp_path / "draw"
    d.mkdir()
    for key, content in DRAW_FILES.items():
        (d / f"{key}.json").write_text(
            json.dumps(content, ensure_ascii=False), encoding="utf-8"
        )
    (d / "README.txt").write_text("not a stroke file", encoding="utf-8")
    return d


@pytest.fixture
def voice_dir(tmp_path: Path) -> Path:
    """Directory of fake mp3 clips plus one non-matching file."""
    d = tmp_path / "voice"
    d.mkdir()
    for name, raw in VOICE_FILES.items():
        (d / name).write_bytes(raw)
    (d / "cover.png").write_bytes(b"\x89PNG")
    return d


@pytest.fixture
def settings(tmp_path: Path, draw_dir: Path, voice_dir: Path) -> Settings:
    """Settings with every path inside tmp_path."""
    return Settings(
        _env_file=None,
        draw_input_dir=draw_dir,
        draw_output_file=tmp_path / "draw_data.json",
        voice_input_dir=voice_dir,
        voice_output_file=tmp_path / "voice_data.json",
        minify_input_file=tmp_path / "voice_data.json",
        minify_output_file=tmp_path / "voice_data.min.json",
        restore_dir=tmp_path / "restored",
    )


@pytest.fixture
def draw_files() -> dict[str, object]:
    """Expected key -> content of the draw_dir fixture."""
    return dict(DRAW_FILES)


@pytest.fixture
def voice_files() -> dict[str, bytes]:
    """Filename -> raw bytes of the voice_dir fixture."""
    return dict(VOICE_FILES)
