# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Every input and output path of the build scripts lives here, so tests and
callers can point a run at any directory instead of the working-directory
defaults (./draw, ./voice, ./voice_data.json ...).

Environment variables use the ``CNCHAR_`` prefix, e.g.
``CNCHAR_VOICE_INPUT_DIR=/data/voice``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file and environment."""

    model_config = SettingsConfigDict(
        env_prefix="CNCHAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Draw data (stroke JSON merge) ===
    draw_input_dir: Path = Path("./draw")
    draw_output_file: Path = Path("./draw_data.json")
    draw_extension: str = ".json"

    # === Voice data (mp3 -> base64 JSON) ===
    voice_input_dir: Path = Path("./voice")
    voice_output_file: Path = Path("./voice_data.json")
    voice_extension: str = ".mp3"
    restore_dir: Path = Path("./restored")

    # === Minify ===
    minify_input_file: Path = Path("./voice_data.json")
    minify_output_file: Path = Path("./voice_data.min.json")

    # === Output ===
    json_indent: int = Field(default=2, ge=0)
    preview_chars: int = Field(default=500, ge=0)

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("draw_extension", "voice_extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        """Lowercase and force a leading dot: 'MP3' -> '.mp3'."""
        v = v.strip().lower()
        if not v or v == ".":
            raise ValueError("extension must not be empty")
        return v if v.startswith(".") else f".{v}"

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Reject path combinations that would clobber an input."""
        errors: list[str] = []

        if self.minify_input_file == self.minify_output_file:
            errors.append("MINIFY_OUTPUT_FILE must differ from MINIFY_INPUT_FILE")

        if self.draw_output_file.parent == self.draw_input_dir and (
            self.draw_output_file.suffix.lower() == self.draw_extension
        ):
            errors.append(
                "DRAW_OUTPUT_FILE must not live inside DRAW_INPUT_DIR "
                "with the scanned extension"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (CLI flags, tests).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
