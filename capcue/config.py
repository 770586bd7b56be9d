"""Typed, environment-driven configuration for capcue."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_FALLBACK_TEXT = "No captions available"
DEFAULT_WINDOW_SIZE = 8
DEFAULT_FALLBACK_SECONDS = 5.0
DEFAULT_SEGMENT_SECONDS = 3.0
DEFAULT_PRESET = "bottom-centered"
DEFAULT_FPS = 30

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptionConfig:
    """Cue construction settings."""

    window_size: int = DEFAULT_WINDOW_SIZE
    fallback_text: str = DEFAULT_FALLBACK_TEXT
    fallback_seconds: float = DEFAULT_FALLBACK_SECONDS
    segment_seconds: float = DEFAULT_SEGMENT_SECONDS


@dataclass(frozen=True)
class RenderConfig:
    """Playback and presentation settings."""

    fps: int = DEFAULT_FPS
    default_preset: str = DEFAULT_PRESET


@dataclass(frozen=True)
class OutputConfig:
    """Filesystem locations used by exporters."""

    cues_folder: Path = Path("./capcue/cues")


@dataclass(frozen=True)
class AppConfig:
    """Application settings snapshot."""

    captions: CaptionConfig = field(default_factory=CaptionConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _read_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        value = int(raw_value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %s.", name, raw_value, default)
        return default
    if value < minimum:
        logger.warning("Ignoring out-of-range %s=%r; using %s.", name, raw_value, default)
        return default
    return value


def _read_float(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %s.", name, raw_value, default)
        return default
    if value <= 0:
        logger.warning("Ignoring out-of-range %s=%r; using %s.", name, raw_value, default)
        return default
    return value


def _read_str(name: str, default: str) -> str:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip()


def _build_settings() -> AppConfig:
    return AppConfig(
        captions=CaptionConfig(
            window_size=_read_int("CAPCUE_WINDOW_SIZE", DEFAULT_WINDOW_SIZE),
            fallback_text=_read_str("CAPCUE_FALLBACK_TEXT", DEFAULT_FALLBACK_TEXT),
            fallback_seconds=_read_float(
                "CAPCUE_FALLBACK_SECONDS", DEFAULT_FALLBACK_SECONDS
            ),
            segment_seconds=_read_float(
                "CAPCUE_SEGMENT_SECONDS", DEFAULT_SEGMENT_SECONDS
            ),
        ),
        render=RenderConfig(
            fps=_read_int("CAPCUE_FPS", DEFAULT_FPS),
            default_preset=_read_str("CAPCUE_DEFAULT_PRESET", DEFAULT_PRESET),
        ),
        output=OutputConfig(
            cues_folder=Path(_read_str("CAPCUE_CUES_DIR", "./capcue/cues")),
        ),
    )


_SETTINGS: AppConfig | None = None


def get_settings() -> AppConfig:
    """Returns the active settings, loading them on first access."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv()
        _SETTINGS = _build_settings()
    return _SETTINGS


def reload_settings() -> AppConfig:
    """Rebuilds settings from the current environment."""
    global _SETTINGS
    _SETTINGS = _build_settings()
    return _SETTINGS


def apply_settings(settings: AppConfig) -> AppConfig:
    """Replaces the active settings snapshot."""
    global _SETTINGS
    _SETTINGS = settings
    return _SETTINGS
