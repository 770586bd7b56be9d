"""Script detection and caption preset resolution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from capcue.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

ScriptHint = Literal["mixed-script", "latin-only"]
PresetKey = Literal["bottom-centered", "top-bar", "karaoke"]

DEFAULT_PRESET_KEY: PresetKey = "bottom-centered"

_DEVANAGARI_PATTERN = re.compile("[\u0900-\u097F]")


@dataclass(frozen=True)
class CaptionPreset:
    """Layout descriptor handed to the renderer for one preset."""

    key: PresetKey
    position: Literal["top", "bottom"]
    font_size_px: int
    font_weight: int
    highlight_words: bool = False


PRESETS: dict[str, CaptionPreset] = {
    "bottom-centered": CaptionPreset(
        key="bottom-centered", position="bottom", font_size_px=32, font_weight=600
    ),
    "top-bar": CaptionPreset(
        key="top-bar", position="top", font_size_px=28, font_weight=700
    ),
    "karaoke": CaptionPreset(
        key="karaoke",
        position="bottom",
        font_size_px=36,
        font_weight=700,
        highlight_words=True,
    ),
}

FONT_FAMILIES: dict[ScriptHint, str] = {
    "mixed-script": '"Noto Sans Devanagari", "Noto Sans", sans-serif',
    "latin-only": '"Noto Sans", sans-serif',
}


@dataclass(frozen=True)
class StyleClassification:
    """Rendering hints derived from one cue's text."""

    script_hint: ScriptHint
    preset_key: PresetKey
    font_family: str

    @property
    def preset(self) -> CaptionPreset:
        return PRESETS[self.preset_key]


def detect_script(text: str) -> ScriptHint:
    """Flags text containing any Devanagari code point as mixed script."""
    if _DEVANAGARI_PATTERN.search(text or ""):
        return "mixed-script"
    return "latin-only"


def resolve_preset(name: str | None) -> PresetKey:
    """Returns ``name`` when it is a known preset, else the bottom-centered default."""
    if isinstance(name, str) and name in PRESETS:
        return PRESETS[name].key
    if name is not None:
        logger.debug("Unknown caption preset %r; using %s.", name, DEFAULT_PRESET_KEY)
    return DEFAULT_PRESET_KEY


def classify(text: str, preset: str | None = None) -> StyleClassification:
    """Chooses the font family group and layout preset for a cue's text."""
    script_hint = detect_script(text)
    return StyleClassification(
        script_hint=script_hint,
        preset_key=resolve_preset(preset),
        font_family=FONT_FAMILIES[script_hint],
    )
