from .classifier import (
    FONT_FAMILIES,
    PRESETS,
    CaptionPreset,
    StyleClassification,
    classify,
    detect_script,
    resolve_preset,
)

__all__ = [
    "FONT_FAMILIES",
    "PRESETS",
    "CaptionPreset",
    "StyleClassification",
    "classify",
    "detect_script",
    "resolve_preset",
]
