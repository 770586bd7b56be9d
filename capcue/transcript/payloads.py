"""Classification of raw transcription payloads into one tagged union.

Upstream producers hand over differently shaped transcription results:

* cloud speech-to-text word lists: ``{"words": [{"word", "start", "end"}, ...]}``
* the local transcription engine's JSON: ``{"transcription": [{"offsets":
  {"from", "to"}, "text"}, ...]}`` with offsets in milliseconds
* cloud segment lists: ``{"segments": [{"start", "end", "text", "words"?}]}``
* plain text: ``{"text": "..."}`` or a bare string

``classify_payload`` derives the discriminator from which fields are present,
and ``parse_payload`` turns the payload into the matching variant so that the
normalizer never probes raw fields itself. Items may be mappings or objects
exposing the same names as attributes.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

PayloadKind = Literal["has_words", "has_offsets_ms", "has_start_end", "text_only"]

MILLISECONDS_PER_SECOND = 1000.0


@dataclass(frozen=True)
class RawWord:
    """One upstream word whose timing may be incomplete."""

    text: str
    start_seconds: float | None
    end_seconds: float | None


@dataclass(frozen=True)
class RawSegment:
    """One upstream segment, timing already converted to seconds."""

    text: str
    start_seconds: float | None
    end_seconds: float | None
    words: tuple[RawWord, ...] | None = None


@dataclass(frozen=True)
class WordTimedPayload:
    """A flat list of individually timed words."""

    words: tuple[RawWord, ...]
    text: str | None
    kind: Literal["has_words"] = "has_words"


@dataclass(frozen=True)
class SegmentPayload:
    """A list of timed segments, from either segment-producing upstream."""

    segments: tuple[RawSegment, ...]
    text: str | None
    kind: Literal["has_offsets_ms", "has_start_end"] = "has_start_end"


@dataclass(frozen=True)
class TextOnlyPayload:
    """Text without any usable timing, or nothing usable at all."""

    text: str | None
    kind: Literal["text_only"] = "text_only"


RawTranscription = WordTimedPayload | SegmentPayload | TextOnlyPayload


def _get(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _has(item: Any, name: str) -> bool:
    if isinstance(item, Mapping):
        return name in item
    return hasattr(item, name)


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_seconds(value: Any, *, scale: float = 1.0) -> float | None:
    """Reads a finite number, returning ``None`` for anything else."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number / scale


def _non_empty_sequence(value: Any) -> Sequence[Any] | None:
    if isinstance(value, (str, bytes, Mapping)):
        return None
    if isinstance(value, Sequence) and len(value) > 0:
        return value
    return None


def _word_text(item: Any) -> str:
    text = _as_text(_get(item, "word"))
    if text is None:
        text = _as_text(_get(item, "text"))
    return text if text is not None else ""


def _parse_word(item: Any) -> RawWord:
    return RawWord(
        text=_word_text(item),
        start_seconds=_as_seconds(_get(item, "start")),
        end_seconds=_as_seconds(_get(item, "end")),
    )


def _parse_words(value: Any) -> tuple[RawWord, ...] | None:
    items = _non_empty_sequence(value)
    if items is None:
        return None
    return tuple(_parse_word(item) for item in items)


def _offset_segments(raw: Any) -> Sequence[Any] | None:
    """Returns the segment list of a millisecond-offset payload, if any."""
    if isinstance(raw, Mapping) or not isinstance(raw, Sequence):
        candidates = [_get(raw, "transcription"), _get(raw, "segments")]
    else:
        candidates = [raw]
    for candidate in candidates:
        items = _non_empty_sequence(candidate)
        if items is not None and any(_has(item, "offsets") for item in items):
            return items
    return None


def _start_end_segments(raw: Any) -> Sequence[Any] | None:
    if isinstance(raw, Mapping) or not isinstance(raw, Sequence):
        return _non_empty_sequence(_get(raw, "segments"))
    if isinstance(raw, (str, bytes)):
        return None
    return _non_empty_sequence(raw)


def _payload_text(raw: Any) -> str | None:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Mapping) or not isinstance(raw, Sequence):
        return _as_text(_get(raw, "text"))
    return None


def classify_payload(raw: Any) -> PayloadKind:
    """Returns the discriminator for ``raw``, checked in priority order.

    1. ``has_words``: a non-empty ``words`` list.
    2. ``has_offsets_ms``: segments carrying ``offsets`` in milliseconds.
    3. ``has_start_end``: a non-empty ``segments`` list (or bare segment list).
    4. ``text_only``: anything else, including ``None`` and unknown shapes.
    """
    if raw is None or isinstance(raw, (str, bytes)):
        return "text_only"
    if not isinstance(raw, Sequence) and _non_empty_sequence(_get(raw, "words")):
        return "has_words"
    if _offset_segments(raw) is not None:
        return "has_offsets_ms"
    if _start_end_segments(raw) is not None:
        return "has_start_end"
    return "text_only"


def _parse_offset_segment(item: Any) -> RawSegment:
    offsets = _get(item, "offsets")
    return RawSegment(
        text=_as_text(_get(item, "text")) or "",
        start_seconds=_as_seconds(_get(offsets, "from"), scale=MILLISECONDS_PER_SECOND)
        if offsets is not None
        else None,
        end_seconds=_as_seconds(_get(offsets, "to"), scale=MILLISECONDS_PER_SECOND)
        if offsets is not None
        else None,
        words=_parse_words(_get(item, "words")),
    )


def _parse_start_end_segment(item: Any) -> RawSegment:
    return RawSegment(
        text=_as_text(_get(item, "text")) or "",
        start_seconds=_as_seconds(_get(item, "start")),
        end_seconds=_as_seconds(_get(item, "end")),
        words=_parse_words(_get(item, "words")),
    )


def parse_payload(raw: Any) -> RawTranscription:
    """Parses ``raw`` into the variant selected by :func:`classify_payload`."""
    kind = classify_payload(raw)
    text = _payload_text(raw)
    match kind:
        case "has_words":
            return WordTimedPayload(
                words=tuple(_parse_word(item) for item in _get(raw, "words")),
                text=text,
            )
        case "has_offsets_ms":
            return SegmentPayload(
                segments=tuple(
                    _parse_offset_segment(item) for item in _offset_segments(raw) or ()
                ),
                text=text,
                kind="has_offsets_ms",
            )
        case "has_start_end":
            return SegmentPayload(
                segments=tuple(
                    _parse_start_end_segment(item)
                    for item in _start_end_segments(raw) or ()
                ),
                text=text,
                kind="has_start_end",
            )
        case _:
            return TextOnlyPayload(text=text)
