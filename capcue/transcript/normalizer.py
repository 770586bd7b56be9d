"""Conversion of heterogeneous transcription payloads into one cue list."""

from __future__ import annotations

import logging
from typing import Any

from capcue.config import CaptionConfig, get_settings
from capcue.domain import Cue, Transcript, Word, join_word_text
from capcue.transcript.payloads import (
    RawSegment,
    RawWord,
    SegmentPayload,
    TextOnlyPayload,
    WordTimedPayload,
    parse_payload,
)
from capcue.transcript.segmenter import (
    fallback_transcript,
    segment_words,
    subdivide_uniformly,
    validate_window_size,
)
from capcue.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


def _continued_start(previous_end: float, end: float | None) -> float:
    """Start for an item that continues from ``previous_end``; never after ``end``."""
    if end is None:
        return previous_end
    return min(previous_end, end)


def _timed_words(raw_words: tuple[RawWord, ...]) -> list[Word]:
    """Fills missing word bounds from the neighbouring timing."""
    words: list[Word] = []
    previous_end = 0.0
    for raw_word in raw_words:
        end = raw_word.end_seconds
        start = raw_word.start_seconds
        if start is None:
            start = _continued_start(previous_end, end)
        if end is None:
            end = start
        words.append(Word(raw_word.text, start, end))
        previous_end = end
    return words


def _segment_words(
    segment: RawSegment, start: float, end: float
) -> tuple[Word, ...]:
    if segment.words is None:
        return subdivide_uniformly(start, end, segment.text)
    words: list[Word] = []
    for raw_word in segment.words:
        word_end = raw_word.end_seconds
        word_start = raw_word.start_seconds
        if word_start is None:
            word_start = _continued_start(start, word_end)
        if word_end is None:
            word_end = max(end, word_start)
        words.append(Word(raw_word.text, word_start, word_end))
    return tuple(words)


def _segment_bounds(
    segment: RawSegment, previous_end: float, segment_seconds: float
) -> tuple[float, float]:
    """Resolves a segment span, borrowing from its words or its predecessor."""
    first_word = segment.words[0] if segment.words else None
    last_word = segment.words[-1] if segment.words else None

    start = segment.start_seconds
    if start is None and first_word is not None:
        start = first_word.start_seconds
    end = segment.end_seconds
    if end is None and last_word is not None:
        end = last_word.end_seconds

    if start is None:
        logger.debug("Segment without start; continuing from %.3fs.", previous_end)
        start = _continued_start(previous_end, end)
    if end is None:
        logger.debug("Segment without end; assuming %.1fs duration.", segment_seconds)
        end = start + segment_seconds
    return start, end


def _cues_from_segments(payload: SegmentPayload, config: CaptionConfig) -> Transcript:
    cues: list[Cue] = []
    previous_end = 0.0
    for cue_id, segment in enumerate(payload.segments, start=1):
        start, end = _segment_bounds(segment, previous_end, config.segment_seconds)
        words = _segment_words(segment, start, end)
        text = " ".join(segment.text.split()) or join_word_text(words)
        cues.append(
            Cue(
                id=cue_id,
                start_seconds=start,
                end_seconds=end,
                text=text,
                words=words,
            )
        )
        previous_end = end
    return tuple(cues)


def normalize(
    raw: Any,
    *,
    window_size: int | None = None,
    fallback_text: str | None = None,
    config: CaptionConfig | None = None,
) -> Transcript:
    """Normalizes any supported transcription payload into a transcript.

    Arguments:
        raw: Transcription payload in any of the supported shapes, or ``None``.
        window_size: Words per cue when the payload is a flat word list.
        fallback_text: Text of the placeholder cue used when nothing is timed.
        config: Caption settings; defaults to the active application settings.

    Returns:
        Transcript: Never empty. Malformed or empty input degrades to a single
            placeholder cue instead of raising.
    """
    active_config = config if config is not None else get_settings().captions
    resolved_window = window_size if window_size is not None else active_config.window_size
    resolved_fallback = (
        fallback_text if fallback_text is not None else active_config.fallback_text
    )

    validate_window_size(resolved_window)

    payload = parse_payload(raw)
    match payload:
        case WordTimedPayload(words=raw_words, text=text):
            # A non-empty word list always carries the finest timing available.
            logger.debug("Normalizing %s timed words.", len(raw_words))
            return segment_words(
                _timed_words(raw_words),
                resolved_window,
                fallback_text=resolved_fallback,
                fallback_seconds=active_config.fallback_seconds,
                raw_text=text,
            )
        case SegmentPayload(segments=segments, kind=kind):
            # Offsets were converted to seconds during parsing; both segment
            # shapes share the same conversion from here on.
            logger.debug("Normalizing %s segments (%s).", len(segments), kind)
            return _cues_from_segments(payload, active_config)
        case TextOnlyPayload(text=text):
            # No words and no segments: the whole text gets one placeholder window.
            logger.debug("No timing information in payload; using placeholder cue.")
            return fallback_transcript(
                text,
                fallback_text=resolved_fallback,
                duration_seconds=active_config.fallback_seconds,
            )
        case _:
            raise TypeError(f"Unsupported payload variant: {type(payload).__name__}")
