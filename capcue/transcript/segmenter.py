"""Word-window cue segmentation and synthetic word timing."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from capcue.config import (
    DEFAULT_FALLBACK_SECONDS,
    DEFAULT_FALLBACK_TEXT,
    DEFAULT_WINDOW_SIZE,
    get_settings,
)
from capcue.domain import Cue, Transcript, Word, join_word_text
from capcue.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


def subdivide_uniformly(start: float, end: float, text: str | None) -> tuple[Word, ...]:
    """Spreads the whitespace tokens of ``text`` evenly across ``[start, end]``.

    Token ``i`` of ``n`` receives ``start + i * step`` to ``start + (i + 1) * step``
    where ``step = (end - start) / n``. The final token is pinned to ``end`` so
    that float accumulation never leaves a gap at the segment boundary. Empty
    or whitespace-only text yields no words.
    """
    tokens = (text or "").split()
    count = len(tokens)
    if count == 0:
        return ()

    step = (end - start) / count
    words: list[Word] = []
    for index, token in enumerate(tokens):
        word_start = start + index * step
        word_end = end if index == count - 1 else start + (index + 1) * step
        words.append(Word(token, word_start, word_end))
    return tuple(words)


def fallback_transcript(
    text: str | None = None,
    *,
    fallback_text: str = DEFAULT_FALLBACK_TEXT,
    duration_seconds: float = DEFAULT_FALLBACK_SECONDS,
) -> Transcript:
    """Returns the single placeholder cue used when no timing is available."""
    cue_text = text.strip() if isinstance(text, str) else ""
    return (
        Cue(
            id=1,
            start_seconds=0.0,
            end_seconds=duration_seconds,
            text=cue_text or fallback_text,
            words=(),
        ),
    )


def validate_window_size(window_size: int) -> None:
    """Raises ``ValueError`` unless ``window_size`` is a positive integer."""
    if isinstance(window_size, bool) or not isinstance(window_size, int):
        raise ValueError(f"window_size must be a positive integer, got {window_size!r}")
    if window_size <= 0:
        raise ValueError(f"window_size must be a positive integer, got {window_size!r}")


def segment_words(
    words: Sequence[Word],
    window_size: int = DEFAULT_WINDOW_SIZE,
    *,
    fallback_text: str = DEFAULT_FALLBACK_TEXT,
    fallback_seconds: float | None = None,
    raw_text: str | None = None,
) -> Transcript:
    """Groups a flat word stream into cues of at most ``window_size`` words.

    Windows are cut strictly by word count in input order; punctuation is not
    treated as a boundary. Each cue spans from its first word's start to its
    last word's end. An empty word stream produces the placeholder cue built
    from ``raw_text`` or ``fallback_text``, lasting ``fallback_seconds``
    (the configured placeholder duration when omitted).

    Raises:
        ValueError: If ``window_size`` is not a positive integer.
    """
    validate_window_size(window_size)
    if not words:
        logger.debug("No words to segment; using placeholder cue.")
        if fallback_seconds is None:
            fallback_seconds = get_settings().captions.fallback_seconds
        return fallback_transcript(
            raw_text,
            fallback_text=fallback_text,
            duration_seconds=fallback_seconds,
        )

    cues: list[Cue] = []
    for cue_id, offset in enumerate(range(0, len(words), window_size), start=1):
        window = tuple(words[offset : offset + window_size])
        cues.append(
            Cue(
                id=cue_id,
                start_seconds=window[0].start_seconds,
                end_seconds=window[-1].end_seconds,
                text=join_word_text(window),
                words=window,
            )
        )

    logger.debug("Segmented %s words into %s cues.", len(words), len(cues))
    return tuple(cues)
