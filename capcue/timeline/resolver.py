"""Stateless lookup of the cue and word active at a playback time.

The renderer calls these once per frame, so every function is a pure linear
scan over immutable values. Span checks include both ends: a time equal to a
shared boundary reports both adjoining cues (or words) as active.
"""

from __future__ import annotations

from capcue.domain import ActiveWordState, Cue, Transcript


def time_at_frame(frame_index: int, fps: float) -> float:
    """Returns the playback time in seconds of ``frame_index``.

    Raises:
        ValueError: If ``fps`` is not positive.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps!r}")
    return frame_index / fps


def active_cues(transcript: Transcript, current_time: float) -> tuple[Cue, ...]:
    """Returns every cue whose span contains ``current_time``, in transcript order."""
    return tuple(cue for cue in transcript if cue.contains(current_time))


def active_word(cue: Cue, current_time: float) -> ActiveWordState | None:
    """Returns the first word of ``cue`` spoken at ``current_time``, if any.

    Progress through the word is clamped to ``[0, 1]``. A zero-length word
    counts as complete as soon as it is reached.
    """
    for word in cue.words:
        if word.start_seconds <= current_time <= word.end_seconds:
            duration = word.duration_seconds
            if duration <= 0:
                return ActiveWordState(word=word, progress_fraction=1.0)
            progress = (current_time - word.start_seconds) / duration
            return ActiveWordState(
                word=word, progress_fraction=min(max(progress, 0.0), 1.0)
            )
    return None


def current_word(transcript: Transcript, current_time: float) -> ActiveWordState | None:
    """Resolves the active word of the first active cue."""
    cues = active_cues(transcript, current_time)
    if not cues:
        return None
    return active_word(cues[0], current_time)
