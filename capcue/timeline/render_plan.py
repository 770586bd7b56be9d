"""Per-frame draw instructions for a caption overlay.

A renderer that does not want to re-implement the lookup logic can ask for
the instruction of one frame, or iterate over the whole plan. Cues fade in
over their first ``ENTRANCE_FADE_FRAMES`` frames; word highlighting is only
resolved for presets that highlight words, and only for the first active cue.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from capcue.domain import ActiveWordState, Cue, Transcript
from capcue.style.classifier import StyleClassification, classify
from capcue.timeline.resolver import active_cues, active_word, time_at_frame
from capcue.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

ENTRANCE_FADE_FRAMES = 15


@dataclass(frozen=True)
class CueInstruction:
    """What to draw for one active cue."""

    cue: Cue
    style: StyleClassification
    opacity: float
    word: ActiveWordState | None = None


@dataclass(frozen=True)
class FrameInstruction:
    """Everything the overlay draws on one frame."""

    frame_index: int
    time_seconds: float
    cues: tuple[CueInstruction, ...]


def total_frames(transcript: Transcript, fps: float) -> int:
    """Returns the number of frames needed to show every cue."""
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps!r}")
    if not transcript:
        return 0
    last_end = max(cue.end_seconds for cue in transcript)
    return max(math.ceil(last_end * fps), 0)


def cue_frame_window(cue: Cue, fps: float) -> tuple[int, int]:
    """Returns ``(first_frame, duration_in_frames)`` for ``cue``."""
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps!r}")
    first_frame = math.floor(cue.start_seconds * fps)
    duration = math.floor(cue.duration_seconds * fps)
    return first_frame, max(duration, 0)


def entrance_opacity(frame_index: int, first_frame: int) -> float:
    """Linear fade-in from 0 to 1 over the first frames of a cue."""
    elapsed = frame_index - first_frame
    return min(max(elapsed / ENTRANCE_FADE_FRAMES, 0.0), 1.0)


def _instruction_at(
    transcript: Transcript,
    frame_index: int,
    time_seconds: float,
    fps: float,
    preset: str | None,
) -> FrameInstruction:
    instructions: list[CueInstruction] = []
    for position, cue in enumerate(active_cues(transcript, time_seconds)):
        style = classify(cue.text, preset)
        word = None
        if position == 0 and style.preset.highlight_words:
            word = active_word(cue, time_seconds)
        first_frame, _ = cue_frame_window(cue, fps)
        instructions.append(
            CueInstruction(
                cue=cue,
                style=style,
                opacity=entrance_opacity(frame_index, first_frame),
                word=word,
            )
        )
    return FrameInstruction(
        frame_index=frame_index,
        time_seconds=time_seconds,
        cues=tuple(instructions),
    )


def frame_instructions(
    transcript: Transcript,
    frame_index: int,
    fps: float,
    preset: str | None = None,
) -> FrameInstruction:
    """Returns the draw instructions for a single frame."""
    return _instruction_at(
        transcript, frame_index, time_at_frame(frame_index, fps), fps, preset
    )


def iter_render_plan(
    transcript: Transcript,
    fps: float,
    preset: str | None = None,
) -> Iterator[FrameInstruction]:
    """Yields the instructions of every frame covering the transcript."""
    frame_count = total_frames(transcript, fps)
    logger.debug("Building render plan for %s frames at %s fps.", frame_count, fps)
    frame_times = np.arange(frame_count, dtype=np.float64) / fps
    for frame_index, time_seconds in enumerate(frame_times.tolist()):
        yield _instruction_at(transcript, frame_index, time_seconds, fps, preset)
