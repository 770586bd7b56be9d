"""Domain data structures for caption words, cues, and playback state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Word(NamedTuple):
    """A transcript word with start/end timing in seconds."""

    text: str
    start_seconds: float
    end_seconds: float

    @property
    def duration_seconds(self) -> float:
        return self.end_seconds - self.start_seconds


@dataclass(frozen=True)
class Cue:
    """One caption display unit with its own time window and words."""

    id: int
    start_seconds: float
    end_seconds: float
    text: str
    words: tuple[Word, ...] = ()

    @property
    def duration_seconds(self) -> float:
        return self.end_seconds - self.start_seconds

    def contains(self, time_seconds: float) -> bool:
        """Returns whether ``time_seconds`` falls inside the cue, ends included."""
        return self.start_seconds <= time_seconds <= self.end_seconds


Transcript = tuple[Cue, ...]


@dataclass(frozen=True)
class ActiveWordState:
    """The word being spoken at a playback time and how far into it we are."""

    word: Word
    progress_fraction: float


def join_word_text(words: tuple[Word, ...] | list[Word]) -> str:
    """Joins word texts with single spaces and trims the result."""
    return " ".join(word.text for word in words).strip()
