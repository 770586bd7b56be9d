"""Tests for the built-in demo transcript."""

import pytest

from capcue.demo import DEMO_TEXTS, generate_demo_transcript
from capcue.style.classifier import classify


def test_demo_transcript_has_back_to_back_cues() -> None:
    """Six three-second cues with sequential ids."""
    transcript = generate_demo_transcript()

    assert [cue.id for cue in transcript] == [1, 2, 3, 4, 5, 6]
    assert [(cue.start_seconds, cue.end_seconds) for cue in transcript][:2] == [
        (0.0, 3.0),
        (3.0, 6.0),
    ]
    assert [cue.text for cue in transcript] == list(DEMO_TEXTS)


def test_demo_words_are_paced_at_fixed_intervals() -> None:
    """Words are spoken 0.4 seconds apart from the cue start."""
    cue = generate_demo_transcript()[1]

    assert cue.words[0].start_seconds == pytest.approx(3.0)
    assert cue.words[2].start_seconds == pytest.approx(3.8)
    assert cue.words[-1].end_seconds == pytest.approx(5.8)


def test_demo_mixes_latin_and_devanagari_cues() -> None:
    """The demo exercises both font family groups."""
    hints = [classify(cue.text).script_hint for cue in generate_demo_transcript()]

    assert hints == [
        "latin-only",
        "mixed-script",
        "latin-only",
        "mixed-script",
        "latin-only",
        "latin-only",
    ]
