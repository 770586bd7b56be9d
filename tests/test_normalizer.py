"""Behavior tests for transcription normalization into cues."""

import logging

import pytest

from capcue.config import CaptionConfig
from capcue.domain import Cue, Word
from capcue.transcript.normalizer import normalize


def _word_payload(count: int) -> dict:
    return {
        "text": "ignored when words exist",
        "words": [
            {"word": f"w{index}", "start": index * 0.5, "end": index * 0.5 + 0.4}
            for index in range(count)
        ],
    }


def test_normalize_empty_payload_yields_placeholder_cue() -> None:
    """Empty text and no segments should give the five-second placeholder."""
    assert normalize({"text": "", "segments": []}) == (
        Cue(1, 0.0, 5.0, "No captions available", ()),
    )


@pytest.mark.parametrize("raw", [None, {}, [], "", 17, {"words": []}, {"segments": "bad"}])
def test_normalize_never_raises_for_malformed_input(raw: object) -> None:
    """Malformed payloads degrade to the placeholder cue."""
    transcript = normalize(raw)

    assert len(transcript) == 1
    assert transcript[0].text == "No captions available"
    assert transcript[0].words == ()


def test_normalize_plain_text_keeps_text_without_words() -> None:
    """Text without timing becomes a single untimed cue."""
    assert normalize({"text": "  hello there  "}) == (
        Cue(1, 0.0, 5.0, "hello there", ()),
    )


def test_normalize_word_list_delegates_to_segmenter() -> None:
    """Word-level payloads are windowed into cues of the configured size."""
    transcript = normalize(_word_payload(17))

    assert [cue.id for cue in transcript] == [1, 2, 3]
    assert [len(cue.words) for cue in transcript] == [8, 8, 1]
    assert transcript[0].start_seconds == 0.0
    assert transcript[0].end_seconds == pytest.approx(3.9)
    assert transcript[2].text == "w16"


def test_normalize_word_list_respects_window_override() -> None:
    """A per-call window size overrides configuration."""
    transcript = normalize(_word_payload(6), window_size=4)

    assert [len(cue.words) for cue in transcript] == [4, 2]


def test_normalize_word_list_fills_missing_word_bounds() -> None:
    """Words missing timing borrow from their predecessor."""
    transcript = normalize(
        {
            "words": [
                {"word": "a", "start": 1.0, "end": 1.5},
                {"text": "b"},
                {"word": "c", "start": 2.0},
            ]
        }
    )

    assert transcript[0].words == (
        Word("a", 1.0, 1.5),
        Word("b", 1.5, 1.5),
        Word("c", 2.0, 2.0),
    )


def test_normalize_offsets_segments_synthesizes_even_word_timing() -> None:
    """Millisecond offsets become seconds and words split the span evenly."""
    transcript = normalize(
        {
            "transcription": [
                {"offsets": {"from": 3000, "to": 6000}, "text": " one two three"},
                {"offsets": {"from": 6000, "to": 7000}, "text": "four"},
            ]
        }
    )

    assert transcript == (
        Cue(
            1,
            3.0,
            6.0,
            "one two three",
            (Word("one", 3.0, 4.0), Word("two", 4.0, 5.0), Word("three", 5.0, 6.0)),
        ),
        Cue(2, 6.0, 7.0, "four", (Word("four", 6.0, 7.0),)),
    )


def test_normalize_start_end_segments_use_their_own_words_verbatim() -> None:
    """Supplied segment words are kept, falling back to segment bounds."""
    transcript = normalize(
        {
            "segments": [
                {
                    "start": 1.0,
                    "end": 3.0,
                    "text": "Namaste dosto",
                    "words": [
                        {"word": "Namaste", "start": 1.1, "end": 1.9},
                        {"text": "dosto"},
                    ],
                }
            ]
        }
    )

    assert transcript == (
        Cue(
            1,
            1.0,
            3.0,
            "Namaste dosto",
            (Word("Namaste", 1.1, 1.9), Word("dosto", 1.0, 3.0)),
        ),
    )


def test_normalize_segments_without_words_subdivide_text() -> None:
    """Segments lacking words get uniformly subdivided timing."""
    transcript = normalize({"segments": [{"start": 0.0, "end": 2.0, "text": "hi  there"}]})

    assert transcript[0].words == (Word("hi", 0.0, 1.0), Word("there", 1.0, 2.0))
    assert transcript[0].text == "hi there"


def test_normalize_word_with_only_end_never_starts_after_it() -> None:
    """A missing start continues from the previous word but stops at its own end."""
    transcript = normalize(
        {
            "words": [
                {"word": "a", "start": 0.0, "end": 2.0},
                {"word": "b", "end": 1.5},
                {"word": "c", "end": 3.0},
            ]
        }
    )

    assert transcript[0].words == (
        Word("a", 0.0, 2.0),
        Word("b", 1.5, 1.5),
        Word("c", 1.5, 3.0),
    )
    assert transcript[0].start_seconds <= transcript[0].end_seconds


def test_normalize_segments_missing_timing_chain_from_previous_cue() -> None:
    """Untimed segments continue after the previous cue with a default length."""
    transcript = normalize(
        {
            "segments": [
                {"start": 1.0, "end": 2.0, "text": "first"},
                {"text": "second"},
                {"start": 10.0, "text": "third"},
            ]
        }
    )

    assert [(cue.start_seconds, cue.end_seconds) for cue in transcript] == [
        (1.0, 2.0),
        (2.0, 5.0),
        (10.0, 13.0),
    ]


def test_normalize_segment_with_empty_text_has_no_words() -> None:
    """A timed segment with no tokens produces a cue without words."""
    transcript = normalize({"segments": [{"start": 0.0, "end": 1.0, "text": "   "}]})

    assert transcript == (Cue(1, 0.0, 1.0, "", ()),)


def test_normalize_uses_configured_fallback_text() -> None:
    """The placeholder text is taken from configuration, then per-call override."""
    config = CaptionConfig(fallback_text="Keine Untertitel", fallback_seconds=2.5)

    assert normalize(None, config=config) == (Cue(1, 0.0, 2.5, "Keine Untertitel", ()),)
    assert normalize(None, config=config, fallback_text="Pas de sous-titres")[0].text == (
        "Pas de sous-titres"
    )


def test_normalize_rejects_non_positive_window_size() -> None:
    """A non-positive window size is a caller error."""
    with pytest.raises(ValueError):
        normalize(_word_payload(3), window_size=0)


def test_normalize_logs_fallback_branch(caplog: pytest.LogCaptureFixture) -> None:
    """Fallback decisions are visible at DEBUG level."""
    with caplog.at_level(logging.DEBUG, logger="capcue.transcript.normalizer"):
        normalize({"text": ""})

    assert "placeholder cue" in caplog.text


def test_normalize_segment_with_only_end_stays_ordered() -> None:
    """A segment ending before the previous cue ends is clamped, not reversed."""
    transcript = normalize(
        {
            "segments": [
                {"start": 0.0, "end": 5.0, "text": "a"},
                {"end": 3.0, "text": "b c"},
                {"text": "d", "words": [{"word": "d", "end": 4.0}]},
            ]
        }
    )

    assert [(cue.start_seconds, cue.end_seconds) for cue in transcript] == [
        (0.0, 5.0),
        (3.0, 3.0),
        (3.0, 4.0),
    ]
    for cue in transcript:
        assert cue.start_seconds <= cue.end_seconds
        for word in cue.words:
            assert word.start_seconds <= word.end_seconds


def test_normalize_segment_word_missing_start_stays_before_its_end() -> None:
    """A segment word with only an end never starts after that end."""
    transcript = normalize(
        {
            "segments": [
                {
                    "start": 2.0,
                    "end": 4.0,
                    "text": "early",
                    "words": [{"word": "early", "end": 1.0}],
                }
            ]
        }
    )

    assert transcript[0].words == (Word("early", 1.0, 1.0),)
