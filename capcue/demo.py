"""Built-in demo transcript for exercising the pipeline without a speech engine."""

from __future__ import annotations

from capcue.domain import Cue, Transcript, Word

DEMO_TEXTS: tuple[str, ...] = (
    "Welcome to this amazing video demonstration",
    "यह एक बेहतरीन वीडियो का उदाहरण है",
    "This shows how captions work perfectly",
    "Multiple styles और effects के साथ",
    "Beautiful typography and smooth animations",
    "Perfect for all your video needs",
)
DEMO_CUE_SECONDS = 3.0
DEMO_WORD_SECONDS = 0.4


def generate_demo_transcript(
    texts: tuple[str, ...] = DEMO_TEXTS,
    cue_seconds: float = DEMO_CUE_SECONDS,
    word_seconds: float = DEMO_WORD_SECONDS,
) -> Transcript:
    """Builds back-to-back cues with words spoken at a fixed pace."""
    cues: list[Cue] = []
    for index, text in enumerate(texts):
        cue_start = index * cue_seconds
        words = tuple(
            Word(
                token,
                cue_start + word_index * word_seconds,
                cue_start + (word_index + 1) * word_seconds,
            )
            for word_index, token in enumerate(text.split())
        )
        cues.append(
            Cue(
                id=index + 1,
                start_seconds=cue_start,
                end_seconds=cue_start + cue_seconds,
                text=text,
                words=words,
            )
        )
    return tuple(cues)
