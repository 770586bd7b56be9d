from .render_plan import (
    CueInstruction,
    FrameInstruction,
    frame_instructions,
    iter_render_plan,
    total_frames,
)
from .resolver import active_cues, active_word, current_word, time_at_frame

__all__ = [
    "CueInstruction",
    "FrameInstruction",
    "frame_instructions",
    "iter_render_plan",
    "total_frames",
    "active_cues",
    "active_word",
    "current_word",
    "time_at_frame",
]
