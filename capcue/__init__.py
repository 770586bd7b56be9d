from .domain import ActiveWordState, Cue, Transcript, Word
from .transcript import normalize, segment_words, subdivide_uniformly
from .timeline import active_cues, active_word, frame_instructions, iter_render_plan
from .style import classify, resolve_preset
from .config import AppConfig, get_settings, reload_settings
