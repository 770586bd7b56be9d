from .normalizer import normalize
from .payloads import PayloadKind, classify_payload, parse_payload
from .segmenter import fallback_transcript, segment_words, subdivide_uniformly

__all__ = [
    "normalize",
    "PayloadKind",
    "classify_payload",
    "parse_payload",
    "fallback_transcript",
    "segment_words",
    "subdivide_uniformly",
]
