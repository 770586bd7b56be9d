import logging
from abc import ABC, abstractmethod
from pathlib import Path

from capcue.domain import Cue, Transcript
from capcue.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)


def _split_time(seconds: float, fraction_digits: int) -> tuple[int, int, int, int]:
    """Splits seconds into hours, minutes, seconds and a rounded fraction."""
    scale: int = 10**fraction_digits
    total_units: int = int(round(max(seconds, 0.0) * scale))
    whole_seconds, fraction = divmod(total_units, scale)
    hours, remainder = divmod(whole_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return hours, minutes, secs, fraction


class SubtitleFormatter(ABC):
    """Abstract base class for subtitle formatters."""

    header: str = ""

    @abstractmethod
    def format_time(self, seconds: float) -> str:
        """Convert time in seconds to formatted time string."""
        pass

    @abstractmethod
    def generate_entry(self, index: int, cue: Cue) -> str:
        """Generate a single subtitle entry."""
        pass

    def generate_file(self, transcript: Transcript, output_file: str) -> None:
        """Write every cue of the transcript to ``output_file``."""
        logger.info("Generating %s file: %s", type(self).__name__, output_file)
        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(self.header)
            for i, cue in enumerate(transcript, 1):
                f.write(self.generate_entry(i, cue) + "\n")
        logger.info("Subtitle file generated successfully: %s", output_file)


class ASSFormatter(SubtitleFormatter):
    """Formatter for ASS subtitles, optionally with per-word karaoke timing."""

    ASS_HEADER: str = """[Script Info]
Title: Generated ASS File
ScriptType: v4.00+
Collisions: Normal
PlayDepth: 0

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: Default,Noto Sans,32,&H00FFFFFF,&H0000D7FF,&H00000000,&H64000000,-1,0,0,0,100,100,0,0.00,1,1.00,0.00,2,10,10,10,1

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
"""

    def __init__(self, karaoke: bool = False) -> None:
        self.karaoke: bool = karaoke
        self.header = self.ASS_HEADER

    def format_time(self, seconds: float) -> str:
        """Convert time in seconds to ASS formatted time string."""
        hours, minutes, secs, centis = _split_time(seconds, 2)
        return f"{hours:01d}:{minutes:02d}:{secs:02d}.{centis:02d}"

    def karaoke_text(self, cue: Cue) -> str:
        """Render cue words with ``\\k`` tags measured in centiseconds."""
        if not cue.words:
            return cue.text
        parts: list[str] = []
        cursor: float = cue.start_seconds
        for word in cue.words:
            # Silence before a word is folded into that word's tag.
            duration: float = max(word.end_seconds - cursor, 0.0)
            parts.append(f"{{\\k{int(round(duration * 100))}}}{word.text.strip()}")
            cursor = max(cursor, word.end_seconds)
        return " ".join(parts)

    def generate_entry(self, index: int, cue: Cue) -> str:
        """Generate a single ASS subtitle entry."""
        start_time: str = self.format_time(cue.start_seconds)
        end_time: str = self.format_time(cue.end_seconds)
        text: str = self.karaoke_text(cue) if self.karaoke else cue.text
        logger.debug("ASS Entry %s: Start %s, End %s, Text %s", index, start_time, end_time, text)
        return f"Dialogue: 0,{start_time},{end_time},Default,,0,0,0,,{text}"


class SRTFormatter(SubtitleFormatter):
    """Formatter for SRT subtitles."""

    def format_time(self, seconds: float) -> str:
        """Convert time in seconds to SRT formatted time string."""
        hours, minutes, secs, millis = _split_time(seconds, 3)
        return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"

    def generate_entry(self, index: int, cue: Cue) -> str:
        """Generate a single SRT subtitle entry."""
        start_time: str = self.format_time(cue.start_seconds)
        end_time: str = self.format_time(cue.end_seconds)
        logger.debug("SRT Entry %s: Start %s, End %s, Text %s", index, start_time, end_time, cue.text)
        return f"{index}\n{start_time} --> {end_time}\n{cue.text}\n"


class VTTFormatter(SubtitleFormatter):
    """Formatter for WebVTT subtitles."""

    header = "WEBVTT\n\n"

    def format_time(self, seconds: float) -> str:
        """Convert time in seconds to WebVTT formatted time string."""
        hours, minutes, secs, millis = _split_time(seconds, 3)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"

    def generate_entry(self, index: int, cue: Cue) -> str:
        """Generate a single WebVTT subtitle entry."""
        start_time: str = self.format_time(cue.start_seconds)
        end_time: str = self.format_time(cue.end_seconds)
        logger.debug("VTT Entry %s: Start %s, End %s, Text %s", index, start_time, end_time, cue.text)
        return f"{cue.id}\n{start_time} --> {end_time}\n{cue.text}\n"


class SubtitleGenerator:
    """Main class to generate subtitle files in different formats."""

    def __init__(self, formatter: SubtitleFormatter) -> None:
        self.formatter: SubtitleFormatter = formatter

    def generate_file(self, transcript: Transcript, output_file: str) -> None:
        """Generate a subtitle file using the provided formatter."""
        self.formatter.generate_file(transcript, output_file)


FORMATTERS: dict[str, type[SubtitleFormatter]] = {
    "ass": ASSFormatter,
    "srt": SRTFormatter,
    "vtt": VTTFormatter,
}


def build_formatter(subtitle_format: str, preset: str | None = None) -> SubtitleFormatter:
    """Instantiate the formatter for ``subtitle_format``.

    Karaoke timing is only written to ASS output, and only for the karaoke preset.
    """
    formatter_cls = FORMATTERS[subtitle_format]
    if formatter_cls is ASSFormatter:
        return ASSFormatter(karaoke=preset == "karaoke")
    return formatter_cls()


def infer_subtitle_format(output_path: str) -> str | None:
    """Infer the subtitle format from a file extension."""
    suffix: str = Path(output_path).suffix.lower().lstrip(".")
    return suffix if suffix in FORMATTERS else None
