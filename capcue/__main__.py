"""
capcue caption cue tool

This module is the command-line entry point. It turns a raw transcription
JSON file (word list, segment list, or plain text) into caption cues, prints
them, and optionally saves them for a renderer or exports them as subtitles.

Usage:
    capcue --file transcription.json [--window-size 8] [--preset karaoke]
    capcue --demo --at 4.2
    capcue --file transcription.json --subtitle-output out/captions.srt
"""

import argparse
import logging
import sys
import time
from typing import Any

from dotenv import load_dotenv

from capcue.config import AppConfig, reload_settings
from capcue.demo import generate_demo_transcript
from capcue.domain import Cue, Transcript
from capcue.style.classifier import classify, resolve_preset
from capcue.timeline.render_plan import total_frames
from capcue.timeline.resolver import active_cues, active_word
from capcue.transcript.normalizer import normalize
from capcue.utils.logger import configure_logging, get_logger
from capcue.utils.subtitles import (
    FORMATTERS,
    SubtitleGenerator,
    build_formatter,
    infer_subtitle_format,
)
from capcue.utils.timeline_utils import (
    TranscriptionLoadError,
    display_elapsed_time,
    load_transcription,
    print_cue_timeline,
    save_cues_to_csv,
    save_cues_to_json,
)

logger: logging.Logger = get_logger("capcue")


def _build_parser(settings: AppConfig) -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="capcue",
        description="Convert timestamped transcriptions into caption cues",
    )
    parser.add_argument(
        "--file",
        type=str,
        help="Path to a transcription JSON file",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in demo transcript instead of a file",
    )
    parser.add_argument(
        "--window-size",
        type=int,
        default=settings.captions.window_size,
        help="Maximum number of words per cue for word-level transcriptions",
    )
    parser.add_argument(
        "--fallback-text",
        type=str,
        default=settings.captions.fallback_text,
        help="Caption text used when the transcription has no usable content",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=settings.render.default_preset,
        help="Caption preset (bottom-centered, top-bar, karaoke)",
    )
    parser.add_argument(
        "--at",
        type=float,
        help="Print the cues and word active at this playback time in seconds",
    )
    parser.add_argument(
        "--save-cues",
        action="store_true",
        help="Save the cues as CSV and renderer JSON into the cues folder",
    )
    parser.add_argument(
        "--subtitle-format",
        choices=tuple(FORMATTERS.keys()),
        help=(
            "Export the cues as subtitles in the chosen format. "
            "If omitted, the format is inferred from --subtitle-output when possible."
        ),
    )
    parser.add_argument(
        "--subtitle-output",
        type=str,
        help=(
            "File path for the exported subtitle file. The format is inferred from "
            "the extension when --subtitle-format is not provided."
        ),
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level; overrides LOG_LEVEL for this invocation",
    )
    return parser


def _load_transcript(args: argparse.Namespace) -> Transcript:
    if args.demo:
        logger.info(msg="Using the built-in demo transcript.")
        return generate_demo_transcript()
    payload: Any = load_transcription(args.file)
    return normalize(
        payload,
        window_size=args.window_size,
        fallback_text=args.fallback_text,
    )


def _print_active_state(transcript: Transcript, at_seconds: float, preset: str) -> None:
    cues: tuple[Cue, ...] = active_cues(transcript, at_seconds)
    if not cues:
        print(f"No caption at {display_elapsed_time(at_seconds, _format='short')}")
        return
    for cue in cues:
        style = classify(cue.text, preset)
        print(f"[{cue.id}] {cue.text} ({style.script_hint}, {style.preset_key})")
        state = active_word(cue, at_seconds)
        if state is not None:
            print(f"    word: {state.word.text} ({state.progress_fraction:.0%})")


def _export_subtitles(transcript: Transcript, args: argparse.Namespace) -> None:
    if not args.subtitle_output:
        logger.error(msg="--subtitle-output is required to export subtitles.")
        sys.exit(1)

    subtitle_format: str | None = args.subtitle_format
    inferred_format: str | None = infer_subtitle_format(args.subtitle_output)
    if not subtitle_format:
        subtitle_format = inferred_format
        if not subtitle_format:
            logger.error(
                "Unable to infer subtitle format from %s. Provide --subtitle-format.",
                args.subtitle_output,
            )
            sys.exit(1)
    elif inferred_format and inferred_format != subtitle_format:
        logger.info(
            "Using subtitle format %s (overriding inferred format %s from output path)",
            subtitle_format,
            inferred_format,
        )

    try:
        generator = SubtitleGenerator(build_formatter(subtitle_format, resolve_preset(args.preset)))
        generator.generate_file(transcript, args.subtitle_output)
    except OSError as err:
        logger.error(msg=f"Failed to export subtitles: {err}", exc_info=True)
        sys.exit(1)
    logger.info("Subtitle file exported to %s", args.subtitle_output)


def main() -> None:
    """
    Main function to handle the command line interface logic.
    """
    load_dotenv()
    settings: AppConfig = reload_settings()
    args: argparse.Namespace = _build_parser(settings).parse_args()
    configure_logging(args.log_level)

    if not args.file and not args.demo:
        logger.error(msg="No transcription file provided. Use --file or --demo.")
        sys.exit(1)
    if args.window_size <= 0:
        logger.error(msg=f"--window-size must be positive, got {args.window_size}.")
        sys.exit(1)

    start_time: float = time.time()
    try:
        transcript: Transcript = _load_transcript(args)
    except TranscriptionLoadError as err:
        logger.error(msg=str(err))
        sys.exit(1)

    preset: str = resolve_preset(args.preset)
    print_cue_timeline(transcript)
    logger.info(
        "Built %s cues spanning %s frames at %s fps.",
        len(transcript),
        total_frames(transcript, settings.render.fps),
        settings.render.fps,
    )

    if args.at is not None:
        _print_active_state(transcript, args.at, preset)

    if args.save_cues:
        source_name: str = args.file or "demo"
        csv_file: str = save_cues_to_csv(transcript, source_name, settings.output.cues_folder)
        json_file: str = save_cues_to_json(
            transcript, source_name, settings.output.cues_folder, preset
        )
        logger.info(msg=f"Cues saved to {csv_file} and {json_file}")

    if args.subtitle_format or args.subtitle_output:
        _export_subtitles(transcript, args)

    logger.info(
        msg=f"Caption cues ready in {display_elapsed_time(time.time() - start_time)}"
    )


if __name__ == "__main__":
    main()
