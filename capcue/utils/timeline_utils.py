"""
Cue Timeline Utilities

This module provides functions to load raw transcription files, print the cue
timeline produced from them, and save cues to CSV or JSON so a renderer can
pick them up.

Functions:
    - load_transcription: Reads a raw transcription payload from a JSON file.
    - cue_to_dict: Converts a cue to the renderer's caption mapping.
    - save_cues_to_csv: Saves one row per word (or per untimed cue) to CSV.
    - save_cues_to_json: Saves the caption mappings and preset to JSON.
    - display_elapsed_time: Displays elapsed time in a formatted string.
    - print_cue_timeline: Prints the cue timeline as a coloured table.
    - color_txt: Colorizes a string.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any

from colored import attr, bg, fg
from halo import Halo

from capcue.domain import Cue, Transcript
from capcue.style.classifier import classify, resolve_preset
from capcue.utils.logger import get_logger


logger: logging.Logger = get_logger(__name__)


class TranscriptionLoadError(RuntimeError):
    """Raised when a transcription file cannot be read or decoded."""


def load_transcription(file_path: str) -> Any:
    """
    Reads a raw transcription payload from a JSON file.

    Arguments:
        file_path (str): Path to the JSON file written by a speech engine.

    Returns:
        Any: The decoded payload, handed to the normalizer untouched.

    Raises:
        TranscriptionLoadError: If the file is missing or is not valid JSON.
    """
    try:
        with open(file_path, encoding="utf-8") as file:
            payload: Any = json.load(file)
    except OSError as err:
        raise TranscriptionLoadError(
            f"Unable to read transcription file {file_path}: {err}"
        ) from err
    except json.JSONDecodeError as err:
        raise TranscriptionLoadError(
            f"Transcription file {file_path} is not valid JSON: {err}"
        ) from err
    logger.debug(msg=f"Loaded transcription payload from {file_path}")
    return payload


def cue_to_dict(cue: Cue) -> dict[str, Any]:
    """
    Converts a cue to the caption mapping consumed by the renderer.

    Arguments:
        cue (Cue): The cue to convert.

    Returns:
        dict: ``{"id", "start", "end", "text", "words": [{"word", "start", "end"}]}``.
    """
    return {
        "id": cue.id,
        "start": cue.start_seconds,
        "end": cue.end_seconds,
        "text": cue.text,
        "words": [
            {"word": word.text, "start": word.start_seconds, "end": word.end_seconds}
            for word in cue.words
        ],
    }


def _output_path(folder: Path, file_name: str, extension: str) -> Path:
    stem: str = Path(file_name).stem or "captions"
    return folder / f"{stem}.{extension}"


def save_cues_to_csv(transcript: Transcript, file_name: str, folder: Path) -> str:
    """
    Saves the transcript to a CSV file, one row per word.

    Arguments:
        transcript (Transcript): The cues to be saved.
        file_name (str): Source file name; its stem names the CSV file.
        folder (Path): Destination folder, created when missing.

    Returns:
        str: The path to the saved CSV file.
    """
    logger.info(msg="Starting to save cues to CSV.")
    folder.mkdir(parents=True, exist_ok=True)
    output: Path = _output_path(folder, file_name, "csv")

    with Halo(
        text=f"Saving cues to {output}",
        spinner="dots",
        text_color="green",
    ):
        with open(output, mode="w", newline="", encoding="utf-8") as file:
            writer = csv.writer(file)
            writer.writerow(["Cue", "Cue start (s)", "Cue end (s)", "Word", "Word start (s)", "Word end (s)"])
            logger.debug("Header written to CSV file.")

            for cue in transcript:
                if not cue.words:
                    writer.writerow([cue.id, round(cue.start_seconds, 3), round(cue.end_seconds, 3), cue.text, "", ""])
                    continue
                for word in cue.words:
                    writer.writerow(
                        [
                            cue.id,
                            round(cue.start_seconds, 3),
                            round(cue.end_seconds, 3),
                            word.text,
                            round(word.start_seconds, 3),
                            round(word.end_seconds, 3),
                        ]
                    )

    logger.info(msg=f"Cues successfully saved to {output}")
    return str(output)


def save_cues_to_json(
    transcript: Transcript, file_name: str, folder: Path, preset: str | None = None
) -> str:
    """
    Saves the renderer props (captions plus preset) to a JSON file.

    Arguments:
        transcript (Transcript): The cues to be saved.
        file_name (str): Source file name; its stem names the JSON file.
        folder (Path): Destination folder, created when missing.
        preset (str, optional): Requested caption preset, resolved before saving.

    Returns:
        str: The path to the saved JSON file.
    """
    folder.mkdir(parents=True, exist_ok=True)
    output: Path = _output_path(folder, file_name, "json")
    preset_key: str = resolve_preset(preset)
    props: dict[str, Any] = {
        "captions": [cue_to_dict(cue) for cue in transcript],
        "preset": {"style": preset_key},
    }

    with Halo(
        text=f"Saving caption props to {output}",
        spinner="dots",
        text_color="green",
    ):
        with open(output, mode="w", encoding="utf-8") as file:
            json.dump(props, file, ensure_ascii=False, indent=2)

    logger.info(msg=f"Caption props successfully saved to {output}")
    return str(output)


def display_elapsed_time(elapsed_time: float, _format: str = "long") -> str:
    """
    Returns the elapsed time in seconds in long or short format.

    Arguments:
        elapsed_time (float): Elapsed time in seconds.
        _format (str, optional): Format of the elapsed time
            ('long' or 'short'), by default 'long'.

    Returns:
        str: Formatted elapsed time.
    """
    minutes, seconds = divmod(int(elapsed_time), 60)
    if _format == "long":
        return (
            f"{minutes} min {seconds} seconds"
            if minutes
            else f"{elapsed_time:.2f} seconds"
        )
    return f"{minutes}m{seconds}s" if minutes else f"{elapsed_time:.2f}s"


def color_txt(
    string: str, fg_color: str, bg_color: str, padding: int = 0
) -> str:
    """
    Colorizes a string.

    Arguments:
        string (str): String to be colorized.
        fg_color (str): Foreground color.
        bg_color (str): Background color.
        padding (int, optional): Minimum width, padded on the right.

    Returns:
        str: Colorized string.
    """
    if padding:
        string = string.ljust(padding)

    return f"{fg(fg_color)}{bg(bg_color)}{string}{attr('reset')}"


def print_cue_timeline(transcript: Transcript) -> None:
    """
    Prints the cue timeline, one row per cue.

    Arguments:
        transcript (Transcript): Cues to print.
    """
    logger.info(msg=f"Printing timeline with {len(transcript)} cues.")
    if not transcript:
        return

    rows: list[tuple[str, str, str, str]] = [
        (
            str(cue.id),
            display_elapsed_time(cue.start_seconds, _format="short"),
            display_elapsed_time(cue.end_seconds, _format="short"),
            cue.text,
        )
        for cue in transcript
    ]
    max_id_width: int = max(len("Cue"), *(len(row[0]) for row in rows))
    max_time_width: int = max(len("Start"), *(len(row[1]) for row in rows), *(len(row[2]) for row in rows))

    # Header
    print(color_txt("Cue", "black", "green", max_id_width + 1), end="")
    print(color_txt("Start", "black", "yellow", max_time_width + 1), end="")
    print(color_txt("End", "black", "yellow", max_time_width + 1), end="")
    print(color_txt("Caption", "black", "blue"))

    for (cue_id, start, end, text), cue in zip(rows, transcript):
        script_hint: str = classify(cue.text).script_hint
        marker: str = "*" if script_hint == "mixed-script" else " "
        print(
            f"{cue_id.ljust(max_id_width)} {start.ljust(max_time_width)} "
            f"{end.ljust(max_time_width)} {marker}{text}"
        )
