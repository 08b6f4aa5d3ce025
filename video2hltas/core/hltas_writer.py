"""HLTAS text generation: per-frame view changes and the script wrapper."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from . import ConversionSettings

logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".hltas"
EMPTY_FIELDS = "----------|------|------"
CLEAR_ENABLE = "bxt_force_clear 1; gl_clear 1; sv_zmax 1"
CLEAR_DISABLE = "bxt_force_clear 0; gl_clear 0; sv_zmax 8192"


def format_angle(value: float) -> str:
    """Shortest positional decimal that survives a round trip through float32."""

    return np.format_float_positional(np.float32(value), unique=True, trim="-")


def view_change_line(pitch: float, yaw: float, directive: str, settings: ConversionSettings) -> str:
    return (
        f"{EMPTY_FIELDS}|{settings.zero_frametime}|{format_angle(yaw)}|{format_angle(pitch)}|1|{directive}"
    )


def slow_wait_line(settings: ConversionSettings) -> str:
    return f"{EMPTY_FIELDS}|{settings.slow_wait}|-|-|1|"


def delay_line(settings: ConversionSettings) -> str:
    """Hold the origin for one video frame so the drawn dots stay on screen."""

    return (
        f"{EMPTY_FIELDS}|{settings.frame_frametime}|"
        f"{format_angle(settings.starting_yaw)}|{format_angle(settings.starting_pitch)}|1"
    )


def _directive_for(position: int) -> str:
    # first dot wipes the previous frame, later dots accumulate
    if position == 0:
        return CLEAR_ENABLE
    if position == 1:
        return CLEAR_DISABLE
    return ""


def encode_frame(angles: Iterable[tuple[float, float]], settings: ConversionSettings) -> str:
    """Encode ``(pitch, yaw)`` pairs of one frame. No pairs, no text."""

    lines: list[str] = []
    for position, (pitch, yaw) in enumerate(angles):
        lines.append(view_change_line(pitch, yaw, _directive_for(position), settings))
        if settings.slow_draw:
            lines.append(slow_wait_line(settings))

    if not lines:
        return ""

    lines.append(delay_line(settings))
    return "\n".join(lines) + "\n"


def load_next_line(next_index: int, settings: ConversionSettings) -> str:
    target = f"{settings.output_dir_name}/{next_index}{SCRIPT_SUFFIX}"
    return (
        f"{EMPTY_FIELDS}|{settings.zero_frametime}|0|-|1|"
        f'echo "frame {next_index}"; bxt_tas_loadscript {target}'
    )


def assemble_script(frame_text: str, next_index: Optional[int], settings: ConversionSettings) -> str:
    """Wrap frame text in the HLTAS header, optionally chaining to the next script.

    The header carries a zero-duration frame of its own since the engine
    needs at least two frames in a script.
    """

    zero = settings.zero_frametime
    document = (
        "version 1\n"
        "hlstrafe_version 5\n"
        "load_command bxt_anglespeed_cap 0; gl_clear 1; bxt_force_clear 1; sv_zmax 1;\n"
        f"frametime0ms {zero}\n"
        "frames\n"
        "strafing vectorial\n"
        "target_yaw velocity_lock\n"
        "\n"
        f"{EMPTY_FIELDS}|{zero}|0|-|1\n"
        f"{frame_text}\n"
    )
    if next_index is not None:
        document += load_next_line(next_index, settings)
    return document


def script_path_for(output_dir: Path, index: int) -> Path:
    """Chained scripts are named by bare frame index."""

    return output_dir / f"{index}{SCRIPT_SUFFIX}"


def write_script(document: str, path: Path) -> Path:
    """Write one script, truncating any previous run's file."""

    path.write_text(document, encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path
