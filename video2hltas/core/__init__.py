"""Core data types shared by the conversion pipeline."""

__all__ = [
    "SelectionMode",
    "ConversionSettings",
    "FrameScript",
    "ConversionStats",
    "ConversionOutcome",
]

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class SelectionMode(str, Enum):
    """How active pixels are picked out of a frame."""

    CANNY = "canny"
    DITHERING = "dithering"
    BILEVEL = "bilevel"


@dataclass(frozen=True)
class ConversionSettings:
    """Run-wide settings. Built once before the first frame and never mutated."""

    scale_factor: float = 0.125
    mode: SelectionMode = SelectionMode.DITHERING

    # canny parameters
    sigma: float = 1.2
    strong_threshold: float = 0.2
    weak_threshold: float = 0.01

    # origin
    starting_pitch: float = -0.022
    starting_yaw: float = 90.197754

    screen_width: int = 1280
    screen_height: int = 720
    angle_per_pixel: float = 0.0625 / 2

    # written verbatim, the replay engine is sensitive to these strings
    zero_frametime: str = "0.0000000001"
    frame_frametime: str = "0.04171"  # 23.97602 fps source

    slow_draw: bool = True
    slow_wait: str = "0.000001"

    max_dots: Optional[int] = None
    chained: bool = True
    output_dir_name: str = "out"
    max_frames: Optional[int] = None
    skip_undecodable: bool = True
    writer_threads: int = 4


@dataclass
class FrameScript:
    """Encoded HLTAS text for one decoded frame."""

    index: int
    text: str
    dot_count: int


@dataclass
class ConversionStats:
    """Counters updated while frames are consumed."""

    decoded: int = 0
    skipped: int = 0


@dataclass
class ConversionOutcome:
    """What a conversion run produced."""

    frames_written: int
    frames_skipped: int
    script_paths: list[Path] = field(default_factory=list)
    document: Optional[str] = None
    output_path: Optional[Path] = None
