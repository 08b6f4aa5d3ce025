"""Frame sources and the still-image decoder."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Iterator, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import FrameDecodeError, ProcessingError
from ..utils import file_tools

logger = logging.getLogger(__name__)

# Raw still-image bytes, an already decoded RGB array, or None when the source
# produced nothing for that position.
FramePayload = Union[bytes, np.ndarray, None]

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}


def iter_clip_frames(clip, video_path: Path) -> Iterator[FramePayload]:
    """Yield every frame of an open clip in order as RGB arrays. The caller closes the clip."""

    logger.info("Streaming frames from %s", video_path)
    try:
        for frame_array in clip.iter_frames():
            yield frame_array
    except Exception as exc:  # pragma: no cover - moviepy internals
        raise ProcessingError(f"Failed to read video {video_path}: {exc}") from exc


def iter_image_files(directory: Path) -> Iterator[FramePayload]:
    """Return the raw bytes of each image in ``directory``, sorted by name.

    The directory is listed right away so a missing directory fails before
    any output is created.
    """

    if not directory.is_dir():
        raise ProcessingError(f"Frame directory not found: {directory}")
    files = file_tools.list_files_with_extensions(directory, IMAGE_EXTENSIONS)
    logger.info("Reading %s frame images from %s", len(files), directory)
    return _read_files(files)


def _read_files(files: list[Path]) -> Iterator[FramePayload]:
    for path in files:
        try:
            yield path.read_bytes()
        except OSError as exc:
            # an unreadable frame is a frame without image data
            logger.warning("Cannot read %s: %s", path, exc)
            yield None


def decode_frame(payload: FramePayload, position: int) -> Image.Image:
    """Turn a source payload into a Pillow image; the format is sniffed from content."""

    if payload is None:
        raise FrameDecodeError(position, reason="source produced no image data")
    if isinstance(payload, np.ndarray):
        try:
            return Image.fromarray(payload)
        except (TypeError, ValueError) as exc:
            raise FrameDecodeError(position, reason=str(exc)) from exc

    try:
        image = Image.open(io.BytesIO(payload))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise FrameDecodeError(position, reason=str(exc)) from exc
    return image
