"""Video opening and metadata discovery through moviepy."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import InvalidVideoError, ProcessingError
from ..utils import validators

logger = logging.getLogger(__name__)


def open_clip(video_path: Path):
    """Validate ``video_path`` and open it as a moviepy clip.

    The caller owns the clip and must close it.
    """

    validated_path = validators.validate_video_path(video_path)
    _ensure_ffmpeg_available()
    clip_class = _resolve_video_file_clip()

    try:
        clip = clip_class(str(validated_path), audio=False)
    except Exception as exc:  # pragma: no cover - backend dependent
        raise InvalidVideoError(validated_path, reason=f"Could not open video: {exc}") from exc

    width, height = clip.size
    logger.info(
        "Opened %s -> %sx%s @ %sfps, %ss",
        validated_path,
        width,
        height,
        getattr(clip, "fps", None),
        getattr(clip, "duration", None),
    )
    return clip


def _ensure_ffmpeg_available() -> None:
    """Raise a friendly error if ffmpeg is missing."""

    try:
        from moviepy.config import FFMPEG_BINARY  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover
        raise ProcessingError("moviepy is not installed. Run pip install -e .") from exc

    if not FFMPEG_BINARY:
        raise ProcessingError("ffmpeg not found. Install ffmpeg and ensure it is on PATH.")


def _resolve_video_file_clip():
    """Import VideoFileClip from supported moviepy locations."""

    try:
        from moviepy import VideoFileClip  # type: ignore
        return VideoFileClip
    except ImportError:
        try:
            from moviepy.editor import VideoFileClip  # type: ignore
            return VideoFileClip
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise ProcessingError("moviepy is not installed. Run pip install -e .") from exc
