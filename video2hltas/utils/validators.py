"""Validation helpers for user inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..core import ConversionSettings
from ..core.errors import InvalidVideoError, ValidationError


ALLOWED_VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".mkv", ".webm"}


def validate_video_path(path: Path) -> Path:
    """Ensure the video path exists and appears to be a supported format."""

    if not path:
        raise InvalidVideoError(Path("<unset>"), reason="No path provided")
    if not path.exists():
        raise InvalidVideoError(path, reason="File not found")
    if path.suffix.lower() not in ALLOWED_VIDEO_EXTENSIONS:
        raise InvalidVideoError(path, reason="Unsupported format")
    return path


def parse_frametime(value: str, field: str) -> str:
    """Check a frame duration literal is a non-negative number and keep its exact text."""

    text = value.strip()
    try:
        parsed = float(text)
    except ValueError as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if parsed < 0:
        raise ValidationError(f"{field} must be zero or greater")
    return text


def validate_positive(value: Optional[float], field: str) -> None:
    if value is not None and value <= 0:
        raise ValidationError(f"{field} must be greater than zero")


def validate_thresholds(strong: float, weak: float) -> None:
    """Canny hysteresis needs 0 < weak <= strong."""

    if weak <= 0:
        raise ValidationError("Weak threshold must be greater than zero")
    if weak > strong:
        raise ValidationError("Weak threshold must not exceed strong threshold")


def validate_settings(settings: ConversionSettings) -> ConversionSettings:
    """Reject settings that would produce a broken script."""

    validate_positive(settings.scale_factor, "Scale factor")
    validate_positive(settings.sigma, "Sigma")
    validate_thresholds(settings.strong_threshold, settings.weak_threshold)
    validate_positive(settings.screen_width, "Screen width")
    validate_positive(settings.screen_height, "Screen height")
    validate_positive(settings.angle_per_pixel, "Angle per pixel")
    validate_positive(settings.max_dots, "Max dots")
    validate_positive(settings.max_frames, "Max frames")
    validate_positive(settings.writer_threads, "Writer threads")
    for field in ("zero_frametime", "frame_frametime", "slow_wait"):
        parse_frametime(getattr(settings, field), field)
    if not settings.output_dir_name or "/" in settings.output_dir_name or "\\" in settings.output_dir_name:
        raise ValidationError("Output directory name must be a single path component")
    return settings
