"""Map image coordinates to absolute camera angles."""

from __future__ import annotations

from . import ConversionSettings


def project(dimensions: tuple[int, int], x: int, y: int, settings: ConversionSettings) -> tuple[float, float]:
    """Return ``(pitch, yaw)`` for pixel ``(x, y)`` of a ``(width, height)`` grid.

    The grid center looks straight at the configured origin. Each pixel of the
    grid spans ``screen / grid`` screen pixels, each worth ``angle_per_pixel``.
    Image y grows downward while pitch grows upward, so the vertical offset is
    subtracted.
    """

    width, height = dimensions
    center_x = width // 2
    center_y = height // 2

    diff_x = x - center_x
    diff_y = y - center_y

    pitch = settings.starting_pitch - diff_y / height * settings.screen_height * settings.angle_per_pixel
    yaw = diff_x / width * settings.screen_width * settings.angle_per_pixel + settings.starting_yaw
    return pitch, yaw


def project_all(
    dimensions: tuple[int, int], coordinates: list[tuple[int, int]], settings: ConversionSettings
) -> list[tuple[float, float]]:
    return [project(dimensions, x, y, settings) for x, y in coordinates]
