"""Pick the pixels of a frame that get drawn as dots."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from PIL import Image
from skimage import feature

from . import ConversionSettings, SelectionMode

logger = logging.getLogger(__name__)

Coordinate = tuple[int, int]


def resize_image(image: Image.Image, scale_factor: float) -> Image.Image:
    """Nearest-neighbour downscale by ``scale_factor`` on both axes."""

    width, height = image.size
    target = (
        max(1, int(width * scale_factor)) if width else 0,
        max(1, int(height * scale_factor)) if height else 0,
    )
    if target == image.size:
        return image
    return image.resize(target, Image.Resampling.NEAREST)


class PixelSelector:
    """Base class: subclasses build a boolean ``(height, width)`` activity mask."""

    def __init__(self, max_dots: Optional[int] = None):
        self.max_dots = max_dots

    def active_mask(self, image: Image.Image) -> np.ndarray:
        raise NotImplementedError

    def select(self, image: Image.Image) -> list[Coordinate]:
        """Return active ``(x, y)`` coordinates, all ``y`` of a column before the next ``x``."""

        if image.width == 0 or image.height == 0:
            return []

        mask = self.active_mask(image)
        # rows of the transposed mask are columns of the image
        coordinates = np.argwhere(mask.T)
        if self.max_dots is not None and len(coordinates) > self.max_dots:
            logger.debug("Capping %s active pixels to %s dots", len(coordinates), self.max_dots)
            coordinates = coordinates[: self.max_dots]
        return [(int(x), int(y)) for x, y in coordinates]


class EdgeSelector(PixelSelector):
    """Canny edges: gaussian smoothing, gradient magnitude, hysteresis."""

    def __init__(
        self,
        sigma: float,
        strong_threshold: float,
        weak_threshold: float,
        max_dots: Optional[int] = None,
    ):
        super().__init__(max_dots)
        self.sigma = sigma
        self.strong_threshold = strong_threshold
        self.weak_threshold = weak_threshold

    def active_mask(self, image: Image.Image) -> np.ndarray:
        gray = np.asarray(image.convert("L"), dtype=np.float64) / 255.0
        return feature.canny(
            gray,
            sigma=self.sigma,
            low_threshold=self.weak_threshold,
            high_threshold=self.strong_threshold,
        )


class DitherSelector(PixelSelector):
    """Floyd-Steinberg bi-level dither of the luminance channel."""

    def active_mask(self, image: Image.Image) -> np.ndarray:
        dithered = image.convert("L").convert("1", dither=Image.Dither.FLOYDSTEINBERG).convert("L")
        return np.asarray(dithered) > 128


class BilevelSelector(PixelSelector):
    """Plain threshold at the 8-bit midpoint, for footage that is already black and white."""

    def active_mask(self, image: Image.Image) -> np.ndarray:
        return np.asarray(image.convert("L")) > 128


def build_selector(settings: ConversionSettings) -> PixelSelector:
    """Instantiate the selector configured by ``settings.mode``."""

    mode = SelectionMode(settings.mode)
    if mode is SelectionMode.CANNY:
        return EdgeSelector(
            settings.sigma,
            settings.strong_threshold,
            settings.weak_threshold,
            max_dots=settings.max_dots,
        )
    if mode is SelectionMode.DITHERING:
        return DitherSelector(max_dots=settings.max_dots)
    return BilevelSelector(max_dots=settings.max_dots)
