import io

import pytest
from PIL import Image

from video2hltas.core import ConversionSettings, SelectionMode


def png_bytes(width: int, height: int, value: int = 255) -> bytes:
    buffer = io.BytesIO()
    Image.new("L", (width, height), value).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def small_settings():
    """Settings for the 2x2 scenario: origin (0, 90), 100x100 screen, 1 degree per pixel."""
    return ConversionSettings(
        scale_factor=1.0,
        mode=SelectionMode.BILEVEL,
        starting_pitch=0.0,
        starting_yaw=90.0,
        screen_width=100,
        screen_height=100,
        angle_per_pixel=1.0,
        slow_draw=False,
        chained=False,
    )
