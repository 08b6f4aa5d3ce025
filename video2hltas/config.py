"""JSON config file support for conversion settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from .core import ConversionSettings, SelectionMode
from .core.errors import ValidationError
from .utils import validators

logger = logging.getLogger(__name__)


class ConversionRequest(BaseModel):
    """Settings as they appear in a config file or on the command line."""

    model_config = ConfigDict(extra="forbid")

    scale_factor: float = Field(0.125, gt=0, le=1)
    mode: SelectionMode = SelectionMode.DITHERING
    sigma: float = Field(1.2, gt=0)
    strong_threshold: float = Field(0.2, gt=0)
    weak_threshold: float = Field(0.01, gt=0)
    starting_pitch: float = -0.022
    starting_yaw: float = 90.197754
    screen_width: int = Field(1280, ge=1)
    screen_height: int = Field(720, ge=1)
    angle_per_pixel: float = Field(0.0625 / 2, gt=0)
    zero_frametime: str = "0.0000000001"
    frame_frametime: str = "0.04171"
    slow_draw: bool = True
    slow_wait: str = "0.000001"
    max_dots: Optional[int] = Field(None, ge=0)
    chained: bool = True
    output_dir_name: str = Field("out", min_length=1)
    max_frames: Optional[int] = Field(None, ge=0)
    skip_undecodable: bool = True
    writer_threads: int = Field(4, ge=1, le=64)

    @field_validator("zero_frametime", "frame_frametime", "slow_wait", mode="before")
    @classmethod
    def _parse_frametime(cls, value, info):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            raise ValueError("frame times must be quoted strings, they are written verbatim")
        if not isinstance(value, str):
            raise ValueError("frame time must be a string")
        return validators.parse_frametime(value, info.field_name)

    @field_validator("max_dots", "max_frames")
    @classmethod
    def _normalize_limits(cls, value):
        if value == 0:
            return None
        return value

    def to_settings(self) -> ConversionSettings:
        settings = ConversionSettings(**self.model_dump())
        return validators.validate_settings(settings)


def load_request(path: Path) -> ConversionRequest:
    """Parse a JSON config file."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValidationError(f"Cannot read config file {path}: {exc}") from exc
    try:
        request = ConversionRequest.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid config file {path}: {exc}") from exc
    logger.debug("Loaded config from %s", path)
    return request


def build_settings(config_path: Optional[Path] = None, overrides: Optional[dict[str, Any]] = None) -> ConversionSettings:
    """Merge a config file (if any) with explicit overrides into validated settings."""

    base = load_request(config_path).model_dump() if config_path else {}
    merged = {**base, **{key: value for key, value in (overrides or {}).items() if value is not None}}
    try:
        request = ConversionRequest.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError(str(exc)) from exc
    return request.to_settings()
