"""Domain-specific exceptions for the HLTAS converter."""

from pathlib import Path


class InvalidVideoError(ValueError):
    """Raised when the selected video file is missing or unreadable."""

    def __init__(self, path: Path, reason: str | None = None):
        message = f"Invalid video file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ValidationError(ValueError):
    """Raised when settings or a config file fail validation."""


class ProcessingError(RuntimeError):
    """Raised when the pipeline fails unexpectedly."""


class FrameDecodeError(ProcessingError):
    """Raised when a single frame cannot be decoded into an image."""

    def __init__(self, position: int, reason: str | None = None):
        message = f"Could not decode frame at stream position {position}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.position = position
