"""Filesystem helpers."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    """Create a directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)
    return path


def chained_output_dir(input_path: Path, dir_name: str) -> Path:
    """Directory for per-frame scripts, next to the input."""

    return input_path.with_name(dir_name)


def list_files_with_extensions(root: Path, extensions: set[str]) -> list[Path]:
    """Return sorted list of files in root with given extensions."""

    if not root.exists():
        return []
    files = [p for p in root.iterdir() if p.is_file() and p.suffix.lower() in extensions]
    return sorted(files)
