"""Command-line entry point for video-to-HLTAS conversion."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import build_settings
from .core import SelectionMode
from .core import pipeline
from .core.errors import InvalidVideoError, ProcessingError, ValidationError

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="video2hltas",
        description="Convert a video into HLTAS scripts that draw each frame with camera angles.",
    )
    parser.add_argument("input", type=Path, help="Source video, frame directory or still image")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--image", action="store_true", help="Treat INPUT as a single still image")
    source.add_argument(
        "--frames-dir",
        action="store_true",
        help="Treat INPUT as a directory of frame images, read in name order",
    )
    parser.add_argument("--config", type=Path, help="JSON file with conversion settings")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SelectionMode],
        help="Pixel selection: canny edges, dithering or bilevel threshold",
    )
    parser.add_argument("--scale", type=float, dest="scale_factor", help="Frame scale factor (default: 0.125)")
    parser.add_argument("--max-frames", type=int, help="Stop after this many frames (0 = no limit)")
    parser.add_argument("--max-dots", type=int, help="Cap dots drawn per frame (0 = no cap)")
    parser.add_argument(
        "--aggregate",
        action="store_true",
        help="Write one script for the whole video instead of one chained script per frame",
    )
    parser.add_argument("--output", type=Path, help="Aggregated script path (default: stdout)")
    parser.add_argument("--no-slow-draw", action="store_true", help="Draw every dot of a frame in one instant")
    parser.add_argument(
        "--abort-on-bad-frame",
        action="store_true",
        help="Fail the run instead of skipping frames that cannot be decoded",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve settings and show them without converting",
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    overrides = {
        "mode": args.mode,
        "scale_factor": args.scale_factor,
        "max_frames": args.max_frames,
        "max_dots": args.max_dots,
    }
    if args.aggregate or args.image:
        overrides["chained"] = False
    if args.no_slow_draw:
        overrides["slow_draw"] = False
    if args.abort_on_bad_frame:
        overrides["skip_undecodable"] = False
    return overrides


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = build_settings(args.config, _overrides(args))
    except ValidationError as exc:
        logger.error("%s", exc)
        return 2

    if args.output and settings.chained:
        logger.error("--output only applies to aggregated scripts; add --aggregate or drop --output")
        return 2

    if args.dry_run:
        print(settings)
        return 0

    try:
        if args.image:
            document = pipeline.convert_image(args.input, settings)
            outcome = None
        elif args.frames_dir:
            outcome = pipeline.convert_image_directory(args.input, settings, args.output)
            document = outcome.document
        else:
            outcome = pipeline.convert_video(args.input, settings, args.output)
            document = outcome.document
    except (InvalidVideoError, ProcessingError) as exc:
        logger.error("%s", exc)
        return 1

    if args.image and args.output:
        try:
            args.output.write_text(document, encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot write script %s: %s", args.output, exc)
            return 1
    elif document is not None and not args.output:
        print(document)

    if outcome is not None and outcome.frames_skipped:
        logger.warning("%s frames could not be decoded and were skipped", outcome.frames_skipped)
    return 0


if __name__ == "__main__":
    sys.exit(main())
