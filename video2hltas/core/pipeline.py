"""Frame-by-frame conversion driver."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, Optional

from PIL import Image

from . import ConversionOutcome, ConversionSettings, ConversionStats, FrameScript
from . import frame_extractor, hltas_writer, pixel_selector, projection, video_loader
from .errors import FrameDecodeError, ProcessingError
from .frame_extractor import FramePayload
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)


def render_frame(
    image: Image.Image, selector: pixel_selector.PixelSelector, settings: ConversionSettings
) -> tuple[str, int]:
    """Encode one decoded image; returns the frame text and its dot count."""

    image = pixel_selector.resize_image(image, settings.scale_factor)
    coordinates = selector.select(image)
    angles = projection.project_all(image.size, coordinates, settings)
    return hltas_writer.encode_frame(angles, settings), len(coordinates)


def iter_frame_scripts(
    payloads: Iterable[FramePayload],
    settings: ConversionSettings,
    stats: Optional[ConversionStats] = None,
) -> Iterator[FrameScript]:
    """Decode, select, project and encode each frame in source order.

    Frame indices count decoded frames only, so skipped payloads leave no gap.
    """

    stats = stats if stats is not None else ConversionStats()
    selector = pixel_selector.build_selector(settings)

    for position, payload in enumerate(payloads):
        try:
            image = frame_extractor.decode_frame(payload, position)
        except FrameDecodeError as exc:
            if not settings.skip_undecodable:
                raise
            stats.skipped += 1
            logger.warning("Skipping frame: %s", exc)
            continue

        if settings.max_frames is not None and stats.decoded >= settings.max_frames:
            logger.info("Reached frame limit of %s, stopping", settings.max_frames)
            break

        index = stats.decoded
        stats.decoded += 1

        text, dot_count = render_frame(image, selector, settings)
        logger.debug("Frame %s: %s dots", index, dot_count)
        yield FrameScript(index=index, text=text, dot_count=dot_count)


def convert(
    payloads: Iterable[FramePayload],
    settings: ConversionSettings,
    output_dir: Optional[Path] = None,
    output_path: Optional[Path] = None,
) -> ConversionOutcome:
    """Run the pipeline over ``payloads`` in chained or aggregated mode."""

    validators.validate_settings(settings)
    if settings.chained:
        if output_dir is None:
            raise ProcessingError("Chained output needs an output directory")
        return _convert_chained(payloads, settings, output_dir)
    return _convert_aggregated(payloads, settings, output_path)


def _convert_chained(
    payloads: Iterable[FramePayload], settings: ConversionSettings, output_dir: Path
) -> ConversionOutcome:
    try:
        file_tools.ensure_directory(output_dir)
    except OSError as exc:
        raise ProcessingError(f"Cannot create output directory {output_dir}: {exc}") from exc

    stats = ConversionStats()
    futures: list[tuple[int, Future]] = []

    def submit(frame: FrameScript, next_index: Optional[int]) -> None:
        document = hltas_writer.assemble_script(frame.text, next_index, settings)
        path = hltas_writer.script_path_for(output_dir, frame.index)
        futures.append((frame.index, pool.submit(hltas_writer.write_script, document, path)))

    with ThreadPoolExecutor(max_workers=settings.writer_threads) as pool:
        # a frame is only linked once its successor is known to exist
        pending: Optional[FrameScript] = None
        for frame in iter_frame_scripts(payloads, settings, stats):
            if pending is not None:
                submit(pending, frame.index)
            pending = frame
        if pending is not None:
            submit(pending, None)

    script_paths: list[Path] = []
    failures: list[tuple[int, BaseException]] = []
    for index, future in futures:
        exc = future.exception()
        if exc is not None:
            failures.append((index, exc))
        else:
            script_paths.append(future.result())

    if failures:
        for index, exc in failures:
            logger.error("Failed to write script for frame %s: %s", index, exc)
        first_index, first_exc = failures[0]
        raise ProcessingError(
            f"{len(failures)} of {len(futures)} scripts could not be written (first: frame {first_index})"
        ) from first_exc

    logger.info(
        "Wrote %s scripts to %s (%s frames skipped)", len(script_paths), output_dir, stats.skipped
    )
    return ConversionOutcome(
        frames_written=len(script_paths),
        frames_skipped=stats.skipped,
        script_paths=script_paths,
    )


def _convert_aggregated(
    payloads: Iterable[FramePayload], settings: ConversionSettings, output_path: Optional[Path]
) -> ConversionOutcome:
    stats = ConversionStats()
    frame_texts = [frame.text for frame in iter_frame_scripts(payloads, settings, stats)]
    document = hltas_writer.assemble_script("".join(frame_texts), None, settings)

    if output_path is not None:
        try:
            file_tools.ensure_directory(output_path.parent)
            hltas_writer.write_script(document, output_path)
        except OSError as exc:
            raise ProcessingError(f"Cannot write script {output_path}: {exc}") from exc
        logger.info("Wrote %s frames to %s (%s frames skipped)", len(frame_texts), output_path, stats.skipped)

    return ConversionOutcome(
        frames_written=len(frame_texts),
        frames_skipped=stats.skipped,
        document=document,
        output_path=output_path,
    )


def convert_video(
    video_path: Path, settings: ConversionSettings, output_path: Optional[Path] = None
) -> ConversionOutcome:
    """Convert a video file; chained scripts go next to the video.

    The clip is opened before any output directory is created.
    """

    validators.validate_settings(settings)
    output_dir = file_tools.chained_output_dir(video_path, settings.output_dir_name)
    clip = video_loader.open_clip(video_path)
    try:
        return convert(frame_extractor.iter_clip_frames(clip, video_path), settings, output_dir, output_path)
    finally:
        clip.close()


def convert_image_directory(
    directory: Path, settings: ConversionSettings, output_path: Optional[Path] = None
) -> ConversionOutcome:
    """Convert a directory of numbered still images as if they were video frames."""

    output_dir = file_tools.chained_output_dir(directory, settings.output_dir_name)
    return convert(frame_extractor.iter_image_files(directory), settings, output_dir, output_path)


def convert_image(image_path: Path, settings: ConversionSettings) -> str:
    """Convert one still image into a standalone script document."""

    validators.validate_settings(settings)
    try:
        payload = image_path.read_bytes()
    except OSError as exc:
        raise ProcessingError(f"Cannot read image {image_path}: {exc}") from exc

    image = frame_extractor.decode_frame(payload, 0)
    text, dot_count = render_frame(image, pixel_selector.build_selector(settings), settings)
    logger.info("Converted %s: %s dots", image_path, dot_count)
    return hltas_writer.assemble_script(text, None, settings)
