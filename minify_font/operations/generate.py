"""
Batch font generation.

Runs one conversion per requested format concurrently. A failing format
is recorded in its outcome and never affects the others; the batch always
returns one outcome per format, in request order.
"""

import os
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from minify_font.config.formats import VALID_FONT_TYPES, WEB_FONT_FORMATS, format_from_path
from minify_font.config.paths import DEFAULT_OUTPUT_DIRNAME
from minify_font.core import codec
from minify_font.core.charset import ResolvedSubset, subset_from_text
from minify_font.core.codec import CodecOptions
from minify_font.core.font_io import (
    check_input_font,
    ensure_dir,
    get_font_size_kb,
    read_font_bytes,
    write_font_bytes,
)
from minify_font.core.output_paths import OutputPlan, PlannedOutput
from minify_font.errors import SetupFailure, ValidationError
from minify_font.utils.logging import logger

Converter = Callable[[bytes, str, str, Iterable[int], CodecOptions], bytes]


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of generating one format. error is set iff success is False."""

    format: str
    path: Path
    success: bool
    error: Exception | None = None

    def __post_init__(self):
        if self.success == (self.error is not None):
            raise ValueError("error must be set exactly when success is False")


@dataclass(frozen=True)
class BatchResult:
    """Outcomes of a batch, in the requested format order."""

    output_dir: Path
    outcomes: list[GenerationOutcome]

    @property
    def succeeded(self) -> list[GenerationOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[GenerationOutcome]:
        return [o for o in self.outcomes if not o.success]


def minify_font_file(
    input_path: Path,
    output_path: Path,
    code_points: Iterable[int],
    codec_options: CodecOptions | None = None,
    *,
    convert: Converter = codec.convert,
) -> None:
    """
    Subset a single font file and write it in the format of output_path's extension.

    Raises:
        InputNotFound: If the input font does not exist
        ValidationError: If either extension is not a font type or output_path is the input
    """
    input_path, output_path = Path(input_path), Path(output_path)
    input_type, output_type = format_from_path(input_path), format_from_path(output_path)

    check_input_font(input_path)
    if output_path.resolve() == input_path.resolve():
        raise ValidationError(f"Output {output_path} would overwrite the input font")
    if input_type not in VALID_FONT_TYPES:
        raise ValidationError(f"Invalid input font type: {input_type}")
    if output_type not in VALID_FONT_TYPES:
        raise ValidationError(f"Invalid output font type: {output_type}")

    data = read_font_bytes(input_path)
    encoded = convert(data, input_type, output_type, code_points, codec_options or CodecOptions())
    write_font_bytes(output_path, encoded)


def common_output_dir(plan: OutputPlan) -> Path:
    """Deepest directory containing every planned output."""
    parents = [str(planned.path.parent) for planned in plan]
    try:
        return Path(os.path.commonpath(parents))
    except ValueError:
        # Mixed absolute and relative paths
        return plan[0].path.parent


def _check_plan(input_path: Path, plan: OutputPlan) -> None:
    """Reject plans that would overwrite the input or write one file twice."""
    source = input_path.resolve()
    seen = {}
    for planned in plan:
        target = planned.path.resolve()
        if target == source:
            raise ValidationError(f"Output {planned.path} would overwrite the input font")
        if target in seen:
            raise ValidationError(
                f"Formats {seen[target]} and {planned.format} both write to {planned.path}"
            )
        seen[target] = planned.format


def _prepare_directories(plan: OutputPlan) -> None:
    for directory in dict.fromkeys(planned.path.parent for planned in plan):
        try:
            ensure_dir(directory)
        except OSError as e:
            raise SetupFailure(f"Cannot create output directory {directory}: {e}") from e


def _generate_one(
    input_path: Path,
    planned: PlannedOutput,
    code_points: tuple[int, ...],
    codec_options: CodecOptions,
    convert: Converter,
) -> GenerationOutcome:
    try:
        ensure_dir(planned.path.parent)
        minify_font_file(input_path, planned.path, code_points, codec_options, convert=convert)
        logger.info(f"Created {planned.path} ({get_font_size_kb(planned.path):.1f} KB)")
    except Exception as e:
        logger.error(f"Failed to generate {planned.format}: {e}")
        return GenerationOutcome(planned.format, planned.path, False, e)

    return GenerationOutcome(planned.format, planned.path, True)


def generate_fonts(
    input_path: str | Path,
    subset: ResolvedSubset,
    plan: OutputPlan,
    codec_options: CodecOptions | None = None,
    *,
    output_dir: Path | None = None,
    convert: Converter = codec.convert,
    max_workers: int | None = None,
) -> BatchResult:
    """
    Generate every planned format concurrently.

    Setup (input check, directory creation) runs first and raises; after that
    every format runs to completion and failures are captured per outcome.

    Args:
        input_path: Source font
        subset: Code points to keep
        plan: (format, path) pairs to produce
        codec_options: Options forwarded to the codec
        output_dir: Reported output directory, defaults to the plan's common parent
        convert: Codec function
        max_workers: Thread pool size, defaults to one thread per format

    Returns:
        BatchResult with one outcome per planned format, in plan order

    Raises:
        ValidationError: If the plan is empty, overwrites the input or repeats a path
        InputNotFound: If the input font does not exist
        SetupFailure: If the input is unreadable or a directory cannot be created
    """
    if not plan:
        raise ValidationError("formats must be a non-empty list")

    input_path = Path(input_path)
    check_input_font(input_path)
    _check_plan(input_path, plan)
    _prepare_directories(plan)

    codec_options = codec_options or CodecOptions()
    code_points = tuple(subset.code_points)

    logger.info(
        f"Generating {len(plan)} format(s): {', '.join(p.format for p in plan)}"
    )

    with ThreadPoolExecutor(max_workers=max_workers or len(plan)) as executor:
        futures = [
            executor.submit(
                _generate_one, input_path, planned, code_points, codec_options, convert
            )
            for planned in plan
        ]
        outcomes = [future.result() for future in futures]

    return BatchResult(output_dir or common_output_dir(plan), outcomes)


def default_file_name(basename: str, ext: str) -> str:
    return f"{basename}.{ext}"


def create_web_fonts(
    input_path: str | Path,
    text: str | None,
    output_dir: str | Path | None = None,
    resolve_file_name: Callable[[str, str], str] | None = None,
    formats: list[str] | None = None,
    codec_options: CodecOptions | None = None,
) -> BatchResult:
    """
    Create several web font formats from one font in a single call.

    Args:
        input_path: Source font (ttf, otf, woff, woff2)
        text: Characters to keep
        output_dir: Target directory, defaults to "output" beside the input
        resolve_file_name: Builds a file name from (basename, ext)
        formats: Formats to generate, defaults to woff2, woff, ttf
        codec_options: Options forwarded to the codec

    Returns:
        BatchResult with one outcome per format

    Raises:
        ValidationError: If input_path or text is missing, or formats is empty
    """
    if not input_path:
        raise ValidationError("input parameter is required")
    if text is None:
        raise ValidationError("text parameter is required")
    formats = list(WEB_FONT_FORMATS) if formats is None else list(dict.fromkeys(formats))
    if not formats:
        raise ValidationError("formats must be a non-empty list")

    input_path = Path(input_path)
    target_dir = Path(output_dir) if output_dir else input_path.parent / DEFAULT_OUTPUT_DIRNAME
    name_for = resolve_file_name or default_file_name

    plan = [
        PlannedOutput(fmt, target_dir / name_for(input_path.stem, fmt)) for fmt in formats
    ]
    return generate_fonts(
        input_path,
        subset_from_text(text),
        plan,
        codec_options,
        output_dir=target_dir,
    )
