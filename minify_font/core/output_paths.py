"""
Output path resolution.

Computes one output path per requested format from the input path and an
optional output argument. The output argument is a file when it has an extension
and a directory otherwise. A trailing path separator always means directory,
so "fonts.v2/" is a directory while "fonts.v2" is a file named fonts.v2.
"""

import os
from collections.abc import Iterable
from pathlib import Path
from typing import NamedTuple

from minify_font.config.formats import DEFAULT_FORMATS, format_from_path, normalize_format
from minify_font.config.paths import MIN_SUFFIX
from minify_font.errors import ValidationError


class PlannedOutput(NamedTuple):
    format: str
    path: Path


OutputPlan = list[PlannedOutput]


def _has_trailing_separator(value: str) -> bool:
    return value.endswith(os.sep) or bool(os.altsep and value.endswith(os.altsep))


def is_output_file(output: str | Path | None) -> bool:
    """Whether the output argument names a concrete file rather than a directory."""
    if output is None:
        return False
    if isinstance(output, str) and _has_trailing_separator(output):
        return False
    return Path(output).suffix != ""


def parse_formats(formats: str | Iterable[str]) -> list[str]:
    """
    Parse a format list.

    Accepts a comma-separated string or an iterable of identifiers.
    Identifiers are trimmed and lowercased; blanks and repeats are dropped.
    """
    items = formats.split(",") if isinstance(formats, str) else formats
    parsed = [normalize_format(item) for item in items]
    return list(dict.fromkeys(f for f in parsed if f))


def infer_formats(
    formats: str | Iterable[str] | None, output: str | Path | None
) -> list[str]:
    """
    Decide which formats to generate.

    Precedence: explicit format list, then the output file extension,
    then the default set.

    Raises:
        ValidationError: If an explicit format list is empty
    """
    if formats is not None:
        parsed = parse_formats(formats)
        if not parsed:
            raise ValidationError("formats must be a non-empty list")
        return parsed
    if is_output_file(output):
        return [format_from_path(output)]
    return list(DEFAULT_FORMATS)


def min_file_name(stem: str, fmt: str) -> str:
    """File name for a minified font, e.g. "font.min.woff2"."""
    return f"{stem}.{MIN_SUFFIX}.{fmt}"


def resolve_output_path(input_path: Path, output: str | Path | None, fmt: str) -> Path:
    """Output path for a single format."""
    if is_output_file(output):
        return Path(output).with_suffix(f".{fmt}")
    if output is not None:
        return Path(output) / min_file_name(input_path.stem, fmt)
    return input_path.with_name(min_file_name(input_path.stem, fmt))


def resolve_output_paths(
    input_path: str | Path, output: str | Path | None, formats: list[str]
) -> OutputPlan:
    """
    Compute the output plan.

    Args:
        input_path: Source font path
        output: Output file or directory, None to write beside the input
        formats: Formats to produce, in order

    Returns:
        One PlannedOutput per format, in the order given

    Raises:
        ValidationError: If formats is empty
    """
    if not formats:
        raise ValidationError("formats must be a non-empty list")

    input_path = Path(input_path)
    return [
        PlannedOutput(fmt, resolve_output_path(input_path, output, fmt))
        for fmt in formats
    ]
