"""
Font codec backed by fontTools.

Decodes a source font, subsets it to a set of code points and re-encodes
it into the target container. Stateless: every call loads its own font.

Input options are fontTools subsetter options (same names as pyftsubset
flags, underscores or dashes). Output options:

- reorder_tables: sort sfnt tables when saving (default True)
- svg_font_id: id attribute of the <font> element in SVG output
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any

from fontTools import subset
from fontTools.ttLib import TTFont

from minify_font.config.formats import (
    EOT,
    READABLE_FONT_TYPES,
    SFNT_FLAVORS,
    SVG,
    VALID_FONT_TYPES,
)
from minify_font.core.eot import build_eot
from minify_font.core.font_io import save_font
from minify_font.core.svg import build_svg_font
from minify_font.errors import CodecError
from minify_font.utils.logging import logger

# Subsetter defaults, overridable through input options
DEFAULT_SUBSET_OPTIONS = {
    "layout_features": ["*"],
    "name_IDs": ["*"],
    "name_languages": ["*"],
    "notdef_outline": True,
    "ignore_missing_glyphs": True,
    "ignore_missing_unicodes": True,
}

OUTPUT_OPTION_KEYS = {"reorder_tables", "svg_font_id"}


@dataclass(frozen=True)
class CodecOptions:
    """Opaque per-run options forwarded to the codec."""

    input_options: Mapping[str, Any] = field(default_factory=dict)
    output_options: Mapping[str, Any] = field(default_factory=dict)


def build_subset_options(input_options: Mapping[str, Any]) -> subset.Options:
    """Merge input options over the defaults into fontTools subsetter options."""
    values = dict(DEFAULT_SUBSET_OPTIONS)
    values.update({key.replace("-", "_"): value for key, value in input_options.items()})
    try:
        return subset.Options(**values)
    except subset.Options.OptionError as e:
        raise CodecError(f"Invalid input option: {e}") from e


def check_output_options(output_options: Mapping[str, Any]) -> None:
    unknown = sorted(set(output_options) - OUTPUT_OPTION_KEYS)
    if unknown:
        raise CodecError(
            f"Unknown output option(s): {', '.join(unknown)}. "
            f"Supported: {', '.join(sorted(OUTPUT_OPTION_KEYS))}"
        )


def subset_font(
    data: bytes, code_points: Iterable[int], options: subset.Options
) -> TTFont:
    """Load font bytes and subset them to the given code points."""
    font = subset.load_font(BytesIO(data), options)
    subsetter = subset.Subsetter(options=options)
    subsetter.populate(unicodes=list(code_points))
    subsetter.subset(font)
    return font


def encode_font(font: TTFont, target_format: str, output_options: Mapping[str, Any]) -> bytes:
    """Serialize a subsetted font into the target container."""
    reorder = bool(output_options.get("reorder_tables", True))

    if target_format in SFNT_FLAVORS:
        font.flavor = SFNT_FLAVORS[target_format]
        return save_font(font, reorderTables=reorder)

    if target_format == EOT:
        font.flavor = None
        return build_eot(font, save_font(font, reorderTables=reorder))

    if target_format == SVG:
        return build_svg_font(font, font_id=output_options.get("svg_font_id"))

    raise CodecError(f"Invalid output font type: {target_format}")


def convert(
    data: bytes,
    source_format: str,
    target_format: str,
    code_points: Iterable[int],
    options: CodecOptions | None = None,
) -> bytes:
    """
    Subset and re-encode a font.

    Args:
        data: Source font bytes
        source_format: Container of the source (ttf, otf, woff, woff2)
        target_format: Container to produce
        code_points: Code points to retain
        options: Codec options

    Returns:
        Encoded font bytes

    Raises:
        CodecError: On unsupported formats or invalid options
    """
    options = options or CodecOptions()

    if source_format not in VALID_FONT_TYPES:
        raise CodecError(f"Invalid input font type: {source_format}")
    if source_format not in READABLE_FONT_TYPES:
        raise CodecError(f"Reading {source_format} fonts is not supported")
    if target_format not in VALID_FONT_TYPES:
        raise CodecError(f"Invalid output font type: {target_format}")

    check_output_options(options.output_options)
    subset_options = build_subset_options(options.input_options)

    font = subset_font(data, code_points, subset_options)
    try:
        logger.debug(f"Encoding {len(font.getGlyphOrder())} glyphs as {target_format}")
        return encode_font(font, target_format, options.output_options)
    finally:
        font.close()
