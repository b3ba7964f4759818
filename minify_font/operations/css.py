"""
@font-face rule generation.
"""

from collections.abc import Iterable

from minify_font.config.formats import (
    CSS_FORMAT_KEYWORDS,
    FALLBACK_PREFERENCE,
    FORMAT_PREFERENCE,
)
from minify_font.operations.generate import GenerationOutcome
from minify_font.utils.logging import logger

SRC_SEPARATOR = ",\n       "


def format_rank(fmt: str) -> int:
    """Web delivery preference of a format, lower is better."""
    return FORMAT_PREFERENCE.get(fmt, FALLBACK_PREFERENCE)


def css_string(value: str) -> str:
    """Quote a value as a single-quoted CSS string."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def css_format_keyword(fmt: str) -> str:
    return CSS_FORMAT_KEYWORDS.get(fmt, fmt)


def font_face_sources(outcomes: Iterable[GenerationOutcome]) -> list[str]:
    """url()/format() entries for the successful outcomes, best format first."""
    succeeded = sorted((o for o in outcomes if o.success), key=lambda o: format_rank(o.format))
    return [
        f"url({outcome.path.as_posix()}) format('{css_format_keyword(outcome.format)}')"
        for outcome in succeeded
    ]


def build_font_face_css(outcomes: Iterable[GenerationOutcome], font_family: str) -> str:
    """
    Build an @font-face rule for the generated fonts.

    Failed outcomes are left out. With no successful outcome the rule only
    names the family.
    """
    sources = font_face_sources(outcomes)
    lines = ["@font-face {", f"  font-family: {css_string(font_family)};"]
    if sources:
        lines.append(f"  src: {SRC_SEPARATOR.join(sources)};")
    else:
        logger.warning("No font was generated, @font-face rule has no src")
    lines.append("}")
    return "\n".join(lines)
