"""
Font container format definitions.

Identifiers are lowercase file extensions without the leading dot.
"""

from pathlib import Path

TTF = "ttf"
OTF = "otf"
EOT = "eot"
SVG = "svg"
WOFF = "woff"
WOFF2 = "woff2"

VALID_FONT_TYPES = [TTF, OTF, EOT, SVG, WOFF, WOFF2]

# Formats fontTools can load as a source font
READABLE_FONT_TYPES = [TTF, OTF, WOFF, WOFF2]

# Used when neither --formats nor an output file extension is given
DEFAULT_FORMATS = [TTF, WOFF, WOFF2]

# Default order for create_web_fonts()
WEB_FONT_FORMATS = [WOFF2, WOFF, TTF]

# Keyword used in the @font-face format() hint
CSS_FORMAT_KEYWORDS = {
    WOFF2: "woff2",
    WOFF: "woff",
    TTF: "truetype",
    OTF: "opentype",
    EOT: "embedded-opentype",
    SVG: "svg",
}

# Web delivery preference, lower is better
FORMAT_PREFERENCE = {
    WOFF2: 0,
    WOFF: 1,
    TTF: 2,
}
FALLBACK_PREFERENCE = 3

# TTFont.flavor for sfnt-based web containers
SFNT_FLAVORS = {
    TTF: None,
    OTF: None,
    WOFF: "woff",
    WOFF2: "woff2",
}


def normalize_format(value: str) -> str:
    """Normalize a format identifier ("WOFF2", ".woff2" -> "woff2")."""
    return value.strip().lstrip(".").lower()


def format_from_path(path: Path | str) -> str:
    """Get the format identifier from a file path's extension."""
    return normalize_format(Path(path).suffix)
