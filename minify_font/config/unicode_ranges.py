"""
Unicode range definitions for range-based character collections.

Reference: https://www.unicode.org/charts/
Ranges are inclusive hex bounds without the U+ prefix.
"""

# Printable ASCII
ASCII_RANGES = [
    "0020-007E",  # Basic Latin (printable)
]

# ASCII plus Latin-1 Supplement
LATIN1_RANGES = ASCII_RANGES + [
    "00A0-00FF",  # Latin-1 Supplement (printable)
]


def parse_range(value: str) -> range:
    """Parse an inclusive "XXXX-YYYY" hex range."""
    start, _, end = value.partition("-")
    first = int(start, 16)
    last = int(end or start, 16)
    if last < first:
        raise ValueError(f"Invalid unicode range: {value}")
    return range(first, last + 1)


def expand_ranges(ranges: list[str]) -> tuple[int, ...]:
    """Expand ranges into an ordered tuple of unique code points."""
    return tuple(dict.fromkeys(cp for value in ranges for cp in parse_range(value)))
