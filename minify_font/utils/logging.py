"""
Logging for minify-font.

Progress and errors go to stderr so stdout only carries the per-format
report and the generated CSS.
"""

import logging
import sys

LOG_FORMAT = "%(levelname)s: %(message)s"

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stderr)],
)

logger = logging.getLogger("minify_font")


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between DEBUG and INFO."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
