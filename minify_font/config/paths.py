"""
Filesystem path constants.

Centralizes path definitions to avoid magic strings in individual modules.
"""

from pathlib import Path

PACKAGE_ROOT = Path(__file__).parent.parent
DATA_DIR = PACKAGE_ROOT / "data"

# Infix placed between the input stem and the format extension
MIN_SUFFIX = "min"

# Directory created beside the input by create_web_fonts() when none is given
DEFAULT_OUTPUT_DIRNAME = "output"
