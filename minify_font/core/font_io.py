"""
Font I/O utilities for reading, writing, and locating font files.
"""

from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont

from minify_font.errors import InputNotFound, SetupFailure


def ensure_dir(directory: Path) -> Path:
    """
    Create a directory and its parents if missing.

    Safe to call repeatedly and from several threads at once.
    """
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def check_input_font(path: Path) -> None:
    """
    Verify the input font exists and is a readable file.

    Raises:
        InputNotFound: If the path does not exist
        SetupFailure: If the path is not a regular readable file
    """
    if not path.exists():
        raise InputNotFound(path)
    if not path.is_file():
        raise SetupFailure(f"{path} is not a file")
    try:
        with path.open("rb"):
            pass
    except OSError as e:
        raise SetupFailure(f"Cannot read {path}: {e}") from e


def read_font_bytes(path: Path) -> bytes:
    """Read a font file into memory."""
    return path.read_bytes()


def write_font_bytes(path: Path, data: bytes) -> None:
    """Write encoded font bytes, creating the parent directory if needed."""
    ensure_dir(path.parent)
    path.write_bytes(data)


def load_font(data: bytes, **kwargs) -> TTFont:
    """Load a TTFont from in-memory bytes (sfnt, woff or woff2)."""
    return TTFont(BytesIO(data), **kwargs)


def save_font(font: TTFont, **kwargs) -> bytes:
    """Serialize a TTFont using its current flavor."""
    buffer = BytesIO()
    font.save(buffer, **kwargs)
    return buffer.getvalue()


def get_font_size_kb(path: Path) -> float:
    """Get font file size in kilobytes."""
    return path.stat().st_size / 1024
