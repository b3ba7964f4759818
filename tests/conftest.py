"""Shared pytest fixtures."""

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from minify_font.config.collections import CharacterCollection, CollectionRegistry

# Glyph name -> code point (None for unmapped glyphs)
TEST_GLYPHS = {
    ".notdef": None,
    "space": 0x20,
    "A": 0x41,
    "B": 0x42,
    "C": 0x43,
    "uni4E2D": 0x4E2D,
}


def _box(pen: TTGlyphPen, inset: int) -> None:
    pen.moveTo((inset, 0))
    pen.lineTo((inset, 700))
    pen.lineTo((600 - inset, 700))
    pen.lineTo((600 - inset, 0))
    pen.closePath()


def build_test_font(path, family: str = "Test Sans") -> None:
    """Build a minimal TrueType font with a handful of box glyphs."""
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(list(TEST_GLYPHS))
    fb.setupCharacterMap({cp: name for name, cp in TEST_GLYPHS.items() if cp is not None})

    glyphs = {}
    for i, name in enumerate(TEST_GLYPHS):
        pen = TTGlyphPen(None)
        if name != "space":
            _box(pen, 50 + i * 10)
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)

    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (600, getattr(glyf[name], "xMin", 0)) for name in TEST_GLYPHS}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))


@pytest.fixture
def temp_font_dir(tmp_path):
    """Create a temporary directory for font testing."""
    directory = tmp_path / "fonts"
    directory.mkdir()
    return directory


@pytest.fixture
def test_font(temp_font_dir):
    """Path to a freshly built TrueType test font."""
    path = temp_font_dir / "TestSans.ttf"
    build_test_font(path)
    return path


@pytest.fixture
def registry():
    """Small collection registry independent of the bundled data."""
    return CollectionRegistry(
        [
            CharacterCollection.from_text("basic", "ABC"),
            CharacterCollection.from_text("cjk", "中文字"),
        ]
    )
