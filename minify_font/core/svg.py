"""
SVG font writer.

Emits an SVG 1.1 <font> element with one <glyph> per mapped code point.
Glyph outlines stay in font units; SVG fonts share the y-up font
coordinate system so no transform is applied.
"""

from xml.sax.saxutils import quoteattr

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.ttLib import TTFont

SVG_HEADER = (
    '<?xml version="1.0" standalone="no"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
)


def _glyph_path(glyphset, glyph_name: str) -> str:
    pen = SVGPathPen(glyphset)
    glyphset[glyph_name].draw(pen)
    return pen.getCommands()


def build_svg_font(font: TTFont, font_id: str | None = None) -> bytes:
    """
    Build an SVG font document.

    Args:
        font: Source font (already subsetted)
        font_id: id of the <font> element, defaults to the PostScript name

    Returns:
        UTF-8 encoded SVG document
    """
    name_table = font["name"]
    family = name_table.getDebugName(1) or "Untitled"
    font_id = font_id or name_table.getDebugName(6) or family.replace(" ", "")

    units_per_em = font["head"].unitsPerEm
    hhea = font["hhea"]
    hmtx = font["hmtx"]
    weight = font["OS/2"].usWeightClass if "OS/2" in font else 400
    glyphset = font.getGlyphSet()
    cmap = font.getBestCmap() or {}

    glyph_order = font.getGlyphOrder()
    notdef = glyph_order[0]
    default_advance = hmtx[notdef][0]

    lines = [
        SVG_HEADER,
        '<svg xmlns="http://www.w3.org/2000/svg">\n<defs>\n',
        f"<font id={quoteattr(font_id)} horiz-adv-x=\"{default_advance}\">\n",
        f"  <font-face font-family={quoteattr(family)} font-weight=\"{weight}\" "
        f'units-per-em="{units_per_em}" ascent="{hhea.ascent}" descent="{hhea.descent}" />\n',
        f'  <missing-glyph horiz-adv-x="{default_advance}" '
        f"d={quoteattr(_glyph_path(glyphset, notdef))} />\n",
    ]

    for code_point, glyph_name in sorted(cmap.items()):
        lines.append(
            f"  <glyph glyph-name={quoteattr(glyph_name)} unicode=\"&#x{code_point:X};\" "
            f'horiz-adv-x="{hmtx[glyph_name][0]}" '
            f"d={quoteattr(_glyph_path(glyphset, glyph_name))} />\n"
        )

    lines.append("</font>\n</defs>\n</svg>\n")
    return "".join(lines).encode("utf-8")
