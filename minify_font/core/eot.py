"""
Embedded OpenType (EOT) writer.

Wraps uncompressed sfnt data in an EOT version 0x00020001 header.
Reference: https://www.w3.org/submissions/EOT/
"""

import struct
from io import BytesIO

from fontTools.ttLib import TTFont

from minify_font.core.font_io import load_font

EOT_VERSION = 0x00020001
EOT_MAGIC = 0x504C
DEFAULT_CHARSET = 1

# EOTSize .. Padding1, all little-endian
HEADER_FORMAT = "<4L10s2BL2H4L2LL4LH"

PANOSE_FIELDS = (
    "bFamilyType",
    "bSerifStyle",
    "bWeight",
    "bProportion",
    "bContrast",
    "bStrokeVariation",
    "bArmStyle",
    "bLetterForm",
    "bMidline",
    "bXHeight",
)

# Family, style, version, full name
NAME_IDS = (1, 2, 5, 4)


def _panose_bytes(os2) -> bytes:
    if os2 is None:
        return bytes(10)
    return bytes(getattr(os2.panose, name, 0) for name in PANOSE_FIELDS)


def _name_block(font: TTFont) -> bytes:
    """Name strings with their sizes and padding, ending with an empty RootString."""
    name_table = font["name"] if "name" in font else None
    out = BytesIO()
    for name_id in NAME_IDS:
        value = name_table.getDebugName(name_id) if name_table else None
        encoded = (value or "").encode("utf-16-le")
        out.write(struct.pack("<H", len(encoded)))
        out.write(encoded)
        out.write(struct.pack("<H", 0))  # padding
    out.write(struct.pack("<H", 0))  # RootStringSize
    return out.getvalue()


def build_eot(font: TTFont, sfnt_data: bytes) -> bytes:
    """
    Build an EOT file.

    Args:
        font: Font whose metadata fills the header
        sfnt_data: Serialized sfnt of the same font

    Returns:
        EOT file bytes
    """
    os2 = font["OS/2"] if "OS/2" in font else None
    # checkSumAdjustment is only final once the font has been serialized
    checksum = load_font(sfnt_data, lazy=True)["head"].checkSumAdjustment
    names = _name_block(font)

    header_size = struct.calcsize(HEADER_FORMAT) + len(names)
    header = struct.pack(
        HEADER_FORMAT,
        header_size + len(sfnt_data),
        len(sfnt_data),
        EOT_VERSION,
        0,  # flags: no subsetting, compression or obfuscation
        _panose_bytes(os2),
        DEFAULT_CHARSET,
        (os2.fsSelection & 1) if os2 else 0,
        os2.usWeightClass if os2 else 400,
        os2.fsType if os2 else 0,
        EOT_MAGIC,
        getattr(os2, "ulUnicodeRange1", 0),
        getattr(os2, "ulUnicodeRange2", 0),
        getattr(os2, "ulUnicodeRange3", 0),
        getattr(os2, "ulUnicodeRange4", 0),
        getattr(os2, "ulCodePageRange1", 0),
        getattr(os2, "ulCodePageRange2", 0),
        checksum,
        0,
        0,
        0,
        0,
        0,  # padding
    )
    return header + names + sfnt_data
