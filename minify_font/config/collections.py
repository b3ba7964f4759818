"""
Predefined character collections.

A collection is a named, ordered, duplicate-free sequence of code points.
The default registry is built once per process and passed explicitly to
the character set resolver.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from minify_font.config.paths import DATA_DIR
from minify_font.config.unicode_ranges import (
    ASCII_RANGES,
    LATIN1_RANGES,
    expand_ranges,
)

DEFAULT_COLLECTION = "top2500"

# Frequency-ordered source for the Chinese collections
HANZI_FREQUENCY_FILE = DATA_DIR / "hanzi_frequency.txt"

# Collection name -> number of leading characters taken from the frequency list
HANZI_COLLECTION_SIZES = {
    "top500": 500,
    "top2500": 2500,
    "commonlyUsed": 3500,
}


@dataclass(frozen=True)
class CharacterCollection:
    """Immutable named sequence of code points."""

    name: str
    code_points: tuple[int, ...]

    @classmethod
    def from_text(cls, name: str, text: str) -> "CharacterCollection":
        """Build a collection from text, dropping duplicates and whitespace."""
        chars = (c for c in text if not c.isspace())
        return cls(name, tuple(dict.fromkeys(ord(c) for c in chars)))

    @property
    def text(self) -> str:
        """Collection as a string."""
        return "".join(map(chr, self.code_points))

    def __len__(self) -> int:
        return len(self.code_points)


class CollectionRegistry(Mapping):
    """Read-only mapping of collection name to CharacterCollection."""

    def __init__(self, collections: Iterable[CharacterCollection] = ()):
        self._collections: dict[str, CharacterCollection] = {}
        for collection in collections:
            if collection.name in self._collections:
                raise ValueError(f"Duplicate collection name: {collection.name}")
            self._collections[collection.name] = collection

    def __getitem__(self, name: str) -> CharacterCollection:
        return self._collections[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._collections)

    def __len__(self) -> int:
        return len(self._collections)

    @property
    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._collections)


def read_collection_text(path: Path) -> str:
    """Read a collection data file, skipping '#' comment lines."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return "".join(line for line in lines if not line.startswith("#"))


def load_hanzi_collections(path: Path = HANZI_FREQUENCY_FILE) -> list[CharacterCollection]:
    """Load the frequency-based Chinese collections from a data file."""
    ordered = CharacterCollection.from_text("all", read_collection_text(path))
    return [
        CharacterCollection(name, ordered.code_points[:size])
        for name, size in HANZI_COLLECTION_SIZES.items()
    ]


def load_range_collections() -> list[CharacterCollection]:
    """Build the Unicode range based collections."""
    return [
        CharacterCollection("ascii", expand_ranges(ASCII_RANGES)),
        CharacterCollection("latin1", expand_ranges(LATIN1_RANGES)),
    ]


@lru_cache(maxsize=1)
def default_registry() -> CollectionRegistry:
    """Registry of all bundled collections, built on first use."""
    return CollectionRegistry(load_hanzi_collections() + load_range_collections())
