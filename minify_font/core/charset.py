"""
Character set resolution.

Turns the collection and custom-text inputs into the final set of code
points to keep. Three modes exist:

- CollectionOnly: no custom text, keep the named collection.
- SpecifiedOnly: custom text given, collection left at its default.
- Append: custom text given and a collection explicitly requested.

Custom text presence is tracked with None; an empty string is a valid
request to keep no custom characters.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from minify_font.config.collections import CharacterCollection
from minify_font.errors import UnknownCollection


@dataclass(frozen=True)
class CollectionOnly:
    name: str


@dataclass(frozen=True)
class SpecifiedOnly:
    text: str


@dataclass(frozen=True)
class Append:
    name: str
    text: str


SubsetMode = CollectionOnly | SpecifiedOnly | Append


@dataclass(frozen=True)
class ResolvedSubset:
    """Unique code points to retain, plus a description of how they were chosen."""

    mode: SubsetMode
    code_points: tuple[int, ...]
    description: str

    @property
    def text(self) -> str:
        return "".join(map(chr, self.code_points))

    def __len__(self) -> int:
        return len(self.code_points)


def unique_code_points(*sources: Iterable[int]) -> tuple[int, ...]:
    """Concatenate code point sources, keeping first occurrences only."""
    return tuple(dict.fromkeys(cp for source in sources for cp in source))


def subset_from_text(text: str) -> ResolvedSubset:
    """Subset made of the unique code points of text, in first-occurrence order."""
    code_points = unique_code_points(map(ord, text))
    return ResolvedSubset(SpecifiedOnly(text), code_points, f"{len(code_points)} unique chars")


def select_mode(
    custom_text: str | None, collection_name: str, collection_explicit: bool
) -> SubsetMode:
    """Pick the subset mode from the presence of custom text and collection intent."""
    if custom_text is None:
        return CollectionOnly(collection_name)
    if collection_explicit:
        return Append(collection_name, custom_text)
    return SpecifiedOnly(custom_text)


def resolve_subset(
    custom_text: str | None,
    collection_name: str,
    collection_explicit: bool,
    registry: Mapping[str, CharacterCollection],
) -> ResolvedSubset:
    """
    Resolve the final subset.

    Args:
        custom_text: Extra characters to keep, None when not requested
        collection_name: Collection to use (always set, may be the default)
        collection_explicit: Whether the collection was requested by the user
        registry: Available collections

    Returns:
        ResolvedSubset with duplicate-free code points

    Raises:
        UnknownCollection: If collection_name is not registered
    """
    if collection_name not in registry:
        raise UnknownCollection(collection_name, list(registry))

    collection = registry[collection_name]
    mode = select_mode(custom_text, collection_name, collection_explicit)

    match mode:
        case SpecifiedOnly(text=text):
            return subset_from_text(text)
        case Append(text=text):
            code_points = unique_code_points(collection.code_points, map(ord, text))
            description = (
                f"collection {collection.name} ({len(collection)} chars) "
                f"+ custom words, total: {len(code_points)} unique chars"
            )
        case CollectionOnly():
            code_points = collection.code_points
            description = f"collection {collection.name} ({len(collection)} chars)"

    return ResolvedSubset(mode, code_points, description)
