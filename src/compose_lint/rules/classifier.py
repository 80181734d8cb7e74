"""Type classification against named type families.

Classification only ever looks at a descriptor's raw name and its stability
markers, never the full text, so nullability and generic arguments do not
change the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from compose_lint.scanner.types import TypeDescriptor


class TypeFamily(StrEnum):
    MODIFIER = "modifier"
    UNSTABLE_COLLECTION = "unstable_collection"


LIST_TYPES = frozenset(
    {"List", "MutableList", "ArrayList", "list", "Sequence", "MutableSequence"}
)
SET_TYPES = frozenset(
    {"Set", "MutableSet", "HashSet", "LinkedHashSet", "set", "AbstractSet"}
)
MAP_TYPES = frozenset(
    {
        "Map",
        "MutableMap",
        "HashMap",
        "LinkedHashMap",
        "dict",
        "Dict",
        "Mapping",
        "MutableMapping",
    }
)
COLLECTION_TYPES = frozenset({"Collection", "MutableCollection"})

DEFAULT_UNSTABLE_COLLECTIONS = LIST_TYPES | SET_TYPES | MAP_TYPES | COLLECTION_TYPES

DEFAULT_IMMUTABLE_COLLECTIONS = frozenset(
    {
        "ImmutableList",
        "ImmutableSet",
        "ImmutableMap",
        "ImmutableCollection",
        "PersistentList",
        "PersistentSet",
        "PersistentMap",
        "tuple",
        "Tuple",
        "frozenset",
        "FrozenSet",
    }
)

DEFAULT_IMMUTABLE_MARKERS = frozenset({"Immutable", "Stable"})

DEFAULT_MODIFIER_TYPES = frozenset({"Modifier"})


@dataclass(frozen=True, slots=True)
class TypeRegistry:
    """Type names making up each family."""

    modifier_types: frozenset[str] = DEFAULT_MODIFIER_TYPES
    unstable_collections: frozenset[str] = DEFAULT_UNSTABLE_COLLECTIONS
    immutable_collections: frozenset[str] = DEFAULT_IMMUTABLE_COLLECTIONS
    immutable_markers: frozenset[str] = DEFAULT_IMMUTABLE_MARKERS


DEFAULT_REGISTRY = TypeRegistry()


def classify(
    type_ref: TypeDescriptor | None,
    family: TypeFamily,
    registry: TypeRegistry = DEFAULT_REGISTRY,
) -> bool:
    """Return True if ``type_ref`` belongs to ``family``.

    An unresolvable type (``None`` or empty raw name) never matches.
    """
    if type_ref is None or not type_ref.raw_name:
        return False

    if family is TypeFamily.MODIFIER:
        return type_ref.raw_name in registry.modifier_types

    if family is TypeFamily.UNSTABLE_COLLECTION:
        if type_ref.raw_name not in registry.unstable_collections:
            return False
        if type_ref.markers & registry.immutable_markers:
            return False
        return type_ref.raw_name not in registry.immutable_collections

    return False


def immutable_counterpart(raw_name: str) -> str:
    """Immutable collection type to recommend in place of ``raw_name``."""
    if raw_name in SET_TYPES:
        return "ImmutableSet"
    if raw_name in MAP_TYPES:
        return "ImmutableMap"
    if raw_name in LIST_TYPES:
        return "ImmutableList"
    if raw_name in COLLECTION_TYPES:
        return "ImmutableCollection"
    # Custom registry entries: keep the original's prefixing convention
    return f"Immutable{raw_name[:1].upper()}{raw_name[1:]}"
