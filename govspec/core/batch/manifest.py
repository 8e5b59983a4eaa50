from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

from govspec.core.contract.exceptions import ManifestError


class Category(str, Enum):
    """Kind of layout an input describes."""

    PAGES = "Pages"
    COMPONENTS = "Components"

    @classmethod
    def parse(cls, value: Union[str, "Category"]) -> "Category":
        if isinstance(value, Category):
            return value
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        raise ManifestError(f"unknown category: {value!r} (expected Pages or Components)")


@dataclass(frozen=True)
class ManifestEntry:
    """One named input of a batch. The tree is already materialized."""

    identifier: str
    category: Category
    tree: Mapping[str, Any]

    def __post_init__(self) -> None:
        if not isinstance(self.identifier, str) or not self.identifier.strip():
            raise ManifestError("manifest identifier must be a non-empty string")
        object.__setattr__(self, "category", Category.parse(self.category))


ManifestLike = Iterable[Union[ManifestEntry, Tuple[str, Any, Any], Sequence[Any]]]


def build_manifest(entries: ManifestLike) -> List[ManifestEntry]:
    """Coerce (identifier, category, tree) triples into ManifestEntry records.

    Order is preserved. Duplicate identifiers are rejected because output
    filenames are derived from them.
    """

    out: List[ManifestEntry] = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, ManifestEntry):
            if len(entry) != 3:
                raise ManifestError("manifest entries must be (identifier, category, tree) triples")
            identifier, category, tree = entry
            entry = ManifestEntry(identifier=identifier, category=category, tree=tree)
        if entry.identifier in seen:
            raise ManifestError(f"duplicate manifest identifier: {entry.identifier}")
        seen.add(entry.identifier)
        out.append(entry)
    return out
