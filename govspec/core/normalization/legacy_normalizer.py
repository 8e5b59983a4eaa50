from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from govspec.core.contract.exceptions import MalformedSpecError

from .semantic_key import extract_legacy_suffix

log = logging.getLogger("govspec.normalize")

SEMANTIC_KEY_FIELD = "data-page-section"
LOCATION_FIELD = "data-page-section-location"


@dataclass(frozen=True)
class CanonicalSection:
    """Canonical identity assigned to the section at a given position."""

    section_id: str
    name: str
    location: str

    @classmethod
    def at(cls, index: int) -> "CanonicalSection":
        number = index + 1
        padded = f"{number:02d}"
        return cls(section_id=f"section_{padded}", name=f"SECTION_{padded}", location=str(number))


def resolve_semantic_key(section: Mapping[str, Any]) -> Tuple[str, str]:
    """Resolve a section's semantic key.

    Priority: explicit data-page-section, then the legacy identifier suffix,
    then the legacy name suffix (case-folded), else empty.

    Returns: (key, source) where source is one of
    "explicit", "identifier", "name", "none".
    """

    explicit = section.get(SEMANTIC_KEY_FIELD)
    if isinstance(explicit, str) and explicit.strip():
        return explicit.strip(), "explicit"

    legacy_id = section.get("section_id")
    if legacy_id is None:
        legacy_id = section.get("id")
    key: Optional[str] = extract_legacy_suffix(legacy_id) if legacy_id is not None else None
    if key:
        return key, "identifier"

    legacy_name = section.get("name")
    key = extract_legacy_suffix(legacy_name, case_fold=True) if legacy_name is not None else None
    if key:
        return key, "name"

    return "", "none"


def normalize_section(section: Mapping[str, Any], index: int) -> Dict[str, Any]:
    """Rewrite one section into canonical shape. Unknown keys are preserved."""

    canonical = CanonicalSection.at(index)
    key, _ = resolve_semantic_key(section)
    out = copy.deepcopy(dict(section))
    out.update(
        {
            "section_id": canonical.section_id,
            "id": canonical.section_id,
            SEMANTIC_KEY_FIELD: key,
            LOCATION_FIELD: canonical.location,
            "name": canonical.name,
        }
    )
    return out


def normalize_spec_tree(tree: Mapping[str, Any]) -> Dict[str, Any]:
    """Canonicalize legacy section metadata.

    Returns a deep copy; the input is never mutated. No contract checks are
    made here: unsupported versions and bad actions pass through untouched
    for the validator to report.

    Raises MalformedSpecError when the tree is not a mapping, when sections is
    present but not a list, or when a section entry is not a mapping.
    """

    if not isinstance(tree, Mapping):
        raise MalformedSpecError(f"spec tree must be a mapping, got {type(tree).__name__}")

    sections = tree.get("sections")
    if sections is None:
        return copy.deepcopy(dict(tree))
    if not isinstance(sections, list):
        raise MalformedSpecError(f"sections must be a list, got {type(sections).__name__}")

    sources: Dict[str, int] = {"explicit": 0, "identifier": 0, "name": 0, "none": 0}
    rewritten = []
    for idx, section in enumerate(sections):
        if not isinstance(section, Mapping):
            raise MalformedSpecError(
                f"section {idx + 1} must be a mapping, got {type(section).__name__}",
                section_index=idx,
            )
        sources[resolve_semantic_key(section)[1]] += 1
        rewritten.append(normalize_section(section, idx))

    out = {k: rewritten if k == "sections" else copy.deepcopy(v) for k, v in tree.items()}

    log.debug(
        "normalized_sections",
        extra={"section_count": len(rewritten), "semantic_key_sources": sources},
    )
    return out
