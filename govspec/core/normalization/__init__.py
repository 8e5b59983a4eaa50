"""Legacy normalization for governed-spec inputs.

Normalization maps historically inconsistent layout trees (arbitrary section
identifiers and names) into one canonical shape, so validation, hashing and
serialization never special-case legacy input.

Notes:
- Inputs are never mutated; every call returns a deep copy.
- Canonical form is a fixed point: normalizing twice changes nothing.
"""

from .legacy_normalizer import (
    LOCATION_FIELD,
    SEMANTIC_KEY_FIELD,
    CanonicalSection,
    normalize_section,
    normalize_spec_tree,
    resolve_semantic_key,
)
from .semantic_key import extract_legacy_suffix

__all__ = [
    "SEMANTIC_KEY_FIELD",
    "LOCATION_FIELD",
    "CanonicalSection",
    "normalize_section",
    "normalize_spec_tree",
    "resolve_semantic_key",
    "extract_legacy_suffix",
]
