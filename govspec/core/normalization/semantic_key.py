"""Legacy semantic-key recovery.

Compatibility shim: older layout files encoded the semantic key as a suffix of
the section identifier or display name (sec_hero_pricing -> pricing). This is
a heuristic with narrower guarantees than the explicit data-page-section
field, which always wins when present.
"""

from __future__ import annotations

import re
from typing import Any, Optional

# Last underscore-delimited lowercase word; trailing underscores are dropped.
_IDENTIFIER_SUFFIX = re.compile(r"_([a-z]+)_*$")
_NAME_SUFFIX = re.compile(r"_([a-z]+)_*$", re.IGNORECASE)


def extract_legacy_suffix(value: Any, *, case_fold: bool = False) -> Optional[str]:
    """Return the trailing ``_suffix`` of a legacy identifier or name.

    Examples: ``sec_hero_pricing`` -> ``pricing``; ``section_01`` -> None
    (digits never form a key).

    - case_fold=False: identifier rules, lowercase letters only.
    - case_fold=True: name rules, any case, result lower-cased.
    """

    if value is None:
        return None
    pattern = _NAME_SUFFIX if case_fold else _IDENTIFIER_SUFFIX
    match = pattern.search(str(value))
    if not match:
        return None
    suffix = match.group(1)
    return suffix.lower() if case_fold else suffix
