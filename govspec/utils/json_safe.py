from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping


def to_jsonable(obj: Any) -> Any:
    """
    Convert spec-tree values and pipeline records into deterministic,
    JSON-serializable primitives.

    Notes:
    - sets/frozensets are emitted sorted so canonical output is stable.
    - mapping keys are coerced to str.
    """
    if obj is None or isinstance(obj, (bool, int, float)):
        return obj

    # str Enums before str, so members serialize as their value
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, str):
        return obj

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, (set, frozenset)):
        return sorted((to_jsonable(x) for x in obj), key=repr)

    if isinstance(obj, (list, tuple)):
        return [to_jsonable(x) for x in obj]

    # fallback: string representation
    return str(obj)
