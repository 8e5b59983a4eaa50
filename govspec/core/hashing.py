from __future__ import annotations

import hashlib
import json
from datetime import datetime
from typing import Any, Mapping, Optional

from govspec.core.contract.registry import DEFAULT_CONTRACT, ContractRegistry
from govspec.utils.json_safe import to_jsonable

# Keys whose values change between runs without any semantic change.
VOLATILE_KEYS = frozenset(
    {
        "generated_at",
        "exported_at",
        "timestamp",
        "updated_at",
        "build_id",
        "run_id",
        "nonce",
    }
)


def canonical_json(value: Any) -> str:
    """Serialize a value deterministically (sorted keys, compact separators)."""

    return json.dumps(
        to_jsonable(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def strip_volatile(value: Any) -> Any:
    """Return a copy of a JSON-shaped value with volatile keys removed at every depth."""

    if isinstance(value, Mapping):
        return {k: strip_volatile(v) for k, v in value.items() if k not in VOLATILE_KEYS}
    if isinstance(value, (list, tuple)):
        return [strip_volatile(v) for v in value]
    return value


def content_hash(data: bytes, contract: Optional[ContractRegistry] = None) -> str:
    """Digest bytes with the contract's algorithm, hex-encoded and truncated."""

    contract = contract or DEFAULT_CONTRACT
    h = hashlib.new(contract.hash_algorithm)
    h.update(data)
    return h.hexdigest()[: contract.hash_truncate]


def model_hash(
    tree: Mapping[str, Any],
    contract: Optional[ContractRegistry] = None,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    """Hash a normalized spec tree.

    Release mode hashes the tree with volatile keys stripped, so identical
    semantic input yields identical hashes across runs. Development mode
    hashes the tree as given plus the export timestamp.
    """

    contract = contract or DEFAULT_CONTRACT
    if contract.is_release:
        payload: Any = strip_volatile(tree)
    else:
        payload = {"model": tree, "generated_at": generated_at}
    return content_hash(canonical_json(payload).encode("utf-8"), contract)


def export_hash(text: str, contract: Optional[ContractRegistry] = None) -> str:
    """Hash rendered export text (UTF-8)."""

    return content_hash(text.encode("utf-8"), contract)
