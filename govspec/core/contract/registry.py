from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Tuple

from .exceptions import ContractConfigurationError
from .taxonomy import REQUIRED_TARGET_TAGS, ActionTag

BUILD_MODES: Tuple[str, ...] = ("release", "development")
HASH_ENCODINGS: Tuple[str, ...] = ("hex",)


@dataclass(frozen=True, slots=True)
class ContractRegistry:
    """Contract lock: the frozen governance constants of the export engine.

    One instance is built at process start and injected into every pipeline
    entry point. Construction fails with ContractConfigurationError when the
    lock contradicts itself, so a bad lock never reaches a single input.

    Version formats
    - contract_version: GOV-SPEC-V{MAJOR}.{MINOR}
    - engine_version:   ENGINE-V{MAJOR}.{MINOR}.{PATCH}

    Build modes
    - release: volatile fields (timestamps, run ids) never reach a hash.
    - development: the export timestamp participates in hashing.
    """

    contract_version: str = "GOV-SPEC-V2.0"
    engine_version: str = "ENGINE-V2.0.0"
    supported_schema_versions: Tuple[str, ...] = ("1.0", "1.1", "1.2", "2.0")
    default_schema_version: str = "1.0"
    allowed_actions: FrozenSet[str] = field(
        default_factory=lambda: frozenset(t.value for t in ActionTag)
    )
    required_target_actions: FrozenSet[str] = field(
        default_factory=lambda: frozenset(t.value for t in REQUIRED_TARGET_TAGS)
    )
    build_mode: str = "release"
    hash_algorithm: str = "sha256"
    hash_encoding: str = "hex"
    hash_truncate: int = 16

    def __post_init__(self) -> None:
        # Normalize containers so equality and hashing are order-independent.
        object.__setattr__(self, "supported_schema_versions", tuple(self.supported_schema_versions))
        object.__setattr__(self, "allowed_actions", frozenset(str(a) for a in self.allowed_actions))
        object.__setattr__(
            self, "required_target_actions", frozenset(str(a) for a in self.required_target_actions)
        )
        check_contract_consistency(self)

    @property
    def is_release(self) -> bool:
        return self.build_mode == "release"

    def is_allowed_action(self, tag: str) -> bool:
        return tag in self.allowed_actions

    def requires_target(self, tag: str) -> bool:
        return tag in self.required_target_actions

    def is_supported_schema(self, version: str) -> bool:
        return version in self.supported_schema_versions

    def with_build_mode(self, mode: str) -> "ContractRegistry":
        return replace(self, build_mode=mode)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_version": self.contract_version,
            "engine_version": self.engine_version,
            "supported_schema_versions": list(self.supported_schema_versions),
            "default_schema_version": self.default_schema_version,
            "allowed_actions": sorted(self.allowed_actions),
            "required_target_actions": sorted(self.required_target_actions),
            "build_mode": self.build_mode,
            "hash_algorithm": self.hash_algorithm,
            "hash_encoding": self.hash_encoding,
            "hash_truncate": self.hash_truncate,
        }


def check_contract_consistency(contract: ContractRegistry) -> None:
    """Fail closed on a self-contradictory contract lock."""

    if not contract.contract_version or not contract.engine_version:
        raise ContractConfigurationError("contract and engine versions must be non-empty")
    if not contract.supported_schema_versions:
        raise ContractConfigurationError("supported_schema_versions must not be empty")
    if contract.default_schema_version not in contract.supported_schema_versions:
        raise ContractConfigurationError(
            f"default schema version {contract.default_schema_version!r} is not supported"
        )
    if not contract.allowed_actions:
        raise ContractConfigurationError("allowed_actions must not be empty")

    stray = sorted(contract.required_target_actions - contract.allowed_actions)
    if stray:
        raise ContractConfigurationError(
            f"required-target actions missing from allowed_actions: {', '.join(stray)}"
        )

    if contract.build_mode not in BUILD_MODES:
        raise ContractConfigurationError(f"unknown build mode: {contract.build_mode!r}")
    if contract.hash_algorithm not in hashlib.algorithms_guaranteed:
        raise ContractConfigurationError(f"unsupported hash algorithm: {contract.hash_algorithm!r}")
    if contract.hash_encoding not in HASH_ENCODINGS:
        raise ContractConfigurationError(f"unsupported hash encoding: {contract.hash_encoding!r}")
    if contract.hash_algorithm.startswith("shake_"):
        raise ContractConfigurationError("variable-length digests are not supported")

    digest_len = hashlib.new(contract.hash_algorithm).digest_size * 2
    if not isinstance(contract.hash_truncate, int) or not 8 <= contract.hash_truncate <= digest_len:
        raise ContractConfigurationError(
            f"hash_truncate must be an int between 8 and {digest_len}"
        )


def load_contract_lock(path: str) -> ContractRegistry:
    """Load a contract lock from a JSON file.

    Keys mirror ContractRegistry field names. Missing keys keep their
    defaults; unknown keys are rejected so typos cannot silently loosen the
    contract.
    """

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ContractConfigurationError(f"contract lock is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ContractConfigurationError("contract lock JSON must be an object")

    known = {f.name for f in fields(ContractRegistry)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ContractConfigurationError(f"unknown contract lock keys: {', '.join(unknown)}")

    for key in ("supported_schema_versions", "allowed_actions", "required_target_actions"):
        if key in data and (
            not isinstance(data[key], list) or not all(isinstance(x, str) for x in data[key])
        ):
            raise ContractConfigurationError(f"{key} must be a list of strings")

    return ContractRegistry(**data)


DEFAULT_CONTRACT = ContractRegistry()
