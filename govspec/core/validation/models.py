from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ViolationCode(str, Enum):
    """
    Enumerated violation kinds.

    Using str Enum ensures stable serialization and safe comparisons.
    """

    CONTRACT_VERSION_MISMATCH = "contract_version_mismatch"
    UNSUPPORTED_SCHEMA_VERSION = "unsupported_schema_version"
    UNKNOWN_ACTION = "unknown_action"
    MISSING_TARGET = "missing_target"
    MALFORMED_ACTION = "malformed_action"
    MALFORMED_ELEMENT = "malformed_element"
    MALFORMED_INPUT = "malformed_input"


@dataclass(frozen=True)
class Violation:
    """
    One itemized contract violation.

    section_id and path locate the offending node for audit; both are None
    for tree-level violations such as a version mismatch.
    """

    code: ViolationCode
    message: str
    section_id: Optional[str] = None
    path: Optional[str] = None
    action: Optional[str] = None

    def describe(self) -> str:
        if self.path:
            return f"[{self.code.value}] {self.message} ({self.section_id} at {self.path})"
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "section_id": self.section_id,
            "path": self.path,
            "action": self.action,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Validity verdict for one normalized spec tree."""

    valid: bool
    violations: Tuple[Violation, ...]
    contract_version: str
    schema_version: str

    @property
    def status(self) -> str:
        return "VALID" if self.valid else "INVALID"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "status": self.status,
            "contract_version": self.contract_version,
            "schema_version": self.schema_version,
            "violations": [v.to_dict() for v in self.violations],
        }
