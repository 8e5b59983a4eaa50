from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from govspec.core.validation.models import Violation


@dataclass(frozen=True)
class ExportMetadata:
    """Provenance of one export: hashes and the versions they were made under."""

    model_hash: str
    export_hash: str
    schema_version: str
    contract_version: str
    engine_version: str
    build_mode: str
    section_count: int
    action_count: int
    generated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model_hash": self.model_hash,
            "export_hash": self.export_hash,
            "schema_version": self.schema_version,
            "contract_version": self.contract_version,
            "engine_version": self.engine_version,
            "build_mode": self.build_mode,
            "section_count": self.section_count,
            "action_count": self.action_count,
            "generated_at": self.generated_at,
        }


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of running one input through the pipeline.

    Built once per run and never mutated; the caller decides where (and
    whether) content and csv are written.
    """

    page_id: str
    category: str
    content: str
    csv: str
    valid: bool
    violations: Tuple[Violation, ...]
    metadata: ExportMetadata

    @property
    def status(self) -> str:
        return "VALID" if self.valid else "INVALID"

    @property
    def governed_spec_filename(self) -> str:
        return f"{self.page_id}_governed_spec_new.txt"

    @property
    def csv_filename(self) -> str:
        return f"{self.page_id}_export.csv"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_id": self.page_id,
            "category": self.category,
            "valid": self.valid,
            "status": self.status,
            "violations": [v.to_dict() for v in self.violations],
            "metadata": self.metadata.to_dict(),
        }
