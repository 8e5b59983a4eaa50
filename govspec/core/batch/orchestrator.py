from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from govspec.core.contract.exceptions import MalformedSpecError
from govspec.core.contract.registry import DEFAULT_CONTRACT, ContractRegistry
from govspec.core.export.engine import Clock, export_spec, malformed_export_result
from govspec.core.export.models import ExportResult

from .manifest import Category, ManifestLike, build_manifest

log = logging.getLogger("govspec.batch")


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate counts over one batch run."""

    total_pages: int
    total_components: int
    total_exports: int
    valid_exports: int
    invalid_exports: int
    all_valid: bool

    @classmethod
    def from_results(cls, results: Iterable[ExportResult]) -> "BatchSummary":
        pages = components = valid = invalid = 0
        for r in results:
            if r.category == Category.PAGES.value:
                pages += 1
            else:
                components += 1
            if r.valid:
                valid += 1
            else:
                invalid += 1
        return cls(
            total_pages=pages,
            total_components=components,
            total_exports=pages + components,
            valid_exports=valid,
            invalid_exports=invalid,
            all_valid=invalid == 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalPages": self.total_pages,
            "totalComponents": self.total_components,
            "totalExports": self.total_exports,
            "validExports": self.valid_exports,
            "invalidExports": self.invalid_exports,
            "allValid": self.all_valid,
        }


@dataclass(frozen=True)
class BatchResult:
    """Every per-input result, in manifest order, plus the folded summary."""

    results: Tuple[ExportResult, ...]
    summary: BatchSummary

    @property
    def governed_specs(self) -> Dict[str, ExportResult]:
        return {r.governed_spec_filename: r for r in self.results}

    @property
    def csv_exports(self) -> Dict[str, str]:
        return {r.csv_filename: r.csv for r in self.results}

    def result_for(self, identifier: str) -> Optional[ExportResult]:
        for r in self.results:
            if r.page_id == identifier:
                return r
        return None


def run_batch(
    manifest: ManifestLike,
    *,
    contract: Optional[ContractRegistry] = None,
    clock: Optional[Clock] = None,
) -> BatchResult:
    """Export every manifest entry and fold a summary.

    An invalid input never aborts the batch. An input that cannot be
    normalized at all is recorded as a degenerate invalid result with a
    malformed_input violation, so every entry appears in the output.
    """

    contract = contract or DEFAULT_CONTRACT
    entries = build_manifest(manifest)
    results = []

    for entry in entries:
        category = entry.category.value
        try:
            result = export_spec(
                entry.tree,
                entry.identifier,
                category,
                contract=contract,
                clock=clock,
            )
        except MalformedSpecError as e:
            log.warning(
                "malformed_input",
                extra={"page_id": entry.identifier, "reason": str(e)},
            )
            result = malformed_export_result(entry.identifier, category, str(e), contract=contract)
        log.debug(
            "input_exported",
            extra={"page_id": entry.identifier, "category": category, "valid": result.valid},
        )
        results.append(result)

    summary = BatchSummary.from_results(results)
    log.info("batch_complete", extra=summary.to_dict())
    return BatchResult(results=tuple(results), summary=summary)
