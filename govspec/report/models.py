from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from govspec.core.batch.orchestrator import BatchResult, BatchSummary
from govspec.core.export.models import ExportResult


class ViolationOut(BaseModel):
    """One contract violation."""

    code: str
    message: str
    section_id: Optional[str] = None
    path: Optional[str] = None
    action: Optional[str] = None


class ExportResultOut(BaseModel):
    """Per-input export outcome (content is written separately)."""

    page_id: str
    category: str
    status: str
    valid: bool
    governed_spec_file: str
    csv_file: str
    model_hash: str
    export_hash: str
    schema_version: str
    contract_version: str
    engine_version: str
    build_mode: str
    section_count: int = 0
    action_count: int = 0
    generated_at: Optional[str] = None
    violations: List[ViolationOut] = Field(default_factory=list)


class BatchSummaryOut(BaseModel):
    """Batch summary with the camelCase keys consumers expect."""

    model_config = ConfigDict(populate_by_name=True)

    total_pages: int = Field(alias="totalPages")
    total_components: int = Field(alias="totalComponents")
    total_exports: int = Field(alias="totalExports")
    valid_exports: int = Field(alias="validExports")
    invalid_exports: int = Field(alias="invalidExports")
    all_valid: bool = Field(alias="allValid")


class BatchReportOut(BaseModel):
    """Whole-batch report."""

    summary: BatchSummaryOut
    results: List[ExportResultOut] = Field(default_factory=list)


def _summary_out(summary: BatchSummary) -> BatchSummaryOut:
    return BatchSummaryOut.model_validate(summary.to_dict())


def export_result_out(result: ExportResult) -> ExportResultOut:
    md = result.metadata
    return ExportResultOut(
        page_id=result.page_id,
        category=result.category,
        status=result.status,
        valid=result.valid,
        governed_spec_file=result.governed_spec_filename,
        csv_file=result.csv_filename,
        model_hash=md.model_hash,
        export_hash=md.export_hash,
        schema_version=md.schema_version,
        contract_version=md.contract_version,
        engine_version=md.engine_version,
        build_mode=md.build_mode,
        section_count=md.section_count,
        action_count=md.action_count,
        generated_at=md.generated_at,
        violations=[ViolationOut(**v.to_dict()) for v in result.violations],
    )


def build_batch_report(result: BatchResult) -> BatchReportOut:
    return BatchReportOut(
        summary=_summary_out(result.summary),
        results=[export_result_out(r) for r in result.results],
    )
