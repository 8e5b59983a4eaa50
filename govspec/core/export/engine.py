from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Callable, Mapping, Optional

from govspec.core.contract.registry import DEFAULT_CONTRACT, ContractRegistry
from govspec.core.hashing import export_hash, model_hash
from govspec.core.normalization import normalize_spec_tree
from govspec.core.spec_tree import get_sections
from govspec.core.validation import Violation, ViolationCode, validate_spec_tree

from .csv_renderer import EXPORT_CSV_HEADER, render_export_csv, write_csv
from .models import ExportMetadata, ExportResult
from .text_renderer import count_actions, render_governed_spec, render_malformed_spec

log = logging.getLogger("govspec.export")

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def export_spec(
    tree: Mapping[str, Any],
    page_id: str,
    category: str,
    *,
    contract: Optional[ContractRegistry] = None,
    clock: Optional[Clock] = None,
) -> ExportResult:
    """Run one spec tree through normalize -> validate -> hash -> render.

    Validation failures are reported on the result, never raised. The clock
    is only consulted in development builds; release exports carry no
    timestamp anywhere.

    Raises MalformedSpecError when the tree cannot be normalized.
    """

    contract = contract or DEFAULT_CONTRACT
    normalized = normalize_spec_tree(tree)
    validation = validate_spec_tree(normalized, contract)

    generated_at: Optional[datetime] = None
    if not contract.is_release:
        generated_at = (clock or _utc_now)()
    generated_iso = generated_at.isoformat() if generated_at is not None else None

    m_hash = model_hash(normalized, contract, generated_at=generated_at)
    content = render_governed_spec(
        normalized,
        validation,
        page_id,
        category,
        model_hash=m_hash,
        contract=contract,
        generated_at=generated_iso,
    )
    csv_text = render_export_csv(normalized, validation, page_id)

    metadata = ExportMetadata(
        model_hash=m_hash,
        export_hash=export_hash(content, contract),
        schema_version=validation.schema_version,
        contract_version=validation.contract_version,
        engine_version=contract.engine_version,
        build_mode=contract.build_mode,
        section_count=len(get_sections(normalized)),
        action_count=count_actions(normalized),
        generated_at=generated_iso,
    )

    log.debug(
        "export_rendered",
        extra={
            "page_id": page_id,
            "valid": validation.valid,
            "model_hash": metadata.model_hash,
            "export_hash": metadata.export_hash,
        },
    )

    return ExportResult(
        page_id=page_id,
        category=category,
        content=content,
        csv=csv_text,
        valid=validation.valid,
        violations=validation.violations,
        metadata=metadata,
    )


def malformed_export_result(
    page_id: str,
    category: str,
    reason: str,
    *,
    contract: Optional[ContractRegistry] = None,
) -> ExportResult:
    """Build the degenerate result recorded for an input that failed normalization.

    The result is always invalid and carries a single malformed_input
    violation; hashes are computed over the stand-in text so the inventory
    stays complete.
    """

    contract = contract or DEFAULT_CONTRACT
    violation = Violation(code=ViolationCode.MALFORMED_INPUT, message=reason)
    content = render_malformed_spec(page_id, category, reason, contract=contract)
    csv_text = write_csv(
        EXPORT_CSV_HEADER, [[page_id, "", "", "", "", "", "", "", "", "INVALID"]]
    )
    digest = export_hash(content, contract)
    return ExportResult(
        page_id=page_id,
        category=category,
        content=content,
        csv=csv_text,
        valid=False,
        violations=(violation,),
        metadata=ExportMetadata(
            model_hash="",
            export_hash=digest,
            schema_version="",
            contract_version="",
            engine_version=contract.engine_version,
            build_mode=contract.build_mode,
            section_count=0,
            action_count=0,
        ),
    )
