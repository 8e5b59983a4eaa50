from __future__ import annotations

from typing import Iterable

from govspec.core.export.csv_renderer import write_csv
from govspec.core.export.models import ExportResult

INVENTORY_HEADER = ("Page", "Total Subsections", "Validation Status", "Model Hash", "Export Hash")


def render_inventory_csv(results: Iterable[ExportResult]) -> str:
    """Render the aggregate inventory: one row per processed input, in order."""

    rows = (
        [
            r.page_id,
            r.metadata.section_count,
            r.status,
            r.metadata.model_hash,
            r.metadata.export_hash,
        ]
        for r in results
    )
    return write_csv(INVENTORY_HEADER, rows)
