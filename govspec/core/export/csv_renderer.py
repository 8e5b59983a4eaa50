from __future__ import annotations

import csv
import io
from typing import Any, Iterable, List, Mapping, Sequence

from govspec.core.contract.taxonomy import raw_action_fields
from govspec.core.normalization.legacy_normalizer import LOCATION_FIELD, SEMANTIC_KEY_FIELD
from govspec.core.spec_tree import get_sections, iter_section_nodes, node_label
from govspec.core.validation.models import ValidationResult

EXPORT_CSV_HEADER = (
    "Page",
    "Section ID",
    "Section Name",
    "Semantic Key",
    "Location",
    "Element Path",
    "Element Label",
    "Action",
    "Target",
    "Validation Status",
)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def write_csv(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows with standard CSV quoting and a fixed "\\n" line terminator."""

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow([_cell(v) for v in row])
    return buf.getvalue()


def export_rows(
    tree: Mapping[str, Any], validation: ValidationResult, page_id: str
) -> List[List[Any]]:
    """One row per node carrying an action; one bare row per section with none."""

    rows: List[List[Any]] = []
    for idx, section in enumerate(get_sections(tree)):
        base = [
            page_id,
            section.get("section_id"),
            section.get("name"),
            section.get(SEMANTIC_KEY_FIELD),
            section.get(LOCATION_FIELD),
        ]
        section_rows = []
        for site in iter_section_nodes(tree, idx):
            if not site.is_mapping:
                continue
            fields = raw_action_fields(site.node)
            if fields is None:
                continue
            tag, target = fields
            section_rows.append(
                base + [site.outline, node_label(site.node), tag, target, validation.status]
            )
        rows.extend(section_rows or [base + ["", "", "", "", validation.status]])
    return rows


def render_export_csv(tree: Mapping[str, Any], validation: ValidationResult, page_id: str) -> str:
    """Render the flat per-input CSV audit export."""

    return write_csv(EXPORT_CSV_HEADER, export_rows(tree, validation, page_id))
