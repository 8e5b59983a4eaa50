from __future__ import annotations

from typing import Any, List, Mapping, Optional, Set

from govspec.core.contract.registry import DEFAULT_CONTRACT, ContractRegistry
from govspec.core.contract.taxonomy import raw_action_fields
from govspec.core.normalization.legacy_normalizer import LOCATION_FIELD, SEMANTIC_KEY_FIELD
from govspec.core.spec_tree import NodeSite, get_sections, iter_nodes, iter_section_nodes, node_label
from govspec.core.validation.models import ValidationResult

TITLE = "GOVERNED SPEC CONTRACT"
RULE = "=" * 60
THIN_RULE = "-" * 60


def one_line(value: Any) -> str:
    """Collapse any value to a single whitespace-normalized line."""

    if value is None:
        return ""
    return " ".join(str(value).split())


def _header(
    *,
    page_id: str,
    category: str,
    validation: ValidationResult,
    contract: ContractRegistry,
    model_hash: str,
    generated_at: Optional[str],
) -> List[str]:
    lines = [
        RULE,
        TITLE,
        RULE,
        f"Page: {one_line(page_id)}",
        f"Category: {one_line(category)}",
        f"Contract Version: {validation.contract_version}",
        f"Expected Contract Version: {contract.contract_version}",
        f"Schema Version: {validation.schema_version}",
        f"Export Engine: {contract.engine_version}",
        f"Build Mode: {contract.build_mode}",
        f"Model Hash: {model_hash}",
    ]
    # Volatile: only ever present outside release builds.
    if generated_at is not None and not contract.is_release:
        lines.append(f"Generated At: {generated_at}")
    return lines


def _node_line(site: NodeSite, rejected: Set[str]) -> str:
    node = site.node
    indent = "  " * (site.depth + 1)
    label = node_label(node) or "(unlabeled)"
    parts = [f"{indent}{site.outline} {one_line(label)}"]
    fields = raw_action_fields(node)
    if fields is not None:
        tag, target = fields
        parts.append(f"action: {one_line(tag)}")
        parts.append(f"target: {one_line(target) or '-'}")
    line = " | ".join(parts)
    if site.path in rejected:
        line += " [REJECTED]"
    return line


def _section_block(
    tree: Mapping[str, Any], index: int, section: Mapping[str, Any], rejected: Set[str]
) -> List[str]:
    lines = [
        THIN_RULE,
        f"SECTION {index + 1:02d}",
        THIN_RULE,
        f"Section ID: {one_line(section.get('section_id'))}",
        f"Name: {one_line(section.get('name'))}",
        f"Semantic Key: {one_line(section.get(SEMANTIC_KEY_FIELD)) or '-'}",
        f"Location: {one_line(section.get(LOCATION_FIELD))}",
    ]

    fields = raw_action_fields(section)
    if fields is not None:
        tag, target = fields
        line = f"Section Action: {one_line(tag)} | target: {one_line(target) or '-'}"
        if f"sections[{index}]" in rejected:
            line += " [REJECTED]"
        lines.append(line)

    nested = [s for s in iter_section_nodes(tree, index) if not s.is_section and s.is_mapping]
    lines.append(f"Elements: {len(nested)}")
    lines.extend(_node_line(site, rejected) for site in nested)
    return lines


def count_actions(tree: Mapping[str, Any]) -> int:
    return sum(1 for s in iter_nodes(tree) if s.is_mapping and raw_action_fields(s.node) is not None)


def render_governed_spec(
    tree: Mapping[str, Any],
    validation: ValidationResult,
    page_id: str,
    category: str,
    *,
    model_hash: str,
    contract: Optional[ContractRegistry] = None,
    generated_at: Optional[str] = None,
) -> str:
    """Render the governed-spec text document for a normalized tree.

    Pure: the same tree, validation result, page id, category and model hash
    always produce byte-identical text. generated_at is only emitted in
    development builds.
    """

    contract = contract or DEFAULT_CONTRACT
    sections = get_sections(tree)
    rejected = {v.path for v in validation.violations if v.path}

    lines = _header(
        page_id=page_id,
        category=category,
        validation=validation,
        contract=contract,
        model_hash=model_hash,
        generated_at=generated_at,
    )
    for idx, section in enumerate(sections):
        lines.extend(_section_block(tree, idx, section, rejected))

    lines.extend(
        [
            RULE,
            "SUMMARY",
            RULE,
            f"Total Subsections: {len(sections)}",
            f"Total Actions: {count_actions(tree)}",
            f"Validation Status: {validation.status}",
            f"Violations: {len(validation.violations)}",
        ]
    )
    lines.extend(f"  - {one_line(v.describe())}" for v in validation.violations)
    lines.append(RULE)
    return "\n".join(lines) + "\n"


def render_malformed_spec(
    page_id: str,
    category: str,
    reason: str,
    *,
    contract: Optional[ContractRegistry] = None,
) -> str:
    """Render the stand-in document recorded for an input that could not be normalized."""

    contract = contract or DEFAULT_CONTRACT
    lines = [
        RULE,
        TITLE,
        RULE,
        f"Page: {one_line(page_id)}",
        f"Category: {one_line(category)}",
        f"Export Engine: {contract.engine_version}",
        f"Build Mode: {contract.build_mode}",
        RULE,
        "SUMMARY",
        RULE,
        "Total Subsections: 0",
        "Validation Status: INVALID",
        "Violations: 1",
        f"  - [malformed_input] {one_line(reason)}",
        RULE,
    ]
    return "\n".join(lines) + "\n"
