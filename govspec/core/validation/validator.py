from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from govspec.core.contract.exceptions import ActionRejected, MissingTargetError
from govspec.core.contract.registry import DEFAULT_CONTRACT, ContractRegistry
from govspec.core.contract.taxonomy import parse_action
from govspec.core.spec_tree import iter_nodes

from .models import ValidationResult, Violation, ViolationCode

log = logging.getLogger("govspec.validate")


def declared_contract_version(tree: Mapping[str, Any], contract: ContractRegistry) -> str:
    value = tree.get("contract_version")
    return str(value) if value not in (None, "") else contract.contract_version


def declared_schema_version(tree: Mapping[str, Any], contract: ContractRegistry) -> str:
    value = tree.get("schema_version")
    return str(value) if value not in (None, "") else contract.default_schema_version


def _version_violations(
    contract_version: str, schema_version: str, contract: ContractRegistry
) -> List[Violation]:
    out: List[Violation] = []
    if contract_version != contract.contract_version:
        out.append(
            Violation(
                code=ViolationCode.CONTRACT_VERSION_MISMATCH,
                message=(
                    f"contract version {contract_version} does not match "
                    f"expected {contract.contract_version}"
                ),
            )
        )
    if not contract.is_supported_schema(schema_version):
        out.append(
            Violation(
                code=ViolationCode.UNSUPPORTED_SCHEMA_VERSION,
                message=(
                    f"schema version {schema_version} is not supported "
                    f"({', '.join(contract.supported_schema_versions)})"
                ),
            )
        )
    return out


def validate_spec_tree(
    tree: Mapping[str, Any],
    contract: Optional[ContractRegistry] = None,
) -> ValidationResult:
    """Check a normalized spec tree against the contract lock.

    Gates, in order; every violation is collected, none short-circuits:
    1. contract version equals the expected version
    2. schema version (declared or default) is supported
    3. every action tag, anywhere in the tree, is in the allowed taxonomy
    4. every required-target action has a non-empty target

    The tree is never repaired, only reported on.
    """

    contract = contract or DEFAULT_CONTRACT
    contract_version = declared_contract_version(tree, contract)
    schema_version = declared_schema_version(tree, contract)

    violations = _version_violations(contract_version, schema_version, contract)
    taxonomy: List[Violation] = []
    targets: List[Violation] = []

    for site in iter_nodes(tree):
        if not site.is_mapping:
            taxonomy.append(
                Violation(
                    code=ViolationCode.MALFORMED_ELEMENT,
                    message=f"element must be a mapping, got {type(site.node).__name__}",
                    section_id=site.section_id,
                    path=site.path,
                )
            )
            continue
        try:
            parse_action(site.node, contract)
        except ActionRejected as err:
            v = Violation(
                code=ViolationCode(err.code),
                message=str(err),
                section_id=site.section_id,
                path=site.path,
                action=err.tag,
            )
            (targets if isinstance(err, MissingTargetError) else taxonomy).append(v)

    violations.extend(taxonomy)
    violations.extend(targets)

    if violations:
        log.debug(
            "validation_failed",
            extra={"violation_count": len(violations), "codes": sorted({v.code.value for v in violations})},
        )

    return ValidationResult(
        valid=not violations,
        violations=tuple(violations),
        contract_version=contract_version,
        schema_version=schema_version,
    )
