from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List

from govspec.core.batch import run_batch
from govspec.core.contract import (
    BUILD_MODES,
    DEFAULT_CONTRACT,
    ContractConfigurationError,
    ContractRegistry,
    MalformedSpecError,
    ManifestError,
    load_contract_lock,
)
from govspec.core.hashing import model_hash
from govspec.core.normalization import normalize_spec_tree
from govspec.core.validation import validate_spec_tree
from govspec.export_io import load_manifest_file, write_batch_artifacts
from govspec.report.models import build_batch_report
from govspec.utils.json_safe import to_jsonable

log = logging.getLogger("govspec.cli")

BUILD_MODE_ENV = "GOVSPEC_BUILD_MODE"


def _load_contract(args: argparse.Namespace) -> ContractRegistry:
    """Resolve the contract lock for this invocation.

    Raises ContractConfigurationError on a bad lock file or build mode; the
    command must stop before exporting anything.
    """

    contract = DEFAULT_CONTRACT
    path = getattr(args, "contract_lock", None)
    if path:
        if not os.path.isfile(path):
            raise ContractConfigurationError(f"contract lock not found: {path}")
        contract = load_contract_lock(path)
    mode = getattr(args, "build_mode", None)
    if mode:
        contract = contract.with_build_mode(mode)
    return contract


def cmd_show_contract(args: argparse.Namespace) -> int:
    """Print the effective contract lock as JSON."""

    try:
        contract = _load_contract(args)
    except ContractConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(contract.to_dict(), indent=2, sort_keys=True))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Normalize and validate a single spec file.

    Exit codes: 0 valid, 3 invalid, 2 unreadable input or bad contract lock.
    """

    try:
        contract = _load_contract(args)
    except ContractConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    path = os.path.abspath(args.path)
    if not os.path.isfile(path):
        print(f"error: file not found: {path}", file=sys.stderr)
        return 2

    try:
        with open(path, "r", encoding="utf-8") as f:
            tree = json.load(f)
        normalized = normalize_spec_tree(tree)
    except json.JSONDecodeError as e:
        print(f"error: invalid JSON: {e}", file=sys.stderr)
        return 2
    except MalformedSpecError as e:
        print(f"error: malformed spec: {e}", file=sys.stderr)
        return 2

    result = validate_spec_tree(normalized, contract)

    if args.json:
        output = result.to_dict()
        output["model_hash"] = model_hash(normalized, contract)
        output["section_count"] = len(normalized.get("sections") or [])
        print(json.dumps(to_jsonable(output), indent=2, sort_keys=True))
    else:
        print(f"{os.path.basename(path)}: {result.status}")
        for v in result.violations:
            print(f"  - {v.describe()}")

    return 0 if result.valid else 3


def cmd_export_batch(args: argparse.Namespace) -> int:
    """Run a manifest through the export pipeline and write every artifact.

    Exit codes: 0 all valid, 3 at least one invalid export, 2 bad manifest
    or contract lock.
    """

    try:
        contract = _load_contract(args)
    except ContractConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        manifest = load_manifest_file(args.manifest)
    except ManifestError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = run_batch(manifest, contract=contract)
    try:
        written = write_batch_artifacts(result, args.out, include_report=not args.no_report)
    except ManifestError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log.info(
        "artifacts_written",
        extra={"out_dir": written.out_dir, "artifact_count": len(written.artifacts)},
    )

    report = build_batch_report(result)
    print(json.dumps(report.summary.model_dump(by_alias=True), indent=2, sort_keys=True))
    return 0 if result.summary.all_valid else 3


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    p = argparse.ArgumentParser(prog="govspec", description="Governed spec export CLI")
    p.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: warning)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_contract_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--contract-lock", default=None, help="Path to a JSON contract lock")
        sp.add_argument(
            "--build-mode",
            default=os.environ.get(BUILD_MODE_ENV) or None,
            choices=list(BUILD_MODES),
            help=f"Override the contract build mode (env: {BUILD_MODE_ENV})",
        )

    sc = sub.add_parser("show-contract", help="Print the effective contract lock")
    add_contract_args(sc)
    sc.set_defaults(func=cmd_show_contract)

    vp = sub.add_parser("validate", help="Normalize and validate one spec JSON file")
    vp.add_argument("path", help="Path to spec JSON")
    vp.add_argument("--json", action="store_true", help="Print the verdict as JSON")
    add_contract_args(vp)
    vp.set_defaults(func=cmd_validate)

    eb = sub.add_parser("export-batch", help="Export every spec in a manifest")
    eb.add_argument("--manifest", required=True, help="Path to manifest JSON")
    eb.add_argument("--out", required=True, help="Output directory")
    eb.add_argument("--no-report", action="store_true", help="Skip batch_report.json")
    add_contract_args(eb)
    eb.set_defaults(func=cmd_export_batch)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
