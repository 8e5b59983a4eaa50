from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from govspec.core.batch.inventory import render_inventory_csv
from govspec.core.batch.orchestrator import BatchResult
from govspec.core.contract.exceptions import ManifestError
from govspec.report.models import build_batch_report

INVENTORY_FILENAME = "inventory.csv"
REPORT_FILENAME = "batch_report.json"
HASHES_FILENAME = "hashes.txt"


def sha256_hex(data: bytes) -> str:
    """Full SHA-256 hex digest of written bytes (integrity of files on disk)."""

    h = hashlib.sha256()
    h.update(data)
    return h.hexdigest()


def _safe_filename(name: str) -> str:
    """Return a filename-safe basename.

    Prevents directory traversal by discarding directory components and
    replacing separators and control characters.
    """

    base = os.path.basename(name)
    base = "".join(ch if ch.isprintable() else "_" for ch in base)
    base = base.replace(os.sep, "_")
    return base or "export"


def _check_filename_collisions(result: BatchResult) -> None:
    owners: Dict[str, str] = {}
    for r in result.results:
        for filename in (r.governed_spec_filename, r.csv_filename):
            relpath = _safe_filename(filename)
            if relpath in owners:
                raise ManifestError(
                    f"identifiers {owners[relpath]!r} and {r.page_id!r} both write {relpath}"
                )
            owners[relpath] = r.page_id


@dataclass(frozen=True)
class WrittenArtifact:
    """One written file."""

    name: str
    relpath: str
    sha256: str
    size_bytes: int
    content_type: str


@dataclass(frozen=True)
class WrittenArtifacts:
    """Everything a batch write produced."""

    out_dir: str
    artifacts: List[WrittenArtifact]
    hashes_path: str

    def relpaths(self) -> List[str]:
        return [a.relpath for a in self.artifacts]


def write_batch_artifacts(
    result: BatchResult,
    out_dir: str,
    *,
    include_report: bool = True,
) -> WrittenArtifacts:
    """Persist a batch run.

    Outputs (files)
    - {id}_governed_spec_new.txt per input
    - {id}_export.csv per input
    - inventory.csv
    - batch_report.json (optional)
    - hashes.txt (sha256 of every file above, not of itself)

    Raises ManifestError, before anything is written, when two identifiers
    sanitize to the same filename.

    Text is written with "\\n" newlines so bytes on disk match the hashed
    content on every platform.
    """

    _check_filename_collisions(result)

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    artifacts: List[WrittenArtifact] = []

    def write_text(*, name: str, filename: str, text: str, content_type: str) -> None:
        relpath = _safe_filename(filename)
        data = text.encode("utf-8")
        (out / relpath).write_bytes(data)
        artifacts.append(
            WrittenArtifact(
                name=name,
                relpath=relpath,
                sha256=sha256_hex(data),
                size_bytes=len(data),
                content_type=content_type,
            )
        )

    for r in result.results:
        write_text(
            name=f"{r.page_id}:governed_spec",
            filename=r.governed_spec_filename,
            text=r.content,
            content_type="text/plain",
        )
        write_text(
            name=f"{r.page_id}:export_csv",
            filename=r.csv_filename,
            text=r.csv,
            content_type="text/csv",
        )

    write_text(
        name="inventory",
        filename=INVENTORY_FILENAME,
        text=render_inventory_csv(result.results),
        content_type="text/csv",
    )

    if include_report:
        report: Any = build_batch_report(result).model_dump(by_alias=True)
        write_text(
            name="batch_report",
            filename=REPORT_FILENAME,
            text=json.dumps(report, indent=2, sort_keys=True) + "\n",
            content_type="application/json",
        )

    hashes_path = out / HASHES_FILENAME
    hashes_path.write_bytes(
        "".join(f"{a.sha256}  {a.relpath}\n" for a in artifacts).encode("utf-8")
    )

    return WrittenArtifacts(out_dir=str(out), artifacts=artifacts, hashes_path=str(hashes_path))
