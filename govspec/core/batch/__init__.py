"""Batch orchestration over a fixed manifest of named inputs."""

from .inventory import INVENTORY_HEADER, render_inventory_csv
from .manifest import Category, ManifestEntry, build_manifest
from .orchestrator import BatchResult, BatchSummary, run_batch

__all__ = [
    "INVENTORY_HEADER",
    "render_inventory_csv",
    "Category",
    "ManifestEntry",
    "build_manifest",
    "BatchResult",
    "BatchSummary",
    "run_batch",
]
