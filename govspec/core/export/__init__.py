"""Deterministic serialization of normalized, validated spec trees.

Two artifacts per input: the governed-spec text document and a flat CSV
export. Both are pure functions of their inputs so the export hash is
reproducible.
"""

from .csv_renderer import EXPORT_CSV_HEADER, render_export_csv, write_csv
from .engine import export_spec, malformed_export_result
from .models import ExportMetadata, ExportResult
from .text_renderer import render_governed_spec, render_malformed_spec

__all__ = [
    "EXPORT_CSV_HEADER",
    "render_export_csv",
    "write_csv",
    "export_spec",
    "malformed_export_result",
    "ExportMetadata",
    "ExportResult",
    "render_governed_spec",
    "render_malformed_spec",
]
