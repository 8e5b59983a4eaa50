"""JSON report payloads for batch runs."""

from .models import BatchReportOut, BatchSummaryOut, ExportResultOut, ViolationOut, build_batch_report

__all__ = [
    "BatchReportOut",
    "BatchSummaryOut",
    "ExportResultOut",
    "ViolationOut",
    "build_batch_report",
]
