"""Reporting — summaries and spreadsheet export."""

from rou_lease.reporting.summary import build_summary, format_amount
from rou_lease.reporting.export import build_workbook, export_filename

__all__ = [
    "build_summary",
    "format_amount",
    "build_workbook",
    "export_filename",
]
