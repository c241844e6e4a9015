"""Results writing domain exports."""

from .report_models import RunMetadata
from .summary_report_writer import (
    RUN_INFO_SHEET_NAME,
    SUMMARY_COLUMNS,
    SUMMARY_SHEET_NAME,
    format_summary_line,
    write_summary_workbook,
)

__all__ = [
    "RUN_INFO_SHEET_NAME",
    "RunMetadata",
    "SUMMARY_COLUMNS",
    "SUMMARY_SHEET_NAME",
    "format_summary_line",
    "write_summary_workbook",
]
