"""Migration summary workbook writer service."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from annotation_migrator.annotation_migration.annotation_models import MigrationSummaryEntry

from .report_models import RunMetadata

SUMMARY_SHEET_NAME = "Summary"
RUN_INFO_SHEET_NAME = "RunInfo"
SUMMARY_COLUMNS = ("File", "Page", "Annotation", "Action", "Changes")
_UPDATE_ACTION = "update"
_COLUMN_WIDTHS = (24, 8, 40, 20, 60)


def format_summary_line(entry: MigrationSummaryEntry) -> str:
    """Render one summary entry the way the confirmation prompt lists it."""
    action = entry.action.value if entry.action is not None else _UPDATE_ACTION
    line = f"{entry.file_id} page {entry.page} - ann {entry.annotation_id[:6]}: {action}"
    if entry.changes:
        line += f" ({', '.join(entry.changes)})"
    return line


def write_summary_workbook(
    summary: Sequence[MigrationSummaryEntry],
    run_metadata: RunMetadata,
    output_path: Path | str,
) -> Path:
    """Write the migration summary workbook and return its resolved path."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SUMMARY_SHEET_NAME
    for column, (header, width) in enumerate(zip(SUMMARY_COLUMNS, _COLUMN_WIDTHS), start=1):
        sheet.cell(row=1, column=column, value=header)
        sheet.cell(row=1, column=column).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column)].width = width
    sheet.freeze_panes = "A2"

    for row, entry in enumerate(summary, start=2):
        values = (
            entry.file_id,
            entry.page,
            entry.annotation_id,
            entry.action.value if entry.action is not None else _UPDATE_ACTION,
            ", ".join(entry.changes) or None,
        )
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)

    _write_run_info_sheet(workbook, run_metadata, summary)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_run_info_sheet(
    workbook: Workbook, run_metadata: RunMetadata, summary: Sequence[MigrationSummaryEntry]
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    actions = Counter(
        entry.action.value if entry.action is not None else _UPDATE_ACTION for entry in summary
    )
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("schema_name", run_metadata.schema_name),
        ("old_version", run_metadata.old_version),
        ("new_version", run_metadata.new_version),
        ("classification", run_metadata.classification),
        ("workspace_path", str(run_metadata.workspace_path)),
        ("affected", len(summary)),
        ("reextract", actions.get("reextract", 0)),
        ("pending_validation", actions.get("pendingValidation", 0)),
        ("updated", actions.get(_UPDATE_ACTION, 0)),
        ("parents_updated", ", ".join(run_metadata.parents_updated) or None),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
