"""Schema edit run use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from annotation_migrator.annotation_migration import MigrationSummaryEntry
from annotation_migrator.configuration import ConfigurationError, load_configuration
from annotation_migrator.results_writing import RunMetadata, write_summary_workbook
from annotation_migrator.schema_diffing import rename_detector_for, revise_schema
from annotation_migrator.schema_management import (
    ObjectSchema,
    SchemaError,
    fields_from_sequence,
    schema_from_mapping,
)
from annotation_migrator.subschema_propagation import SchemaEditOutcome, apply_schema_edit
from annotation_migrator.workspace_io import WorkspaceError, load_workspace, write_workspace

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

ConfirmCallback = Callable[[Sequence[MigrationSummaryEntry]], bool]

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_schema_edit_run(
    request: RunRequest, *, confirm: ConfirmCallback | None = None
) -> RunOutcome:
    """Apply one edited schema document to the configured workspace.

    The edit is committed as a whole-workspace write unless the run is a dry
    run or `confirm` declines the listed annotation changes.
    """
    artifacts = _load_run_artifacts(request.config_path, request.schema_path)
    schemas = artifacts.workspace.schemas
    target = request.target or _document_name(artifacts.schema_document)
    old_schema = next((schema for schema in schemas if schema.name == target), None)
    if old_schema is None and (request.target or not request.create_new):
        message = f"Object schema not found: {target}"
        if not request.target:
            message += " (creating a new schema must be requested explicitly)"
        raise RunExecutionError(message)
    if old_schema is None:
        _LOGGER.info("Creating new object schema %s", target)

    run_start = datetime.now(UTC)
    migration = artifacts.configuration.migration
    try:
        new_schema = _build_new_schema(old_schema, artifacts.schema_document)
        outcome = apply_schema_edit(
            schemas,
            old_schema,
            new_schema,
            artifacts.workspace.store,
            rename_detector=rename_detector_for(migration.rename_strategy),
            propagate_subobjects=migration.propagate_subobjects,
        )
    except (SchemaError, ValueError) as exc:
        raise RunExecutionError(str(exc)) from exc

    parents_updated = tuple(update.new_schema.name for update in outcome.parent_updates)
    committed = not request.dry_run and _is_confirmed(outcome, request, confirm)
    _LOGGER.info(
        "Schema edit of %s is %s with %d affected annotation(s); committed=%s",
        new_schema.name,
        outcome.diff.classification.value,
        len(outcome.summary),
        committed,
    )
    run_outcome = RunOutcome(
        schema_name=new_schema.name,
        classification=outcome.diff.classification,
        summary=outcome.summary,
        parents_updated=parents_updated,
        committed=committed,
        dry_run=request.dry_run,
    )
    if not committed:
        return run_outcome

    output_dir = (
        Path(request.output_dir)
        if request.output_dir
        else artifacts.configuration.output.directory
    )
    workspace_path = _commit_workspace(artifacts, outcome, output_dir)
    report_path = None
    if artifacts.configuration.output.summary_workbook:
        report_path = write_summary_workbook(
            outcome.summary,
            RunMetadata(
                run_start=run_start,
                schema_name=new_schema.name,
                old_version=old_schema.version if old_schema else None,
                new_version=new_schema.version,
                classification=outcome.diff.classification.value,
                workspace_path=workspace_path,
                parents_updated=parents_updated,
            ),
            _report_path(output_dir, new_schema.name, run_start),
        )
    return replace(run_outcome, workspace_path=workspace_path, report_path=report_path)


def _load_run_artifacts(config_path: str, schema_path: str) -> RunArtifacts:
    try:
        configuration = load_configuration(config_path)
        workspace = load_workspace(configuration.workspace)
        schema_document = json.loads(Path(schema_path).read_text(encoding="utf-8"))
    except (
        ConfigurationError,
        WorkspaceError,
        OSError,
        json.JSONDecodeError,
    ) as exc:
        raise RunExecutionError(str(exc)) from exc
    if not isinstance(schema_document, Mapping):
        raise RunExecutionError(f"Schema document must be a JSON object: {schema_path}")
    return RunArtifacts(
        configuration=configuration,
        workspace=workspace,
        schema_document=dict(schema_document),
    )


def _document_name(document: Mapping[str, Any]) -> str:
    name = document.get("name")
    if not isinstance(name, str) or not name.strip():
        raise RunExecutionError("Schema document requires a name.")
    return name.strip()


def _build_new_schema(old_schema: ObjectSchema | None, document: Mapping[str, Any]) -> ObjectSchema:
    if "version" in document:
        schema = schema_from_mapping(document)
        expected = old_schema.version + 1 if old_schema else 1
        if schema.version != expected:
            raise RunExecutionError(
                f"Schema {schema.name} must be saved as version {expected}, got {schema.version}."
            )
        return schema
    name = _document_name(document)
    system_prompt = document.get("systemPrompt")
    return revise_schema(
        old_schema,
        name=name,
        fields=fields_from_sequence(document.get("fields"), schema_name=name),
        is_subobject=bool(document.get("isSubobject", False)),
        system_prompt=system_prompt if isinstance(system_prompt, str) else None,
    )


def _is_confirmed(
    outcome: SchemaEditOutcome, request: RunRequest, confirm: ConfirmCallback | None
) -> bool:
    if not outcome.requires_confirmation or request.assume_yes or confirm is None:
        return True
    return confirm(outcome.summary)


def _commit_workspace(
    artifacts: RunArtifacts, outcome: SchemaEditOutcome, output_dir: Path
) -> Path:
    source_archive = artifacts.workspace.source_archive
    destination = output_dir / source_archive.name if source_archive else output_dir
    updated = replace(artifacts.workspace, schemas=outcome.schemas, store=outcome.store)
    try:
        return write_workspace(updated, destination)
    except WorkspaceError as exc:
        raise RunExecutionError(str(exc)) from exc


def _report_path(output_dir: Path, schema_name: str, run_start: datetime) -> Path:
    timestamp = run_start.strftime("%Y%m%d-%H%M%S")
    return output_dir / f"{schema_name}-migration-{timestamp}.xlsx"
