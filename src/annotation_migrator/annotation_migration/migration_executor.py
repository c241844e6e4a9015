"""Annotation migration service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from annotation_migrator.schema_diffing import (
    DiffResult,
    RemoveField,
    RenameDetector,
    RenameField,
    diff_schemas,
)
from annotation_migrator.schema_management.schema_models import (
    CreateOp,
    DeleteOp,
    MigrationOp,
    ObjectSchema,
    RenameOp,
    TypeChangeOp,
    UnknownOp,
)

from .annotation_models import (
    Annotation,
    AnnotationStore,
    FileAnnotations,
    MigrationResult,
    MigrationSummaryEntry,
    SummaryAction,
)
from .value_rewriting import ValueOp, apply_value_ops

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ReviewedPlan:
    """How reviewed annotations of the migrated schema are rewritten."""

    value_ops: tuple[ValueOp, ...]
    requires_validation: bool


def migrate_annotations(
    store: AnnotationStore,
    old_schema: ObjectSchema,
    new_schema: ObjectSchema,
    *,
    rename_detector: RenameDetector | None = None,
) -> MigrationResult:
    """Rewrite annotations of `old_schema` so they conform to `new_schema`.

    Explicit `migration_ops` on the new schema take precedence; otherwise the
    change is inferred with the schema differ. Inputs are never mutated and
    annotations of other schemas are passed through as-is.
    """
    if new_schema.migration_ops:
        plan = _plan_from_explicit_ops(new_schema.migration_ops)
        source = "explicit ops"
    else:
        diff = diff_schemas(old_schema, new_schema, rename_detector=rename_detector)
        plan = _plan_from_diff(diff)
        source = "diff"

    summary: list[MigrationSummaryEntry] = []
    updated: dict[str, FileAnnotations] = {}
    for file_id, entry in store.items():
        annotations: list[Annotation] = []
        for annotation in entry.annotations:
            if annotation.object_name != old_schema.name:
                annotations.append(annotation)
                continue
            migrated, summary_entry = _migrate_annotation(
                annotation, file_id=file_id, new_schema=new_schema, plan=plan
            )
            annotations.append(migrated)
            summary.append(summary_entry)
        updated[file_id] = replace(entry, annotations=tuple(annotations))

    _LOGGER.info(
        "Migrated %d annotation(s) of %s v%s -> %s v%s using %s (%s)",
        len(summary),
        old_schema.name,
        old_schema.version,
        new_schema.name,
        new_schema.version,
        source,
        "major" if plan.requires_validation else "minor",
    )
    return MigrationResult(store=updated, summary=tuple(summary))


def _plan_from_explicit_ops(ops: Sequence[MigrationOp]) -> _ReviewedPlan:
    for op in ops:
        if isinstance(op, UnknownOp):
            _LOGGER.debug("Ignoring unrecognised migration op: %s", op.raw)
    value_ops = tuple(op for op in ops if isinstance(op, RenameOp | DeleteOp))
    requires_validation = any(isinstance(op, CreateOp | TypeChangeOp) for op in ops)
    return _ReviewedPlan(value_ops=value_ops, requires_validation=requires_validation)


def _plan_from_diff(diff: DiffResult) -> _ReviewedPlan:
    if not diff.is_minor:
        return _ReviewedPlan(value_ops=(), requires_validation=True)
    value_ops: list[ValueOp] = []
    for op in diff.minor_ops:
        if isinstance(op, RenameField):
            value_ops.append(RenameOp(from_field=op.from_field, to_field=op.to_field))
        elif isinstance(op, RemoveField):
            value_ops.append(DeleteOp(field=op.field))
    return _ReviewedPlan(value_ops=tuple(value_ops), requires_validation=False)


def _migrate_annotation(
    annotation: Annotation,
    *,
    file_id: str,
    new_schema: ObjectSchema,
    plan: _ReviewedPlan,
) -> tuple[Annotation, MigrationSummaryEntry]:
    restamped = replace(
        annotation,
        object_name=new_schema.name,
        object_version=new_schema.version,
    )
    if not annotation.human_revised:
        return replace(restamped, openai_pending=True), _summary_entry(
            file_id, annotation, action=SummaryAction.REEXTRACT
        )

    values, changes = apply_value_ops(annotation.values, plan.value_ops)
    if plan.requires_validation:
        return replace(restamped, values=values, pending_validation=True), _summary_entry(
            file_id, annotation, action=SummaryAction.PENDING_VALIDATION, changes=changes
        )
    migrated = replace(
        restamped,
        values=values,
        pending_validation=False,
        openai_pending=False,
    )
    return migrated, _summary_entry(file_id, annotation, changes=changes)


def _summary_entry(
    file_id: str,
    annotation: Annotation,
    *,
    action: SummaryAction | None = None,
    changes: tuple[str, ...] = (),
) -> MigrationSummaryEntry:
    return MigrationSummaryEntry(
        file_id=file_id,
        annotation_id=annotation.id,
        page=annotation.page_index + 1,
        action=action,
        changes=changes,
    )
