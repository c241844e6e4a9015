"""Sub-schema change propagation and the schema save flow."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from annotation_migrator.annotation_migration import (
    Annotation,
    AnnotationStore,
    FileAnnotations,
    MigrationSummaryEntry,
    migrate_annotations,
    rename_nested_keys,
)
from annotation_migrator.schema_diffing import RenameDetector, diff_schemas
from annotation_migrator.schema_management.schema_models import (
    SUBOBJECT_UPDATE_SENTINEL,
    ObjectSchema,
    RenameOp,
)
from annotation_migrator.schema_management.type_tags import (
    SchemaError,
    references_schema,
    rename_reference,
)

from .propagation_outcomes import ParentUpdate, PropagationResult, SchemaEditOutcome

_LOGGER = logging.getLogger(__name__)


def find_parent_schemas(
    schemas: Sequence[ObjectSchema], old_sub: ObjectSchema, new_sub: ObjectSchema
) -> tuple[ObjectSchema, ...]:
    """Return schemas embedding the sub-schema under its old or new name."""
    edited_names = {old_sub.name, new_sub.name}
    referenced_names = edited_names if old_sub.name != new_sub.name else {old_sub.name}
    return tuple(
        schema
        for schema in schemas
        if schema.name not in edited_names
        and any(
            references_schema(item.type, name)
            for item in schema.fields
            for name in referenced_names
        )
    )


def propagate_subschema_change(
    schemas: Sequence[ObjectSchema],
    old_sub: ObjectSchema,
    new_sub: ObjectSchema,
    store: AnnotationStore,
    *,
    rename_detector: RenameDetector | None = None,
) -> PropagationResult:
    """Cascade a sub-schema edit into every parent schema, one level deep.

    Each parent gets a new version with retyped references; nested values are
    rewritten for minor field renames, and a major sub-schema change forces
    reviewed parent annotations into pending validation.
    """
    sub_diff = diff_schemas(old_sub, new_sub, rename_detector=rename_detector)
    renames = (
        tuple(
            RenameOp(from_field=pair.from_field, to_field=pair.to_field)
            for pair in sub_diff.rename_pairs()
        )
        if sub_diff.is_minor
        else ()
    )

    current_store = store
    summary: list[MigrationSummaryEntry] = []
    parent_updates: list[ParentUpdate] = []
    for parent_old in find_parent_schemas(schemas, old_sub, new_sub):
        if renames:
            current_store = _rename_embedded_values(
                current_store, parent_old, old_sub.name, renames
            )
        parent_new = _next_parent_version(
            parent_old,
            old_name=old_sub.name,
            new_name=new_sub.name,
            force_validation=not sub_diff.is_minor,
        )
        result = migrate_annotations(
            current_store, parent_old, parent_new, rename_detector=rename_detector
        )
        current_store = result.store
        summary.extend(result.summary)
        parent_updates.append(ParentUpdate(old_schema=parent_old, new_schema=parent_new))

    _LOGGER.info(
        "Propagated %s change of sub-schema %s to %d parent schema(s)",
        sub_diff.classification.value,
        new_sub.name,
        len(parent_updates),
    )
    return PropagationResult(
        store=current_store,
        summary=tuple(summary),
        parent_updates=tuple(parent_updates),
    )


def apply_schema_edit(
    schemas: Sequence[ObjectSchema],
    old_schema: ObjectSchema | None,
    new_schema: ObjectSchema,
    store: AnnotationStore,
    *,
    rename_detector: RenameDetector | None = None,
    propagate_subobjects: bool = True,
) -> SchemaEditOutcome:
    """Save one schema edit: migrate its annotations and update dependent parents."""
    registry = list(schemas)
    diff = diff_schemas(old_schema, new_schema, rename_detector=rename_detector)
    if old_schema is None:
        if any(schema.name == new_schema.name for schema in registry):
            raise SchemaError(f"Object schema already exists: {new_schema.name}")
        registry.append(new_schema)
        return SchemaEditOutcome(schemas=tuple(registry), store=store, summary=(), diff=diff)

    index = _index_of(registry, old_schema.name)
    name_taken = any(
        schema.name == new_schema.name
        for position, schema in enumerate(registry)
        if position != index
    )
    if new_schema.name != old_schema.name and name_taken:
        raise SchemaError(f"Object schema already exists: {new_schema.name}")

    migration = migrate_annotations(
        store, old_schema, new_schema, rename_detector=rename_detector
    )
    registry[index] = new_schema
    is_subobject_edit = old_schema.is_subobject or new_schema.is_subobject
    if not (propagate_subobjects and is_subobject_edit):
        return SchemaEditOutcome(
            schemas=tuple(registry),
            store=migration.store,
            summary=migration.summary,
            diff=diff,
        )

    propagation = propagate_subschema_change(
        registry, old_schema, new_schema, migration.store, rename_detector=rename_detector
    )
    for update in propagation.parent_updates:
        registry[_index_of(registry, update.old_schema.name)] = update.new_schema
    return SchemaEditOutcome(
        schemas=tuple(registry),
        store=propagation.store,
        summary=migration.summary + propagation.summary,
        diff=diff,
        parent_updates=propagation.parent_updates,
    )


def _next_parent_version(
    parent: ObjectSchema, *, old_name: str, new_name: str, force_validation: bool
) -> ObjectSchema:
    fields = parent.fields
    if old_name != new_name:
        fields = tuple(
            replace(item, type=rename_reference(item.type, old_name, new_name))
            for item in parent.fields
        )
    return replace(
        parent,
        version=parent.version + 1,
        fields=fields,
        migration_ops=(SUBOBJECT_UPDATE_SENTINEL,) if force_validation else (),
    )


def _rename_embedded_values(
    store: AnnotationStore,
    parent: ObjectSchema,
    sub_name: str,
    renames: Sequence[RenameOp],
) -> AnnotationStore:
    embedded_fields = tuple(
        item.name for item in parent.fields if references_schema(item.type, sub_name)
    )
    if not embedded_fields:
        return store

    updated: dict[str, FileAnnotations] = {}
    for file_id, entry in store.items():
        annotations = tuple(
            _rename_in_annotation(annotation, embedded_fields, renames)
            if annotation.object_name == parent.name
            else annotation
            for annotation in entry.annotations
        )
        updated[file_id] = replace(entry, annotations=annotations)
    return updated


def _rename_in_annotation(
    annotation: Annotation,
    embedded_fields: Sequence[str],
    renames: Sequence[RenameOp],
) -> Annotation:
    rewritten: dict[str, object] | None = None
    for field_name in embedded_fields:
        value = annotation.values.get(field_name)
        if not value:
            continue
        new_value, touched = rename_nested_keys(value, renames)
        if touched:
            if rewritten is None:
                rewritten = dict(annotation.values)
            rewritten[field_name] = new_value
    if rewritten is None:
        return annotation
    return replace(annotation, values=rewritten)


def _index_of(schemas: Sequence[ObjectSchema], name: str) -> int:
    for position, schema in enumerate(schemas):
        if schema.name == name:
            return position
    raise SchemaError(f"Object schema not found: {name}")
