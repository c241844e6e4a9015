"""Editor-side authoring of explicit migration ops for a saved schema version."""

from __future__ import annotations

from collections.abc import Sequence

from annotation_migrator.schema_management.schema_models import (
    CreateOp,
    DeleteOp,
    FieldDefinition,
    MigrationOp,
    ObjectSchema,
    RenameOp,
    TypeChangeOp,
)
from annotation_migrator.schema_management.type_tags import SchemaError, format_type_tag

from .rename_detection import GreedySameTypeRenameDetector


def derive_migration_ops(
    old_schema: ObjectSchema, new_fields: Sequence[FieldDefinition]
) -> tuple[MigrationOp, ...]:
    """Describe how `new_fields` differ from the fields of `old_schema`.

    Removed fields are paired greedily with same-typed added fields as renames;
    the rest become deletes and creates, followed by type changes of fields
    kept under the same name.
    """
    old_fields = old_schema.field_map()
    new_by_name = {item.name: item for item in new_fields}
    removed = [item for name, item in old_fields.items() if name not in new_by_name]
    added = [item for name, item in new_by_name.items() if name not in old_fields]

    pairs = GreedySameTypeRenameDetector().detect_renames(removed, added)
    renamed_from = {pair.from_field for pair in pairs}
    renamed_to = {pair.to_field for pair in pairs}

    ops: list[MigrationOp] = [
        RenameOp(from_field=pair.from_field, to_field=pair.to_field) for pair in pairs
    ]
    ops.extend(DeleteOp(field=item.name) for item in removed if item.name not in renamed_from)
    ops.extend(
        CreateOp(field=item.name, type=format_type_tag(item.type))
        for item in added
        if item.name not in renamed_to
    )
    for name, old_field in old_fields.items():
        new_field = new_by_name.get(name)
        if new_field is not None and new_field.type != old_field.type:
            ops.append(
                TypeChangeOp(
                    field=name,
                    from_type=format_type_tag(old_field.type),
                    to_type=format_type_tag(new_field.type),
                )
            )
    return tuple(ops)


def revise_schema(
    old_schema: ObjectSchema | None,
    *,
    name: str,
    fields: Sequence[FieldDefinition],
    is_subobject: bool = False,
    system_prompt: str | None = None,
) -> ObjectSchema:
    """Build the next saved version of a schema, as the schema editor does on save."""
    stripped_name = name.strip()
    if not stripped_name:
        raise SchemaError("Object name is required.")
    if not fields:
        raise SchemaError("Please add at least one field.")
    field_names = [item.name for item in fields]
    if len(set(field_names)) != len(field_names):
        raise SchemaError(f"Duplicate field names in object schema '{stripped_name}'.")

    migration_ops = derive_migration_ops(old_schema, fields) if old_schema else ()
    return ObjectSchema(
        name=stripped_name,
        version=old_schema.version + 1 if old_schema else 1,
        fields=tuple(fields),
        is_subobject=is_subobject,
        system_prompt=(system_prompt or "").strip(),
        migration_ops=migration_ops,
    )
