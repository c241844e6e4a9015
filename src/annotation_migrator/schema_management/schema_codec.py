"""Translation between stored schema documents and schema entities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .schema_models import (
    CreateOp,
    DeleteOp,
    FieldDefinition,
    MigrationOp,
    ObjectSchema,
    RenameOp,
    TypeChangeOp,
    UnknownOp,
)
from .type_tags import SchemaError, format_type_tag, parse_type_tag


def schema_from_mapping(value: Any) -> ObjectSchema:
    """Build an object schema from its stored camelCase document."""
    if not isinstance(value, Mapping):
        raise SchemaError("Object schema must be a mapping.")
    name = _require_name(value.get("name"), "Object schema name")
    version = value.get("version", 1)
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise SchemaError(f"Object schema '{name}' version must be a positive integer.")

    fields = fields_from_sequence(value.get("fields"), schema_name=name)
    system_prompt = value.get("systemPrompt")
    if system_prompt is not None and not isinstance(system_prompt, str):
        raise SchemaError(f"Object schema '{name}' systemPrompt must be a string.")
    raw_ops = value.get("migrationOps") or ()
    if not isinstance(raw_ops, Sequence) or isinstance(raw_ops, str):
        raise SchemaError(f"Object schema '{name}' migrationOps must be a list.")

    return ObjectSchema(
        name=name,
        version=version,
        fields=fields,
        is_subobject=bool(value.get("isSubobject", False)),
        system_prompt=system_prompt,
        migration_ops=tuple(migration_op_from_mapping(op) for op in raw_ops),
    )


def fields_from_sequence(value: Any, *, schema_name: str) -> tuple[FieldDefinition, ...]:
    """Parse and validate a stored field list."""
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SchemaError(f"Object schema '{schema_name}' fields must be a list.")
    fields: list[FieldDefinition] = []
    seen_names: set[str] = set()
    for entry in value:
        definition = field_from_mapping(entry, schema_name=schema_name)
        if definition.name in seen_names:
            raise SchemaError(
                f"Duplicate field '{definition.name}' in object schema '{schema_name}'."
            )
        seen_names.add(definition.name)
        fields.append(definition)
    return tuple(fields)


def field_from_mapping(value: Any, *, schema_name: str) -> FieldDefinition:
    if not isinstance(value, Mapping):
        raise SchemaError(f"Fields of object schema '{schema_name}' must be mappings.")
    name = _require_name(value.get("name"), f"Field name in '{schema_name}'")
    description = value.get("description")
    return FieldDefinition(
        name=name,
        type=parse_type_tag(value.get("type")),
        enum_values=_normalize_enum_values(value.get("enumValues")),
        description=description if isinstance(description, str) and description else None,
    )


def schema_to_mapping(schema: ObjectSchema) -> dict[str, Any]:
    """Return the stored camelCase document for an object schema."""
    document: dict[str, Any] = {
        "name": schema.name,
        "version": schema.version,
        "fields": [field_to_mapping(item) for item in schema.fields],
        "isSubobject": schema.is_subobject,
    }
    if schema.system_prompt is not None:
        document["systemPrompt"] = schema.system_prompt
    if schema.migration_ops:
        document["migrationOps"] = [migration_op_to_mapping(op) for op in schema.migration_ops]
    return document


def field_to_mapping(definition: FieldDefinition) -> dict[str, Any]:
    document: dict[str, Any] = {
        "name": definition.name,
        "type": format_type_tag(definition.type),
    }
    if definition.enum_values:
        document["enumValues"] = list(definition.enum_values)
    if definition.description:
        document["description"] = definition.description
    return document


def migration_op_from_mapping(value: Any) -> MigrationOp:
    """Interpret one stored migration op; uninterpretable ops become `UnknownOp`."""
    if not isinstance(value, Mapping):
        return UnknownOp(raw={"value": value})
    op = value.get("op")
    if op == "rename" and _all_strings(value, "from", "to"):
        return RenameOp(from_field=value["from"], to_field=value["to"])
    if op == "delete" and _all_strings(value, "field"):
        return DeleteOp(field=value["field"])
    if op == "create" and _all_strings(value, "field"):
        return CreateOp(field=value["field"], type=str(value.get("type", "")))
    if op == "typeChange" and _all_strings(value, "field"):
        return TypeChangeOp(
            field=value["field"],
            from_type=str(value.get("from", "")),
            to_type=str(value.get("to", "")),
        )
    return UnknownOp(raw=dict(value))


def migration_op_to_mapping(op: MigrationOp) -> dict[str, Any]:
    if isinstance(op, RenameOp):
        return {"op": op.kind.value, "from": op.from_field, "to": op.to_field}
    if isinstance(op, DeleteOp):
        return {"op": op.kind.value, "field": op.field}
    if isinstance(op, CreateOp):
        return {"op": op.kind.value, "field": op.field, "type": op.type}
    if isinstance(op, TypeChangeOp):
        return {
            "op": op.kind.value,
            "field": op.field,
            "from": op.from_type,
            "to": op.to_type,
        }
    return dict(op.raw)


def schema_registry_from_document(value: Any) -> tuple[ObjectSchema, ...]:
    """Parse a stored registry: a list of schemas, or a legacy name->schema mapping."""
    if isinstance(value, Mapping):
        items: Iterable[Any] = value.values()
    elif isinstance(value, Sequence) and not isinstance(value, str):
        items = value
    else:
        raise SchemaError("Object registry must be a list of object schemas.")

    schemas: list[ObjectSchema] = []
    seen_names: set[str] = set()
    for item in items:
        schema = schema_from_mapping(item)
        if schema.name in seen_names:
            raise SchemaError(f"Duplicate object schema name in registry: {schema.name}")
        seen_names.add(schema.name)
        schemas.append(schema)
    return tuple(schemas)


def schema_registry_to_document(schemas: Iterable[ObjectSchema]) -> list[dict[str, Any]]:
    return [schema_to_mapping(schema) for schema in schemas]


def _normalize_enum_values(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(item.strip() for item in value.split(",") if item.strip())
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise SchemaError("enumValues entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise SchemaError("enumValues must be a string or list of strings.")


def _require_name(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{label} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise SchemaError(f"{label} must not be empty.")
    return stripped


def _all_strings(mapping: Mapping[str, Any], *keys: str) -> bool:
    return all(isinstance(mapping.get(key), str) for key in keys)
