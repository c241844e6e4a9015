"""JSON Schema export and example values for the extraction collaborator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from .schema_models import (
    ArrayType,
    EnumType,
    FieldDefinition,
    ObjectSchema,
    PrimitiveType,
    ReferenceType,
    TypeTag,
)
from .type_tags import SchemaError

_PRIMITIVE_JSON_TYPES: Mapping[str, dict[str, Any]] = {
    "string": {"type": "string"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
    "date": {"type": "string", "format": "date"},
}


def export_json_schema(schema: ObjectSchema, registry: Sequence[ObjectSchema]) -> dict[str, Any]:
    """Return an object JSON Schema with referenced sub-schemas under `$defs`."""
    schemas_by_name = {item.name: item for item in registry}
    definitions: dict[str, dict[str, Any]] = {}
    document = _object_definition(schema, schemas_by_name, definitions, visiting=set())
    document["title"] = schema.name
    if definitions:
        document["$defs"] = definitions
    return document


def build_example_values(fields: Sequence[FieldDefinition]) -> dict[str, Any]:
    """Return placeholder values shaped like the given fields."""
    example: dict[str, Any] = {}
    for definition in fields:
        tag = definition.type
        if isinstance(tag, ArrayType):
            example[definition.name] = []
        elif isinstance(tag, ReferenceType):
            example[definition.name] = {}
        elif isinstance(tag, EnumType):
            example[definition.name] = definition.enum_values[0] if definition.enum_values else ""
        elif tag.name == "number":
            example[definition.name] = 0
        elif tag.name == "boolean":
            example[definition.name] = False
        elif tag.name == "date":
            example[definition.name] = datetime.now(UTC).isoformat()
        else:
            example[definition.name] = ""
    return example


def _object_definition(
    schema: ObjectSchema,
    schemas_by_name: Mapping[str, ObjectSchema],
    definitions: dict[str, dict[str, Any]],
    *,
    visiting: set[str],
) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    for definition in schema.fields:
        node = _type_node(definition.type, definition, schemas_by_name, definitions, visiting)
        if definition.description:
            node = {**node, "description": definition.description}
        properties[definition.name] = node
    return {
        "type": "object",
        "properties": properties,
        "required": list(schema.field_names),
        "additionalProperties": False,
    }


def _type_node(
    tag: TypeTag,
    definition: FieldDefinition,
    schemas_by_name: Mapping[str, ObjectSchema],
    definitions: dict[str, dict[str, Any]],
    visiting: set[str],
) -> dict[str, Any]:
    if isinstance(tag, ArrayType):
        items = _type_node(tag.item, definition, schemas_by_name, definitions, visiting)
        return {"type": "array", "items": items}
    if isinstance(tag, PrimitiveType):
        return dict(_PRIMITIVE_JSON_TYPES[tag.name])
    if isinstance(tag, EnumType):
        if definition.enum_values:
            return {"type": "string", "enum": list(definition.enum_values)}
        return {"type": "string"}

    referenced = schemas_by_name.get(tag.schema_name)
    if referenced is None:
        raise SchemaError(
            f"Field '{definition.name}' references unknown object schema '{tag.schema_name}'."
        )
    if tag.schema_name not in definitions and tag.schema_name not in visiting:
        visiting.add(tag.schema_name)
        definitions[tag.schema_name] = _object_definition(
            referenced, schemas_by_name, definitions, visiting=visiting
        )
    return {"$ref": f"#/$defs/{tag.schema_name}"}
