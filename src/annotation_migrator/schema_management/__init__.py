"""Schema management exports."""

from .json_schema_export import build_example_values, export_json_schema
from .schema_codec import (
    fields_from_sequence,
    migration_op_from_mapping,
    migration_op_to_mapping,
    schema_from_mapping,
    schema_registry_from_document,
    schema_registry_to_document,
    schema_to_mapping,
)
from .schema_models import (
    SUBOBJECT_UPDATE_SENTINEL,
    ArrayType,
    CreateOp,
    DeleteOp,
    EnumType,
    FieldDefinition,
    MigrationOp,
    MigrationOpKind,
    ObjectSchema,
    PrimitiveType,
    ReferenceType,
    RenameOp,
    TypeChangeOp,
    TypeTag,
    UnknownOp,
)
from .type_tags import (
    SchemaError,
    base_type,
    format_type_tag,
    is_array,
    is_reference,
    parse_type_tag,
    references_schema,
    rename_reference,
)

__all__ = [
    "ArrayType",
    "CreateOp",
    "DeleteOp",
    "EnumType",
    "FieldDefinition",
    "MigrationOp",
    "MigrationOpKind",
    "ObjectSchema",
    "PrimitiveType",
    "ReferenceType",
    "RenameOp",
    "SUBOBJECT_UPDATE_SENTINEL",
    "SchemaError",
    "TypeChangeOp",
    "TypeTag",
    "UnknownOp",
    "base_type",
    "build_example_values",
    "export_json_schema",
    "fields_from_sequence",
    "format_type_tag",
    "is_array",
    "is_reference",
    "migration_op_from_mapping",
    "migration_op_to_mapping",
    "parse_type_tag",
    "references_schema",
    "rename_reference",
    "schema_from_mapping",
    "schema_registry_from_document",
    "schema_registry_to_document",
    "schema_to_mapping",
]
