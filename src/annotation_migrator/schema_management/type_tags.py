"""Field type tag parsing and inspection."""

from __future__ import annotations

from .schema_models import (
    ARRAY_PREFIX,
    ENUM_TYPE_NAME,
    PRIMITIVE_TYPE_NAMES,
    ArrayType,
    EnumType,
    PrimitiveType,
    ReferenceType,
    TypeTag,
)


class SchemaError(Exception):
    """Raised for schema parsing or validation failures."""


def parse_type_tag(text: str) -> TypeTag:
    """Parse a stored type string such as `array_Car` into a type tag."""
    if not isinstance(text, str) or not text.strip():
        raise SchemaError("Field type must be a non-empty string.")
    value = text.strip()
    if value.startswith(ARRAY_PREFIX) and len(value) > len(ARRAY_PREFIX):
        return ArrayType(item=parse_type_tag(value[len(ARRAY_PREFIX) :]))
    if value in PRIMITIVE_TYPE_NAMES:
        return PrimitiveType(name=value)
    if value == ENUM_TYPE_NAME:
        return EnumType()
    return ReferenceType(schema_name=value)


def format_type_tag(tag: TypeTag) -> str:
    """Return the stored type string for a type tag."""
    if isinstance(tag, ArrayType):
        return f"{ARRAY_PREFIX}{format_type_tag(tag.item)}"
    if isinstance(tag, PrimitiveType):
        return tag.name
    if isinstance(tag, EnumType):
        return ENUM_TYPE_NAME
    return tag.schema_name


def is_array(tag: TypeTag) -> bool:
    return isinstance(tag, ArrayType)


def base_type(tag: TypeTag) -> TypeTag:
    """Strip one level of array wrapping."""
    return tag.item if isinstance(tag, ArrayType) else tag


def is_reference(tag: TypeTag) -> bool:
    """Return True for a sub-schema reference, bare or array-wrapped."""
    return isinstance(base_type(tag), ReferenceType)


def references_schema(tag: TypeTag, schema_name: str) -> bool:
    base = base_type(tag)
    return isinstance(base, ReferenceType) and base.schema_name == schema_name


def rename_reference(tag: TypeTag, old_name: str, new_name: str) -> TypeTag:
    """Point a reference to `old_name` at `new_name`, keeping array wrapping."""
    if not references_schema(tag, old_name):
        return tag
    renamed = ReferenceType(schema_name=new_name)
    return ArrayType(item=renamed) if isinstance(tag, ArrayType) else renamed
