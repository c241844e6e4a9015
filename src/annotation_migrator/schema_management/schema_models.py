"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

PRIMITIVE_TYPE_NAMES: tuple[str, ...] = ("string", "number", "boolean", "date")
ENUM_TYPE_NAME = "enum"
ARRAY_PREFIX = "array_"


@dataclass(frozen=True)
class PrimitiveType:
    """Scalar field type such as `string` or `date`."""

    name: str


@dataclass(frozen=True)
class EnumType:
    """Closed set of string values; the values live on the field definition."""


@dataclass(frozen=True)
class ReferenceType:
    """Reference to another object schema used as a nested value."""

    schema_name: str


@dataclass(frozen=True)
class ArrayType:
    """Ordered collection of values of the item type."""

    item: TypeTag


TypeTag = PrimitiveType | EnumType | ReferenceType | ArrayType


@dataclass(frozen=True)
class FieldDefinition:
    """One named field of an object schema."""

    name: str
    type: TypeTag
    enum_values: tuple[str, ...] = ()
    description: str | None = None


class MigrationOpKind(str, Enum):
    """Tags of editor-authored migration operations."""

    RENAME = "rename"
    DELETE = "delete"
    CREATE = "create"
    TYPE_CHANGE = "typeChange"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RenameOp:
    """Move the value stored under `from_field` to `to_field`."""

    kind: ClassVar[MigrationOpKind] = MigrationOpKind.RENAME

    from_field: str
    to_field: str


@dataclass(frozen=True)
class DeleteOp:
    """Drop the value stored under `field`."""

    kind: ClassVar[MigrationOpKind] = MigrationOpKind.DELETE

    field: str


@dataclass(frozen=True)
class CreateOp:
    """A new field was added; existing values cannot provide it."""

    kind: ClassVar[MigrationOpKind] = MigrationOpKind.CREATE

    field: str
    type: str


@dataclass(frozen=True)
class TypeChangeOp:
    """The type of an existing field changed."""

    kind: ClassVar[MigrationOpKind] = MigrationOpKind.TYPE_CHANGE

    field: str
    from_type: str
    to_type: str


@dataclass(frozen=True)
class UnknownOp:
    """Stored op that could not be interpreted; it matches nothing."""

    kind: ClassVar[MigrationOpKind] = MigrationOpKind.UNKNOWN

    raw: Mapping[str, object]


MigrationOp = RenameOp | DeleteOp | CreateOp | TypeChangeOp | UnknownOp

SUBOBJECT_UPDATE_SENTINEL = TypeChangeOp(
    field="__subobjectUpdate",
    from_type="none",
    to_type="none",
)


@dataclass(frozen=True)
class ObjectSchema:
    """Named, versioned field set that annotations are instances of."""

    name: str
    version: int
    fields: tuple[FieldDefinition, ...]
    is_subobject: bool = False
    system_prompt: str | None = None
    migration_ops: tuple[MigrationOp, ...] = ()

    @property
    def field_names(self) -> tuple[str, ...]:
        """Return field names in display order."""
        return tuple(item.name for item in self.fields)

    def field_map(self) -> dict[str, FieldDefinition]:
        """Return fields keyed by name."""
        return {item.name: item for item in self.fields}
