"""Schema differencing entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ChangeClassification(str, Enum):
    """Whether reviewed annotations survive a schema change untouched."""

    MINOR = "minor"
    MAJOR = "major"


class ChangeKind(str, Enum):
    """Tags of the operations reported by the schema differ."""

    RENAME_OBJECT = "renameObject"
    SYSTEM_PROMPT_CHANGE = "systemPromptChange"
    REMOVE_FIELD = "removeField"
    RENAME_FIELD = "renameField"
    RENAME_SUBOBJECT = "renameSubobject"
    NEW_OBJECT = "newObject"
    ADD_FIELD = "addField"
    TYPE_CHANGE = "typeChange"


@dataclass(frozen=True)
class RenameObject:
    kind: ClassVar[ChangeKind] = ChangeKind.RENAME_OBJECT

    from_name: str
    to_name: str


@dataclass(frozen=True)
class SystemPromptChange:
    kind: ClassVar[ChangeKind] = ChangeKind.SYSTEM_PROMPT_CHANGE


@dataclass(frozen=True)
class RemoveField:
    kind: ClassVar[ChangeKind] = ChangeKind.REMOVE_FIELD

    field: str


@dataclass(frozen=True)
class RenameField:
    kind: ClassVar[ChangeKind] = ChangeKind.RENAME_FIELD

    from_field: str
    to_field: str


@dataclass(frozen=True)
class RenameSubobject:
    """A field now references a differently named sub-schema of the same shape."""

    kind: ClassVar[ChangeKind] = ChangeKind.RENAME_SUBOBJECT

    field: str
    from_type: str
    to_type: str


@dataclass(frozen=True)
class NewObject:
    kind: ClassVar[ChangeKind] = ChangeKind.NEW_OBJECT


@dataclass(frozen=True)
class AddField:
    kind: ClassVar[ChangeKind] = ChangeKind.ADD_FIELD

    field: str


@dataclass(frozen=True)
class TypeChange:
    kind: ClassVar[ChangeKind] = ChangeKind.TYPE_CHANGE

    field: str
    from_type: str
    to_type: str


MinorOp = RenameObject | SystemPromptChange | RemoveField | RenameField | RenameSubobject
MajorOp = NewObject | AddField | TypeChange


@dataclass(frozen=True)
class RenamePair:
    """Removed field recognised as renamed to an added field."""

    from_field: str
    to_field: str


@dataclass(frozen=True)
class DiffResult:
    """Classified list of operations between two schema versions."""

    classification: ChangeClassification
    minor_ops: tuple[MinorOp, ...]
    major_ops: tuple[MajorOp, ...]

    @property
    def is_minor(self) -> bool:
        return self.classification == ChangeClassification.MINOR

    def rename_pairs(self) -> tuple[RenamePair, ...]:
        """Return field renames in reported order."""
        return tuple(
            RenamePair(from_field=op.from_field, to_field=op.to_field)
            for op in self.minor_ops
            if isinstance(op, RenameField)
        )

    def removed_fields(self) -> tuple[str, ...]:
        return tuple(op.field for op in self.minor_ops if isinstance(op, RemoveField))
