"""Schema differencing domain exports."""

from .diff_outcomes import (
    AddField,
    ChangeClassification,
    ChangeKind,
    DiffResult,
    MajorOp,
    MinorOp,
    NewObject,
    RemoveField,
    RenameField,
    RenameObject,
    RenamePair,
    RenameSubobject,
    SystemPromptChange,
    TypeChange,
)
from .diff_codec import diff_result_to_mapping
from .migration_op_authoring import derive_migration_ops, revise_schema
from .rename_detection import (
    RENAME_STRATEGIES,
    GreedySameTypeRenameDetector,
    NoRenameDetector,
    RenameDetector,
    SinglePairRenameDetector,
    rename_detector_for,
)
from .schema_differ import diff_schemas

__all__ = [
    "AddField",
    "ChangeClassification",
    "ChangeKind",
    "DiffResult",
    "GreedySameTypeRenameDetector",
    "MajorOp",
    "MinorOp",
    "NewObject",
    "NoRenameDetector",
    "RENAME_STRATEGIES",
    "RemoveField",
    "RenameDetector",
    "RenameField",
    "RenameObject",
    "RenamePair",
    "RenameSubobject",
    "SinglePairRenameDetector",
    "SystemPromptChange",
    "TypeChange",
    "derive_migration_ops",
    "diff_result_to_mapping",
    "diff_schemas",
    "rename_detector_for",
    "revise_schema",
]
