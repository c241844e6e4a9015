"""Schema differencing service."""

from __future__ import annotations

import logging

from annotation_migrator.schema_management.schema_models import ObjectSchema
from annotation_migrator.schema_management.type_tags import (
    format_type_tag,
    is_array,
    is_reference,
)

from .diff_outcomes import (
    AddField,
    ChangeClassification,
    DiffResult,
    MajorOp,
    MinorOp,
    NewObject,
    RemoveField,
    RenameField,
    RenameObject,
    RenameSubobject,
    SystemPromptChange,
    TypeChange,
)
from .rename_detection import RenameDetector, SinglePairRenameDetector

_LOGGER = logging.getLogger(__name__)


def diff_schemas(
    old_schema: ObjectSchema | None,
    new_schema: ObjectSchema,
    *,
    rename_detector: RenameDetector | None = None,
) -> DiffResult:
    """Compare two schema versions and classify the change as minor or major."""
    if old_schema is None:
        return DiffResult(
            classification=ChangeClassification.MAJOR,
            minor_ops=(),
            major_ops=(NewObject(),),
        )

    detector = rename_detector or SinglePairRenameDetector()
    minor_ops: list[MinorOp] = []
    major_ops: list[MajorOp] = []

    if old_schema.name != new_schema.name:
        minor_ops.append(RenameObject(from_name=old_schema.name, to_name=new_schema.name))
    if (old_schema.system_prompt or "") != (new_schema.system_prompt or ""):
        minor_ops.append(SystemPromptChange())

    old_fields = old_schema.field_map()
    new_fields = new_schema.field_map()
    removed = [item for name, item in old_fields.items() if name not in new_fields]
    added = [item for name, item in new_fields.items() if name not in old_fields]

    pairs = detector.detect_renames(removed, added)
    renamed_from = {pair.from_field for pair in pairs}
    renamed_to = {pair.to_field for pair in pairs}

    minor_ops.extend(
        RemoveField(field=item.name) for item in removed if item.name not in renamed_from
    )
    minor_ops.extend(
        RenameField(from_field=pair.from_field, to_field=pair.to_field) for pair in pairs
    )
    major_ops.extend(AddField(field=item.name) for item in added if item.name not in renamed_to)

    for name, old_field in old_fields.items():
        new_field = new_fields.get(name)
        if new_field is None or new_field.type == old_field.type:
            continue
        from_type = format_type_tag(old_field.type)
        to_type = format_type_tag(new_field.type)
        if (
            is_reference(old_field.type)
            and is_reference(new_field.type)
            and is_array(old_field.type) == is_array(new_field.type)
        ):
            minor_ops.append(RenameSubobject(field=name, from_type=from_type, to_type=to_type))
        else:
            major_ops.append(TypeChange(field=name, from_type=from_type, to_type=to_type))

    classification = ChangeClassification.MAJOR if major_ops else ChangeClassification.MINOR
    _LOGGER.debug(
        "Diffed %s v%s -> %s v%s: %s (%d minor, %d major)",
        old_schema.name,
        old_schema.version,
        new_schema.name,
        new_schema.version,
        classification.value,
        len(minor_ops),
        len(major_ops),
    )
    return DiffResult(
        classification=classification,
        minor_ops=tuple(minor_ops),
        major_ops=tuple(major_ops),
    )
