"""Copy-on-write rewriting of stored annotation values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from annotation_migrator.schema_management.schema_models import DeleteOp, RenameOp

ValueOp = RenameOp | DeleteOp


def apply_value_ops(
    values: Mapping[str, object], ops: Sequence[ValueOp]
) -> tuple[dict[str, object], tuple[str, ...]]:
    """Apply renames and deletes in order; ops on absent keys are skipped.

    Returns the rewritten values and a change descriptor per applied op.
    """
    rewritten = dict(values)
    changes: list[str] = []
    for op in ops:
        if isinstance(op, RenameOp):
            if op.from_field in rewritten:
                rewritten[op.to_field] = rewritten.pop(op.from_field)
                changes.append(f"rename {op.from_field}->{op.to_field}")
        elif op.field in rewritten:
            del rewritten[op.field]
            changes.append(f"delete {op.field}")
    return rewritten, tuple(changes)


def rename_nested_keys(value: object, renames: Sequence[RenameOp]) -> tuple[object, bool]:
    """Apply renames inside a nested mapping, or inside each mapping of a list.

    Returns the possibly new value and whether anything was renamed. Values
    that are neither mappings nor lists are returned unchanged.
    """
    if isinstance(value, Mapping):
        return _rename_in_mapping(value, renames)
    if isinstance(value, list):
        touched = False
        items: list[object] = []
        for item in value:
            new_item, item_touched = _rename_in_mapping(item, renames)
            items.append(new_item)
            touched = touched or item_touched
        return (items, True) if touched else (value, False)
    return value, False


def _rename_in_mapping(item: object, renames: Sequence[RenameOp]) -> tuple[object, bool]:
    if not isinstance(item, Mapping):
        return item, False
    rewritten, changes = apply_value_ops(item, renames)
    return (rewritten, True) if changes else (item, False)
