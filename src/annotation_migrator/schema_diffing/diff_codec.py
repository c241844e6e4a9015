"""Rendering of diff results as JSON-ready documents."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from .diff_outcomes import DiffResult, MajorOp, MinorOp

_KEY_NAMES = {
    "from_name": "from",
    "to_name": "to",
    "from_field": "from",
    "to_field": "to",
    "from_type": "from",
    "to_type": "to",
}


def diff_result_to_mapping(diff: DiffResult) -> dict[str, Any]:
    """Return `{classification, minorOps, majorOps}` with `{type, ...}` op entries."""
    return {
        "classification": diff.classification.value,
        "minorOps": [_op_to_mapping(op) for op in diff.minor_ops],
        "majorOps": [_op_to_mapping(op) for op in diff.major_ops],
    }


def _op_to_mapping(op: MinorOp | MajorOp) -> dict[str, Any]:
    document: dict[str, Any] = {"type": op.kind.value}
    for item in fields(op):
        document[_KEY_NAMES.get(item.name, item.name)] = getattr(op, item.name)
    return document
