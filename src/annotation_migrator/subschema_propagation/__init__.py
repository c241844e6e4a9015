"""Sub-schema propagation domain exports."""

from .propagation_orchestrator import (
    apply_schema_edit,
    find_parent_schemas,
    propagate_subschema_change,
)
from .propagation_outcomes import ParentUpdate, PropagationResult, SchemaEditOutcome

__all__ = [
    "ParentUpdate",
    "PropagationResult",
    "SchemaEditOutcome",
    "apply_schema_edit",
    "find_parent_schemas",
    "propagate_subschema_change",
]
