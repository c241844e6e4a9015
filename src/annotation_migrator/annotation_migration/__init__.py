"""Annotation migration domain exports."""

from .annotation_codec import (
    AnnotationStoreError,
    annotation_store_from_mapping,
    annotation_store_to_mapping,
)
from .annotation_models import (
    Annotation,
    AnnotationStore,
    FileAnnotations,
    MigrationResult,
    MigrationSummaryEntry,
    SummaryAction,
)
from .migration_executor import migrate_annotations
from .value_rewriting import apply_value_ops, rename_nested_keys

__all__ = [
    "Annotation",
    "AnnotationStore",
    "AnnotationStoreError",
    "FileAnnotations",
    "MigrationResult",
    "MigrationSummaryEntry",
    "SummaryAction",
    "annotation_store_from_mapping",
    "annotation_store_to_mapping",
    "apply_value_ops",
    "migrate_annotations",
    "rename_nested_keys",
]
