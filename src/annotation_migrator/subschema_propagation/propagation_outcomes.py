"""Sub-schema propagation entities."""

from __future__ import annotations

from dataclasses import dataclass

from annotation_migrator.annotation_migration.annotation_models import (
    AnnotationStore,
    MigrationSummaryEntry,
)
from annotation_migrator.schema_diffing.diff_outcomes import DiffResult
from annotation_migrator.schema_management.schema_models import ObjectSchema


@dataclass(frozen=True)
class ParentUpdate:
    """Parent schema version produced because an embedded sub-schema changed."""

    old_schema: ObjectSchema
    new_schema: ObjectSchema


@dataclass(frozen=True)
class PropagationResult:
    """Store and summary after cascading a sub-schema change into its parents."""

    store: AnnotationStore
    summary: tuple[MigrationSummaryEntry, ...]
    parent_updates: tuple[ParentUpdate, ...]


@dataclass(frozen=True)
class SchemaEditOutcome:
    """Everything one schema save produces, to be committed as a single unit."""

    schemas: tuple[ObjectSchema, ...]
    store: AnnotationStore
    summary: tuple[MigrationSummaryEntry, ...]
    diff: DiffResult
    parent_updates: tuple[ParentUpdate, ...] = ()

    @property
    def requires_confirmation(self) -> bool:
        """Return True when existing annotations are affected."""
        return bool(self.summary)
