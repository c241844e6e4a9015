"""Annotation migration entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Annotation:  # pylint: disable=too-many-instance-attributes
    """One page region annotated with an instance of an object schema."""

    id: str
    object_name: str
    object_version: int
    page_index: int
    values: Mapping[str, object]
    human_revised: bool = False
    pending_validation: bool = False
    openai_pending: bool = False
    ocr_pending: bool = False
    extra: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class FileAnnotations:
    """Annotations stored for one file, plus the entry's other stored keys."""

    annotations: tuple[Annotation, ...]
    extra: Mapping[str, object] = field(default_factory=dict)


AnnotationStore = Mapping[str, FileAnnotations]


class SummaryAction(str, Enum):
    """Follow-up an annotation needs after migration."""

    REEXTRACT = "reextract"
    PENDING_VALIDATION = "pendingValidation"


@dataclass(frozen=True)
class MigrationSummaryEntry:
    """Presentation record describing what migration did to one annotation."""

    file_id: str
    annotation_id: str
    page: int
    action: SummaryAction | None = None
    changes: tuple[str, ...] = ()


@dataclass(frozen=True)
class MigrationResult:
    """Updated annotation store and the summary of applied changes."""

    store: AnnotationStore
    summary: tuple[MigrationSummaryEntry, ...]
