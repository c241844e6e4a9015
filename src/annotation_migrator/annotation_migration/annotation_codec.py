"""Translation between the stored annotation document and annotation entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .annotation_models import Annotation, AnnotationStore, FileAnnotations

_ANNOTATION_KEYS = (
    "id",
    "objectName",
    "objectVersion",
    "pageIndex",
    "values",
    "humanRevised",
    "pendingValidation",
    "openaiPending",
    "ocrPending",
)


class AnnotationStoreError(Exception):
    """Raised when a stored annotation document has an invalid shape."""


def annotation_store_from_mapping(value: Any) -> AnnotationStore:
    """Parse `{fileId: {annotations: [...], ...}}` into an annotation store."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise AnnotationStoreError("Annotation store root must be a mapping of file ids.")
    store: dict[str, FileAnnotations] = {}
    for file_id, entry in value.items():
        if not isinstance(entry, Mapping):
            raise AnnotationStoreError(f"Entry for file '{file_id}' must be a mapping.")
        raw_annotations = entry.get("annotations") or []
        if not isinstance(raw_annotations, Sequence) or isinstance(raw_annotations, str):
            raise AnnotationStoreError(f"Annotations of file '{file_id}' must be a list.")
        store[str(file_id)] = FileAnnotations(
            annotations=tuple(
                annotation_from_mapping(item, file_id=str(file_id)) for item in raw_annotations
            ),
            extra={key: item for key, item in entry.items() if key != "annotations"},
        )
    return store


def annotation_from_mapping(value: Any, *, file_id: str) -> Annotation:
    if not isinstance(value, Mapping):
        raise AnnotationStoreError(f"Annotations of file '{file_id}' must be mappings.")
    annotation_id = value.get("id")
    if not isinstance(annotation_id, str) or not annotation_id:
        raise AnnotationStoreError(f"Annotation in file '{file_id}' requires a string id.")
    page_index = value.get("pageIndex", 0)
    if isinstance(page_index, bool) or not isinstance(page_index, int) or page_index < 0:
        raise AnnotationStoreError(
            f"Annotation '{annotation_id}' pageIndex must be a non-negative integer."
        )
    object_version = value.get("objectVersion", 1)
    if isinstance(object_version, bool) or not isinstance(object_version, int):
        raise AnnotationStoreError(
            f"Annotation '{annotation_id}' objectVersion must be an integer."
        )
    values = value.get("values") or {}
    if not isinstance(values, Mapping):
        raise AnnotationStoreError(f"Annotation '{annotation_id}' values must be a mapping.")

    return Annotation(
        id=annotation_id,
        object_name=str(value.get("objectName") or ""),
        object_version=object_version,
        page_index=page_index,
        values=dict(values),
        human_revised=bool(value.get("humanRevised", False)),
        pending_validation=bool(value.get("pendingValidation", False)),
        openai_pending=bool(value.get("openaiPending", False)),
        ocr_pending=bool(value.get("ocrPending", False)),
        extra={key: item for key, item in value.items() if key not in _ANNOTATION_KEYS},
    )


def annotation_store_to_mapping(store: AnnotationStore) -> dict[str, Any]:
    """Return the stored document for an annotation store."""
    return {
        file_id: {
            **dict(entry.extra),
            "annotations": [annotation_to_mapping(item) for item in entry.annotations],
        }
        for file_id, entry in store.items()
    }


def annotation_to_mapping(annotation: Annotation) -> dict[str, Any]:
    return {
        **dict(annotation.extra),
        "id": annotation.id,
        "objectName": annotation.object_name,
        "objectVersion": annotation.object_version,
        "pageIndex": annotation.page_index,
        "values": dict(annotation.values),
        "humanRevised": annotation.human_revised,
        "pendingValidation": annotation.pending_validation,
        "openaiPending": annotation.openai_pending,
        "ocrPending": annotation.ocr_pending,
    }
