"""Annotation store codec tests."""

from __future__ import annotations

import pytest
from annotation_migrator.annotation_migration import (
    AnnotationStoreError,
    annotation_store_from_mapping,
    annotation_store_to_mapping,
)


def _document() -> dict:
    return {
        "file-1": {
            "name": "cars.pdf",
            "pageCount": 3,
            "annotations": [
                {
                    "id": "ann-123456789",
                    "objectName": "Car",
                    "objectVersion": 1,
                    "pageIndex": 1,
                    "values": {"brand": "Ford"},
                    "humanRevised": True,
                    "bbox": [1, 2, 3, 4],
                }
            ],
        }
    }


def test_parses_annotation_store_and_keeps_unknown_keys() -> None:
    store = annotation_store_from_mapping(_document())

    entry = store["file-1"]
    annotation = entry.annotations[0]
    assert entry.extra == {"name": "cars.pdf", "pageCount": 3}
    assert annotation.id == "ann-123456789"
    assert annotation.object_name == "Car"
    assert annotation.page_index == 1
    assert annotation.values == {"brand": "Ford"}
    assert annotation.human_revised is True
    assert annotation.pending_validation is False
    assert annotation.extra == {"bbox": [1, 2, 3, 4]}


def test_serializes_back_with_flags_and_unknown_keys() -> None:
    document = annotation_store_to_mapping(annotation_store_from_mapping(_document()))

    entry = document["file-1"]
    assert entry["name"] == "cars.pdf"
    stored = entry["annotations"][0]
    assert stored["bbox"] == [1, 2, 3, 4]
    assert stored["openaiPending"] is False
    assert stored["ocrPending"] is False
    assert stored["values"] == {"brand": "Ford"}


def test_missing_document_is_an_empty_store() -> None:
    assert annotation_store_from_mapping(None) == {}
    assert annotation_store_from_mapping({"file-1": {}})["file-1"].annotations == ()


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"file-1": []},
        {"file-1": {"annotations": "a"}},
        {"file-1": {"annotations": [{"objectName": "Car"}]}},
        {"file-1": {"annotations": [{"id": "a", "pageIndex": -1}]}},
        {"file-1": {"annotations": [{"id": "a", "objectVersion": "2"}]}},
        {"file-1": {"annotations": [{"id": "a", "values": ["Ford"]}]}},
    ],
)
def test_invalid_store_documents_are_rejected(document: object) -> None:
    with pytest.raises(AnnotationStoreError):
        annotation_store_from_mapping(document)
