"""Workspace file reading and writing tests."""

from __future__ import annotations

import json
import zipfile
from dataclasses import replace
from pathlib import Path

import pytest
from annotation_migrator.configuration.runtime_settings import WorkspaceSettings
from annotation_migrator.workspace_io import (
    ANNOTATIONS_MEMBER,
    REGISTRY_MEMBER,
    WorkspaceError,
    load_workspace,
    write_workspace,
)

_REGISTRY = [
    {"name": "Car", "version": 1, "fields": [{"name": "brand", "type": "string"}]},
]
_PDF_DATA = {
    "file-1": {
        "name": "cars.pdf",
        "annotations": [
            {
                "id": "ann-1",
                "objectName": "Car",
                "objectVersion": 1,
                "pageIndex": 0,
                "values": {"brand": "Ford"},
            }
        ],
    }
}


def _file_settings(tmp_path: Path) -> WorkspaceSettings:
    registry_path = tmp_path / "objectRegistry.json"
    annotations_path = tmp_path / "pdfData.json"
    registry_path.write_text(json.dumps(_REGISTRY), encoding="utf-8")
    annotations_path.write_text(json.dumps(_PDF_DATA), encoding="utf-8")
    return WorkspaceSettings(
        registry_path=registry_path, annotations_path=annotations_path, archive_path=None
    )


def _archive_settings(
    tmp_path: Path, *, members: dict[str, bytes] | None = None
) -> WorkspaceSettings:
    archive_path = tmp_path / "annotator-export.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.writestr(REGISTRY_MEMBER, json.dumps(_REGISTRY))
        archive.writestr(ANNOTATIONS_MEMBER, json.dumps(_PDF_DATA))
        for name, payload in (members or {}).items():
            archive.writestr(name, payload)
    return WorkspaceSettings(registry_path=None, annotations_path=None, archive_path=archive_path)


def test_loads_workspace_from_json_documents(tmp_path: Path) -> None:
    workspace = load_workspace(_file_settings(tmp_path))

    assert [schema.name for schema in workspace.schemas] == ["Car"]
    assert workspace.store["file-1"].annotations[0].values == {"brand": "Ford"}
    assert workspace.source_archive is None


def test_loads_workspace_from_export_archive(tmp_path: Path) -> None:
    settings = _archive_settings(tmp_path)

    workspace = load_workspace(settings)

    assert workspace.schemas[0].name == "Car"
    assert workspace.source_archive == settings.archive_path


def test_missing_documents_are_reported(tmp_path: Path) -> None:
    settings = WorkspaceSettings(
        registry_path=tmp_path / "objectRegistry.json",
        annotations_path=tmp_path / "pdfData.json",
        archive_path=None,
    )

    with pytest.raises(WorkspaceError, match="Workspace file not found"):
        load_workspace(settings)


def test_archive_without_core_members_is_rejected(tmp_path: Path) -> None:
    archive_path = tmp_path / "broken.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.writestr(REGISTRY_MEMBER, "[]")

    with pytest.raises(WorkspaceError, match="missing: pdfData.json"):
        load_workspace(
            WorkspaceSettings(registry_path=None, annotations_path=None, archive_path=archive_path)
        )


def test_invalid_documents_are_reported_as_workspace_errors(tmp_path: Path) -> None:
    settings = _file_settings(tmp_path)
    settings.registry_path.write_text('[{"name": ""}]', encoding="utf-8")

    with pytest.raises(WorkspaceError):
        load_workspace(settings)

    settings.registry_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(WorkspaceError, match="Invalid JSON"):
        load_workspace(settings)


def test_writes_workspace_documents_into_directory(tmp_path: Path) -> None:
    workspace = load_workspace(_file_settings(tmp_path))

    written = write_workspace(workspace, tmp_path / "out")

    assert written == (tmp_path / "out").resolve()
    registry = json.loads((tmp_path / "out" / REGISTRY_MEMBER).read_text(encoding="utf-8"))
    pdf_data = json.loads((tmp_path / "out" / ANNOTATIONS_MEMBER).read_text(encoding="utf-8"))
    assert registry[0]["name"] == "Car"
    assert pdf_data["file-1"]["name"] == "cars.pdf"
    assert pdf_data["file-1"]["annotations"][0]["values"] == {"brand": "Ford"}


def test_writes_archive_and_carries_page_images_through(tmp_path: Path) -> None:
    settings = _archive_settings(tmp_path, members={"images/file-1/0.png": b"\x89PNG"})
    workspace = load_workspace(settings)
    edited = replace(workspace, schemas=(replace(workspace.schemas[0], version=2),))

    target = tmp_path / "out" / "annotator-export.zip"
    write_workspace(edited, target)

    with zipfile.ZipFile(target) as archive:
        assert set(archive.namelist()) == {
            REGISTRY_MEMBER,
            ANNOTATIONS_MEMBER,
            "images/file-1/0.png",
        }
        assert archive.read("images/file-1/0.png") == b"\x89PNG"
        assert json.loads(archive.read(REGISTRY_MEMBER))[0]["version"] == 2


def test_archive_can_be_rewritten_in_place(tmp_path: Path) -> None:
    settings = _archive_settings(tmp_path, members={"pdfs/file-1.pdf": b"%PDF"})
    workspace = load_workspace(settings)

    write_workspace(workspace, settings.archive_path)

    with zipfile.ZipFile(settings.archive_path) as archive:
        assert archive.read("pdfs/file-1.pdf") == b"%PDF"
