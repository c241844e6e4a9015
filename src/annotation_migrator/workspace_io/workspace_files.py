"""Reading and writing the object registry and annotation store documents."""

from __future__ import annotations

import json
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from annotation_migrator.annotation_migration import (
    AnnotationStore,
    AnnotationStoreError,
    annotation_store_from_mapping,
    annotation_store_to_mapping,
)
from annotation_migrator.configuration.runtime_settings import WorkspaceSettings
from annotation_migrator.schema_management import (
    ObjectSchema,
    SchemaError,
    schema_registry_from_document,
    schema_registry_to_document,
)

REGISTRY_MEMBER = "objectRegistry.json"
ANNOTATIONS_MEMBER = "pdfData.json"

_LOGGER = logging.getLogger(__name__)


class WorkspaceError(Exception):
    """Raised when workspace documents cannot be read or written."""


@dataclass(frozen=True)
class Workspace:
    """Object registry plus annotation store, optionally backed by an export archive."""

    schemas: tuple[ObjectSchema, ...]
    store: AnnotationStore
    source_archive: Path | None = None


def load_workspace(settings: WorkspaceSettings) -> Workspace:
    """Load the registry and annotation store from two documents or an export archive."""
    if settings.archive_path is not None:
        registry_document, annotations_document = _read_archive(settings.archive_path)
        source_archive: Path | None = settings.archive_path
    else:
        if settings.registry_path is None or settings.annotations_path is None:
            raise WorkspaceError("Workspace requires registry and annotations paths.")
        registry_document = _read_json_file(settings.registry_path)
        annotations_document = _read_json_file(settings.annotations_path)
        source_archive = None

    try:
        schemas = schema_registry_from_document(registry_document)
        store = annotation_store_from_mapping(annotations_document)
    except (SchemaError, AnnotationStoreError) as exc:
        raise WorkspaceError(str(exc)) from exc

    _LOGGER.info(
        "Loaded workspace with %d schema(s) and %d file(s)", len(schemas), len(store)
    )
    return Workspace(schemas=schemas, store=store, source_archive=source_archive)


def write_workspace(workspace: Workspace, destination: Path | str) -> Path:
    """Write the workspace to a directory, or to a new archive for `.zip` destinations.

    Non-JSON members of the source archive (page images, PDFs) are copied
    through unchanged when writing an archive.

    Returns:
      The resolved destination path.
    """
    target = Path(destination)
    registry_text = _dump(schema_registry_to_document(workspace.schemas))
    annotations_text = _dump(annotation_store_to_mapping(workspace.store))
    try:
        if target.suffix.lower() == ".zip":
            _write_archive(target, registry_text, annotations_text, workspace.source_archive)
        else:
            target.mkdir(parents=True, exist_ok=True)
            (target / REGISTRY_MEMBER).write_text(registry_text, encoding="utf-8")
            (target / ANNOTATIONS_MEMBER).write_text(annotations_text, encoding="utf-8")
    except (OSError, zipfile.BadZipFile) as exc:
        raise WorkspaceError(f"Failed to write workspace to {target}: {exc}") from exc

    _LOGGER.info("Wrote workspace to %s", target)
    return target.resolve()


def _read_json_file(path: Path) -> Any:
    if not path.exists():
        raise WorkspaceError(f"Workspace file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkspaceError(f"Invalid JSON in {path}: {exc}") from exc


def _read_archive(path: Path) -> tuple[Any, Any]:
    if not path.exists():
        raise WorkspaceError(f"Workspace archive not found: {path}")
    try:
        with zipfile.ZipFile(path) as archive:
            names = set(archive.namelist())
            missing = [
                member for member in (REGISTRY_MEMBER, ANNOTATIONS_MEMBER) if member not in names
            ]
            if missing:
                raise WorkspaceError(
                    f"Workspace archive {path} is missing: {', '.join(missing)}"
                )
            registry = json.loads(archive.read(REGISTRY_MEMBER).decode("utf-8"))
            annotations = json.loads(archive.read(ANNOTATIONS_MEMBER).decode("utf-8"))
    except zipfile.BadZipFile as exc:
        raise WorkspaceError(f"Not a workspace archive: {path}") from exc
    except json.JSONDecodeError as exc:
        raise WorkspaceError(f"Invalid JSON in workspace archive {path}: {exc}") from exc
    return registry, annotations


def _write_archive(
    target: Path, registry_text: str, annotations_text: str, source_archive: Path | None
) -> None:
    # Members are read up front so the source archive may also be the target.
    carried: list[tuple[zipfile.ZipInfo, bytes]] = []
    if source_archive is not None:
        with zipfile.ZipFile(source_archive) as source:
            carried = [
                (info, source.read(info.filename))
                for info in source.infolist()
                if info.filename not in (REGISTRY_MEMBER, ANNOTATIONS_MEMBER)
            ]

    target.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(REGISTRY_MEMBER, registry_text)
        archive.writestr(ANNOTATIONS_MEMBER, annotations_text)
        for info, payload in carried:
            archive.writestr(info, payload)


def _dump(document: Any) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
