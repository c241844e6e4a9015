"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorkspaceSettings:
    """Location of the object registry and annotation store documents.

    Either `archive` is set, or both `registry_path` and `annotations_path`.
    """

    registry_path: Path | None
    annotations_path: Path | None
    archive_path: Path | None

    @property
    def uses_archive(self) -> bool:
        return self.archive_path is not None


@dataclass(frozen=True)
class MigrationSettings:
    """Engine policy choices."""

    rename_strategy: str
    propagate_subobjects: bool


@dataclass(frozen=True)
class OutputSettings:
    """Where committed workspaces and summary reports are written."""

    directory: Path
    summary_workbook: bool


@dataclass(frozen=True)
class LoggingSettings:
    level: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    workspace: WorkspaceSettings
    migration: MigrationSettings
    output: OutputSettings
    logging: LoggingSettings
