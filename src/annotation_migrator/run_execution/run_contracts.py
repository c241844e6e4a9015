"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from annotation_migrator.annotation_migration.annotation_models import MigrationSummaryEntry
from annotation_migrator.configuration.runtime_settings import Configuration
from annotation_migrator.schema_diffing.diff_outcomes import ChangeClassification
from annotation_migrator.workspace_io.workspace_files import Workspace


@dataclass(frozen=True)
class RunRequest:
    """Input contract for applying one schema edit to a workspace."""

    config_path: str
    schema_path: str
    target: str | None = None
    output_dir: str | None = None
    dry_run: bool = False
    assume_yes: bool = False
    create_new: bool = False


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one schema edit run."""

    schema_name: str
    classification: ChangeClassification
    summary: tuple[MigrationSummaryEntry, ...]
    parents_updated: tuple[str, ...]
    committed: bool
    dry_run: bool
    workspace_path: Path | None = None
    report_path: Path | None = None


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    workspace: Workspace
    schema_document: dict
