"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    schema_name: str
    old_version: int | None
    new_version: int
    classification: str
    workspace_path: Path
    parents_updated: tuple[str, ...] = ()
