"""Run execution domain exports."""

from .run_contracts import RunArtifacts, RunOutcome, RunRequest
from .schema_edit_run_use_case import (
    ConfirmCallback,
    RunExecutionError,
    execute_schema_edit_run,
)

__all__ = [
    "ConfirmCallback",
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "execute_schema_edit_run",
]
