"""Workspace file exports."""

from .workspace_files import (
    ANNOTATIONS_MEMBER,
    REGISTRY_MEMBER,
    Workspace,
    WorkspaceError,
    load_workspace,
    write_workspace,
)

__all__ = [
    "ANNOTATIONS_MEMBER",
    "REGISTRY_MEMBER",
    "Workspace",
    "WorkspaceError",
    "load_workspace",
    "write_workspace",
]
