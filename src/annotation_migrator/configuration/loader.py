"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from annotation_migrator.schema_diffing.rename_detection import RENAME_STRATEGIES

from .runtime_settings import (
    Configuration,
    LoggingSettings,
    MigrationSettings,
    OutputSettings,
    WorkspaceSettings,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        workspace=_parse_workspace_section(parsed.get("workspace"), base_path),
        migration=_parse_migration_section(parsed.get("migration")),
        output=_parse_output_section(parsed.get("output"), base_path),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_workspace_section(value: Any, base_path: Path) -> WorkspaceSettings:
    section = _require_mapping(value, "workspace")
    archive = _optional_string(section.get("archive"), "workspace.archive")
    registry = _optional_string(section.get("registry"), "workspace.registry")
    annotations = _optional_string(section.get("annotations"), "workspace.annotations")

    if archive and (registry or annotations):
        raise ConfigurationError(
            "workspace must set either archive or registry/annotations, not both."
        )
    if archive:
        return WorkspaceSettings(
            registry_path=None,
            annotations_path=None,
            archive_path=_resolve_path(base_path, archive),
        )
    if not registry or not annotations:
        raise ConfigurationError(
            "workspace requires an archive, or both registry and annotations paths."
        )
    return WorkspaceSettings(
        registry_path=_resolve_path(base_path, registry),
        annotations_path=_resolve_path(base_path, annotations),
        archive_path=None,
    )


def _parse_migration_section(value: Any) -> MigrationSettings:
    section = _optional_mapping(value, "migration")
    rename_strategy = _require_non_empty_string(
        section.get("rename_strategy", "single_pair"), "migration.rename_strategy"
    )
    if rename_strategy not in RENAME_STRATEGIES:
        supported = ", ".join(sorted(RENAME_STRATEGIES))
        raise ConfigurationError(
            f"migration.rename_strategy '{rename_strategy}' is not one of: {supported}"
        )
    propagate = section.get("propagate_subobjects", True)
    if not isinstance(propagate, bool):
        raise ConfigurationError("migration.propagate_subobjects must be a boolean.")
    return MigrationSettings(rename_strategy=rename_strategy, propagate_subobjects=propagate)


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    directory = _optional_string(section.get("directory"), "output.directory")
    summary_workbook = section.get("summary_workbook", True)
    if not isinstance(summary_workbook, bool):
        raise ConfigurationError("output.summary_workbook must be a boolean.")
    return OutputSettings(
        directory=_resolve_path(base_path, directory) if directory else base_path,
        summary_workbook=summary_workbook,
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "WARNING"), "logging.level").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of: {', '.join(_LOG_LEVELS)}")
    return LoggingSettings(level=level)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
