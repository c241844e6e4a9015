"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "migrator-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Migration configuration template for annotation-migrator.
# Replace every <REQUIRED> placeholder before running apply-edit or export-schema.
# Values marked as defaults may be removed.

workspace:
  # Choose exactly one workspace layout: an export archive, or two JSON documents.
  # archive: "<REQUIRED>"
  registry: "<REQUIRED>"
  annotations: "<REQUIRED>"

migration:
  # single_pair | greedy_same_type | none
  rename_strategy: "single_pair"
  # Cascade sub-schema edits into the schemas embedding them.
  propagate_subobjects: true

output:
  # Relative paths resolve against this file's directory.
  directory: "migrated"
  summary_workbook: true

logging:
  # DEBUG | INFO | WARNING | ERROR | CRITICAL
  level: "WARNING"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML migration configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
