"""Command line interface entry point."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import click

from annotation_migrator.annotation_migration import MigrationSummaryEntry
from annotation_migrator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    configure_logging,
    load_configuration,
    write_placeholder_configuration,
)
from annotation_migrator.results_writing import format_summary_line
from annotation_migrator.run_execution import (
    RunExecutionError,
    RunRequest,
    execute_schema_edit_run,
)
from annotation_migrator.schema_diffing import (
    RENAME_STRATEGIES,
    diff_result_to_mapping,
    diff_schemas,
    rename_detector_for,
)
from annotation_migrator.schema_management import (
    SchemaError,
    build_example_values,
    export_json_schema,
    schema_from_mapping,
)
from annotation_migrator.workspace_io import WorkspaceError, load_workspace

_LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="annotation-migrator")
@click.option(
    "--log-level",
    "log_level",
    required=False,
    type=click.Choice(_LOG_LEVEL_CHOICES, case_sensitive=False),
    help="Override the configured log level for this invocation",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Schema evolution and annotation migration utility."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    configure_logging(log_level or "WARNING")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML migration configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML migration configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="diff")
@click.option(
    "--old",
    "old_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the previous object schema JSON document",
)
@click.option(
    "--new",
    "new_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the edited object schema JSON document",
)
@click.option(
    "--rename-strategy",
    "rename_strategy",
    required=False,
    default="single_pair",
    show_default=True,
    type=click.Choice(sorted(RENAME_STRATEGIES)),
    help="How removed and added fields are paired into renames",
)
def diff(old_path: str, new_path: str, rename_strategy: str) -> None:
    """Classify the change between two object schema versions."""
    try:
        old_schema = schema_from_mapping(_read_json_document(old_path))
        new_schema = schema_from_mapping(_read_json_document(new_path))
    except SchemaError as exc:
        raise CliError(str(exc)) from exc
    result = diff_schemas(
        old_schema, new_schema, rename_detector=rename_detector_for(rename_strategy)
    )
    click.echo(json.dumps(diff_result_to_mapping(result), indent=2))


# pylint: disable=too-many-arguments
@cli.command(name="apply-edit")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON migration configuration file",
)
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the edited object schema JSON document",
)
@click.option(
    "--target",
    "target",
    required=False,
    help="Registry name of the edited schema when the document renames it",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for the migrated workspace and summary workbook",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="List affected annotations without writing anything.",
)
@click.option(
    "--yes",
    "assume_yes",
    is_flag=True,
    default=False,
    help="Commit without asking for confirmation.",
)
@click.option(
    "--new-schema",
    "create_new",
    is_flag=True,
    default=False,
    help="Create the schema when no registry entry has the document's name.",
)
@click.pass_context
def apply_edit(
    ctx: click.Context,
    config_path: str,
    schema_path: str,
    target: str | None,
    output_dir: str | None,
    dry_run: bool,
    assume_yes: bool,
    create_new: bool,
) -> None:
    """Save an edited object schema and migrate the affected annotations."""
    _configure_from_file(ctx, config_path)
    listed = False

    def confirm(summary: Sequence[MigrationSummaryEntry]) -> bool:
        nonlocal listed
        _echo_summary(summary)
        listed = True
        return click.confirm(f"Apply changes to {len(summary)} annotation(s)?", default=False)

    try:
        outcome = execute_schema_edit_run(
            RunRequest(
                config_path=config_path,
                schema_path=schema_path,
                target=target,
                output_dir=output_dir,
                dry_run=dry_run,
                assume_yes=assume_yes,
                create_new=create_new,
            ),
            confirm=confirm,
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc

    if not listed:
        _echo_summary(outcome.summary)
    if outcome.parents_updated:
        click.echo(f"parent schemas updated: {', '.join(outcome.parents_updated)}")
    if outcome.dry_run:
        click.echo("dry run: no changes written")
    elif not outcome.committed:
        click.echo("declined: no changes written")
    else:
        click.echo(str(outcome.workspace_path))
        if outcome.report_path is not None:
            click.echo(str(outcome.report_path))


# pylint: enable=too-many-arguments


@cli.command(name="export-schema")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON migration configuration file",
)
@click.option(
    "--object",
    "object_name",
    required=True,
    help="Name of the object schema to export",
)
@click.option(
    "--example",
    is_flag=True,
    default=False,
    help="Also print placeholder example values for the schema fields.",
)
@click.pass_context
def export_schema(ctx: click.Context, config_path: str, object_name: str, example: bool) -> None:
    """Print the JSON Schema the extraction collaborator receives for an object."""
    configuration = _configure_from_file(ctx, config_path)
    try:
        workspace = load_workspace(configuration.workspace)
        schema = next(
            (item for item in workspace.schemas if item.name == object_name), None
        )
        if schema is None:
            raise CliError(f"Object schema not found: {object_name}")
        document: dict[str, Any] = export_json_schema(schema, workspace.schemas)
    except (WorkspaceError, SchemaError) as exc:
        raise CliError(str(exc)) from exc
    if example:
        document = {"jsonSchema": document, "exampleValues": build_example_values(schema.fields)}
    click.echo(json.dumps(document, indent=2))


def _configure_from_file(ctx: click.Context, config_path: str) -> Configuration:
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    if not (ctx.obj or {}).get("log_level"):
        configure_logging(configuration.logging.level)
    return configuration


def _read_json_document(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CliError(f"Failed to read {path}: {exc}") from exc


def _echo_summary(summary: Sequence[MigrationSummaryEntry]) -> None:
    if not summary:
        click.echo("No annotations affected.")
        return
    for entry in summary:
        click.echo(format_summary_line(entry))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
