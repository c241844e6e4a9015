"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from annotation_migrator.cli import cli
from click.testing import CliRunner

_REGISTRY = [
    {
        "name": "Car",
        "version": 1,
        "fields": [
            {"name": "brand", "type": "string"},
            {"name": "fuel", "type": "enum", "enumValues": ["petrol", "diesel"]},
            {"name": "owners", "type": "array_Person"},
        ],
    },
    {
        "name": "Person",
        "version": 1,
        "isSubobject": True,
        "fields": [{"name": "name", "type": "string"}],
    },
]
_PDF_DATA = {
    "file-1": {
        "annotations": [
            {
                "id": "abcdef987654",
                "objectName": "Car",
                "objectVersion": 1,
                "pageIndex": 0,
                "values": {"brand": "Ford", "owners": [{"name": "Ann"}]},
                "humanRevised": True,
            }
        ]
    }
}


def _write_workspace(tmp_path: Path) -> Path:
    (tmp_path / "objectRegistry.json").write_text(json.dumps(_REGISTRY), encoding="utf-8")
    (tmp_path / "pdfData.json").write_text(json.dumps(_PDF_DATA), encoding="utf-8")
    config_path = tmp_path / "migrator-config.yaml"
    config_path.write_text(
        "workspace:\n"
        "  registry: objectRegistry.json\n"
        "  annotations: pdfData.json\n"
        "output:\n"
        "  directory: migrated\n",
        encoding="utf-8",
    )
    return config_path


def _write_json(path: Path, document: dict) -> Path:
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _person_rename_edit(tmp_path: Path) -> Path:
    return _write_json(
        tmp_path / "person-edit.json",
        {"name": "Person", "isSubobject": True, "fields": [{"name": "fullName", "type": "string"}]},
    )


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "migrator-config.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_generate_config_command_refuses_to_overwrite(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "migrator-config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code != 0
    assert output_path.read_text(encoding="utf-8") == "existing"


def test_diff_command_prints_classification_json(tmp_path: Path) -> None:
    runner = CliRunner()
    old_path = _write_json(tmp_path / "old.json", _REGISTRY[0])
    new_document = {
        **_REGISTRY[0],
        "version": 2,
        "fields": [{"name": "make", "type": "string"}, *_REGISTRY[0]["fields"][1:]],
    }
    new_path = _write_json(tmp_path / "new.json", new_document)

    result = runner.invoke(cli, ["diff", "--old", str(old_path), "--new", str(new_path)])

    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "classification": "minor",
        "minorOps": [{"type": "renameField", "from": "brand", "to": "make"}],
        "majorOps": [],
    }


def test_apply_edit_lists_summary_and_commits_after_confirmation(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_workspace(tmp_path)
    schema_path = _person_rename_edit(tmp_path)

    result = runner.invoke(
        cli,
        ["apply-edit", "--config", str(config_path), "--schema", str(schema_path)],
        input="y\n",
    )

    assert result.exit_code == 0
    assert "file-1 page 1 - ann abcdef: update" in result.output
    assert "parent schemas updated: Car" in result.output
    pdf_data = json.loads((tmp_path / "migrated" / "pdfData.json").read_text(encoding="utf-8"))
    values = pdf_data["file-1"]["annotations"][0]["values"]
    assert values["owners"] == [{"fullName": "Ann"}]


def test_apply_edit_declined_writes_nothing(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_workspace(tmp_path)
    schema_path = _person_rename_edit(tmp_path)

    result = runner.invoke(
        cli,
        ["apply-edit", "--config", str(config_path), "--schema", str(schema_path)],
        input="n\n",
    )

    assert result.exit_code == 0
    assert "declined: no changes written" in result.output
    assert not (tmp_path / "migrated").exists()


def test_apply_edit_dry_run_prints_summary_only(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_workspace(tmp_path)
    schema_path = _person_rename_edit(tmp_path)

    result = runner.invoke(
        cli,
        [
            "apply-edit",
            "--config",
            str(config_path),
            "--schema",
            str(schema_path),
            "--dry-run",
        ],
    )

    assert result.exit_code == 0
    assert "file-1 page 1 - ann abcdef: update" in result.output
    assert "dry run: no changes written" in result.output
    assert not (tmp_path / "migrated").exists()


def test_apply_edit_with_yes_writes_workspace_and_report(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_workspace(tmp_path)
    schema_path = _person_rename_edit(tmp_path)
    output_dir = tmp_path / "elsewhere"

    result = runner.invoke(
        cli,
        [
            "--log-level",
            "info",
            "apply-edit",
            "--config",
            str(config_path),
            "--schema",
            str(schema_path),
            "--output-dir",
            str(output_dir),
            "--yes",
        ],
    )

    assert result.exit_code == 0
    assert str(output_dir.resolve()) in result.output
    assert (output_dir / "objectRegistry.json").exists()
    assert list(output_dir.glob("Person-migration-*.xlsx"))


def test_export_schema_prints_json_schema_and_example(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_workspace(tmp_path)

    result = runner.invoke(
        cli, ["export-schema", "--config", str(config_path), "--object", "Car", "--example"]
    )

    assert result.exit_code == 0
    document = json.loads(result.output)
    assert document["jsonSchema"]["properties"]["owners"]["items"] == {"$ref": "#/$defs/Person"}
    assert document["exampleValues"] == {"brand": "", "fuel": "petrol", "owners": []}


def test_export_schema_rejects_unknown_object(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_workspace(tmp_path)

    result = runner.invoke(
        cli, ["export-schema", "--config", str(config_path), "--object", "Boat"]
    )

    assert result.exit_code != 0
    assert "Object schema not found: Boat" in str(result.exception)
