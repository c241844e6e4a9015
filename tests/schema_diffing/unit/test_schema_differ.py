"""Schema differ tests."""

from __future__ import annotations

from annotation_migrator.schema_diffing import (
    AddField,
    ChangeClassification,
    GreedySameTypeRenameDetector,
    NewObject,
    NoRenameDetector,
    RemoveField,
    RenameField,
    RenameObject,
    RenamePair,
    RenameSubobject,
    SystemPromptChange,
    TypeChange,
    diff_result_to_mapping,
    diff_schemas,
)
from annotation_migrator.schema_management import ObjectSchema, schema_from_mapping


def _schema(
    name: str,
    fields: list[tuple[str, str]],
    *,
    version: int = 1,
    system_prompt: str | None = None,
) -> ObjectSchema:
    document: dict = {
        "name": name,
        "version": version,
        "fields": [{"name": field_name, "type": tag} for field_name, tag in fields],
    }
    if system_prompt is not None:
        document["systemPrompt"] = system_prompt
    return schema_from_mapping(document)


def test_identical_schemas_are_minor_without_ops() -> None:
    schema = _schema("Car", [("brand", "string"), ("price", "number")])

    result = diff_schemas(schema, schema)

    assert result.classification == ChangeClassification.MINOR
    assert result.is_minor
    assert result.minor_ops == ()
    assert result.major_ops == ()


def test_missing_old_schema_is_a_new_object() -> None:
    result = diff_schemas(None, _schema("Car", [("brand", "string")]))

    assert result.classification == ChangeClassification.MAJOR
    assert result.major_ops == (NewObject(),)


def test_single_same_type_swap_is_a_rename() -> None:
    old = _schema("Car", [("a", "string")])
    new = _schema("Car", [("b", "string")], version=2)

    result = diff_schemas(old, new)

    assert result.is_minor
    assert result.minor_ops == (RenameField(from_field="a", to_field="b"),)
    assert result.rename_pairs() == (RenamePair(from_field="a", to_field="b"),)


def test_swap_with_different_type_is_remove_and_add() -> None:
    old = _schema("Car", [("a", "string")])
    new = _schema("Car", [("b", "number")])

    result = diff_schemas(old, new)

    assert result.classification == ChangeClassification.MAJOR
    assert result.minor_ops == (RemoveField(field="a"),)
    assert result.major_ops == (AddField(field="b"),)
    assert result.removed_fields() == ("a",)


def test_two_simultaneous_renames_are_not_disambiguated() -> None:
    old = _schema("Car", [("a", "string"), ("b", "string")])
    new = _schema("Car", [("c", "string"), ("d", "string")])

    result = diff_schemas(old, new)

    assert result.minor_ops == (RemoveField(field="a"), RemoveField(field="b"))
    assert result.major_ops == (AddField(field="c"), AddField(field="d"))


def test_greedy_detector_pairs_several_renames() -> None:
    old = _schema("Car", [("a", "string"), ("b", "number")])
    new = _schema("Car", [("c", "number"), ("d", "string")])

    result = diff_schemas(old, new, rename_detector=GreedySameTypeRenameDetector())

    assert result.is_minor
    assert result.minor_ops == (
        RenameField(from_field="a", to_field="d"),
        RenameField(from_field="b", to_field="c"),
    )


def test_no_rename_detector_reports_remove_and_add() -> None:
    old = _schema("Car", [("a", "string")])
    new = _schema("Car", [("b", "string")])

    result = diff_schemas(old, new, rename_detector=NoRenameDetector())

    assert result.minor_ops == (RemoveField(field="a"),)
    assert result.major_ops == (AddField(field="b"),)


def test_removing_a_field_is_minor() -> None:
    old = _schema("Car", [("brand", "string"), ("color", "string")])
    new = _schema("Car", [("brand", "string")])

    result = diff_schemas(old, new)

    assert result.is_minor
    assert result.minor_ops == (RemoveField(field="color"),)


def test_primitive_type_change_is_major() -> None:
    old = _schema("Car", [("price", "string")])
    new = _schema("Car", [("price", "number")])

    result = diff_schemas(old, new)

    assert result.major_ops == (TypeChange(field="price", from_type="string", to_type="number"),)


def test_reference_retype_with_same_array_ness_is_a_subobject_rename() -> None:
    old = _schema("Car", [("info", "Info"), ("owners", "array_Person")])
    new = _schema("Car", [("info", "Details"), ("owners", "array_Owner")])

    result = diff_schemas(old, new)

    assert result.is_minor
    assert result.minor_ops == (
        RenameSubobject(field="info", from_type="Info", to_type="Details"),
        RenameSubobject(field="owners", from_type="array_Person", to_type="array_Owner"),
    )


def test_reference_array_ness_change_is_major() -> None:
    old = _schema("Car", [("info", "Info")])
    new = _schema("Car", [("info", "array_Info")])

    result = diff_schemas(old, new)

    assert result.major_ops == (
        TypeChange(field="info", from_type="Info", to_type="array_Info"),
    )


def test_object_rename_and_prompt_change_are_minor_and_listed_first() -> None:
    old = _schema("Car", [("brand", "string"), ("color", "string")], system_prompt="old")
    new = _schema("Vehicle", [("brand", "string")], system_prompt="new")

    result = diff_schemas(old, new)

    assert result.minor_ops == (
        RenameObject(from_name="Car", to_name="Vehicle"),
        SystemPromptChange(),
        RemoveField(field="color"),
    )


def test_absent_and_empty_prompts_are_equal() -> None:
    old = _schema("Car", [("brand", "string")])
    new = _schema("Car", [("brand", "string")], system_prompt="")

    assert diff_schemas(old, new).minor_ops == ()


def test_diff_result_renders_as_json_ready_mapping() -> None:
    old = _schema("Car", [("a", "string"), ("price", "string")])
    new = _schema("Car", [("b", "string"), ("price", "number")])

    document = diff_result_to_mapping(diff_schemas(old, new))

    assert document == {
        "classification": "major",
        "minorOps": [{"type": "renameField", "from": "a", "to": "b"}],
        "majorOps": [{"type": "typeChange", "field": "price", "from": "string", "to": "number"}],
    }
