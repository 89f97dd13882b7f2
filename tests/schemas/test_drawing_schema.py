"""Tests for the bundled payload schemas."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from schemas.validators import (
    DRAWING_SCHEMA_NAME,
    SETTINGS_SCHEMA_NAME,
    SchemaValidationError,
    load_drawing,
    load_payload,
    load_schema,
    validate_drawing_payload,
)
from tests.helpers import drawing, sheet, three_sheet_drawing


@pytest.mark.parametrize("name", [DRAWING_SCHEMA_NAME, SETTINGS_SCHEMA_NAME])
def test_bundled_schemas_load(name: str) -> None:
    schema = load_schema(name)

    assert schema["type"] == "object"


def test_missing_schema_raises() -> None:
    with pytest.raises(FileNotFoundError):
        load_schema("does_not_exist.yaml")


def test_valid_drawing_passes() -> None:
    validate_drawing_payload(three_sheet_drawing())


def test_invalid_drawing_reports_every_error_with_its_path() -> None:
    payload = {
        "layouts": [
            {"name": "A", "entities": [{"type": "line", "start": [0], "end": [1, 1]}]},
            {"entities": []},
        ]
    }

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_drawing_payload(payload)

    message = str(excinfo.value)
    assert len(excinfo.value.errors) == 2
    assert "[layouts / 0 / entities / 0 / start]" in message
    assert "'name' is a required property" in message


def test_duplicate_layout_names_are_reported() -> None:
    payload = drawing(sheet("A"), sheet("S"), sheet("S"), sheet("B"), sheet("S"))

    with pytest.raises(SchemaValidationError) as excinfo:
        validate_drawing_payload(payload)

    message = str(excinfo.value)
    assert len(excinfo.value.errors) == 2
    assert "[layouts / 2 / name] Layout name 'S' is used by more than one layout" in message
    assert "[layouts / 4 / name]" in message


def test_layouts_are_required() -> None:
    with pytest.raises(SchemaValidationError):
        validate_drawing_payload({"name": "empty"})


def test_load_drawing_accepts_yaml_and_json(tmp_path: Path) -> None:
    json_path = tmp_path / "drawing.json"
    json_path.write_text(json.dumps(three_sheet_drawing()), encoding="utf-8")
    yaml_path = tmp_path / "drawing.yaml"
    yaml_path.write_text(
        "layouts:\n  - name: A\n    entities:\n      - {type: point, position: [1, 2]}\n",
        encoding="utf-8",
    )

    assert [layout["name"] for layout in load_drawing(json_path)["layouts"]] == ["Model", "A", "B", "C"]
    assert load_drawing(yaml_path)["layouts"][0]["entities"][0]["type"] == "point"


def test_load_drawing_requires_a_mapping(tmp_path: Path) -> None:
    path = tmp_path / "drawing.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(TypeError):
        load_drawing(path)


def test_unsupported_extension(tmp_path: Path) -> None:
    path = tmp_path / "drawing.txt"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError):
        load_payload(path)
