"""Utilities for validating SheetLink payloads against the bundled schemas."""
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator, ValidationError

DRAWING_SCHEMA_NAME = "drawing.yaml"
SETTINGS_SCHEMA_NAME = "cutline_settings.yaml"

__all__ = [
    "DRAWING_SCHEMA_NAME",
    "SETTINGS_SCHEMA_NAME",
    "SchemaValidationError",
    "load_schema",
    "load_payload",
    "load_drawing",
    "validate_drawing_payload",
    "validate_settings_payload",
]


class SchemaValidationError(RuntimeError):
    """Raised when an instance fails schema validation."""

    def __init__(self, errors: Iterable[ValidationError]):
        self.errors = tuple(errors)
        message = "Schema validation failed:\n" + "\n".join(_format_error(e) for e in self.errors)
        super().__init__(message)


def _schema_dir() -> Path:
    return Path(__file__).resolve().parent


@lru_cache(maxsize=4)
def load_schema(name: str = DRAWING_SCHEMA_NAME) -> Mapping[str, Any]:
    """Load and cache a schema definition by name."""

    schema_path = _schema_dir() / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema '{name}' not found at {schema_path}")

    with schema_path.open("r", encoding="utf-8") as handle:
        schema = yaml.safe_load(handle)

    if not isinstance(schema, Mapping):
        raise TypeError(f"Schema '{name}' must decode to a mapping, received {type(schema)!r}")

    return schema


def load_payload(path: Path) -> Any:
    """Load a JSON or YAML payload from disk."""

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as handle:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(handle)
        if suffix == ".json":
            return json.load(handle)
    raise ValueError(f"Unsupported payload extension '{suffix}' for {path}")


def _validate(instance: Any, schema_name: str) -> None:
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda exc: [str(part) for part in exc.path])
    if errors:
        raise SchemaValidationError(errors)


def _duplicate_layout_names(instance: Mapping[str, Any]) -> list[ValidationError]:
    seen: set[str] = set()
    errors: list[ValidationError] = []
    for index, layout in enumerate(instance.get("layouts", [])):
        name = layout["name"]
        if name in seen:
            errors.append(
                ValidationError(
                    f"Layout name {name!r} is used by more than one layout",
                    path=("layouts", index, "name"),
                )
            )
        seen.add(name)
    return errors


def validate_drawing_payload(instance: Any, *, schema_name: str = DRAWING_SCHEMA_NAME) -> None:
    """Validate *instance* against the drawing schema.

    Layout names must also be unique; cutlines are addressed to a layout by name.
    """

    _validate(instance, schema_name)
    duplicates = _duplicate_layout_names(instance)
    if duplicates:
        raise SchemaValidationError(duplicates)


def validate_settings_payload(instance: Any, *, schema_name: str = SETTINGS_SCHEMA_NAME) -> None:
    """Validate *instance* against the cutline settings schema."""

    _validate(instance, schema_name)


def load_drawing(path: Path) -> Mapping[str, Any]:
    """Load and validate a drawing payload from *path*."""

    instance = load_payload(path)
    if not isinstance(instance, Mapping):
        raise TypeError("Drawing payload must be a mapping.")

    validate_drawing_payload(instance)
    return instance


def _format_error(error: ValidationError) -> str:
    location = " / ".join(str(component) for component in error.absolute_path)
    prefix = f"[{location}] " if location else ""
    return f"{prefix}{error.message}"
