"""Schema definitions and validators for drawing and settings payloads."""

from .validators import (
    DRAWING_SCHEMA_NAME,
    SETTINGS_SCHEMA_NAME,
    SchemaValidationError,
    load_drawing,
    load_payload,
    load_schema,
    validate_drawing_payload,
    validate_settings_payload,
)

__all__ = [
    "DRAWING_SCHEMA_NAME",
    "SETTINGS_SCHEMA_NAME",
    "SchemaValidationError",
    "load_drawing",
    "load_payload",
    "load_schema",
    "validate_drawing_payload",
    "validate_settings_payload",
]
