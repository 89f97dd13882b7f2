"""Calibration constants for cutline placement."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

__all__ = [
    "CutlineSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
]


@dataclass(frozen=True, slots=True)
class CutlineSettings:
    """Offsets, clearances and text styling applied when placing cutlines.

    The defaults are tuned for sheets drawn at 1:1 in millimetres. START and
    END placements use separate vertical biases.
    """

    offset: float = 280.0
    cutline_length: float = 280.0
    min_clearance: float = 250.0
    start_bias: float = 15.0
    end_bias: float = 10.0
    text_offset: float = 5.0
    lead_text_offset: float = -25.0
    text_rise: float = 5.0
    text_height: float = 2.5
    text_rotation: float = 90.0
    line_color: int = 1
    horizontal_align: str = "center"
    vertical_align: str = "baseline"
    reference_template: str = "For continuation refer - {name}"

    def __post_init__(self) -> None:
        try:
            self.reference_template.format(name="")
        except (IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"reference_template {self.reference_template!r} cannot be filled with a layout name: {exc}"
            ) from exc

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "CutlineSettings":
        """Overlay ``payload`` on the defaults, rejecting unknown keys."""

        known = {field.name: field for field in fields(cls)}
        unknown = sorted(set(payload) - set(known))
        if unknown:
            msg = f"Unknown cutline settings: {', '.join(unknown)}"
            raise KeyError(msg)
        overrides: dict[str, Any] = {}
        for key, value in payload.items():
            if known[key].type in {"float", float}:
                overrides[key] = float(value)
            elif known[key].type in {"int", int}:
                overrides[key] = int(value)
            else:
                overrides[key] = str(value)
        return replace(DEFAULT_SETTINGS, **overrides)

    def reference_text(self, layout_name: str) -> str:
        return self.reference_template.format(name=layout_name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS = CutlineSettings()


def load_settings(path: Path | str | None) -> CutlineSettings:
    """Load settings from a YAML or JSON file, falling back to the defaults."""

    if path is None:
        return DEFAULT_SETTINGS

    from schemas.validators import load_payload, validate_settings_payload

    payload = load_payload(Path(path))
    if payload is None:
        return DEFAULT_SETTINGS
    validate_settings_payload(payload)
    return CutlineSettings.from_mapping(payload)
