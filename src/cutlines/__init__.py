"""Cutline geometry, placement and sequencing for multi-sheet drawings."""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "BoundingBox",
    "CutlineGenerator",
    "CutlinePersistenceError",
    "CutlineRole",
    "CutlineSettings",
    "CutlineSpec",
    "DEFAULT_SETTINGS",
    "DrawingStore",
    "ExtentResolutionError",
    "GenerationStatus",
    "GenerationSummary",
    "InsufficientLayoutsError",
    "Layout",
    "LayoutOutcome",
    "LayoutProcessingError",
    "OutcomeStatus",
    "Point",
    "SkipReason",
    "accumulate_boxes",
    "load_settings",
    "merge_boxes",
    "place_cutlines",
    "resolve_layout_extents",
    "sequence_layouts",
]

_ATTRIBUTE_MODULES: dict[str, str] = {
    "BoundingBox": ".geometry",
    "Point": ".geometry",
    "accumulate_boxes": ".geometry",
    "merge_boxes": ".geometry",
    "resolve_layout_extents": ".extents",
    "CutlineRole": ".placement",
    "CutlineSpec": ".placement",
    "place_cutlines": ".placement",
    "ExtentResolutionError": ".sequencing",
    "InsufficientLayoutsError": ".sequencing",
    "Layout": ".sequencing",
    "LayoutOutcome": ".sequencing",
    "LayoutProcessingError": ".sequencing",
    "OutcomeStatus": ".sequencing",
    "SkipReason": ".sequencing",
    "sequence_layouts": ".sequencing",
    "CutlineGenerator": ".generator",
    "CutlinePersistenceError": ".generator",
    "DrawingStore": ".generator",
    "GenerationStatus": ".generator",
    "GenerationSummary": ".generator",
    "CutlineSettings": ".settings",
    "DEFAULT_SETTINGS": ".settings",
    "load_settings": ".settings",
}


def __getattr__(name: str):
    try:
        module_name = _ATTRIBUTE_MODULES[name]
    except KeyError as exc:  # pragma: no cover - defensive programming
        raise AttributeError(f"module 'cutlines' has no attribute {name!r}") from exc

    module = import_module(module_name, __name__)
    value = getattr(module, name)
    globals()[name] = value
    return value
