"""Pipelines that run cutline generation against drawing files."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__all__ = [
    "CutlineRunResult",
    "generate_cutlines_main",
    "run_cutline_generation",
]

_LAZY_IMPORTS: Dict[str, Tuple[str, str]] = {
    "CutlineRunResult": ("sheetlink.pipelines.generate_cutlines", "CutlineRunResult"),
    "generate_cutlines_main": ("sheetlink.pipelines.generate_cutlines", "main"),
    "run_cutline_generation": ("sheetlink.pipelines.generate_cutlines", "run_cutline_generation"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - simple delegation
    try:
        module_name, attribute = _LAZY_IMPORTS[name]
    except KeyError as exc:  # pragma: no cover - attribute errors fall through
        raise AttributeError(f"module 'sheetlink.pipelines' has no attribute {name!r}") from exc

    module = import_module(module_name)
    value = getattr(module, attribute)
    globals()[name] = value
    return value


def __dir__() -> list[str]:  # pragma: no cover - interactive helper
    return sorted(__all__)
