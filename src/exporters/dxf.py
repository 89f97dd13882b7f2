"""ASCII DXF export of a drawing payload with its generated cutlines."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Mapping, Sequence

from .drawing_store import CUTLINE_LAYER, is_model_space_layout

__all__ = ["write_dxf"]

logger = logging.getLogger(__name__)

_HORIZONTAL_CODES = {"left": 0, "center": 1, "right": 2}
_VERTICAL_CODES = {"baseline": 0, "bottom": 1, "middle": 2, "top": 3}


def _layer_name(layout: str, suffix: str | None = None) -> str:
    name = re.sub(r'[<>/\\":;?*|=`]+', "_", layout.strip()) or "LAYOUT"
    return f"{name}_{suffix}" if suffix else name


def _xy(point: Sequence[float], x_code: str = "10", y_code: str = "20") -> list[str]:
    return [x_code, f"{float(point[0]):.4f}", y_code, f"{float(point[1]):.4f}"]


def _entity_lines(entity: Mapping[str, Any], layer: str) -> list[str]:
    kind = str(entity.get("type", "")).lower()
    if kind == "line":
        return ["0", "LINE", "8", layer, *_xy(entity["start"]), *_xy(entity["end"], "11", "21")]
    if kind in {"polyline", "lwpolyline"}:
        points = entity.get("points") or []
        if not points:
            return []
        lines = ["0", "LWPOLYLINE", "8", layer, "90", str(len(points)), "70", "1" if entity.get("closed") else "0"]
        for point in points:
            lines.extend(_xy(point))
        return lines
    if kind == "circle":
        return ["0", "CIRCLE", "8", layer, *_xy(entity["center"]), "40", f"{float(entity['radius']):.4f}"]
    if kind == "arc":
        return [
            "0",
            "ARC",
            "8",
            layer,
            *_xy(entity["center"]),
            "40",
            f"{float(entity['radius']):.4f}",
            "50",
            f"{float(entity.get('start_angle', 0.0)):.2f}",
            "51",
            f"{float(entity.get('end_angle', 360.0)):.2f}",
        ]
    if kind == "text":
        lines = [
            "0",
            "TEXT",
            "8",
            layer,
            *_xy(entity["position"]),
            "40",
            f"{float(entity.get('height', 2.5)):.4f}",
            "1",
            str(entity.get("text", "")),
            "50",
            f"{float(entity.get('rotation', 0.0)):.2f}",
        ]
        halign = _HORIZONTAL_CODES.get(str(entity.get("horizontal_align", "left")), 0)
        valign = _VERTICAL_CODES.get(str(entity.get("vertical_align", "baseline")), 0)
        if halign or valign:
            anchor = entity.get("align_point") or entity["position"]
            lines.extend(["72", str(halign), *_xy(anchor, "11", "21"), "73", str(valign)])
        return lines
    return []


def write_dxf(path: Path, payload: Mapping[str, Any]) -> Path:
    """Write every non-model layout of ``payload`` into one DXF file.

    Each layout gets its own layer; generated cutlines and their annotations
    land on ``<layout>_CUTLINE``.
    """

    lines = [
        "0",
        "SECTION",
        "2",
        "HEADER",
        "9",
        "$SHEETLINK_LAYOUTS",
        "1",
        str(len(payload.get("layouts", []))),
        "0",
        "ENDSEC",
        "0",
        "SECTION",
        "2",
        "ENTITIES",
    ]
    skipped = 0
    for layout in payload.get("layouts", []):
        if is_model_space_layout(layout):
            continue
        name = str(layout["name"])
        for entity in layout.get("entities", []):
            suffix = "CUTLINE" if entity.get("layer") == CUTLINE_LAYER else None
            entity_lines = _entity_lines(entity, _layer_name(name, suffix))
            if not entity_lines:
                skipped += 1
            lines.extend(entity_lines)
    lines.extend(["0", "ENDSEC", "0", "EOF"])

    if skipped:
        logger.debug("Omitted %d entities without a DXF representation", skipped)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
    return path
