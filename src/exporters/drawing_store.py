"""Drawing store backed by a JSON/YAML drawing payload."""
from __future__ import annotations

import copy
import logging
import math
from collections import Counter
from typing import Any, Callable, Mapping, MutableMapping, Sequence

import numpy as np

from cutlines.geometry import BoundingBox, Point
from cutlines.sequencing import Layout

__all__ = [
    "CUTLINE_LAYER",
    "DrawingStoreError",
    "JsonDrawingStore",
    "entity_bounds",
    "is_model_space_layout",
]

logger = logging.getLogger(__name__)

CUTLINE_LAYER = "CUTLINES"
MODEL_SPACE_NAME = "model"


class DrawingStoreError(RuntimeError):
    """Raised when the store refuses to stage or publish an object."""


def _bounds_from_points(entity: Mapping[str, Any], *keys: str) -> BoundingBox:
    return BoundingBox.from_points(entity[key] for key in keys)


def _polyline_bounds(entity: Mapping[str, Any]) -> BoundingBox | None:
    points = entity.get("points") or []
    if not points:
        return None
    return BoundingBox.from_points(points)


def _circle_bounds(entity: Mapping[str, Any]) -> BoundingBox:
    center = Point.from_sequence(entity["center"])
    radius = float(entity["radius"])
    return BoundingBox(center.offset(-radius, -radius), center.offset(radius, radius))


def _arc_bounds(entity: Mapping[str, Any]) -> BoundingBox:
    """Bound a counter-clockwise arc by its endpoints and swept axis extremes."""

    center = Point.from_sequence(entity["center"])
    radius = float(entity["radius"])
    start = float(entity.get("start_angle", 0.0)) % 360.0
    end = float(entity.get("end_angle", 360.0)) % 360.0
    sweep = (end - start) % 360.0 or 360.0

    angles = [start, start + sweep]
    angles.extend(
        quadrant for quadrant in (0.0, 90.0, 180.0, 270.0) if (quadrant - start) % 360.0 <= sweep
    )
    radians = np.radians(np.asarray(angles, dtype=float))
    xs = center.x + radius * np.cos(radians)
    ys = center.y + radius * np.sin(radians)
    return BoundingBox(
        Point(float(xs.min()), float(ys.min()), center.z),
        Point(float(xs.max()), float(ys.max()), center.z),
    )


def _explicit_bounds(entity: Mapping[str, Any]) -> BoundingBox:
    bounds = entity["bounds"]
    return BoundingBox(Point.from_sequence(bounds["min"]), Point.from_sequence(bounds["max"]))


_BOUNDS_BY_TYPE: dict[str, Callable[[Mapping[str, Any]], BoundingBox | None]] = {
    "line": lambda entity: _bounds_from_points(entity, "start", "end"),
    "polyline": _polyline_bounds,
    "lwpolyline": _polyline_bounds,
    "circle": _circle_bounds,
    "arc": _arc_bounds,
    "point": lambda entity: _bounds_from_points(entity, "position"),
    "text": lambda entity: _bounds_from_points(entity, "position"),
}


def entity_bounds(entity: Mapping[str, Any]) -> BoundingBox | None:
    """Return the extents of a drawing entity, or ``None`` if it has none.

    An explicit ``bounds`` mapping takes precedence over the geometry. Unknown
    entity types and entities with incomplete geometry are unbounded.
    """

    if "bounds" in entity:
        handler: Callable[[Mapping[str, Any]], BoundingBox | None] | None = _explicit_bounds
    else:
        handler = _BOUNDS_BY_TYPE.get(str(entity.get("type", "")).lower())
    if handler is None:
        return None
    try:
        return handler(entity)
    except (KeyError, TypeError, ValueError) as exc:
        logger.debug("Entity %r has no usable geometry: %s", entity.get("type"), exc)
        return None


def is_model_space_layout(layout: Mapping[str, Any]) -> bool:
    """Model space is flagged explicitly or named ``Model``."""

    if layout.get("model_space", False):
        return True
    return str(layout.get("name", "")).strip().lower() == MODEL_SPACE_NAME


def _coords(point: Point) -> list[float]:
    if not point.is_finite():
        raise DrawingStoreError(f"Refusing to stage non-finite coordinates {point.as_tuple()}")
    return list(point.as_tuple())


class JsonDrawingStore:
    """In-memory drawing store that stages created objects in a single batch.

    Objects created through :meth:`create_line_segment` and
    :meth:`create_text` stay pending until :meth:`commit_batch`; an
    :meth:`abort_batch` drops them all.
    """

    def __init__(self, payload: Mapping[str, Any]) -> None:
        self._payload = copy.deepcopy(dict(payload))
        self._layout_names = [str(layout["name"]) for layout in self._payload.get("layouts", [])]
        duplicates = sorted(name for name, count in Counter(self._layout_names).items() if count > 1)
        if duplicates:
            raise DrawingStoreError(
                f"Layout names must be unique, found duplicates: {', '.join(duplicates)}"
            )
        self._pending: list[tuple[str, MutableMapping[str, Any]]] = []
        self._committed: dict[str, list[MutableMapping[str, Any]]] = {}
        self._counter = 0

    def list_non_model_layouts(self) -> Sequence[Layout]:
        return [
            Layout(name=str(layout["name"]), entities=list(layout.get("entities", [])))
            for layout in self._payload.get("layouts", [])
            if not is_model_space_layout(layout)
        ]

    def entity_bounds(self, entity: Any) -> BoundingBox | None:
        if not isinstance(entity, Mapping):
            return None
        return entity_bounds(entity)

    def _stage(self, layout: str, entity: MutableMapping[str, Any]) -> str:
        if layout not in self._layout_names:
            raise DrawingStoreError(f"Unknown layout {layout!r}")
        self._counter += 1
        handle = f"{layout}:{self._counter}"
        entity["handle"] = handle
        entity["layer"] = CUTLINE_LAYER
        self._pending.append((layout, entity))
        return handle

    def create_line_segment(self, layout: str, start: Point, end: Point, color: int) -> str:
        return self._stage(
            layout,
            {"type": "line", "start": _coords(start), "end": _coords(end), "color": int(color)},
        )

    def create_text(
        self,
        layout: str,
        position: Point,
        text: str,
        height: float,
        rotation: float,
        horizontal_align: str,
        vertical_align: str,
        alignment_anchor: Point,
    ) -> str:
        if not math.isfinite(height) or height <= 0:
            raise DrawingStoreError(f"Text height must be positive, received {height!r}")
        return self._stage(
            layout,
            {
                "type": "text",
                "position": _coords(position),
                "text": str(text),
                "height": float(height),
                "rotation": float(rotation),
                "horizontal_align": horizontal_align,
                "vertical_align": vertical_align,
                "align_point": _coords(alignment_anchor),
            },
        )

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def commit_batch(self) -> None:
        for layout, entity in self._pending:
            self._committed.setdefault(layout, []).append(entity)
        logger.debug("Committed %d staged object(s)", len(self._pending))
        self._pending = []

    def abort_batch(self) -> None:
        if self._pending:
            logger.info("Discarding %d staged object(s)", len(self._pending))
        self._pending = []

    def committed_entities(self, layout: str) -> list[Mapping[str, Any]]:
        return list(self._committed.get(layout, []))

    def to_payload(self) -> dict[str, Any]:
        """Return the drawing with every committed object appended to its layout."""

        payload = copy.deepcopy(self._payload)
        for layout in payload.get("layouts", []):
            created = self._committed.get(str(layout["name"]), [])
            if created:
                layout.setdefault("entities", []).extend(copy.deepcopy(created))
        return payload
