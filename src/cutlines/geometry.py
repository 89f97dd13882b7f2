"""Point and bounding box primitives used by cutline placement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Sequence

import numpy as np

__all__ = [
    "Point",
    "BoundingBox",
    "merge_boxes",
    "accumulate_boxes",
]


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable position in drawing coordinates."""

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Point":
        coords = [float(value) for value in values]
        if len(coords) == 2:
            coords.append(0.0)
        if len(coords) != 3:
            msg = f"Points require two or three coordinates, received {len(coords)}."
            raise ValueError(msg)
        return cls(*coords)

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Point":
        return Point(self.x + dx, self.y + dy, self.z + dz)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def is_finite(self) -> bool:
        return all(math.isfinite(value) for value in self.as_tuple())


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box spanning ``min`` to ``max``."""

    min: Point
    max: Point

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z:
            msg = f"Bounding box minimum {self.min} exceeds maximum {self.max}."
            raise ValueError(msg)

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "BoundingBox":
        """Return the tightest box around ``points`` (2D or 3D coordinates)."""

        rows = [Point.from_sequence(point).as_tuple() for point in points]
        if not rows:
            msg = "At least one point is required to build a bounding box."
            raise ValueError(msg)
        array = np.asarray(rows, dtype=float)
        low = array.min(axis=0)
        high = array.max(axis=0)
        return cls(Point(*map(float, low)), Point(*map(float, high)))

    @property
    def center(self) -> Point:
        return Point(
            (self.min.x + self.max.x) / 2.0,
            (self.min.y + self.max.y) / 2.0,
            (self.min.z + self.max.z) / 2.0,
        )

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def is_finite(self) -> bool:
        return self.min.is_finite() and self.max.is_finite()


def merge_boxes(existing: BoundingBox | None, next_box: BoundingBox) -> BoundingBox:
    """Merge ``next_box`` into ``existing`` using component-wise min/max."""

    if existing is None:
        return next_box
    return BoundingBox(
        Point(
            min(existing.min.x, next_box.min.x),
            min(existing.min.y, next_box.min.y),
            min(existing.min.z, next_box.min.z),
        ),
        Point(
            max(existing.max.x, next_box.max.x),
            max(existing.max.y, next_box.max.y),
            max(existing.max.z, next_box.max.z),
        ),
    )


def accumulate_boxes(boxes: Iterable[BoundingBox | None]) -> BoundingBox | None:
    """Fold ``boxes`` into one enclosing box, ignoring ``None`` entries."""

    return reduce(
        lambda acc, box: merge_boxes(acc, box),
        (box for box in boxes if box is not None),
        None,
    )
