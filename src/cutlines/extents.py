"""Resolve the drawable extents of a single layout."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .geometry import BoundingBox, merge_boxes

__all__ = ["BoundsQuery", "resolve_layout_extents"]

logger = logging.getLogger(__name__)

BoundsQuery = Callable[[Any], BoundingBox | None]


def resolve_layout_extents(
    entities: Iterable[Any],
    bounds_of: BoundsQuery,
) -> BoundingBox | None:
    """Return the box enclosing every boundable entity, or ``None`` if empty.

    ``bounds_of`` is the host's per-entity extent query. Entities it cannot
    bound (``None`` or non-finite coordinates) are skipped.
    """

    extents: BoundingBox | None = None
    skipped = 0
    for entity in entities:
        box = bounds_of(entity)
        if box is None or not box.is_finite():
            skipped += 1
            continue
        extents = merge_boxes(extents, box)
    if skipped:
        logger.debug("Skipped %d entities without usable bounds", skipped)
    return extents
