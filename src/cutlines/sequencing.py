"""Walk an ordered layout list and decide which cutlines each sheet needs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from .extents import BoundsQuery, resolve_layout_extents
from .geometry import BoundingBox
from .placement import CutlineRole, CutlineSpec, place_cutlines
from .settings import DEFAULT_SETTINGS, CutlineSettings

__all__ = [
    "ExtentResolutionError",
    "InsufficientLayoutsError",
    "Layout",
    "LayoutOutcome",
    "LayoutProcessingError",
    "OutcomeStatus",
    "SkipReason",
    "sequence_layouts",
]

logger = logging.getLogger(__name__)


class LayoutProcessingError(RuntimeError):
    """Raised when a layout cannot be measured or given its cutlines."""

    def __init__(self, layout: str, step: str) -> None:
        self.layout = layout
        self.step = step
        super().__init__(f"Failed during {step} of layout {layout!r}")


class ExtentResolutionError(LayoutProcessingError):
    """Raised when the host fails while measuring a layout."""

    def __init__(self, layout: str) -> None:
        super().__init__(layout, "extent resolution")


class InsufficientLayoutsError(ValueError):
    """Raised when fewer than two sheet layouts are available to link."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"At least two non-model layouts are required to generate cutlines, found {count}."
        )


@dataclass(slots=True)
class Layout:
    """A sheet of the drawing and the opaque entities drawn on it."""

    name: str
    entities: Sequence[Any] = field(default_factory=list)
    is_model_space: bool = False


class OutcomeStatus(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    EMPTY_LAYOUT = "empty_layout"


@dataclass(frozen=True, slots=True)
class LayoutOutcome:
    """What happened to one layout during sequencing."""

    layout: str
    status: OutcomeStatus
    reason: SkipReason | None = None
    bounds: BoundingBox | None = None
    cutlines: tuple[CutlineSpec, ...] = ()

    @classmethod
    def skipped(cls, layout: str, reason: SkipReason) -> "LayoutOutcome":
        return cls(layout=layout, status=OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def created(
        cls, layout: str, bounds: BoundingBox, cutlines: Sequence[CutlineSpec]
    ) -> "LayoutOutcome":
        return cls(
            layout=layout,
            status=OutcomeStatus.CREATED,
            bounds=bounds,
            cutlines=tuple(cutlines),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"layout": self.layout, "status": self.status.value}
        if self.reason is not None:
            payload["reason"] = self.reason.value
        if self.cutlines:
            payload["cutlines"] = [spec.to_dict() for spec in self.cutlines]
        return payload


def _cutlines_for_position(
    index: int,
    names: Sequence[str],
    box: BoundingBox,
    settings: CutlineSettings,
) -> list[CutlineSpec]:
    last = len(names) - 1
    if index == 0:
        return place_cutlines(
            box,
            CutlineRole.END,
            settings.reference_text(names[1]),
            is_lead_cutline=True,
            settings=settings,
        )
    if index == last:
        return place_cutlines(
            box,
            CutlineRole.START,
            settings.reference_text(names[index - 1]),
            settings=settings,
        )
    return [
        *place_cutlines(
            box, CutlineRole.START, settings.reference_text(names[index - 1]), settings=settings
        ),
        *place_cutlines(
            box, CutlineRole.END, settings.reference_text(names[index + 1]), settings=settings
        ),
    ]


def sequence_layouts(
    layouts: Sequence[Layout],
    bounds_of: BoundsQuery,
    settings: CutlineSettings = DEFAULT_SETTINGS,
) -> list[LayoutOutcome]:
    """Compute the cutlines for every sheet in ``layouts``.

    Model-space layouts are dropped before indexing, so "first" and "last"
    refer to positions among the sheets only. Empty sheets are skipped but
    still count as neighbours when naming the adjacent sheet.
    """

    sheets = [layout for layout in layouts if not layout.is_model_space]
    if len(sheets) < 2:
        raise InsufficientLayoutsError(len(sheets))

    names = [sheet.name for sheet in sheets]
    outcomes: list[LayoutOutcome] = []
    for index, sheet in enumerate(sheets):
        try:
            box = resolve_layout_extents(sheet.entities, bounds_of)
        except Exception as exc:
            raise ExtentResolutionError(sheet.name) from exc
        if box is None:
            logger.warning("Layout %r has no boundable entities; skipping", sheet.name)
            outcomes.append(LayoutOutcome.skipped(sheet.name, SkipReason.EMPTY_LAYOUT))
            continue
        try:
            specs = _cutlines_for_position(index, names, box, settings)
        except Exception as exc:
            raise LayoutProcessingError(sheet.name, "placement") from exc
        logger.debug("Layout %r receives %d cutline(s)", sheet.name, len(specs))
        outcomes.append(LayoutOutcome.created(sheet.name, box, specs))
    return outcomes
