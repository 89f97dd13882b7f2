"""Place cutline segments and their annotations inside a layout box."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .geometry import BoundingBox, Point
from .settings import DEFAULT_SETTINGS, CutlineSettings

__all__ = [
    "CutlineRole",
    "CutlineSpec",
    "end_cutline_x",
    "place_cutlines",
]


class CutlineRole(str, Enum):
    """Which edge of the sheet a cutline marks."""

    START = "start"
    END = "end"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class CutlineSpec:
    """A cutline segment together with its annotation placement."""

    role: CutlineRole
    segment_start: Point
    segment_end: Point
    annotation_text: str
    annotation_anchor: Point
    annotation_rotation: float
    is_lead_cutline: bool = False

    @property
    def midpoint(self) -> Point:
        return Point(
            (self.segment_start.x + self.segment_end.x) / 2.0,
            (self.segment_start.y + self.segment_end.y) / 2.0,
            (self.segment_start.z + self.segment_end.z) / 2.0,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "role": self.role.value,
            "segment_start": list(self.segment_start.as_tuple()),
            "segment_end": list(self.segment_end.as_tuple()),
            "annotation_text": self.annotation_text,
            "annotation_anchor": list(self.annotation_anchor.as_tuple()),
            "annotation_rotation": self.annotation_rotation,
            "is_lead_cutline": self.is_lead_cutline,
        }


def end_cutline_x(box: BoundingBox, settings: CutlineSettings = DEFAULT_SETTINGS) -> float:
    """Return the END cutline abscissa, clamped away from the left edge.

    Boxes narrower than ``2 * min_clearance + offset`` collapse onto
    ``box.min.x + min_clearance``.
    """

    candidate = box.max.x - settings.offset
    floor = box.min.x + settings.min_clearance
    if candidate - settings.min_clearance > floor:
        return candidate
    return floor


def _vertical_cutline(
    role: CutlineRole,
    x: float,
    box: BoundingBox,
    bias: float,
    text: str,
    is_lead: bool,
    settings: CutlineSettings,
) -> CutlineSpec:
    center_y = (box.min.y + box.max.y) / 2.0
    half = settings.cutline_length / 2.0
    start = Point(x, center_y - half + bias, 0.0)
    end = Point(x, center_y + half + bias, 0.0)
    text_dx = settings.lead_text_offset if is_lead else settings.text_offset
    midpoint = Point(x, (start.y + end.y) / 2.0, 0.0)
    return CutlineSpec(
        role=role,
        segment_start=start,
        segment_end=end,
        annotation_text=text,
        annotation_anchor=midpoint.offset(text_dx, settings.text_rise),
        annotation_rotation=settings.text_rotation,
        is_lead_cutline=is_lead,
    )


def place_cutlines(
    box: BoundingBox,
    role: CutlineRole,
    annotation_text: str,
    is_lead_cutline: bool = False,
    settings: CutlineSettings = DEFAULT_SETTINGS,
) -> list[CutlineSpec]:
    """Compute the cutline(s) for ``role`` inside ``box``.

    ``BOTH`` yields a START followed by an END cutline; the END half of a
    ``BOTH`` placement is never a lead cutline.
    """

    if box is None:
        msg = "Cutlines can only be placed inside a resolved bounding box."
        raise ValueError(msg)

    role = CutlineRole(role)
    specs: list[CutlineSpec] = []
    if role in (CutlineRole.START, CutlineRole.BOTH):
        specs.append(
            _vertical_cutline(
                CutlineRole.START,
                box.min.x + settings.offset,
                box,
                settings.start_bias,
                annotation_text,
                is_lead_cutline,
                settings,
            )
        )
    if role in (CutlineRole.END, CutlineRole.BOTH):
        specs.append(
            _vertical_cutline(
                CutlineRole.END,
                end_cutline_x(box, settings),
                box,
                settings.end_bias,
                annotation_text,
                is_lead_cutline and role is CutlineRole.END,
                settings,
            )
        )
    return specs
