"""Tests for cutline placement inside a layout box."""

from __future__ import annotations

import numpy as np
import pytest

from cutlines.geometry import BoundingBox, Point
from cutlines.placement import CutlineRole, end_cutline_x, place_cutlines
from cutlines.settings import DEFAULT_SETTINGS, CutlineSettings

SHEET = BoundingBox(Point(0, 0, 0), Point(1000, 500, 0))


def test_start_cutline_geometry() -> None:
    (spec,) = place_cutlines(SHEET, CutlineRole.START, "refer - A")

    assert spec.role is CutlineRole.START
    assert spec.segment_start == Point(280.0, 125.0, 0.0)
    assert spec.segment_end == Point(280.0, 405.0, 0.0)
    assert spec.annotation_anchor == Point(285.0, 270.0, 0.0)
    assert spec.annotation_rotation == 90.0
    assert spec.annotation_text == "refer - A"
    assert not spec.is_lead_cutline


def test_end_cutline_geometry() -> None:
    (spec,) = place_cutlines(SHEET, CutlineRole.END, "refer - C")

    assert spec.role is CutlineRole.END
    assert spec.segment_start == Point(720.0, 120.0, 0.0)
    assert spec.segment_end == Point(720.0, 400.0, 0.0)
    assert spec.annotation_anchor == Point(725.0, 265.0, 0.0)


def test_segments_keep_their_distinct_vertical_bias() -> None:
    start, end = place_cutlines(SHEET, CutlineRole.BOTH, "refer")
    center_y = SHEET.center.y

    assert start.midpoint.y - center_y == pytest.approx(15.0)
    assert end.midpoint.y - center_y == pytest.approx(10.0)
    for spec in (start, end):
        assert spec.segment_end.y - spec.segment_start.y == pytest.approx(280.0)
        assert spec.segment_start.x == spec.segment_end.x


def test_lead_end_cutline_shifts_text_backwards() -> None:
    (spec,) = place_cutlines(SHEET, CutlineRole.END, "refer - B", is_lead_cutline=True)

    assert spec.is_lead_cutline
    assert spec.annotation_anchor.x - spec.midpoint.x == pytest.approx(-25.0)
    assert spec.annotation_anchor.y - spec.midpoint.y == pytest.approx(5.0)


def test_lead_start_cutline_shifts_text_backwards() -> None:
    (spec,) = place_cutlines(SHEET, CutlineRole.START, "refer", is_lead_cutline=True)

    assert spec.annotation_anchor.x - spec.midpoint.x == pytest.approx(-25.0)


def test_both_emits_start_then_end_and_never_leads_the_end() -> None:
    specs = place_cutlines(SHEET, CutlineRole.BOTH, "refer", is_lead_cutline=True)

    assert [spec.role for spec in specs] == [CutlineRole.START, CutlineRole.END]
    assert specs[0].is_lead_cutline
    assert not specs[1].is_lead_cutline
    assert specs[1].annotation_anchor.x - specs[1].midpoint.x == pytest.approx(5.0)


def test_role_accepts_plain_strings() -> None:
    (spec,) = place_cutlines(SHEET, "end", "refer")

    assert spec.role is CutlineRole.END


@pytest.mark.parametrize(
    ("width", "expected"),
    [
        (1000.0, 720.0),
        (781.0, 501.0),
        (780.0, 250.0),
        (600.0, 250.0),
        (100.0, 250.0),
        (0.0, 250.0),
    ],
)
def test_end_cutline_clearance(width: float, expected: float) -> None:
    box = BoundingBox(Point(0, 0), Point(width, 400))

    assert end_cutline_x(box) == expected


@pytest.mark.parametrize("seed", [0, 5, 17])
def test_clearance_invariant_over_random_boxes(seed: int) -> None:
    rng = np.random.default_rng(seed)
    threshold = 2 * DEFAULT_SETTINGS.min_clearance + DEFAULT_SETTINGS.offset
    for _ in range(200):
        min_x = float(rng.uniform(-10_000, 10_000))
        width = float(rng.uniform(0, 3 * threshold))
        box = BoundingBox(Point(min_x, 0), Point(min_x + width, 300))
        (spec,) = place_cutlines(box, CutlineRole.END, "refer")
        x = spec.segment_start.x
        if width >= threshold:
            assert x > box.min.x + DEFAULT_SETTINGS.min_clearance - 1e-6
        else:
            assert x == box.min.x + DEFAULT_SETTINGS.min_clearance


def test_custom_settings_are_honoured() -> None:
    settings = CutlineSettings(offset=100.0, cutline_length=50.0, start_bias=0.0, text_rotation=270.0)

    (spec,) = place_cutlines(SHEET, CutlineRole.START, "refer", settings=settings)

    assert spec.segment_start == Point(100.0, 225.0, 0.0)
    assert spec.segment_end == Point(100.0, 275.0, 0.0)
    assert spec.annotation_rotation == 270.0


def test_repeated_placement_is_identical() -> None:
    first = place_cutlines(SHEET, CutlineRole.BOTH, "refer")
    second = place_cutlines(SHEET, CutlineRole.BOTH, "refer")

    assert first == second
    assert [spec.to_dict() for spec in first] == [spec.to_dict() for spec in second]


def test_absent_box_is_rejected() -> None:
    with pytest.raises(ValueError):
        place_cutlines(None, CutlineRole.START, "refer")  # type: ignore[arg-type]
