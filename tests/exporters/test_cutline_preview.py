"""Tests for the matplotlib sheet preview."""

from __future__ import annotations

from pathlib import Path

import pytest

from cutlines.generator import CutlineGenerator
from cutlines.settings import CutlineSettings
from exporters import preview
from exporters.drawing_store import JsonDrawingStore
from tests.helpers import drawing, sheet, three_sheet_drawing


def test_preview_requires_matplotlib(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(preview.importlib_util, "find_spec", lambda name: None)

    assert preview.plot_cutline_preview(three_sheet_drawing(), tmp_path) is None
    assert not (tmp_path / "cutline_preview.png").exists()


def test_preview_without_sheets_returns_none(tmp_path: Path) -> None:
    payload = drawing(sheet("Model", model_space=True))

    assert preview.plot_cutline_preview(payload, tmp_path) is None


def test_preview_renders_every_sheet(tmp_path: Path) -> None:
    pytest.importorskip("matplotlib")
    store = JsonDrawingStore(three_sheet_drawing())
    CutlineGenerator(store).generate_cutlines()

    path = preview.plot_cutline_preview(store.to_payload(), tmp_path / "preview")

    assert path == tmp_path / "preview" / "cutline_preview.png"
    assert path.stat().st_size > 0


@pytest.mark.parametrize(
    ("vertical_align", "expected"),
    [("baseline", "baseline"), ("bottom", "bottom"), ("middle", "center"), ("top", "top")],
)
def test_text_alignment_follows_the_entity(vertical_align: str, expected: str) -> None:
    entity = {"type": "text", "horizontal_align": "right", "vertical_align": vertical_align}

    assert preview._text_alignment(entity) == ("right", expected)


def test_text_alignment_defaults() -> None:
    assert preview._text_alignment({"type": "text"}) == ("left", "baseline")


def test_preview_renders_settings_alignment(tmp_path: Path) -> None:
    pytest.importorskip("matplotlib")
    store = JsonDrawingStore(three_sheet_drawing())
    settings = CutlineSettings(horizontal_align="left", vertical_align="middle")
    CutlineGenerator(store, settings).generate_cutlines()

    path = preview.plot_cutline_preview(store.to_payload(), tmp_path)

    assert path is not None and path.exists()
