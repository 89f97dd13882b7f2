"""Example drawings showing continuation cutlines across sheets."""

from __future__ import annotations

from pathlib import Path

from cutlines.generator import CutlineGenerator, GenerationSummary
from cutlines.settings import CutlineSettings
from exporters.drawing_store import JsonDrawingStore
from exporters.dxf import write_dxf


def _frame(x0: float, y0: float, x1: float, y1: float) -> dict:
    return {
        "type": "polyline",
        "points": [[x0, y0], [x1, y0], [x1, y1], [x0, y1]],
        "closed": True,
    }


def example_pipeline_route(base_dir: Path) -> tuple[GenerationSummary, Path]:
    """Link a four-sheet route drawing with the default calibration."""

    drawing = {
        "name": "pipeline route",
        "layouts": [
            {"name": "Model", "model_space": True, "entities": [_frame(0, 0, 4200, 600)]},
            {"name": "Sheet 1", "entities": [_frame(0, 0, 1050, 600)]},
            {
                "name": "Sheet 2",
                "entities": [
                    _frame(0, 0, 1050, 600),
                    {"type": "circle", "center": [525, 300], "radius": 40},
                ],
            },
            {"name": "Sheet 3", "entities": [_frame(0, 0, 1050, 600)]},
            {
                "name": "Sheet 4",
                "entities": [
                    _frame(0, 0, 1050, 600),
                    {"type": "text", "position": [40, 40], "text": "END OF ROUTE"},
                ],
            },
        ],
    }

    store = JsonDrawingStore(drawing)
    summary = CutlineGenerator(store).generate_cutlines()
    return summary, write_dxf(base_dir / "pipeline_route.dxf", store.to_payload())


def example_compact_sheets(base_dir: Path) -> tuple[GenerationSummary, Path]:
    """Narrow sheets with a tighter offset and a custom reference label."""

    drawing = {
        "name": "compact detail",
        "layouts": [
            {"name": "D-01", "entities": [_frame(0, 0, 600, 420)]},
            {"name": "D-02", "entities": []},
            {"name": "D-03", "entities": [_frame(0, 0, 600, 420)]},
        ],
    }

    settings = CutlineSettings(offset=120.0, reference_template="MATCH LINE - SEE {name}")
    store = JsonDrawingStore(drawing)
    summary = CutlineGenerator(store, settings).generate_cutlines()
    return summary, write_dxf(base_dir / "compact_detail.dxf", store.to_payload())


if __name__ == "__main__":  # pragma: no cover - example script
    base = Path("exports/cutlines/examples")
    for name, (summary, path) in {
        "pipeline_route": example_pipeline_route(base),
        "compact": example_compact_sheets(base),
    }.items():
        print(name, "->", summary.status.value, summary.cutlines_created, "cutline(s)", str(path))
