"""Quick-look rendering of sheets and their cutlines."""
from __future__ import annotations

from importlib import util as importlib_util
from pathlib import Path
from typing import Any, Mapping

from .drawing_store import CUTLINE_LAYER, is_model_space_layout

__all__ = ["plot_cutline_preview"]


# matplotlib calls the DXF "middle" vertical alignment "center"
_MATPLOTLIB_VALIGN = {"middle": "center"}


def _text_alignment(entity: Mapping[str, Any]) -> tuple[str, str]:
    horizontal = str(entity.get("horizontal_align", "left"))
    vertical = str(entity.get("vertical_align", "baseline"))
    return horizontal, _MATPLOTLIB_VALIGN.get(vertical, vertical)


def plot_cutline_preview(payload: Mapping[str, Any], output_dir: Path) -> Path | None:
    """Render one panel per sheet if matplotlib is available."""

    if importlib_util.find_spec("matplotlib") is None:
        return None

    sheets = [layout for layout in payload.get("layouts", []) if not is_model_space_layout(layout)]
    if not sheets:
        return None

    import matplotlib

    matplotlib.use("Agg")
    from matplotlib import pyplot as plt
    from matplotlib.patches import Arc, Circle

    output_dir.mkdir(parents=True, exist_ok=True)
    fig, axes = plt.subplots(1, len(sheets), figsize=(4.5 * len(sheets), 4.0), squeeze=False)
    for ax, sheet in zip(axes[0], sheets):
        for entity in sheet.get("entities", []):
            kind = str(entity.get("type", "")).lower()
            is_cutline = entity.get("layer") == CUTLINE_LAYER
            color = "#d62728" if is_cutline else "#404040"
            if kind == "line":
                (x0, y0, *_), (x1, y1, *_) = entity["start"], entity["end"]
                ax.plot([x0, x1], [y0, y1], color=color, linewidth=1.6 if is_cutline else 0.8)
            elif kind in {"polyline", "lwpolyline"} and entity.get("points"):
                points = list(entity["points"])
                if entity.get("closed"):
                    points.append(points[0])
                ax.plot([p[0] for p in points], [p[1] for p in points], color=color, linewidth=0.8)
            elif kind == "circle":
                center = entity["center"]
                ax.add_patch(
                    Circle((center[0], center[1]), entity["radius"], fill=False, color=color, linewidth=0.8)
                )
            elif kind == "arc":
                center = entity["center"]
                diameter = 2.0 * float(entity["radius"])
                ax.add_patch(
                    Arc(
                        (center[0], center[1]),
                        diameter,
                        diameter,
                        theta1=float(entity.get("start_angle", 0.0)),
                        theta2=float(entity.get("end_angle", 360.0)),
                        color=color,
                        linewidth=0.8,
                    )
                )
            elif kind == "text":
                position = entity.get("align_point") or entity["position"]
                horizontal, vertical = _text_alignment(entity)
                ax.text(
                    position[0],
                    position[1],
                    str(entity.get("text", "")),
                    rotation=float(entity.get("rotation", 0.0)),
                    ha=horizontal,
                    va=vertical,
                    fontsize=6,
                    color=color,
                )
        ax.set_title(str(sheet["name"]))
        ax.set_aspect("equal", adjustable="datalim")
        ax.autoscale_view()
        ax.grid(linestyle="--", alpha=0.3)

    fig.tight_layout()
    output_path = output_dir / "cutline_preview.png"
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
