"""Generate continuation cutlines for a drawing file and export the result."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from cutlines.generator import CutlineGenerator, GenerationStatus, GenerationSummary
from cutlines.settings import load_settings
from exporters.drawing_store import JsonDrawingStore
from exporters.dxf import write_dxf
from exporters.preview import plot_cutline_preview
from schemas.validators import SchemaValidationError, load_drawing

from ..logging_config import setup_logging

__all__ = [
    "CutlineRunResult",
    "SUPPORTED_FORMATS",
    "add_generate_arguments",
    "main",
    "run_cutline_generation",
    "run_from_args",
]

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "dxf")


@dataclass(frozen=True)
class CutlineRunResult:
    """Summary of a generation run plus the files it wrote."""

    summary: GenerationSummary
    summary_path: Path
    outputs: dict[str, Path] = field(default_factory=dict)


def _write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as stream:
        json.dump(payload, stream, indent=2)
    return path


def run_cutline_generation(
    drawing_path: Path,
    *,
    output_dir: Path | None = None,
    settings_path: Path | None = None,
    formats: Iterable[str] = SUPPORTED_FORMATS,
    preview: bool = False,
) -> CutlineRunResult:
    """Load ``drawing_path``, place cutlines on every sheet and export the drawing.

    Drawing exports are only written when the batch was committed; the
    summary JSON is written for every run.
    """

    requested = [fmt.lower() for fmt in formats]
    unsupported = sorted(set(requested) - set(SUPPORTED_FORMATS))
    if unsupported:
        raise ValueError(f"Unsupported export format(s): {', '.join(unsupported)}")

    drawing = load_drawing(drawing_path)
    settings = load_settings(settings_path)
    store = JsonDrawingStore(drawing)

    logger.info("Generating cutlines for %s", drawing_path)
    summary = CutlineGenerator(store, settings).generate_cutlines()

    stem = drawing_path.stem
    target_dir = output_dir or Path("outputs") / stem
    summary_path = _write_json(target_dir / f"{stem}_summary.json", summary.to_dict())

    outputs: dict[str, Path] = {}
    if summary.status is GenerationStatus.COMPLETED:
        payload = store.to_payload()
        for fmt in requested:
            path = target_dir / f"{stem}_cutlines.{fmt}"
            if fmt == "json":
                outputs[fmt] = _write_json(path, payload)
            elif fmt == "dxf":
                outputs[fmt] = write_dxf(path, payload)
        if preview:
            preview_path = plot_cutline_preview(payload, target_dir)
            if preview_path is None:
                logger.warning("matplotlib is not installed; skipping preview rendering")
            else:
                outputs["png"] = preview_path

    return CutlineRunResult(summary=summary, summary_path=summary_path, outputs=outputs)


def add_generate_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument(
        "--drawing", type=Path, required=True, help="Path to the drawing JSON/YAML payload"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Directory for generated files (default: outputs/<drawing name>)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Optional YAML/JSON file overriding the cutline calibration constants",
    )
    parser.add_argument(
        "--formats",
        nargs="+",
        choices=SUPPORTED_FORMATS,
        default=list(SUPPORTED_FORMATS),
        help="One or more export formats (default: json dxf).",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Render a PNG preview of every sheet (requires matplotlib).",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Verbosity of log output.",
    )
    parser.add_argument("--log-file", type=Path, help="Optional file receiving a copy of the log")
    return parser


def run_from_args(args: argparse.Namespace) -> int:
    setup_logging(
        level=getattr(logging, args.log_level),
        log_file=str(args.log_file) if args.log_file else None,
    )

    try:
        result = run_cutline_generation(
            args.drawing,
            output_dir=args.output,
            settings_path=args.settings,
            formats=args.formats,
            preview=args.preview,
        )
    except SchemaValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("Input loading failed", exc_info=True)
        print(f"Could not process {args.drawing}: {exc}", file=sys.stderr)
        return 2

    summary = result.summary
    if summary.status is GenerationStatus.FAILED:
        print(f"Cutline generation failed: {summary.error}", file=sys.stderr)
        return 1
    if summary.status is GenerationStatus.INSUFFICIENT_LAYOUTS:
        print(f"No cutlines created: {summary.error}")
        return 0

    for outcome in summary.outcomes:
        if outcome.reason is not None:
            print(f"{outcome.layout}: skipped ({outcome.reason.value})")
        else:
            print(f"{outcome.layout}: {len(outcome.cutlines)} cutline(s)")
    print(
        f"Created {summary.cutlines_created} cutline(s) on "
        f"{summary.layouts_processed - summary.layouts_skipped} layout(s); "
        f"{summary.layouts_skipped} skipped"
    )
    for fmt, path in result.outputs.items():
        print(f"Wrote {fmt.upper()} to {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Add continuation cutlines to every sheet of a drawing."
    )
    add_generate_arguments(parser)
    return run_from_args(parser.parse_args(argv))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
