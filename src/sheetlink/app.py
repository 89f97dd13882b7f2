"""High-level command helpers for running SheetLink."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

__all__ = ["build_cli", "check_drawing"]


def check_drawing(drawing: Path, settings: Path | None = None) -> int:
    """Validate a drawing (and optional settings file) without generating anything."""

    from cutlines.settings import load_settings
    from exporters.drawing_store import JsonDrawingStore
    from schemas.validators import SchemaValidationError, load_drawing

    try:
        payload = load_drawing(drawing)
        load_settings(settings)
        sheets = JsonDrawingStore(payload).list_non_model_layouts()
    except SchemaValidationError as exc:
        print(str(exc))
        return 2
    except (OSError, TypeError, ValueError) as exc:
        print(f"Invalid input: {exc}")
        return 2

    print(f"{drawing} is valid: {len(sheets)} sheet layout(s)")
    for sheet in sheets:
        print(f"  - {sheet.name} ({len(sheet.entities)} entities)")
    return 0


def build_cli(argv: Sequence[str] | None = None) -> int:
    import argparse

    from .pipelines.generate_cutlines import add_generate_arguments, run_from_args

    parser = argparse.ArgumentParser(description="SheetLink command launcher")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate",
        help="Place continuation cutlines on every sheet of a drawing",
    )
    add_generate_arguments(generate)

    validate = subparsers.add_parser(
        "validate",
        help="Check a drawing payload against the bundled schema",
    )
    validate.add_argument("--drawing", type=Path, required=True, help="Path to the drawing payload")
    validate.add_argument("--settings", type=Path, help="Optional settings file to check as well")

    args = parser.parse_args(argv)

    if args.command == "generate":
        return run_from_args(args)

    if args.command == "validate":
        return check_drawing(args.drawing, args.settings)

    parser.error(f"Unknown command: {args.command}")
    return 0
