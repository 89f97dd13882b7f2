"""Test helper utilities exposed for import convenience."""
from .drawings import drawing, rectangle, sheet, three_sheet_drawing

__all__ = [
    "drawing",
    "rectangle",
    "sheet",
    "three_sheet_drawing",
]
