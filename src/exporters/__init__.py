"""Drawing store and export utilities for generated cutlines."""

from .drawing_store import (
    CUTLINE_LAYER,
    DrawingStoreError,
    JsonDrawingStore,
    entity_bounds,
    is_model_space_layout,
)
from .dxf import write_dxf
from .preview import plot_cutline_preview

__all__ = [
    "CUTLINE_LAYER",
    "DrawingStoreError",
    "JsonDrawingStore",
    "entity_bounds",
    "is_model_space_layout",
    "plot_cutline_preview",
    "write_dxf",
]
