"""Drive cutline generation against a host drawing store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Sequence

from .geometry import BoundingBox, Point
from .placement import CutlineSpec
from .sequencing import (
    InsufficientLayoutsError,
    Layout,
    LayoutOutcome,
    LayoutProcessingError,
    OutcomeStatus,
    sequence_layouts,
)
from .settings import DEFAULT_SETTINGS, CutlineSettings

__all__ = [
    "CutlinePersistenceError",
    "CutlineGenerator",
    "DrawingStore",
    "GenerationStatus",
    "GenerationSummary",
]

logger = logging.getLogger(__name__)


class DrawingStore(Protocol):
    """Protocol describing the host drawing behaviour the generator relies on."""

    def list_non_model_layouts(self) -> Sequence[Layout]:  # pragma: no cover - interface definition
        """Return the sheet layouts in processing order."""

    def entity_bounds(self, entity: Any) -> BoundingBox | None:  # pragma: no cover - interface
        """Return the extents of ``entity`` or ``None`` when it has none."""

    def create_line_segment(
        self, layout: str, start: Point, end: Point, color: int
    ) -> Any:  # pragma: no cover - interface definition
        """Stage a line on ``layout`` and return its handle."""

    def create_text(
        self,
        layout: str,
        position: Point,
        text: str,
        height: float,
        rotation: float,
        horizontal_align: str,
        vertical_align: str,
        alignment_anchor: Point,
    ) -> Any:  # pragma: no cover - interface definition
        """Stage a text object on ``layout`` and return its handle."""

    def commit_batch(self) -> None:  # pragma: no cover - interface definition
        """Persist every staged object."""

    def abort_batch(self) -> None:  # pragma: no cover - interface definition
        """Discard every staged object."""


class CutlinePersistenceError(RuntimeError):
    """Raised when the drawing store rejects a create or commit call."""

    def __init__(self, layout: str | None, step: str) -> None:
        self.layout = layout
        self.step = step
        where = f" on layout {layout!r}" if layout else ""
        super().__init__(f"Drawing store failed during {step}{where}")


class GenerationStatus(str, Enum):
    COMPLETED = "completed"
    INSUFFICIENT_LAYOUTS = "insufficient_layouts"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class GenerationSummary:
    """Result reported back to the caller of :meth:`CutlineGenerator.generate_cutlines`."""

    status: GenerationStatus
    layouts_processed: int = 0
    cutlines_created: int = 0
    layouts_skipped: int = 0
    outcomes: tuple[LayoutOutcome, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not GenerationStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status.value,
            "layouts_processed": self.layouts_processed,
            "cutlines_created": self.cutlines_created,
            "layouts_skipped": self.layouts_skipped,
            "layouts": [outcome.to_dict() for outcome in self.outcomes],
        }
        if self.error:
            payload["error"] = self.error
        return payload


class CutlineGenerator:
    """Compute cutlines for every sheet and commit them as one batch."""

    def __init__(self, store: DrawingStore, settings: CutlineSettings | None = None) -> None:
        self.store = store
        self.settings = settings or DEFAULT_SETTINGS

    def generate_cutlines(self) -> GenerationSummary:
        try:
            layouts = list(self.store.list_non_model_layouts())
        except Exception as exc:
            return self._fail(CutlinePersistenceError(None, "layout enumeration"), cause=exc)
        try:
            outcomes = sequence_layouts(layouts, self.store.entity_bounds, self.settings)
        except InsufficientLayoutsError as exc:
            logger.warning("%s", exc)
            return GenerationSummary(status=GenerationStatus.INSUFFICIENT_LAYOUTS, error=str(exc))
        except LayoutProcessingError as exc:
            return self._fail(exc)

        created = 0
        try:
            for outcome in outcomes:
                if outcome.status is not OutcomeStatus.CREATED:
                    continue
                for spec in outcome.cutlines:
                    self._emit(outcome.layout, spec)
                    created += 1
            try:
                self.store.commit_batch()
            except Exception as exc:
                raise CutlinePersistenceError(None, "commit") from exc
        except CutlinePersistenceError as exc:
            return self._fail(exc)

        skipped = sum(1 for outcome in outcomes if outcome.status is OutcomeStatus.SKIPPED)
        logger.info(
            "Created %d cutline(s) across %d layout(s); %d skipped",
            created,
            len(outcomes) - skipped,
            skipped,
        )
        return GenerationSummary(
            status=GenerationStatus.COMPLETED,
            layouts_processed=len(outcomes),
            cutlines_created=created,
            layouts_skipped=skipped,
            outcomes=tuple(outcomes),
        )

    def _emit(self, layout: str, spec: CutlineSpec) -> None:
        settings = self.settings
        try:
            self.store.create_line_segment(
                layout, spec.segment_start, spec.segment_end, settings.line_color
            )
        except Exception as exc:
            raise CutlinePersistenceError(layout, "line") from exc
        try:
            self.store.create_text(
                layout,
                spec.annotation_anchor,
                spec.annotation_text,
                settings.text_height,
                spec.annotation_rotation,
                settings.horizontal_align,
                settings.vertical_align,
                spec.annotation_anchor,
            )
        except Exception as exc:
            raise CutlinePersistenceError(layout, "text") from exc

    def _fail(self, exc: Exception, cause: BaseException | None = None) -> GenerationSummary:
        cause = cause or exc.__cause__
        message = f"{exc}: {cause}" if cause is not None else str(exc)
        logger.error("Cutline generation aborted: %s", message)
        try:
            self.store.abort_batch()
        except Exception:
            logger.exception("Drawing store failed to abort the pending batch")
        return GenerationSummary(status=GenerationStatus.FAILED, error=message)
