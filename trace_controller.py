"""
Gesture handling for one level: turns input events into traced paths,
validates them on release and commits the ones that match a permitted shape.

All calls are expected on a single thread. Outcomes are returned as values
(ShapeCommit / TraceFailure) and also reported to a TraceListener.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from goal_coverage import CoverageTracker
from grid_index import GridIndex
from shape_matcher import validate_shape
from templates import PERMITTED_SHAPES
from trace_types import GridCell, Level, Shape, TemplateShape, Vec2

logger = logging.getLogger(__name__)

__all__ = [
    "FailureReason",
    "ShapeCommit",
    "TraceController",
    "TraceFailure",
    "TraceListener",
    "TraceMode",
    "TraceRules",
]


class TraceMode(Enum):
    """What the single active gesture is doing."""

    IDLE = "idle"
    DRAWING = "drawing"
    PINCHING = "pinching"  # Two touches, camera zoom owns the gesture


class FailureReason(Enum):
    """Reason a trace event did not produce a commit."""

    INVALID_PATH = "invalid_path"  # Fewer than 2 cells, or no trace to act on
    NO_TEMPLATE_MATCH = "no_template_match"  # Traced, but not a permitted shape
    OUT_OF_BOUNDS = "out_of_bounds"  # Position did not snap to any cell


@dataclass(frozen=True)
class TraceFailure:
    """A recoverable, local failure. No committed state was changed."""

    reason: FailureReason
    details: str | None = None


@dataclass(frozen=True)
class ShapeCommit:
    """A trace that matched a template and is now permanent."""

    template: TemplateShape
    path: Shape
    newly_claimed: frozenset[GridCell]


@dataclass(frozen=True)
class TraceRules:
    """Tunables governing snapping and matching."""

    snap_radius_factor: float = 0.3  # Fraction of cell spacing
    catalogue: tuple[TemplateShape, ...] = PERMITTED_SHAPES


class TraceListener:
    """
    Presentation hooks. Subclass and override the ones you need.
    """

    def on_path_preview(self, cells: Shape) -> None:
        pass

    def on_shape_committed(self, template_name: str, path: Shape) -> None:
        pass

    def on_shape_rejected(self) -> None:
        pass

    def on_goals_claimed(self, cells: frozenset[GridCell]) -> None:
        pass

    def on_trace_cancelled(self) -> None:
        pass

    def on_level_complete(self, stars: int) -> None:
        pass


class TraceController:
    """Owns the in-progress trace, committed paths and goal coverage of a level."""

    def __init__(
        self,
        level: Level,
        listener: TraceListener | None = None,
        rules: TraceRules | None = None,
    ) -> None:
        self.level = level
        self.index = GridIndex(level)
        self.listener = listener if listener is not None else TraceListener()
        self.rules = rules if rules is not None else TraceRules()

        self.coverage = CoverageTracker(level.goal_cells)
        self._committed: list[Shape] = []
        self._path: list[GridCell] = []
        self._mode = TraceMode.IDLE
        self._cursor: Vec2 | None = None
        self._touch_ids: set[int] = set()
        self._trace_touch: int | None = None  # Touch that owns the trace; None = pointer
        self._completed = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> TraceMode:
        return self._mode

    @property
    def is_drawing(self) -> bool:
        return self._mode is TraceMode.DRAWING

    @property
    def current_path(self) -> Shape:
        return tuple(self._path)

    @property
    def cursor(self) -> Vec2 | None:
        """End of the preview line: last snapped point or raw position."""
        return self._cursor

    @property
    def committed_paths(self) -> tuple[Shape, ...]:
        return tuple(self._committed)

    @property
    def claimed_goals(self) -> frozenset[GridCell]:
        return self.coverage.claimed

    @property
    def shape_count(self) -> int:
        return len(self._committed)

    @property
    def stars(self) -> int:
        return self.level.star_thresholds.stars_for(self.shape_count)

    @property
    def is_complete(self) -> bool:
        return self.coverage.is_complete

    @property
    def snap_radius(self) -> float:
        return self.level.cell_spacing * self.rules.snap_radius_factor

    # -------------------------------------------------------------------------
    # Trace events
    # -------------------------------------------------------------------------

    def begin_trace(self, pos: Vec2) -> TraceFailure | None:
        """
        Start a trace at pos.

        Ignored (returns INVALID_PATH, no listener call) when another gesture
        is active, pos lies outside the grid or nothing can be snapped to.
        """
        if self._mode is not TraceMode.IDLE:
            return TraceFailure(FailureReason.INVALID_PATH, f"gesture already active ({self._mode.value})")

        if self.index.cell_from_continuous_position(pos) is None:
            logger.debug("Trace start %s is outside the grid", pos)
            return TraceFailure(FailureReason.INVALID_PATH, "trace started outside the grid")

        point = self.index.snap(pos)
        if point is None:
            return TraceFailure(FailureReason.INVALID_PATH, "no interactable point to start from")

        self._path = [point.cell]
        self._cursor = point.world_position
        self._mode = TraceMode.DRAWING
        logger.debug("Trace started at %s", point.cell)

        self.listener.on_path_preview(self.current_path)
        return None

    def extend_trace(self, pos: Vec2) -> TraceFailure | None:
        """
        Extend the trace towards pos.

        A cell is appended only when pos snaps within the snap radius and the
        cell differs from the last one. Without a snap the raw position
        becomes the preview cursor and OUT_OF_BOUNDS is returned.
        """
        if not self.is_drawing:
            return TraceFailure(FailureReason.INVALID_PATH, "no trace in progress")

        point = self.index.snap(pos, self.snap_radius)
        if point is None:
            self._cursor = pos
            self.listener.on_path_preview(self.current_path)
            return TraceFailure(FailureReason.OUT_OF_BOUNDS, f"{pos} did not snap to a cell")

        if point.cell != self._path[-1]:
            self._path.append(point.cell)
            logger.debug("Trace extended to %s (%d cells)", point.cell, len(self._path))
        self._cursor = point.world_position

        self.listener.on_path_preview(self.current_path)
        return None

    def end_trace(self, pos: Vec2 | None = None) -> ShapeCommit | TraceFailure:
        """
        Finish the trace, validate it and commit it if it matches.

        Args:
            pos: Release position; snapped without a radius limit and appended
                 if it lands on a new cell. None = release where the trace is.

        Returns:
            ShapeCommit on success, otherwise a TraceFailure. Failures leave
            committed paths and claimed goals untouched.
        """
        if not self.is_drawing:
            return TraceFailure(FailureReason.INVALID_PATH, "no trace in progress")

        if pos is not None:
            point = self.index.snap(pos)
            if point is not None and point.cell != self._path[-1]:
                self._path.append(point.cell)

        path = self.current_path
        self._clear_trace()

        if len(path) < 2:
            logger.debug("Discarding trace of %d cell(s)", len(path))
            self.listener.on_trace_cancelled()
            return TraceFailure(FailureReason.INVALID_PATH, "a shape needs at least 2 cells")

        template = validate_shape(path, self.rules.catalogue)
        if template is None:
            logger.info("Rejected trace of %d cells: no permitted shape", len(path))
            self.listener.on_shape_rejected()
            return TraceFailure(FailureReason.NO_TEMPLATE_MATCH)

        return self._commit(template, path)

    def cancel_trace(self) -> None:
        """Discard the in-progress trace without matching or committing."""
        if not self.is_drawing:
            return
        logger.debug("Trace of %d cell(s) cancelled", len(self._path))
        self._clear_trace()
        self.listener.on_trace_cancelled()

    def _clear_trace(self) -> None:
        self._path = []
        self._cursor = None
        self._trace_touch = None
        self._mode = TraceMode.IDLE

    def _commit(self, template: TemplateShape, path: Shape) -> ShapeCommit:
        self._committed.append(path)
        newly_claimed = self.coverage.claim_goals_on_path(path)
        logger.info(
            "Committed %s (%d cells), shape count %d",
            template.name,
            len(path),
            self.shape_count,
        )

        self.listener.on_shape_committed(template.name, path)
        if newly_claimed:
            self.listener.on_goals_claimed(newly_claimed)

        if self.coverage.is_complete and not self._completed:
            self._completed = True
            logger.info("Level complete with %d shape(s): %d star(s)", self.shape_count, self.stars)
            self.listener.on_level_complete(self.stars)

        return ShapeCommit(template, path, newly_claimed)

    # -------------------------------------------------------------------------
    # Pointer input (single pointer, mouse-like)
    # -------------------------------------------------------------------------

    def pointer_down(self, pos: Vec2) -> TraceFailure | None:
        return self.begin_trace(pos)

    def pointer_move(self, pos: Vec2) -> TraceFailure | None:
        if not self._pointer_owns_trace():
            return None
        return self.extend_trace(pos)

    def pointer_up(self, pos: Vec2) -> ShapeCommit | TraceFailure | None:
        if not self._pointer_owns_trace():
            return None
        return self.end_trace(pos)

    def _pointer_owns_trace(self) -> bool:
        return self.is_drawing and self._trace_touch is None

    # -------------------------------------------------------------------------
    # Touch input (drawing and pinch are mutually exclusive)
    # -------------------------------------------------------------------------

    def touch_start(self, touch_id: int, pos: Vec2) -> TraceFailure | None:
        """
        Register a touch. The first touch starts drawing; a second one
        switches to pinch, cancelling any trace without committing it.

        Touches arriving while the pointer is drawing are not registered.
        """
        if self._pointer_owns_trace():
            return TraceFailure(FailureReason.INVALID_PATH, "pointer trace already active")

        self._touch_ids.add(touch_id)
        count = len(self._touch_ids)

        if count == 1:
            failure = self.begin_trace(pos)
            if failure is None:
                self._trace_touch = touch_id
            return failure
        if count == 2:
            self.cancel_trace()
            self._mode = TraceMode.PINCHING
            logger.debug("Pinch started")
        return None

    def touch_move(self, touch_id: int, pos: Vec2) -> TraceFailure | None:
        if touch_id != self._trace_touch or not self.is_drawing:
            return None
        return self.extend_trace(pos)

    def touch_end(self, touch_id: int, pos: Vec2) -> ShapeCommit | TraceFailure | None:
        if touch_id not in self._touch_ids:
            return None
        self._touch_ids.discard(touch_id)

        if touch_id == self._trace_touch and self.is_drawing:
            return self.end_trace(pos)
        self._end_pinch_if_released()
        return None

    def touch_cancel(self, touch_id: int) -> None:
        if touch_id not in self._touch_ids:
            return
        self._touch_ids.discard(touch_id)

        if touch_id == self._trace_touch:
            self.cancel_trace()
        self._end_pinch_if_released()

    def _end_pinch_if_released(self) -> None:
        # The remaining finger does not resume drawing
        if self._mode is TraceMode.PINCHING and len(self._touch_ids) < 2:
            self._mode = TraceMode.IDLE
            logger.debug("Pinch ended")

    # -------------------------------------------------------------------------
    # Level lifecycle
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Reload the level: forget committed paths, claimed goals and gestures."""
        self._committed.clear()
        self.coverage.reset()
        self._touch_ids.clear()
        self._clear_trace()
        self._completed = False
        logger.info("Level reset")
