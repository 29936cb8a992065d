"""
Spatial lookup between continuous positions and lattice cells.

The grid is laid out centered on the origin: cell (row, col) sits at
x = -half_width + col * spacing, y = -half_height + row * spacing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from trace_types import GridCell, GridPoint, Level, Vec2

logger = logging.getLogger(__name__)

__all__ = ["CellSnap", "GridIndex", "NearestPoint"]


@dataclass(frozen=True)
class NearestPoint:
    """Result of a nearest-interactable-point query."""

    point: GridPoint
    distance: float


@dataclass(frozen=True)
class CellSnap:
    """A continuous position rounded to its nearest in-bounds lattice cell."""

    cell: GridCell
    distance_to_snap: float


class GridIndex:
    """
    Lookup service over the materialized points of one level.

    Every lattice cell is materialized as a GridPoint once, at construction.
    """

    def __init__(self, level: Level) -> None:
        self.level = level
        self._half_width = (level.cols - 1) * level.cell_spacing / 2
        self._half_height = (level.rows - 1) * level.cell_spacing / 2

        self._points: dict[GridCell, GridPoint] = {}
        for row in range(level.rows):
            for col in range(level.cols):
                cell = GridCell(row, col)
                self._points[cell] = GridPoint(
                    cell=cell,
                    world_position=self.world_position(cell),
                    is_interactable=cell in level.interactable_cells,
                    is_goal=cell in level.goal_cells,
                )

        self._interactable = [p for p in self._points.values() if p.is_interactable]
        logger.debug(
            "Indexed %dx%d grid: %d interactable, %d goals",
            level.rows,
            level.cols,
            len(self._interactable),
            len(level.goal_cells),
        )

    # -------------------------------------------------------------------------
    # Cell properties
    # -------------------------------------------------------------------------

    @property
    def points(self) -> list[GridPoint]:
        return list(self._points.values())

    @property
    def interactable_points(self) -> list[GridPoint]:
        return list(self._interactable)

    @property
    def goal_points(self) -> list[GridPoint]:
        return [p for p in self._points.values() if p.is_goal]

    def in_bounds(self, cell: GridCell) -> bool:
        return self.level.in_bounds(cell)

    def point(self, cell: GridCell) -> GridPoint | None:
        return self._points.get(cell)

    def is_interactable(self, cell: GridCell) -> bool:
        point = self._points.get(cell)
        return point is not None and point.is_interactable

    def is_goal(self, cell: GridCell) -> bool:
        point = self._points.get(cell)
        return point is not None and point.is_goal

    def world_position(self, cell: GridCell) -> Vec2:
        spacing = self.level.cell_spacing
        return Vec2(
            -self._half_width + cell.col * spacing,
            -self._half_height + cell.row * spacing,
        )

    # -------------------------------------------------------------------------
    # Position queries
    # -------------------------------------------------------------------------

    def nearest_interactable_point(self, pos: Vec2) -> NearestPoint | None:
        """
        Find the interactable point closest to pos (Euclidean distance).

        Returns None when the level has no interactable points. Ties keep the
        first point in row-major order.
        """
        best: NearestPoint | None = None
        for point in self._interactable:
            distance = pos.distance_to(point.world_position)
            if best is None or distance < best.distance:
                best = NearestPoint(point, distance)
        return best

    def point_at(self, pos: Vec2) -> GridPoint | None:
        """Find the interactable point whose world position equals pos exactly."""
        for point in self._interactable:
            if point.world_position == pos:
                return point
        return None

    def cell_from_continuous_position(self, pos: Vec2) -> CellSnap | None:
        """
        Round a continuous position to the nearest lattice cell.

        Each axis is divided by the cell spacing and rounded half up. Returns
        None if the rounded cell lies outside the grid.
        """
        spacing = self.level.cell_spacing
        col = math.floor((pos.x + self._half_width) / spacing + 0.5)
        row = math.floor((pos.y + self._half_height) / spacing + 0.5)
        cell = GridCell(row, col)

        if not self.in_bounds(cell):
            return None

        return CellSnap(cell, pos.distance_to(self.world_position(cell)))

    def snap(self, pos: Vec2, max_distance: float | None = None) -> GridPoint | None:
        """
        Snap a continuous position to an interactable point.

        Tries, in order: an exact world-position hit, the rounded lattice cell
        (when interactable), then the nearest interactable point. The last two
        are only accepted within max_distance (None = unlimited).

        Args:
            pos: Continuous position in the grid's coordinate space
            max_distance: Snap radius, or None for no limit

        Returns:
            The snapped GridPoint, or None if nothing is close enough
        """
        exact = self.point_at(pos)
        if exact is not None:
            return exact

        def close_enough(distance: float) -> bool:
            return max_distance is None or distance <= max_distance

        rounded = self.cell_from_continuous_position(pos)
        if (
            rounded is not None
            and self.is_interactable(rounded.cell)
            and close_enough(rounded.distance_to_snap)
        ):
            return self._points[rounded.cell]

        if rounded is None and max_distance is None:
            # Outside the grid, only an exact or radius-limited snap counts
            return None

        nearest = self.nearest_interactable_point(pos)
        if nearest is not None and close_enough(nearest.distance):
            return nearest.point
        return None
