"""
Shared type definitions for the shapetrace system.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


# =============================================================================
# Lattice Types
# =============================================================================


@dataclass(frozen=True, order=True)
class GridCell:
    """An integer lattice coordinate."""

    row: int
    col: int


# An ordered walk over lattice cells (not a set)
Shape = tuple[GridCell, ...]


def cells(*coords: tuple[int, int]) -> Shape:
    """Build a Shape from (row, col) pairs."""
    return tuple(GridCell(row, col) for row, col in coords)


@dataclass(frozen=True)
class TemplateShape:
    """An entry of the permitted shape catalogue."""

    name: str
    is_closed: bool  # True = first and last cell coincide
    shape: Shape


# =============================================================================
# World Types
# =============================================================================


@dataclass(frozen=True)
class Vec2:
    """A continuous 2D position."""

    x: float
    y: float

    def distance_to(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class GridPoint:
    """A lattice cell materialized in world space."""

    cell: GridCell
    world_position: Vec2
    is_interactable: bool
    is_goal: bool


# =============================================================================
# Level Types
# =============================================================================


@dataclass(frozen=True)
class StarThresholds:
    """Shape-count limits for each star rating."""

    three_stars: int = 1
    two_stars: int = 2

    def stars_for(self, shape_count: int) -> int:
        if shape_count <= self.three_stars:
            return 3
        if shape_count <= self.two_stars:
            return 2
        return 1


@dataclass(frozen=True)
class Level:
    """Static configuration of one puzzle level."""

    rows: int
    cols: int
    cell_spacing: float
    interactable_cells: frozenset[GridCell]
    goal_cells: frozenset[GridCell]
    star_thresholds: StarThresholds = field(default_factory=StarThresholds)

    def in_bounds(self, cell: GridCell) -> bool:
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.cols
