"""
Integer geometry on the cell lattice.

Everything here works on exact integers so collinearity and containment
never depend on floating point tolerances.
"""

from __future__ import annotations

from functools import reduce
from math import gcd

from trace_types import GridCell, Shape

__all__ = [
    "extent",
    "lattice_step",
    "point_on_segment",
    "scale",
    "segments",
    "translate",
]


def point_on_segment(start: GridCell, end: GridCell, point: GridCell) -> bool:
    """
    Check whether point lies on the closed segment start -> end.

    The point must be collinear with the segment (zero cross product) and its
    projection parameter must fall in [0, 1], tested as 0 <= dot <= len_sq.
    Degenerate segments (start == end) are not supported.
    """
    sr = point.row - start.row
    sc = point.col - start.col
    er = end.row - start.row
    ec = end.col - start.col

    if sr * ec != sc * er:
        return False

    dot = sr * er + sc * ec
    if dot < 0:
        return False

    len_sq = er * er + ec * ec
    return dot <= len_sq


def segments(shape: Shape) -> list[tuple[GridCell, GridCell]]:
    """Consecutive (start, end) cell pairs of a walk."""
    return [(shape[i], shape[i + 1]) for i in range(len(shape) - 1)]


def translate(shape: Shape, d_row: int, d_col: int) -> Shape:
    return tuple(GridCell(c.row + d_row, c.col + d_col) for c in shape)


def scale(shape: Shape, factor: int) -> Shape:
    return tuple(GridCell(c.row * factor, c.col * factor) for c in shape)


def extent(shape: Shape) -> tuple[int, int]:
    """Return (row_span, col_span) of the shape's bounding box."""
    rows = [c.row for c in shape]
    cols = [c.col for c in shape]
    return (max(rows) - min(rows), max(cols) - min(cols))


def lattice_step(shape: Shape) -> int:
    """
    Greatest common divisor of all coordinates.

    For a normalized shape this is the largest integer the shape can be
    divided by while staying on the lattice. Returns 0 for an all-zero shape.
    """
    return reduce(gcd, (abs(v) for c in shape for v in (c.row, c.col)), 0)
