"""
ASCII rendering for shapetrace levels.

Draws the lattice with goals, committed paths and the in-progress trace as a
boxed character grid, plus a one-line HUD with goal, shape and star counts.
"""

from __future__ import annotations

from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from geometry import point_on_segment, segments
from trace_types import GridCell, Level, Shape, StarThresholds

__all__ = ["cells_on_paths", "render_hud", "render_level", "star_string"]


DOT = "·"
GOAL = "o"
CLAIMED_GOAL = "●"
COMMITTED = "+"
TRACE = "*"
BLANK = " "


def cells_on_paths(level: Level, paths: Iterable[Shape]) -> set[GridCell]:
    """
    Collect every in-bounds lattice cell lying on a segment of any path.

    A one-cell path contributes just that cell.
    """
    covered: set[GridCell] = set()
    for path in paths:
        if len(path) == 1:
            covered.add(path[0])
            continue
        for start, end in segments(path):
            if start == end:
                covered.add(start)
                continue
            for row in range(min(start.row, end.row), max(start.row, end.row) + 1):
                for col in range(min(start.col, end.col), max(start.col, end.col) + 1):
                    cell = GridCell(row, col)
                    if level.in_bounds(cell) and point_on_segment(start, end, cell):
                        covered.add(cell)
    return covered


def render_level(
    level: Level,
    claimed: frozenset[GridCell] = frozenset(),
    committed_paths: Iterable[Shape] = (),
    current_path: Shape = (),
    cursor: GridCell | None = None,
    cell_width: int = 3,
    title: str = "level",
) -> str:
    """
    Render a level state as a boxed character grid.

    Args:
        level: The level to draw
        claimed: Goal cells already covered
        committed_paths: Paths that passed validation
        current_path: The in-progress trace
        cursor: Optional cell to highlight (white background)
        cell_width: Characters per cell (default 3)
        title: Label centered in the top border

    Returns:
        Rendered ASCII string
    """
    committed_cells = cells_on_paths(level, committed_paths)
    trace_cells = cells_on_paths(level, [current_path]) if current_path else set()

    grid_width = level.cols * cell_width + 2
    label = f" {title} "
    if len(label) <= grid_width - 2:
        title_start = (grid_width - len(label)) // 2
        top = "┌" + "─" * (title_start - 1) + label + "─" * (grid_width - title_start - len(label) - 1) + "┐"
    else:
        top = "┌" + "─" * (grid_width - 2) + "┐"

    lines: list[str] = [top]
    for row in range(level.rows):
        line_parts = ["│"]
        for col in range(level.cols):
            cell = GridCell(row, col)
            char, colorize = _cell_glyph(level, cell, claimed, committed_cells, trace_cells)
            content = char if cell_width == 1 else char.center(cell_width)

            if cursor is not None and cell == cursor:
                content = chalk.bgWhite.black(content)
            else:
                content = colorize(content)
            line_parts.append(content)
        line_parts.append("│")
        lines.append("".join(line_parts))

    lines.append("└" + "─" * (grid_width - 2) + "┘")
    return "\n".join(lines)


def _cell_glyph(
    level: Level,
    cell: GridCell,
    claimed: frozenset[GridCell],
    committed_cells: set[GridCell],
    trace_cells: set[GridCell],
) -> tuple[str, Callable[[str], str]]:
    if cell in level.goal_cells:
        if cell in claimed:
            return CLAIMED_GOAL, chalk.green
        if cell in trace_cells:
            return GOAL, chalk.cyan
        return GOAL, chalk.red
    if cell in trace_cells:
        return TRACE, chalk.cyan
    if cell in committed_cells:
        return COMMITTED, chalk.yellow
    if cell in level.interactable_cells:
        return DOT, chalk.white
    return BLANK, lambda s: s


def star_string(stars: int) -> str:
    """Filled and empty stars out of three, e.g. '★★☆'."""
    return "★" * stars + "☆" * (3 - stars)


def render_hud(
    claimed_count: int,
    goal_count: int,
    shape_count: int,
    thresholds: StarThresholds,
) -> str:
    """
    One-line status: goals, shapes against the next star limit, stars.

    The shape limit shown is the three-star limit while it holds, then the
    two-star limit; past both only the count is shown.
    """
    stars = thresholds.stars_for(shape_count)
    if stars == 3:
        shapes = f"Shapes: {shape_count} / {thresholds.three_stars}"
    elif stars == 2:
        shapes = f"Shapes: {shape_count} / {thresholds.two_stars}"
    else:
        shapes = f"Shapes: {shape_count}"
    return f"Goals: {claimed_count} / {goal_count}   {shapes}   {star_string(stars)}"
