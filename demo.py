"""
Demonstration script for the shapetrace system.
Plays a short scripted session and prints the level after each gesture.
"""

import logging

from ascii_render import render_hud, render_level
from level_parser import parse_level
from shape_matcher import validate_shape
from trace_controller import ShapeCommit, TraceController
from trace_types import GridCell, Level, cells


def show(controller: TraceController, title: str) -> None:
    level = controller.level
    print(
        render_level(
            level,
            claimed=controller.claimed_goals,
            committed_paths=controller.committed_paths,
            current_path=controller.current_path,
            title=title,
        )
    )
    print(
        render_hud(
            len(controller.claimed_goals),
            len(level.goal_cells),
            controller.shape_count,
            level.star_thresholds,
        )
    )
    print()


def trace(controller: TraceController, *path: GridCell) -> None:
    """Drag through the world positions of the given cells, then release."""
    index = controller.index
    controller.begin_trace(index.world_position(path[0]))
    for cell in path[1:]:
        controller.extend_trace(index.world_position(cell))
    result = controller.end_trace()

    if isinstance(result, ShapeCommit):
        print(f"✓ {result.template.name}, claimed {len(result.newly_claimed)} goal(s)")
    else:
        print(f"✗ {result.reason.value}{f' ({result.details})' if result.details else ''}")


def demo_matching() -> None:
    """Match a few hand-written paths against the catalogue."""
    print("=" * 60)
    print("Shape matching")
    print("=" * 60)

    samples = {
        "unit triangle": cells((0, 0), (1, 0), (1, 1), (0, 0)),
        "triangle, other start": cells((1, 1), (0, 0), (1, 0), (1, 1)),
        "rhombus": cells((0, 1), (1, 0), (2, 1), (1, 2), (0, 1)),
        "bare diagonal": cells((0, 0), (1, 1)),
        "catalogue M": cells((29, 0), (0, 0), (10, 10), (0, 20), (29, 20)),
        "square": cells((0, 0), (0, 1), (1, 1), (1, 0), (0, 0)),
    }
    for name, path in samples.items():
        template = validate_shape(path)
        print(f"  {name:24} -> {template.name if template else 'no match'}")
    print()


def demo_session(level: Level) -> None:
    """Trace shapes on a level until every goal is claimed."""
    print("=" * 60)
    print("Scripted session")
    print("=" * 60)

    controller = TraceController(level)
    show(controller, "start")

    # Not a permitted shape: nothing changes
    trace(controller, GridCell(0, 0), GridCell(0, 2), GridCell(2, 2), GridCell(2, 0), GridCell(0, 0))
    show(controller, "after square")

    # Triangle through the goals at (1, 0) and (2, 2)
    trace(controller, GridCell(0, 0), GridCell(1, 0), GridCell(2, 0), GridCell(2, 1), GridCell(2, 2), GridCell(1, 1), GridCell(0, 0))
    show(controller, "after triangle")

    # Rhombus reaching the remaining goal
    trace(controller, GridCell(1, 2), GridCell(2, 3), GridCell(3, 2), GridCell(2, 1), GridCell(1, 2))
    show(controller, "after rhombus")

    print(f"Complete: {controller.is_complete}, stars: {controller.stars}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    demo_matching()
    demo_session(parse_level("....|G...|..G.|..G.", cell_spacing=50.0))
