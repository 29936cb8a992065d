"""
Walk symmetry framework for systematic matcher testing.

This module provides utilities to write a matching test once and automatically
run it for every equivalent way of tracing the same walk: each starting vertex
of a closed walk in both directions, both directions of an open walk, and any
number of translations.
"""

from dataclasses import dataclass, field
from typing import Callable

from geometry import translate
from shape_matcher import rotate_shape
from trace_types import Shape, TemplateShape


# =============================================================================
# Walk Variants
# =============================================================================


def is_closed_walk(path: Shape) -> bool:
    return len(path) >= 2 and path[0] == path[-1]


def walk_variants(path: Shape) -> list[tuple[str, Shape]]:
    """
    Every equivalent tracing of path, labelled for assertion messages.

    Closed walks: every cyclic start, forward and reversed.
    Open walks: forward and reversed.
    """
    directions = [("forward", path), ("reversed", tuple(reversed(path)))]

    if not is_closed_walk(path):
        return directions

    variants: list[tuple[str, Shape]] = []
    for label, walk in directions:
        for shift in range(len(walk) - 1):
            variants.append((f"{label}, start {shift}", rotate_shape(walk, shift)))
    return variants


DEFAULT_OFFSETS: tuple[tuple[int, int], ...] = ((0, 0), (3, 0), (0, 5), (-7, 11), (100, 100))


# =============================================================================
# Test Cases
# =============================================================================


@dataclass
class SymmetryCase:
    """
    A matcher expectation checked for every variant and translation of a walk.

    Example usage:
        case = SymmetryCase(
            name="unit_triangle",
            path=cells((0, 0), (1, 0), (1, 1), (0, 0)),
            expected="Triangle",
        )
        run_symmetry_case(case, validate_shape)
    """

    name: str
    path: Shape
    expected: str | None  # Template name, or None for "no match"
    offsets: tuple[tuple[int, int], ...] = field(default=DEFAULT_OFFSETS)

    def get_all_variants(self) -> list[tuple[str, Shape]]:
        results = []
        for label, walk in walk_variants(self.path):
            for d_row, d_col in self.offsets:
                results.append((f"{label}, offset ({d_row}, {d_col})", translate(walk, d_row, d_col)))
        return results


# =============================================================================
# Test Runner
# =============================================================================


def run_symmetry_case(
    case: SymmetryCase,
    validate: Callable[[Shape], TemplateShape | None],
) -> None:
    """
    Run a symmetry case through all variants.

    Args:
        case: The case to run
        validate: The matcher under test (e.g. validate_shape)
    """
    for label, walk in case.get_all_variants():
        result = validate(walk)
        actual = result.name if result is not None else None
        assert actual == case.expected, (
            f"{case.name} ({label}): expected {case.expected}, got {actual}\n"
            f"  Walk: {[(c.row, c.col) for c in walk]}"
        )
