"""
Shape matching for traced paths.

A traced path is normalized (translated to a zero minimum row/col), then
compared against each catalogue template under the template's symmetry group:
every cyclic start and both traversal directions for closed templates, both
traversal directions for open ones. A transformed path matches when three
predicates hold against the template fitted to the path's size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from geometry import extent, lattice_step, point_on_segment, scale, segments, translate
from templates import PERMITTED_SHAPES
from trace_types import GridCell, Shape, TemplateShape

logger = logging.getLogger(__name__)

__all__ = [
    "PathTransform",
    "fit_template",
    "has_all_consecutive_edges_valid",
    "has_all_points_on_edges",
    "has_template_vertices_in_order",
    "matches_template",
    "matching_transform",
    "normalize",
    "reverse_shape",
    "rotate_shape",
    "transforms_for",
    "validate_shape",
]


# =============================================================================
# Normalization
# =============================================================================


def normalize(shape: Shape) -> Shape:
    """Translate a shape so its minimum row and minimum column are both zero."""
    if not shape:
        return shape
    min_row = min(c.row for c in shape)
    min_col = min(c.col for c in shape)
    return translate(shape, -min_row, -min_col)


def fit_template(template: TemplateShape, path: Shape) -> Shape | None:
    """
    Scale a template's cells to the extent of a normalized path.

    The template is first reduced to its primitive lattice (divided by the gcd
    of its normalized coordinates), then multiplied by the one integer factor
    that makes its bounding box match the path's. An axis along which the
    template is flat must be flat in the path as well.

    Args:
        template: Catalogue entry to fit
        path: Normalized traced path

    Returns:
        The fitted template cells, or None if no integer factor fits both axes
    """
    base = normalize(template.shape)
    step = lattice_step(base)
    if step > 1:
        base = tuple(GridCell(c.row // step, c.col // step) for c in base)

    factors: set[int] = set()
    for template_span, path_span in zip(extent(base), extent(path)):
        if template_span == 0:
            if path_span != 0:
                return None
            continue
        if path_span % template_span:
            return None
        factors.add(path_span // template_span)

    if len(factors) != 1:
        return None
    factor = factors.pop()
    if factor == 0:
        return None
    return scale(base, factor)


# =============================================================================
# Symmetry Transforms
# =============================================================================


def reverse_shape(shape: Shape) -> Shape:
    return tuple(reversed(shape))


def rotate_shape(shape: Shape, shift: int) -> Shape:
    """
    Start a closed walk at a different vertex.

    Drops the closing duplicate, rotates the remaining cells left by shift
    positions, then re-closes the walk on its new first cell.
    """
    open_part = shape[:-1]
    rotated = open_part[shift:] + open_part[:shift]
    return rotated + rotated[:1]


@dataclass(frozen=True)
class PathTransform:
    """One element of a template's symmetry group, applied to the path."""

    reverse: bool = False
    shift: int | None = None  # None = no cyclic rotation (open templates)

    def apply(self, path: Shape) -> Shape:
        result = reverse_shape(path) if self.reverse else path
        if self.shift is not None:
            result = rotate_shape(result, self.shift)
        return result

    def describe(self) -> str:
        direction = "reverse" if self.reverse else "forward"
        if self.shift is None:
            return direction
        return f"{direction}, shift {self.shift}"


def transforms_for(template: TemplateShape, path_length: int) -> Iterator[PathTransform]:
    """
    Enumerate the transforms to try for a template.

    Closed templates: both directions times every cyclic shift of the
    path (path_length - 1 distinct starts). Open templates: both directions.
    """
    for reverse in (False, True):
        if template.is_closed:
            for shift in range(path_length - 1):
                yield PathTransform(reverse, shift)
        else:
            yield PathTransform(reverse)


# =============================================================================
# Matching Predicates
# =============================================================================


def has_template_vertices_in_order(path: Shape, template: Shape) -> bool:
    """
    Check that every template vertex appears in the path, in order.

    Single forward scan: the template cursor advances each time the current
    path cell equals the template cell under the cursor. Other path cells may
    sit between matched vertices.
    """
    index = 0
    for cell in path:
        if cell == template[index]:
            index += 1
            if index == len(template):
                return True
    return False


def has_all_points_on_edges(path: Shape, template: Shape) -> bool:
    """Check that every path cell lies on some template edge."""
    if len(path) == len(template):
        return True

    edges = segments(template)
    return all(
        any(point_on_segment(start, end, cell) for start, end in edges)
        for cell in path
    )


def has_all_consecutive_edges_valid(path: Shape, template: Shape) -> bool:
    """Check that each path step stays on a single template edge."""
    edges = segments(template)
    for step_start, step_end in segments(path):
        if not any(
            point_on_segment(start, end, step_start) and point_on_segment(start, end, step_end)
            for start, end in edges
        ):
            logger.debug(
                "Step %s -> %s leaves every template edge", step_start, step_end
            )
            return False
    return True


def _predicates_hold(path: Shape, template: Shape) -> bool:
    return (
        has_template_vertices_in_order(path, template)
        and has_all_points_on_edges(path, template)
        and has_all_consecutive_edges_valid(path, template)
    )


# =============================================================================
# Matching
# =============================================================================


def matching_transform(path: Shape, template: TemplateShape) -> PathTransform | None:
    """
    Find the first symmetry transform under which a path matches a template.

    Args:
        path: Normalized traced path (at least 2 cells)
        template: Catalogue entry to test

    Returns:
        The matching PathTransform, or None if the template does not match
    """
    if len(template.shape) > len(path):
        return None

    if template.is_closed and path[0] != path[-1]:
        return None

    fitted = fit_template(template, path)
    if fitted is None:
        return None

    for transform in transforms_for(template, len(path)):
        if _predicates_hold(transform.apply(path), fitted):
            return transform
    return None


def matches_template(path: Shape, template: TemplateShape) -> bool:
    return matching_transform(path, template) is not None


def validate_shape(
    path: Shape,
    catalogue: tuple[TemplateShape, ...] = PERMITTED_SHAPES,
) -> TemplateShape | None:
    """
    Match a traced path against the permitted shape catalogue.

    Pure function of (path, catalogue). The path is normalized first, so
    absolute position never matters.

    Args:
        path: Traced cells in drawing order
        catalogue: Templates to try, in priority order

    Returns:
        The first template that matches, or None. Paths with fewer than two
        cells never match.
    """
    if len(path) < 2:
        return None

    normalized = normalize(tuple(path))
    for template in catalogue:
        transform = matching_transform(normalized, template)
        if transform is not None:
            logger.debug(
                "Path of %d cells matched %s (%s)",
                len(normalized),
                template.name,
                transform.describe(),
            )
            return template

    logger.debug("Path of %d cells matched no template", len(normalized))
    return None
