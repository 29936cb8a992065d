"""Tests for geometry module."""

import pytest

from geometry import extent, lattice_step, point_on_segment, scale, segments, translate
from trace_types import GridCell, Vec2, cells


class TestPointOnSegment:
    """Tests for the integer segment-membership test."""

    @pytest.mark.parametrize(
        "point",
        [(0, 0), (0, 2), (0, 4)],
    )
    def test_horizontal_segment_includes_ends_and_interior(self, point: tuple[int, int]) -> None:
        """Endpoints and interior cells are on the segment."""
        assert point_on_segment(GridCell(0, 0), GridCell(0, 4), GridCell(*point))

    def test_diagonal_interior(self) -> None:
        """Cells on a diagonal are found exactly."""
        assert point_on_segment(GridCell(0, 0), GridCell(10, 10), GridCell(3, 3))

    def test_collinear_but_beyond_end(self) -> None:
        """Collinear cells past either end are not on the segment."""
        start, end = GridCell(0, 0), GridCell(2, 2)
        assert not point_on_segment(start, end, GridCell(3, 3))
        assert not point_on_segment(start, end, GridCell(-1, -1))

    def test_not_collinear(self) -> None:
        """A non-zero cross product rejects the cell."""
        assert not point_on_segment(GridCell(0, 0), GridCell(2, 2), GridCell(1, 0))

    def test_direction_does_not_matter(self) -> None:
        """The segment is the same in both directions."""
        a, b, p = GridCell(29, 0), GridCell(0, 0), GridCell(15, 0)
        assert point_on_segment(a, b, p)
        assert point_on_segment(b, a, p)

    def test_steep_segment_with_no_interior_lattice_points(self) -> None:
        """Only endpoints lie on a segment whose components are coprime."""
        start, end = GridCell(0, 0), GridCell(3, 2)
        on = [
            GridCell(r, c)
            for r in range(4)
            for c in range(3)
            if point_on_segment(start, end, GridCell(r, c))
        ]
        assert on == [start, end]


class TestShapeHelpers:
    """Tests for lattice vector helpers."""

    def test_segments(self) -> None:
        """Segments pair consecutive cells."""
        path = cells((0, 0), (1, 0), (1, 1))
        assert segments(path) == [
            (GridCell(0, 0), GridCell(1, 0)),
            (GridCell(1, 0), GridCell(1, 1)),
        ]

    def test_segments_of_single_cell(self) -> None:
        """A single cell has no segments."""
        assert segments(cells((4, 4))) == []

    def test_translate(self) -> None:
        """Translation adds the offset to every cell."""
        assert translate(cells((0, 0), (1, 2)), 3, -1) == cells((3, -1), (4, 1))

    def test_scale(self) -> None:
        """Scaling multiplies every coordinate."""
        assert scale(cells((0, 1), (2, 3)), 5) == cells((0, 5), (10, 15))

    def test_extent(self) -> None:
        """Extent is the bounding box span per axis."""
        assert extent(cells((29, 0), (0, 0), (10, 10), (0, 20))) == (29, 20)

    def test_lattice_step(self) -> None:
        """Lattice step is the gcd of all coordinates."""
        assert lattice_step(cells((0, 7), (7, 0), (14, 7), (7, 14))) == 7
        assert lattice_step(cells((29, 0), (10, 10))) == 1
        assert lattice_step(cells((0, 0))) == 0


class TestVec2:
    """Tests for continuous positions."""

    def test_distance(self) -> None:
        """Distance is Euclidean."""
        assert Vec2(0, 0).distance_to(Vec2(3, 4)) == pytest.approx(5.0)
