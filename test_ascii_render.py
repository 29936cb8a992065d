"""Tests for ascii_render module."""

from ascii_render import (
    CLAIMED_GOAL,
    COMMITTED,
    GOAL,
    TRACE,
    cells_on_paths,
    render_hud,
    render_level,
    star_string,
)
from level_parser import parse_level
from trace_types import GridCell, StarThresholds, cells


LEVEL = parse_level("G...|....|..G.|....")


class TestCellsOnPaths:
    """Tests for collecting cells covered by paths."""

    def test_interior_cells_included(self) -> None:
        """Lattice cells between vertices are covered."""
        covered = cells_on_paths(LEVEL, [cells((0, 0), (0, 3))])
        assert covered == {GridCell(0, c) for c in range(4)}

    def test_diagonal(self) -> None:
        """Diagonal segments cover the cells on the diagonal only."""
        covered = cells_on_paths(LEVEL, [cells((0, 0), (2, 2))])
        assert covered == {GridCell(0, 0), GridCell(1, 1), GridCell(2, 2)}

    def test_single_cell_path(self) -> None:
        """A one-cell path covers that cell."""
        assert cells_on_paths(LEVEL, [cells((3, 1))]) == {GridCell(3, 1)}


class TestRenderLevel:
    """Tests for the boxed grid rendering."""

    def test_box_and_title(self) -> None:
        """The grid is boxed with the title in the top border."""
        output = render_level(LEVEL, title="starter")
        lines = output.split("\n")

        assert "starter" in lines[0]
        assert lines[0].startswith("┌")
        assert lines[-1].startswith("└")
        assert len(lines) == LEVEL.rows + 2

    def test_goal_glyphs(self) -> None:
        """Unclaimed and claimed goals use distinct glyphs."""
        output = render_level(LEVEL)
        assert GOAL in output
        assert CLAIMED_GOAL not in output

        output = render_level(LEVEL, claimed=frozenset({GridCell(0, 0)}))
        assert CLAIMED_GOAL in output

    def test_paths(self) -> None:
        """Committed and in-progress paths are drawn."""
        output = render_level(
            LEVEL,
            committed_paths=[cells((3, 0), (3, 3))],
            current_path=cells((1, 0), (1, 2)),
        )
        assert COMMITTED in output
        assert TRACE in output


class TestHud:
    """Tests for the status line."""

    def test_star_string(self) -> None:
        """Stars are shown out of three."""
        assert star_string(3) == "★★★"
        assert star_string(2) == "★★☆"
        assert star_string(1) == "★☆☆"

    def test_hud_three_stars(self) -> None:
        """While three stars hold, the three-star limit is shown."""
        hud = render_hud(1, 2, 0, StarThresholds(1, 2))
        assert hud == "Goals: 1 / 2   Shapes: 0 / 1   ★★★"

    def test_hud_two_stars(self) -> None:
        """After the three-star limit, the two-star limit is shown."""
        hud = render_hud(2, 2, 2, StarThresholds(1, 2))
        assert hud == "Goals: 2 / 2   Shapes: 2 / 2   ★★☆"

    def test_hud_one_star(self) -> None:
        """Past both limits only the count is shown."""
        hud = render_hud(0, 2, 5, StarThresholds(1, 2))
        assert hud == "Goals: 0 / 2   Shapes: 5   ★☆☆"
