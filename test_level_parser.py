"""Tests for level_parser module."""

import pytest

from level_parser import level_from_config, parse_level, parse_levels
from trace_types import GridCell, StarThresholds


class TestParseLevel:
    """Tests for the text level format."""

    def test_simple_level(self) -> None:
        """Parse a level where every cell is interactable."""
        level = parse_level("...|...")

        assert level.rows == 2
        assert level.cols == 3
        assert len(level.interactable_cells) == 6
        assert level.goal_cells == frozenset()

    def test_goals(self) -> None:
        """'G' is an interactable goal, 'g' a goal that cannot be snapped to."""
        level = parse_level("G.g|...")

        assert level.goal_cells == {GridCell(0, 0), GridCell(0, 2)}
        assert GridCell(0, 0) in level.interactable_cells
        assert GridCell(0, 2) not in level.interactable_cells

    def test_blank_cells(self) -> None:
        """'_' is neither interactable nor a goal."""
        level = parse_level("._.|___")

        assert level.interactable_cells == {GridCell(0, 0), GridCell(0, 2)}
        assert level.rows == 2

    def test_surrounding_whitespace(self) -> None:
        """Whitespace around the definition is ignored."""
        level = parse_level("""
            ..|..
        """)
        assert level.rows == 2
        assert level.cols == 2

    def test_spacing_and_thresholds(self) -> None:
        """Spacing and star thresholds are passed through."""
        level = parse_level("..", cell_spacing=64.0, star_thresholds=StarThresholds(2, 4))

        assert level.cell_spacing == 64.0
        assert level.star_thresholds == StarThresholds(2, 4)

    def test_default_thresholds(self) -> None:
        """Default thresholds are 1 shape for 3 stars, 2 for 2 stars."""
        assert parse_level("..").star_thresholds == StarThresholds(1, 2)

    def test_invalid_character(self) -> None:
        """Unknown characters raise ValueError with the position."""
        with pytest.raises(ValueError, match="Invalid character 'x'") as exc_info:
            parse_level("..|.x")

        assert "Row 1" in str(exc_info.value)
        assert "column 1" in str(exc_info.value)

    def test_inconsistent_rows(self) -> None:
        """Rows of different lengths raise ValueError."""
        with pytest.raises(ValueError, match="Inconsistent row lengths"):
            parse_level("...|..")

    def test_empty_definition(self) -> None:
        """An empty definition raises ValueError."""
        with pytest.raises(ValueError):
            parse_level("")

    @pytest.mark.parametrize("spacing", [0.0, -10.0])
    def test_non_positive_spacing(self, spacing: float) -> None:
        """Cell spacing must be positive."""
        with pytest.raises(ValueError, match="Invalid cell spacing"):
            parse_level("..|..", cell_spacing=spacing)

    def test_parse_levels(self) -> None:
        """Several named levels parse at once."""
        levels = parse_levels({"a": "..", "b": "G|."})

        assert set(levels) == {"a", "b"}
        assert levels["b"].goal_cells == {GridCell(0, 0)}


class TestLevelFromConfig:
    """Tests for the structured configuration record."""

    def test_camel_case_record(self) -> None:
        """The external record format builds a Level."""
        level = level_from_config(
            {
                "rows": 3,
                "cols": 4,
                "cellSpacing": 80,
                "interactableCells": [{"row": 0, "col": 0}, {"row": 2, "col": 3}],
                "goalCells": [{"row": 2, "col": 3}],
                "starThresholds": {"threeStars": 2, "twoStars": 3},
            }
        )

        assert (level.rows, level.cols, level.cell_spacing) == (3, 4, 80.0)
        assert level.interactable_cells == {GridCell(0, 0), GridCell(2, 3)}
        assert level.goal_cells == {GridCell(2, 3)}
        assert level.star_thresholds == StarThresholds(2, 3)

    def test_snake_case_and_pairs(self) -> None:
        """snake_case keys and (row, col) pairs are accepted."""
        level = level_from_config(
            {
                "rows": 2,
                "cols": 2,
                "cell_spacing": 10.0,
                "interactable_cells": [(0, 0), (1, 1)],
                "star_thresholds": (1, 5),
            }
        )

        assert level.interactable_cells == {GridCell(0, 0), GridCell(1, 1)}
        assert level.goal_cells == frozenset()
        assert level.star_thresholds == StarThresholds(1, 5)

    def test_missing_key(self) -> None:
        """A missing required key raises ValueError."""
        with pytest.raises(ValueError, match="cellSpacing"):
            level_from_config({"rows": 2, "cols": 2})

    def test_non_positive_size(self) -> None:
        """Sizes must be positive."""
        with pytest.raises(ValueError, match="Invalid level dimensions"):
            level_from_config({"rows": 0, "cols": 2, "cellSpacing": 10})

    def test_out_of_bounds_goal(self) -> None:
        """Cells outside the grid raise ValueError."""
        with pytest.raises(ValueError, match="goalCells"):
            level_from_config(
                {
                    "rows": 2,
                    "cols": 2,
                    "cellSpacing": 10,
                    "goalCells": [(2, 0)],
                }
            )

    @pytest.mark.parametrize(
        "entry",
        [{"col": 1}, 5, (0, "x"), (1, 2, 3)],
    )
    def test_malformed_cell_entry(self, entry: object) -> None:
        """Malformed cell entries raise ValueError naming the key and entry."""
        with pytest.raises(ValueError, match="Invalid cell in 'interactableCells'") as exc_info:
            level_from_config(
                {
                    "rows": 2,
                    "cols": 2,
                    "cellSpacing": 10,
                    "interactableCells": [(0, 0), entry],
                }
            )

        assert "Entry 1" in str(exc_info.value)
