"""Tests for interactive_demo layout selection and status messages."""

import pytest

from interactive_demo import LAYOUTS, StatusListener, select_layout
from level_parser import parse_levels
from trace_types import GridCell, cells


class TestSelectLayout:
    """Tests for choosing a layout by name."""

    def test_known_layout(self) -> None:
        """Known names return the parsed level."""
        levels = parse_levels(LAYOUTS)
        assert select_layout(levels, "starter") is levels["starter"]

    def test_unknown_layout_lists_names(self) -> None:
        """Unknown names raise ValueError naming every available layout."""
        levels = parse_levels(LAYOUTS)
        with pytest.raises(ValueError, match="Unknown layout 'nope'") as exc_info:
            select_layout(levels, "nope")

        for name in LAYOUTS:
            assert name in str(exc_info.value)


class TestStatusListener:
    """Tests for the demo's status line."""

    def test_commit_then_goals(self) -> None:
        """Goal claims extend the commit message."""
        status = StatusListener()
        status.on_shape_committed("Triangle", cells((0, 0), (1, 0), (1, 1), (0, 0)))
        status.on_goals_claimed(frozenset({GridCell(0, 0)}))

        assert status.message == "✓ Triangle committed (4 cells), 1 goal(s) claimed"
