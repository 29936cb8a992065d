"""
Goal coverage for committed paths.
"""

from __future__ import annotations

import logging

from geometry import point_on_segment, segments
from trace_types import GridCell, Shape

logger = logging.getLogger(__name__)

__all__ = ["CoverageTracker"]


class CoverageTracker:
    """
    Records which goal cells have been covered by committed paths.

    The claimed set only grows; it is cleared by reset() when a level reloads.
    """

    def __init__(self, goal_cells: frozenset[GridCell]) -> None:
        self.goal_cells = frozenset(goal_cells)
        self._claimed: set[GridCell] = set()

    @property
    def claimed(self) -> frozenset[GridCell]:
        return frozenset(self._claimed)

    @property
    def remaining(self) -> frozenset[GridCell]:
        return self.goal_cells - self._claimed

    @property
    def is_complete(self) -> bool:
        """True once every goal is claimed (a level without goals never completes)."""
        return bool(self.goal_cells) and not self.remaining

    def goals_on_path(self, path: Shape) -> frozenset[GridCell]:
        """All goal cells lying on any segment of path, claimed or not."""
        found: set[GridCell] = set()
        for start, end in segments(path):
            if start == end:
                continue
            found.update(g for g in self.goal_cells if point_on_segment(start, end, g))
        return frozenset(found)

    def claim_goals_on_path(self, path: Shape) -> frozenset[GridCell]:
        """
        Claim every unclaimed goal cell lying on a segment of path.

        Returns:
            The cells claimed by this call (empty if nothing new was covered)
        """
        newly_claimed = self.goals_on_path(path) - self._claimed
        self._claimed.update(newly_claimed)

        if newly_claimed:
            logger.info(
                "Claimed %d goal(s), %d / %d covered",
                len(newly_claimed),
                len(self._claimed),
                len(self.goal_cells),
            )
        return newly_claimed

    def reset(self) -> None:
        self._claimed.clear()
