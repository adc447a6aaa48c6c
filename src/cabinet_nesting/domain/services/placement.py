"""Placement selection for a single panel on a single board.

Best-fit rule: among all free rectangles the panel fits into, choose the one
leaving the least area unused. Ties keep the first candidate seen, so the
outcome depends on the enumeration order of the free space tracker.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cabinet_nesting.domain.entities import PlacedPanel
from cabinet_nesting.domain.value_objects import Board, Panel, Placement, Rectangle

from .free_space import FreeSpaceTracker

logger = logging.getLogger(__name__)


def does_panel_fit(
    panel: Panel,
    space: Rectangle,
    allow_rotation: bool = True,
) -> tuple[bool, bool]:
    """Check if a panel fits a rectangle, considering rotation.

    Args:
        panel: The panel to place.
        space: Candidate rectangle.
        allow_rotation: Whether the panel may be turned 90 degrees.

    Returns:
        Tuple of (fits, needs_rotation). The unrotated orientation wins
        when both fit.
    """
    if panel.width <= space.width and panel.height <= space.height:
        return (True, False)

    if allow_rotation and panel.height <= space.width and panel.width <= space.height:
        return (True, True)

    return (False, False)


class PlacementChooser:
    """Chooses where to put one panel on one board.

    Attributes:
        allow_rotation: Whether panels may be turned 90 degrees.
        tracker: Source of the free rectangles on a partly filled board.
    """

    def __init__(
        self,
        allow_rotation: bool = True,
        tracker: FreeSpaceTracker | None = None,
    ) -> None:
        self.allow_rotation = allow_rotation
        self.tracker = tracker or FreeSpaceTracker()

    def find_best_position(
        self,
        panel: Panel,
        board: Board,
        placed: Sequence[PlacedPanel],
    ) -> Placement | None:
        """Find the least-waste position for ``panel`` on ``board``.

        An empty board takes the panel at the origin as long as the board's
        raw dimensions admit it in some orientation.

        Args:
            panel: Panel to place.
            board: Board to place it on.
            placed: Panels already on the board, in placement order.

        Returns:
            The chosen placement, or None if the panel fits nowhere.
        """
        if not placed:
            fits, rotated = does_panel_fit(
                panel, board.as_rectangle(), self.allow_rotation
            )
            if not fits:
                return None
            return Placement(x=0.0, y=0.0, rotated=rotated)

        free = self.tracker.free_rectangles(board, placed)
        return self.choose(panel, free)

    def choose(
        self,
        panel: Panel,
        free: Sequence[Rectangle],
    ) -> Placement | None:
        """Pick the minimum-waste rectangle from an explicit free list."""
        best_space: Rectangle | None = None
        best_waste = float("inf")
        best_rotated = False

        for space in free:
            waste = space.area - panel.area

            if panel.width <= space.width and panel.height <= space.height:
                if waste < best_waste:
                    best_space, best_waste, best_rotated = space, waste, False

            if (
                self.allow_rotation
                and panel.height <= space.width
                and panel.width <= space.height
            ):
                if waste < best_waste:
                    best_space, best_waste, best_rotated = space, waste, True

        if best_space is None:
            return None

        logger.debug(
            "Panel '%s' -> (%s, %s) rotated=%s waste=%s",
            panel.name,
            best_space.x,
            best_space.y,
            best_rotated,
            best_waste,
        )
        return Placement(x=best_space.x, y=best_space.y, rotated=best_rotated)
