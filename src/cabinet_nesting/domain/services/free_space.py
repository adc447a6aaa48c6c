"""Free space tracking for a single board.

Free regions are derived from scratch from the panels already placed on a
board. Each placed footprint splits every free rectangle it overlaps into
the strips left of, right of, above and below it, guillotine style. The
strips span the full extent of the rectangle they came from, so the result
may contain overlapping or redundant candidates. Placement decisions depend
on both the shape and the order of this list.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cabinet_nesting.domain.entities import PlacedPanel
from cabinet_nesting.domain.value_objects import Board, Rectangle

logger = logging.getLogger(__name__)


def split_free_rectangle(space: Rectangle, occupied: Rectangle) -> list[Rectangle]:
    """Split one free rectangle around an occupied footprint.

    Args:
        space: Free rectangle known to intersect ``occupied``.
        occupied: Footprint of a placed panel.

    Returns:
        Up to four sub-rectangles in the order left, right, above, below.
        With y growing downward, "above" is the strip between ``space.y``
        and ``occupied.y`` and "below" the strip under ``occupied.bottom``.
    """
    pieces: list[Rectangle] = []

    if occupied.x > space.x:
        pieces.append(Rectangle(space.x, space.y, occupied.x - space.x, space.height))

    if occupied.right < space.right:
        pieces.append(
            Rectangle(occupied.right, space.y, space.right - occupied.right, space.height)
        )

    if occupied.y > space.y:
        pieces.append(Rectangle(space.x, space.y, space.width, occupied.y - space.y))

    if occupied.bottom < space.bottom:
        pieces.append(
            Rectangle(space.x, occupied.bottom, space.width, space.bottom - occupied.bottom)
        )

    return pieces


def compute_free_rectangles(
    board: Board,
    placed: Sequence[PlacedPanel],
) -> list[Rectangle]:
    """Derive the free rectangles of a board from its placements.

    Args:
        board: The board being filled.
        placed: Panels already on the board, in placement order.

    Returns:
        Free rectangles in enumeration order.
    """
    free: list[Rectangle] = [board.as_rectangle()]

    for placement in placed:
        occupied = placement.footprint
        next_free: list[Rectangle] = []
        for space in free:
            if not space.intersects(occupied):
                next_free.append(space)
                continue
            next_free.extend(split_free_rectangle(space, occupied))
        free = next_free

    logger.debug(
        "Board '%s': %d placements leave %d free rectangles",
        board.id,
        len(placed),
        len(free),
    )
    return free


class FreeSpaceTracker:
    """Object wrapper around :func:`compute_free_rectangles`.

    Keeps no state between calls.
    """

    def free_rectangles(
        self,
        board: Board,
        placed: Sequence[PlacedPanel],
    ) -> list[Rectangle]:
        """Return the free rectangles of ``board`` given ``placed``."""
        return compute_free_rectangles(board, placed)
