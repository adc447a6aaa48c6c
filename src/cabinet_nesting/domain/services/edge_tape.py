"""Edge tape length and cost calculations.

Top and bottom edges run along the panel width, left and right edges along
its height. Panel dimensions are in mm; tape is sold and priced by the meter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from cabinet_nesting.domain.value_objects import EdgeTape, Panel

MM_PER_METER = 1000.0


def edge_tape_length(panel: Panel) -> float:
    """Edge tape needed for one piece of ``panel``, in meters."""
    total = 0.0
    if panel.edge_top:
        total += panel.width
    if panel.edge_right:
        total += panel.height
    if panel.edge_bottom:
        total += panel.width
    if panel.edge_left:
        total += panel.height
    return total / MM_PER_METER


def edge_tape_cost(panel: Panel, tape: EdgeTape) -> float:
    """Cost of the edge tape for one piece of ``panel``."""
    return edge_tape_length(panel) * tape.cost_per_meter


@dataclass(frozen=True)
class EdgeTapeEstimate:
    """Edge tape requirement for a set of panels.

    Attributes:
        tape: The tape the estimate was made for.
        length: Total length in meters, all quantities included.
        cost: Total tape cost.
        reels: Reels needed (0 when the reel length is unknown).
    """

    tape: EdgeTape
    length: float
    cost: float
    reels: int

    @property
    def shortfall_reels(self) -> int:
        """Reels missing from stock."""
        return max(self.reels - self.tape.stock, 0)


def estimate_edge_tape(panels: Sequence[Panel], tape: EdgeTape) -> EdgeTapeEstimate:
    """Total up edge tape for every piece of every panel."""
    length = sum(edge_tape_length(panel) * panel.quantity for panel in panels)
    reels = math.ceil(length / tape.reel_length) if tape.reel_length > 0 else 0
    return EdgeTapeEstimate(
        tape=tape,
        length=length,
        cost=length * tape.cost_per_meter,
        reels=reels,
    )
