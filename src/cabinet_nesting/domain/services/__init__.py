"""Domain services for panel nesting."""

from .edge_tape import (
    EdgeTapeEstimate,
    edge_tape_cost,
    edge_tape_length,
    estimate_edge_tape,
)
from .free_space import FreeSpaceTracker, compute_free_rectangles, split_free_rectangle
from .placement import PlacementChooser, does_panel_fit

__all__ = [
    "EdgeTapeEstimate",
    "FreeSpaceTracker",
    "PlacementChooser",
    "compute_free_rectangles",
    "does_panel_fit",
    "edge_tape_cost",
    "edge_tape_length",
    "estimate_edge_tape",
    "split_free_rectangle",
]
