"""Domain layer - nesting geometry and rules."""

from .entities import (
    JOBS_TABLE,
    LAYOUTS_TABLE,
    PANELS_TABLE,
    NestingJob,
    NestingLayout,
    NestingPanel,
    PlacedPanel,
)
from .services import (
    EdgeTapeEstimate,
    FreeSpaceTracker,
    PlacementChooser,
    compute_free_rectangles,
    does_panel_fit,
    edge_tape_cost,
    edge_tape_length,
    estimate_edge_tape,
)
from .value_objects import Board, EdgeTape, JobStatus, Panel, Placement, Rectangle

__all__ = [
    "JOBS_TABLE",
    "LAYOUTS_TABLE",
    "PANELS_TABLE",
    "Board",
    "EdgeTape",
    "EdgeTapeEstimate",
    "FreeSpaceTracker",
    "JobStatus",
    "NestingJob",
    "NestingLayout",
    "NestingPanel",
    "Panel",
    "PlacedPanel",
    "Placement",
    "PlacementChooser",
    "Rectangle",
    "compute_free_rectangles",
    "does_panel_fit",
    "edge_tape_cost",
    "edge_tape_length",
    "estimate_edge_tape",
]
