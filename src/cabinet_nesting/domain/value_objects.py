"""Value objects for the panel nesting domain.

All dimensions are in millimeters. Catalogue types (boards, panels, edge
tapes) are loaded once per run and never mutated, so they are frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class JobStatus(str, Enum):
    """Lifecycle states of a nesting job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """True for states a job never leaves."""
        return self in (JobStatus.COMPLETED, JobStatus.ERROR)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with its origin at the top-left corner.

    Y grows downward, as on a cut diagram, so a smaller ``y`` is higher up
    the board.

    Used both for free regions of a board and for placed panel footprints.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height

    def intersects(self, other: Rectangle) -> bool:
        """Check whether two rectangles share interior area.

        Rectangles that only touch along an edge do not intersect.
        """
        return not (
            other.right <= self.x
            or other.x >= self.right
            or other.bottom <= self.y
            or other.y >= self.bottom
        )

    def contains(self, other: Rectangle) -> bool:
        """Check whether ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class Board:
    """A stock board type that panels are cut from.

    Attributes:
        id: Catalogue identifier.
        name: Display name.
        width: Board width in mm.
        height: Board height in mm.
        thickness: Board thickness in mm.
        material: Material description (e.g. "melamine white").
        cost: Cost of one sheet.
        stock: Number of physical sheets available.
    """

    id: str
    name: str
    width: float
    height: float
    thickness: float = 18.0
    material: str = ""
    cost: float = 0.0
    stock: int = 1
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Board dimensions must be positive")
        if self.thickness <= 0:
            raise ValueError("Board thickness must be positive")
        if self.cost < 0:
            raise ValueError("Board cost must be non-negative")
        if self.stock < 0:
            raise ValueError("Board stock must be non-negative")

    @property
    def area(self) -> float:
        """Area of one sheet in square mm."""
        return self.width * self.height

    def as_rectangle(self) -> Rectangle:
        """The whole board as a rectangle anchored at the origin."""
        return Rectangle(0.0, 0.0, self.width, self.height)


@dataclass(frozen=True)
class Panel:
    """A rectangular part to be cut from a board.

    Edge flags mark which edges receive edge tape. One record may stand
    for several identical cuts through ``quantity``.
    """

    id: str
    name: str
    width: float
    height: float
    component_id: str | None = None
    board_id: str | None = None
    edge_top: bool = False
    edge_right: bool = False
    edge_bottom: bool = False
    edge_left: bool = False
    quantity: int = 1
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Panel dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @property
    def area(self) -> float:
        """Area of a single piece in square mm."""
        return self.width * self.height

    @property
    def edge_count(self) -> int:
        """Number of edges flagged for edge tape."""
        return sum((self.edge_top, self.edge_right, self.edge_bottom, self.edge_left))


@dataclass(frozen=True)
class EdgeTape:
    """Edge tape stock.

    Attributes:
        width: Tape width in mm.
        cost_per_meter: Price per linear meter.
        reel_length: Length of one reel in meters (0 if unknown).
        stock: Reels on hand.
    """

    id: str
    name: str
    width: float
    material: str
    cost_per_meter: float
    reel_length: float = 0.0
    stock: int = 0
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Edge tape width must be positive")
        if self.cost_per_meter < 0:
            raise ValueError("Edge tape cost must be non-negative")
        if self.reel_length < 0:
            raise ValueError("Reel length must be non-negative")
        if self.stock < 0:
            raise ValueError("Edge tape stock must be non-negative")


@dataclass(frozen=True)
class Placement:
    """Where a panel goes on a board.

    Attributes:
        x: Horizontal offset of the panel origin in mm.
        y: Vertical offset of the panel origin in mm.
        rotated: True if the panel is turned 90 degrees.
    """

    x: float
    y: float
    rotated: bool = False
