"""Domain entities for nesting runs.

``PlacedPanel`` exists only while a run is in progress. The remaining
entities mirror rows in the record store and convert to and from the plain
dictionaries the store exchanges.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .value_objects import JobStatus, Panel, Rectangle

JOBS_TABLE = "nesting_jobs"
LAYOUTS_TABLE = "nesting_layouts"
PANELS_TABLE = "nesting_panels"


@dataclass(frozen=True)
class PlacedPanel:
    """A panel placed on one sheet during a run.

    Attributes:
        panel: The panel being placed.
        x: Horizontal position of the panel origin in mm.
        y: Vertical position of the panel origin in mm.
        rotated: True if the panel is turned 90 degrees.
        board_id: Board type the sheet was taken from.
        sheet_index: Opening order of the sheet within the run.
    """

    panel: Panel
    x: float
    y: float
    rotated: bool
    board_id: str
    sheet_index: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width as placed (accounts for rotation)."""
        return self.panel.height if self.rotated else self.panel.width

    @property
    def placed_height(self) -> float:
        """Height as placed (accounts for rotation)."""
        return self.panel.width if self.rotated else self.panel.height

    @property
    def footprint(self) -> Rectangle:
        """Occupied region of the sheet."""
        return Rectangle(self.x, self.y, self.placed_width, self.placed_height)


@dataclass(frozen=True)
class NestingJob:
    """One nesting run as tracked in the record store."""

    id: str
    name: str
    status: JobStatus
    order_id: str | None = None
    panels_count: int = 0
    boards_used: int = 0
    material_efficiency: float = 0.0
    error_message: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> NestingJob:
        return cls(
            id=str(record.get("id", "")),
            name=record.get("name", ""),
            status=JobStatus(record.get("status", JobStatus.PENDING.value)),
            order_id=record.get("order_id"),
            panels_count=int(record.get("panels_count", 0)),
            boards_used=int(record.get("boards_used", 0)),
            material_efficiency=float(record.get("material_efficiency", 0.0)),
            error_message=record.get("error_message"),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "order_id": self.order_id,
            "panels_count": self.panels_count,
            "boards_used": self.boards_used,
            "material_efficiency": self.material_efficiency,
            "error_message": self.error_message,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class NestingLayout:
    """One sheet used by a completed run."""

    id: str
    job_id: str
    board_id: str
    board_index: int
    width: float
    height: float
    material: str
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> NestingLayout:
        return cls(
            id=str(record["id"]),
            job_id=str(record["job_id"]),
            board_id=str(record["board_id"]),
            board_index=int(record["board_index"]),
            width=float(record["width"]),
            height=float(record["height"]),
            material=record.get("material", ""),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "job_id": self.job_id,
            "board_id": self.board_id,
            "board_index": self.board_index,
            "width": self.width,
            "height": self.height,
            "material": self.material,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class NestingPanel:
    """One placed panel of a completed run.

    ``width`` and ``height`` are the dimensions as placed, after rotation.
    """

    id: str
    layout_id: str
    panel_id: str
    x: float
    y: float
    width: float
    height: float
    rotated: bool
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> NestingPanel:
        return cls(
            id=str(record["id"]),
            layout_id=str(record["layout_id"]),
            panel_id=str(record["panel_id"]),
            x=float(record["x"]),
            y=float(record["y"]),
            width=float(record["width"]),
            height=float(record["height"]),
            rotated=bool(record["rotated"]),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "layout_id": self.layout_id,
            "panel_id": self.panel_id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotated": self.rotated,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @property
    def footprint(self) -> Rectangle:
        return Rectangle(self.x, self.y, self.width, self.height)
