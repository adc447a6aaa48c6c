"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class NestingJobSchema(BaseModel):
    """A nesting job row."""

    id: str = Field(..., description="Job id")
    name: str = Field(..., description="Job name")
    status: str = Field(..., description="pending, processing, completed or error")
    order_id: str | None = Field(default=None, description="Order reference")
    panels_count: int = Field(default=0, description="Physical pieces in the run")
    boards_used: int = Field(default=0, description="Sheets opened")
    material_efficiency: float = Field(
        default=0.0, description="Placed area over sheet area, in percent"
    )
    error_message: str | None = Field(default=None, description="Failure message")
    created_at: str | None = None
    updated_at: str | None = None


class NestingPanelSchema(BaseModel):
    """A placed panel on a sheet."""

    id: str
    panel_id: str = Field(..., description="Catalogue panel id")
    x: float = Field(..., description="X position in mm")
    y: float = Field(..., description="Y position in mm")
    width: float = Field(..., description="Placed width in mm")
    height: float = Field(..., description="Placed height in mm")
    rotated: bool = Field(..., description="Whether the panel is turned 90 degrees")


class NestingLayoutSchema(BaseModel):
    """One sheet of a completed job with its panels."""

    id: str
    board_id: str = Field(..., description="Board type the sheet came from")
    board_index: int = Field(..., description="Opening order within the job")
    width: float = Field(..., description="Sheet width in mm")
    height: float = Field(..., description="Sheet height in mm")
    material: str = Field(default="", description="Sheet material")
    panels: list[NestingPanelSchema] = Field(default_factory=list)


class UnusedPanelSchema(BaseModel):
    """A panel that did not fit any board."""

    id: str
    name: str
    width: float
    height: float


class NestingResultSchema(BaseModel):
    """Response for a nesting job run."""

    success: bool = Field(..., description="Whether the job completed")
    job: NestingJobSchema
    layouts: list[NestingLayoutSchema] = Field(default_factory=list)
    unused_panels: list[UnusedPanelSchema] = Field(default_factory=list)
    material_efficiency: float = Field(default=0.0)
    boards_used: int = Field(default=0)
    error: str | None = Field(default=None)


class EdgeTapeEstimateSchema(BaseModel):
    """Edge tape requirement for one tape."""

    tape_id: str
    name: str
    length: float = Field(..., description="Total length in meters")
    cost: float = Field(..., description="Total cost")
    reels: int = Field(..., description="Reels needed")
    shortfall_reels: int = Field(..., description="Reels missing from stock")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
