"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class NestingJobRequest(BaseModel):
    """Request for running a nesting job from a full configuration."""

    config: dict[str, Any] = Field(..., description="Nesting configuration JSON")
    job_name: str | None = Field(
        default=None, description="Job name (overrides the configuration)"
    )


class EdgeTapeRequest(BaseModel):
    """Request for estimating edge tape."""

    config: dict[str, Any] = Field(..., description="Nesting configuration JSON")
    tape_id: str | None = Field(
        default=None, description="Only estimate the edge tape with this id"
    )
