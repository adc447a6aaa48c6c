"""Pydantic schemas for the REST API."""

from cabinet_nesting.web.schemas.requests import EdgeTapeRequest, NestingJobRequest
from cabinet_nesting.web.schemas.responses import (
    EdgeTapeEstimateSchema,
    ErrorResponseSchema,
    NestingJobSchema,
    NestingLayoutSchema,
    NestingPanelSchema,
    NestingResultSchema,
    UnusedPanelSchema,
)

__all__ = [
    # Requests
    "EdgeTapeRequest",
    "NestingJobRequest",
    # Responses
    "EdgeTapeEstimateSchema",
    "ErrorResponseSchema",
    "NestingJobSchema",
    "NestingLayoutSchema",
    "NestingPanelSchema",
    "NestingResultSchema",
    "UnusedPanelSchema",
]
