"""Edge tape estimate endpoints."""

from fastapi import APIRouter

from cabinet_nesting.application.config import (
    config_to_edge_tapes,
    config_to_panels,
    load_config_from_dict,
)
from cabinet_nesting.domain.services.edge_tape import estimate_edge_tape
from cabinet_nesting.web.exceptions import EdgeTapeNotFoundError
from cabinet_nesting.web.schemas.requests import EdgeTapeRequest
from cabinet_nesting.web.schemas.responses import (
    EdgeTapeEstimateSchema,
    ErrorResponseSchema,
)

router = APIRouter(prefix="/edge-tape", tags=["edge-tape"])


@router.post(
    "",
    response_model=list[EdgeTapeEstimateSchema],
    responses={404: {"model": ErrorResponseSchema}, 422: {"model": ErrorResponseSchema}},
)
async def estimate(request: EdgeTapeRequest) -> list[EdgeTapeEstimateSchema]:
    """Estimate edge tape for every panel in the configuration."""
    config = load_config_from_dict(request.config)
    panels = config_to_panels(config)
    tapes = config_to_edge_tapes(config)

    if request.tape_id is not None:
        selected = [tape for tape in tapes if tape.id == request.tape_id]
        if not selected:
            raise EdgeTapeNotFoundError(request.tape_id, [tape.id for tape in tapes])
        tapes = selected

    estimates = [estimate_edge_tape(panels, tape) for tape in tapes]
    return [
        EdgeTapeEstimateSchema(
            tape_id=e.tape.id,
            name=e.tape.name,
            length=e.length,
            cost=e.cost,
            reels=e.reels,
            shortfall_reels=e.shortfall_reels,
        )
        for e in estimates
    ]
