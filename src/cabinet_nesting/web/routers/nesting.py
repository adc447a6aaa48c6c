"""Nesting job endpoints."""

from fastapi import APIRouter, status

from cabinet_nesting.application.config import (
    config_to_boards,
    config_to_nesting_config,
    config_to_panels,
    load_config_from_dict,
)
from cabinet_nesting.contracts.dtos import NestingResult
from cabinet_nesting.domain.entities import JOBS_TABLE, NestingJob
from cabinet_nesting.web.dependencies import RecordStoreDep, ServiceFactoryDep
from cabinet_nesting.web.exceptions import JobNotFoundError
from cabinet_nesting.web.schemas.requests import NestingJobRequest
from cabinet_nesting.web.schemas.responses import (
    ErrorResponseSchema,
    NestingJobSchema,
    NestingLayoutSchema,
    NestingPanelSchema,
    NestingResultSchema,
    UnusedPanelSchema,
)

router = APIRouter(prefix="/nesting", tags=["nesting"])

ERROR_RESPONSES = {
    404: {"model": ErrorResponseSchema},
    422: {"model": ErrorResponseSchema},
    503: {"model": ErrorResponseSchema},
}


def _job_to_schema(job: NestingJob) -> NestingJobSchema:
    return NestingJobSchema(**job.to_record())


def _result_to_schema(result: NestingResult) -> NestingResultSchema:
    """Convert NestingResult to response schema."""
    layouts = [
        NestingLayoutSchema(
            id=layout.id,
            board_id=layout.board_id,
            board_index=layout.board_index,
            width=layout.width,
            height=layout.height,
            material=layout.material,
            panels=[
                NestingPanelSchema(
                    id=panel.id,
                    panel_id=panel.panel_id,
                    x=panel.x,
                    y=panel.y,
                    width=panel.width,
                    height=panel.height,
                    rotated=panel.rotated,
                )
                for panel in result.panels_for(layout)
            ],
        )
        for layout in result.layouts
    ]

    return NestingResultSchema(
        success=result.success,
        job=_job_to_schema(result.job),
        layouts=layouts,
        unused_panels=[
            UnusedPanelSchema(
                id=panel.id, name=panel.name, width=panel.width, height=panel.height
            )
            for panel in result.unused_panels
        ],
        material_efficiency=result.material_efficiency,
        boards_used=result.boards_used,
        error=result.error,
    )


@router.post(
    "/jobs",
    response_model=NestingResultSchema,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def run_nesting_job(
    request: NestingJobRequest,
    factory: ServiceFactoryDep,
) -> NestingResultSchema:
    """Run a nesting job from a configuration.

    The job is recorded whether it completes or fails; check ``success``.

    Raises:
        ConfigError: If the configuration is invalid (mapped to 422).
    """
    config = load_config_from_dict(request.config)
    command = factory.create_run_command(config_to_nesting_config(config))
    result = command.execute(
        config_to_panels(config),
        config_to_boards(config),
        job_name=request.job_name or config.job_name,
        order_id=config.order_id,
    )
    return _result_to_schema(result)


@router.get(
    "/jobs/{job_id}", response_model=NestingJobSchema, responses=ERROR_RESPONSES
)
async def get_nesting_job(job_id: str, store: RecordStoreDep) -> NestingJobSchema:
    """Read a nesting job back from the record store.

    Raises:
        JobNotFoundError: If no job has this id (mapped to 404).
    """
    record = store.select(JOBS_TABLE, job_id)
    if record is None:
        raise JobNotFoundError(job_id)
    return _job_to_schema(NestingJob.from_record(record))
