"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cabinet_nesting.application.config import ConfigError
from cabinet_nesting.contracts.protocols import PersistenceError


class JobNotFoundError(Exception):
    """Raised when a nesting job id is unknown."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Nesting job not found: {job_id}")


class EdgeTapeNotFoundError(Exception):
    """Raised when a requested edge tape is not in the configuration."""

    def __init__(self, tape_id: str, available: list[str]) -> None:
        self.tape_id = tape_id
        self.available = available
        super().__init__(f"Edge tape not found: {tape_id}")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid nesting configuration",
                "error_type": exc.error_type,
                "details": [
                    {"path": d.get("path"), "message": d.get("message")}
                    for d in exc.details
                ],
            },
        )

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={
                "error": exc.message,
                "error_type": "persistence",
                "details": {"table": exc.table},
            },
        )

    @app.exception_handler(JobNotFoundError)
    async def job_not_found_handler(
        request: Request, exc: JobNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": None,
            },
        )

    @app.exception_handler(EdgeTapeNotFoundError)
    async def edge_tape_not_found_handler(
        request: Request, exc: EdgeTapeNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "not_found",
                "details": {"tape_id": exc.tape_id, "available": exc.available},
            },
        )
