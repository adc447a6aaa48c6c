"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cabinet_nesting.web.exceptions import register_exception_handlers
from cabinet_nesting.web.routers import edge_tape_router, nesting_router

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Build the nesting API with its routers and error handlers.

    Each call returns an independent app, so tests can override
    dependencies without leaking into the module-level ``app``.
    """
    app = FastAPI(
        title="Cabinet Nesting API",
        description="Nest cabinet panels onto stock boards and track nesting jobs",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (nesting_router, edge_tape_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
