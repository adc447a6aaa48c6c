"""API routers for the REST API."""

from cabinet_nesting.web.routers.edge_tape import router as edge_tape_router
from cabinet_nesting.web.routers.nesting import router as nesting_router

__all__ = [
    "edge_tape_router",
    "nesting_router",
]
