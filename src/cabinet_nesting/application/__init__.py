"""Application layer - use cases and configuration."""

from cabinet_nesting.contracts.dtos import NestingResult

from .commands import RunNestingCommand
from .factory import ServiceFactory, get_factory, reset_factory, set_factory

__all__ = [
    "NestingResult",
    "RunNestingCommand",
    "ServiceFactory",
    "get_factory",
    "reset_factory",
    "set_factory",
]
