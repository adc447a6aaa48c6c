"""FastAPI dependency injection for nesting services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cabinet_nesting.application.factory import ServiceFactory, get_factory
from cabinet_nesting.contracts.protocols import RecordStoreProtocol


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_record_store(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> RecordStoreProtocol:
    """Dependency for the shared record store."""
    return factory.get_record_store()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
RecordStoreDep = Annotated[RecordStoreProtocol, Depends(get_record_store)]
