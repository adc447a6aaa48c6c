"""Contracts module - protocols and shared DTOs for cross-layer communication.

Example:
    ```python
    from cabinet_nesting.contracts import RecordStoreProtocol

    def load_job(store: RecordStoreProtocol, job_id: str) -> dict | None:
        return store.select("nesting_jobs", job_id)
    ```
"""

# DTOs
from .dtos import NestingResult as NestingResult

# Service protocols
from .protocols import (
    PanelNesterProtocol as PanelNesterProtocol,
    PersistenceError as PersistenceError,
    RecordStoreProtocol as RecordStoreProtocol,
)
