"""Service protocols for dependency injection.

The nesting job lifecycle talks to persistence and to the packing engine
only through these protocols, so tests and alternative backends can be
swapped in without touching the lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from cabinet_nesting.domain.value_objects import Board, Panel
    from cabinet_nesting.infrastructure.bin_packing import NestingPlan


class PersistenceError(Exception):
    """Raised when the record store cannot complete an operation.

    Attributes:
        message: Human-readable description.
        table: Table the operation targeted, if known.
    """

    def __init__(self, message: str, table: str | None = None) -> None:
        self.message = message
        self.table = table
        super().__init__(message)


@runtime_checkable
class RecordStoreProtocol(Protocol):
    """Protocol for a generic keyed record store.

    Records are plain dictionaries. The store assigns ``id``,
    ``created_at`` and ``updated_at`` on insert. No multi-row transaction
    is assumed.

    Example:
        ```python
        job = store.insert("nesting_jobs", {"name": "Kitchen", "status": "processing"})
        store.update("nesting_jobs", job["id"], {"status": "completed"})
        ```
    """

    def insert(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert a record and return it as stored.

        Raises:
            PersistenceError: If the record cannot be written.
        """
        ...

    def update(
        self, table: str, record_id: str, changes: dict[str, Any]
    ) -> dict[str, Any]:
        """Apply ``changes`` to a record and return it as stored.

        Raises:
            PersistenceError: If the record is missing or cannot be written.
        """
        ...

    def select(self, table: str, record_id: str) -> dict[str, Any] | None:
        """Return a record by id, or None if it does not exist."""
        ...

    def delete(self, table: str, record_id: str) -> None:
        """Remove a record by id."""
        ...


class PanelNesterProtocol(Protocol):
    """Protocol for the nesting orchestrator.

    Implementations place panels onto boards and return an in-memory plan;
    they never touch persistence.
    """

    def count_pieces(self, panels: Sequence[Panel]) -> int:
        """Number of physical pieces ``nest`` would consider for ``panels``.

        Recorded on the job before nesting starts, so it must agree with
        the ``panels_count`` of the plan ``nest`` returns.
        """
        ...

    def nest(
        self,
        panels: Sequence[Panel],
        boards: Sequence[Board],
        should_cancel: Callable[[], bool] | None = None,
    ) -> NestingPlan:
        """Place panels onto boards.

        Args:
            panels: Panels to cut, in caller order.
            boards: Candidate board types.
            should_cancel: Optional callable polled before each panel.

        Returns:
            Per-sheet placements plus the panels that could not be placed.
        """
        ...
