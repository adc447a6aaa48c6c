"""Shared DTOs for cross-layer communication.

``NestingResult`` is produced by the application layer and consumed by the
formatters in the infrastructure layer, so it lives here where both can
depend on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cabinet_nesting.domain.entities import NestingJob, NestingLayout, NestingPanel
from cabinet_nesting.domain.value_objects import Panel


@dataclass
class NestingResult:
    """Outcome of one nesting job.

    The shape of ``unused_panels`` depends on the outcome. On success it
    holds individual pieces: with quantity expansion on, a record with
    quantity N that does not fit shows up as N copies with ``quantity=1``.
    On failure it holds the caller's input records unchanged, quantities
    included, and the layout and panel lists are empty, even if some rows
    were already written to the store before the failure.

    Attributes:
        success: True when the job reached ``completed``.
        job: The job as last known.
        layouts: Layout rows created, one per sheet.
        panels: Panel rows created, one per placed piece.
        unused_panels: Pieces that could not be placed, or the input
            records when the job failed.
        material_efficiency: Placed area over sheet area, in percent.
        boards_used: Number of sheets opened.
        error: Failure message, if any.
    """

    success: bool
    job: NestingJob
    layouts: list[NestingLayout] = field(default_factory=list)
    panels: list[NestingPanel] = field(default_factory=list)
    unused_panels: list[Panel] = field(default_factory=list)
    material_efficiency: float = 0.0
    boards_used: int = 0
    error: str | None = None

    def panels_for(self, layout: NestingLayout) -> list[NestingPanel]:
        """Panel rows that belong to ``layout``."""
        return [p for p in self.panels if p.layout_id == layout.id]
