"""Application commands (use cases) for panel nesting."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Sequence

from cabinet_nesting.contracts.dtos import NestingResult
from cabinet_nesting.domain.entities import (
    JOBS_TABLE,
    LAYOUTS_TABLE,
    PANELS_TABLE,
    NestingJob,
    NestingLayout,
    NestingPanel,
)
from cabinet_nesting.domain.value_objects import Board, JobStatus, Panel
from cabinet_nesting.infrastructure.bin_packing import NestingPlan, PanelNester

if TYPE_CHECKING:
    from cabinet_nesting.contracts.protocols import (
        PanelNesterProtocol,
        RecordStoreProtocol,
    )

logger = logging.getLogger(__name__)


class RunNestingCommand:
    """Runs one nesting job from start to terminal state.

    The job row is written in ``processing`` before the engine runs. A
    successful run writes one layout row per sheet, each followed by its
    panel rows, and then marks the job ``completed``. Any failure marks the
    job ``error`` on a best-effort basis; rows written before the failure
    stay in the store.
    """

    def __init__(
        self,
        store: RecordStoreProtocol,
        nester: PanelNesterProtocol | None = None,
    ) -> None:
        self.store = store
        self.nester = nester or PanelNester()

    def execute(
        self,
        panels: Sequence[Panel],
        boards: Sequence[Board],
        job_name: str | None = None,
        order_id: str | None = None,
        should_cancel: Callable[[], bool] | None = None,
    ) -> NestingResult:
        """Execute a nesting job.

        Args:
            panels: Panels to cut.
            boards: Candidate board types.
            job_name: Optional job name; defaults to a timestamped name.
            order_id: Optional order the job belongs to.
            should_cancel: Optional callable polled before each panel.

        Returns:
            NestingResult describing the finished job. Failures are reported
            through ``success``/``error`` rather than raised.
        """
        name = job_name or f"Nesting Job {datetime.now(timezone.utc).isoformat()}"
        panels_count = self.nester.count_pieces(panels)
        job_id: str | None = None

        try:
            job = NestingJob.from_record(
                self.store.insert(
                    JOBS_TABLE,
                    {
                        "name": name,
                        "status": JobStatus.PROCESSING.value,
                        "order_id": order_id,
                        "panels_count": panels_count,
                        "boards_used": 0,
                        "material_efficiency": 0.0,
                    },
                )
            )
            job_id = job.id
            logger.info("Started nesting job %s with %d pieces", job_id, panels_count)

            plan = self.nester.nest(panels, boards, should_cancel=should_cancel)
            layouts, nesting_panels = self._persist_plan(job_id, plan)

            job = NestingJob.from_record(
                self.store.update(
                    JOBS_TABLE,
                    job_id,
                    {
                        "status": JobStatus.COMPLETED.value,
                        "panels_count": plan.panels_count,
                        "boards_used": plan.boards_used,
                        "material_efficiency": plan.material_efficiency,
                    },
                )
            )
        except Exception as e:
            logger.exception("Nesting job %s failed", job_id or "(not created)")
            return self._failure(
                job_id, name, order_id, panels_count, str(e), panels
            )

        logger.info(
            "Completed nesting job %s: %d sheets, %.1f%% efficiency, %d unplaced",
            job.id,
            plan.boards_used,
            plan.material_efficiency,
            len(plan.unused_panels),
        )
        return NestingResult(
            success=True,
            job=job,
            layouts=layouts,
            panels=nesting_panels,
            unused_panels=list(plan.unused_panels),
            material_efficiency=plan.material_efficiency,
            boards_used=plan.boards_used,
        )

    def _persist_plan(
        self, job_id: str, plan: NestingPlan
    ) -> tuple[list[NestingLayout], list[NestingPanel]]:
        """Write layout and panel rows in dependency order."""
        layouts: list[NestingLayout] = []
        nesting_panels: list[NestingPanel] = []

        for sheet in plan.sheets:
            layout = NestingLayout.from_record(
                self.store.insert(
                    LAYOUTS_TABLE,
                    {
                        "job_id": job_id,
                        "board_id": sheet.board.id,
                        "board_index": sheet.sheet_index,
                        "width": sheet.board.width,
                        "height": sheet.board.height,
                        "material": sheet.board.material,
                    },
                )
            )
            layouts.append(layout)

            for placed in sheet.placements:
                nesting_panels.append(
                    NestingPanel.from_record(
                        self.store.insert(
                            PANELS_TABLE,
                            {
                                "layout_id": layout.id,
                                "panel_id": placed.panel.id,
                                "x": placed.x,
                                "y": placed.y,
                                "width": placed.placed_width,
                                "height": placed.placed_height,
                                "rotated": placed.rotated,
                            },
                        )
                    )
                )

        return layouts, nesting_panels

    def _failure(
        self,
        job_id: str | None,
        name: str,
        order_id: str | None,
        panels_count: int,
        message: str,
        panels: Sequence[Panel],
    ) -> NestingResult:
        job: NestingJob | None = None

        if job_id is not None:
            try:
                job = NestingJob.from_record(
                    self.store.update(
                        JOBS_TABLE,
                        job_id,
                        {
                            "status": JobStatus.ERROR.value,
                            "error_message": message,
                        },
                    )
                )
            except Exception as update_error:
                logger.warning(
                    "Failed to mark nesting job %s as error: %s", job_id, update_error
                )

        if job is None:
            job = NestingJob(
                id=job_id or "",
                name=name,
                status=JobStatus.ERROR,
                order_id=order_id,
                panels_count=panels_count,
                error_message=message,
            )

        return NestingResult(
            success=False,
            job=job,
            unused_panels=list(panels),
            error=message,
        )
