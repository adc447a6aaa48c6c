"""Panel nesting orchestrator and its result models.

Panels are placed largest first. Each panel goes onto the first already
opened sheet that can take it, where the placement chooser picks the
least-waste free rectangle. When no open sheet accepts it, a new sheet is
opened from the smallest board type that can hold the panel. Panels that fit
no board are reported back, not raised.

Result dataclasses are frozen; the per-sheet working state used during a run
is private to that run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Sequence

from cabinet_nesting.domain.entities import PlacedPanel
from cabinet_nesting.domain.services.placement import PlacementChooser
from cabinet_nesting.domain.value_objects import Board, Panel

logger = logging.getLogger(__name__)


class NestingCancelledError(Exception):
    """Raised when a run is cancelled between panels."""

    def __init__(self, processed: int, total: int) -> None:
        self.processed = processed
        self.total = total
        super().__init__("Nesting run cancelled")


class StockPolicy(str, Enum):
    """How board stock limits the sheets a run may open.

    POOL: each board type supplies up to ``Board.stock`` sheets.
    SINGLE: each board id supplies exactly one sheet, whatever its stock.
    """

    POOL = "pool"
    SINGLE = "single"


@dataclass(frozen=True)
class NestingConfig:
    """Configuration for a nesting run.

    Attributes:
        allow_rotation: Whether panels may be turned 90 degrees.
        expand_quantities: Split panels with quantity N into N pieces
            before sorting. When False every record is one piece.
        stock_policy: How board stock is honored.
    """

    allow_rotation: bool = True
    expand_quantities: bool = True
    stock_policy: StockPolicy = StockPolicy.POOL


@dataclass(frozen=True)
class SheetPlan:
    """Placements on one opened sheet.

    Attributes:
        board: Board type the sheet was taken from.
        sheet_index: Zero-based opening order within the run.
        placements: Placed panels in placement order.
    """

    board: Board
    sheet_index: int
    placements: tuple[PlacedPanel, ...]

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def used_area(self) -> float:
        """Total area covered by placed panels in square mm."""
        return sum(p.panel.area for p in self.placements)

    @property
    def efficiency(self) -> float:
        """Percentage of the sheet covered by panels."""
        return self.used_area / self.board.area * 100

    @property
    def panel_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class NestingPlan:
    """Complete in-memory result of a nesting run.

    Attributes:
        sheets: Opened sheets in opening order.
        unused_panels: Pieces that fit no board, in processing order.
        panels_count: Number of physical pieces the run considered.
    """

    sheets: tuple[SheetPlan, ...]
    unused_panels: tuple[Panel, ...] = ()
    panels_count: int = 0

    @property
    def boards_used(self) -> int:
        return len(self.sheets)

    @property
    def placed_count(self) -> int:
        return sum(sheet.panel_count for sheet in self.sheets)

    @property
    def material_efficiency(self) -> float:
        """Placed panel area over opened board area, as a percentage.

        Zero when no sheet was opened.
        """
        total_board_area = sum(sheet.board.area for sheet in self.sheets)
        if total_board_area == 0:
            return 0.0
        total_panel_area = sum(sheet.used_area for sheet in self.sheets)
        return total_panel_area / total_board_area * 100


@dataclass
class _SheetState:
    """Working state of one opened sheet."""

    board: Board
    index: int
    placements: list[PlacedPanel] = field(default_factory=list)


class PanelNester:
    """Best-fit decreasing nesting across a set of board types.

    Attributes:
        config: Nesting configuration.
        chooser: Placement chooser used for every sheet.
    """

    def __init__(self, config: NestingConfig | None = None) -> None:
        self.config = config or NestingConfig()
        self.chooser = PlacementChooser(allow_rotation=self.config.allow_rotation)

    def count_pieces(self, panels: Sequence[Panel]) -> int:
        """Number of physical pieces a run over ``panels`` considers."""
        if self.config.expand_quantities:
            return sum(panel.quantity for panel in panels)
        return len(panels)

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
            NestingPlan with sheets, unused panels and counts.

        Raises:
            NestingCancelledError: If ``should_cancel`` returns True.
        """
        pieces = self._expand_panels(panels) if self.config.expand_quantities else list(panels)
        sorted_pieces = self._sort_panels(pieces)
        sorted_boards = self._sort_boards(boards)

        logger.debug(
            "Nesting %d pieces across %d board types", len(pieces), len(boards)
        )

        sheets: list[_SheetState] = []
        sheets_opened: dict[str, int] = {}
        unused: list[Panel] = []

        for position, panel in enumerate(sorted_pieces):
            if should_cancel is not None and should_cancel():
                logger.info(
                    "Nesting cancelled after %d of %d pieces",
                    position,
                    len(sorted_pieces),
                )
                raise NestingCancelledError(position, len(sorted_pieces))

            if self._place_on_open_sheet(panel, sheets):
                continue

            if self._open_sheet_for(panel, sorted_boards, sheets, sheets_opened):
                continue

            logger.warning(
                "Panel '%s' (%sx%s) does not fit any available board",
                panel.name,
                panel.width,
                panel.height,
            )
            unused.append(panel)

        plan = NestingPlan(
            sheets=tuple(
                SheetPlan(
                    board=sheet.board,
                    sheet_index=sheet.index,
                    placements=tuple(sheet.placements),
                )
                for sheet in sheets
            ),
            unused_panels=tuple(unused),
            panels_count=len(pieces),
        )

        for sheet_plan in plan.sheets:
            logger.debug(
                "Sheet %d (%s): %d pieces, %.1f%% used",
                sheet_plan.sheet_index,
                sheet_plan.board.id,
                sheet_plan.panel_count,
                sheet_plan.efficiency,
            )
        logger.info(
            "Placed %d of %d pieces on %d sheets (%.1f%% efficiency)",
            plan.placed_count,
            plan.panels_count,
            plan.boards_used,
            plan.material_efficiency,
        )
        return plan

    def _expand_panels(self, panels: Sequence[Panel]) -> list[Panel]:
        """Expand panels with quantity > 1 into individual pieces.

        Each copy keeps the id of its source record so placements still
        reference the catalogue panel.
        """
        expanded: list[Panel] = []
        for panel in panels:
            if panel.quantity == 1:
                expanded.append(panel)
                continue
            for _ in range(panel.quantity):
                expanded.append(replace(panel, quantity=1))
        return expanded

    def _sort_panels(self, panels: list[Panel]) -> list[Panel]:
        """Sort by area, largest first; equal areas keep input order."""
        return sorted(panels, key=lambda p: p.area, reverse=True)

    def _sort_boards(self, boards: Sequence[Board]) -> list[Board]:
        """Sort by area, smallest first; equal areas keep input order."""
        return sorted(boards, key=lambda b: b.area)

    def _place_on_open_sheet(self, panel: Panel, sheets: list[_SheetState]) -> bool:
        """Place on the first open sheet that accepts the panel."""
        for sheet in sheets:
            placement = self.chooser.find_best_position(
                panel, sheet.board, sheet.placements
            )
            if placement is None:
                continue
            sheet.placements.append(
                PlacedPanel(
                    panel=panel,
                    x=placement.x,
                    y=placement.y,
                    rotated=placement.rotated,
                    board_id=sheet.board.id,
                    sheet_index=sheet.index,
                )
            )
            return True
        return False

    def _open_sheet_for(
        self,
        panel: Panel,
        sorted_boards: list[Board],
        sheets: list[_SheetState],
        sheets_opened: dict[str, int],
    ) -> bool:
        """Open the smallest available board that can hold the panel."""
        for board in sorted_boards:
            if not self._has_sheet_available(board, sheets_opened):
                continue

            placement = self.chooser.find_best_position(panel, board, [])
            if placement is None:
                continue

            sheet = _SheetState(board=board, index=len(sheets))
            sheet.placements.append(
                PlacedPanel(
                    panel=panel,
                    x=placement.x,
                    y=placement.y,
                    rotated=placement.rotated,
                    board_id=board.id,
                    sheet_index=sheet.index,
                )
            )
            sheets.append(sheet)
            sheets_opened[board.id] = sheets_opened.get(board.id, 0) + 1

            logger.debug(
                "Opened sheet %d from board '%s' for panel '%s'",
                sheet.index,
                board.id,
                panel.name,
            )
            return True
        return False

    def _has_sheet_available(self, board: Board, sheets_opened: dict[str, int]) -> bool:
        opened = sheets_opened.get(board.id, 0)
        if self.config.stock_policy == StockPolicy.SINGLE:
            return opened == 0
        return opened < board.stock
