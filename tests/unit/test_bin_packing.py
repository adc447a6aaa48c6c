"""Tests for the panel nesting orchestrator."""

from __future__ import annotations

import itertools

import pytest

from cabinet_nesting.domain.value_objects import Board, Panel
from cabinet_nesting.infrastructure.bin_packing import (
    NestingCancelledError,
    NestingConfig,
    NestingPlan,
    PanelNester,
    SheetPlan,
    StockPolicy,
)


def _panel(panel_id: str, width: float, height: float, quantity: int = 1) -> Panel:
    return Panel(id=panel_id, name=panel_id, width=width, height=height, quantity=quantity)


def _assert_valid_plan(plan: NestingPlan) -> None:
    """Every placement lies on its sheet and no two placements overlap."""
    for sheet in plan.sheets:
        board_rect = sheet.board.as_rectangle()
        for placed in sheet.placements:
            assert board_rect.contains(placed.footprint)
        for a, b in itertools.combinations(sheet.placements, 2):
            assert not a.footprint.intersects(b.footprint)


class TestSingleSheet:
    """Single-board scenarios."""

    def test_one_panel_at_origin(self, large_board: Board, small_panel: Panel) -> None:
        plan = PanelNester().nest([small_panel], [large_board])

        assert plan.boards_used == 1
        placed = plan.sheets[0].placements[0]
        assert (placed.x, placed.y, placed.rotated) == (0, 0, False)
        assert placed.board_id == "board-large"
        assert plan.material_efficiency == pytest.approx(12.5)
        assert plan.unused_panels == ()

    def test_rotation_on_empty_board(self) -> None:
        board = Board(id="tall", name="Tall", width=800, height=1500)
        plan = PanelNester().nest([_panel("wide", 1500, 800)], [board])

        placed = plan.sheets[0].placements[0]
        assert placed.rotated
        assert (placed.placed_width, placed.placed_height) == (800, 1500)

    def test_oversize_panel_is_unused(self, large_board: Board) -> None:
        big = _panel("big", 3000, 3000)
        plan = PanelNester().nest([big], [large_board])

        assert plan.boards_used == 0
        assert plan.unused_panels == (big,)
        assert plan.material_efficiency == 0.0

    def test_empty_input(self, large_board: Board) -> None:
        plan = PanelNester().nest([], [large_board])
        assert plan.sheets == ()
        assert plan.panels_count == 0

    def test_no_boards(self, small_panel: Panel) -> None:
        plan = PanelNester().nest([small_panel], [])
        assert plan.unused_panels == (small_panel,)

    def test_equal_areas_keep_input_order(self, square_board: Board) -> None:
        a = _panel("a", 200, 100)
        b = _panel("b", 100, 200)
        plan = PanelNester().nest([a, b], [square_board])

        placements = plan.sheets[0].placements
        assert [p.panel.id for p in placements] == ["a", "b"]
        assert (placements[1].x, placements[1].y, placements[1].rotated) == (200, 0, False)

    def test_largest_panel_placed_first(self, square_board: Board) -> None:
        plan = PanelNester().nest(
            [_panel("small", 100, 100), _panel("large", 500, 500)], [square_board]
        )
        assert plan.sheets[0].placements[0].panel.id == "large"


class TestMultipleSheets:
    """Scenarios that need more than one sheet or board type."""

    def test_second_sheet_with_pool_stock(self) -> None:
        board = Board(id="b", name="b", width=1000, height=1000, stock=2)
        plan = PanelNester().nest([_panel("p1", 600, 600), _panel("p2", 600, 600)], [board])

        assert plan.boards_used == 2
        second = plan.sheets[1]
        assert second.sheet_index == 1
        assert (second.placements[0].x, second.placements[0].y) == (0, 0)
        assert second.placements[0].sheet_index == 1

    def test_stock_exhausted_leaves_panel_unused(self, square_board: Board) -> None:
        plan = PanelNester().nest(
            [_panel("p1", 600, 600), _panel("p2", 600, 600)], [square_board]
        )
        assert plan.boards_used == 1
        assert [p.id for p in plan.unused_panels] == ["p2"]

    def test_single_policy_ignores_stock(self) -> None:
        board = Board(id="b", name="b", width=1000, height=1000, stock=2)
        nester = PanelNester(NestingConfig(stock_policy=StockPolicy.SINGLE))
        plan = nester.nest([_panel("p1", 600, 600), _panel("p2", 600, 600)], [board])

        assert plan.boards_used == 1
        assert len(plan.unused_panels) == 1

    def test_zero_stock_board_never_opened(self, small_panel: Panel) -> None:
        board = Board(id="b", name="b", width=1000, height=1000, stock=0)
        plan = PanelNester().nest([small_panel], [board])
        assert plan.boards_used == 0
        assert plan.unused_panels == (small_panel,)

    def test_smallest_fitting_board_opened(self, large_board: Board) -> None:
        small_board = Board(id="small", name="Small", width=500, height=500)
        plan = PanelNester().nest([_panel("p", 400, 400)], [large_board, small_board])
        assert plan.sheets[0].board.id == "small"

    def test_open_sheet_preferred_over_new_sheet(self, large_board: Board) -> None:
        small_board = Board(id="small", name="Small", width=500, height=500)
        panels = [
            _panel("p1", 1500, 800),
            _panel("p2", 400, 400),
            _panel("p3", 300, 300),
        ]
        plan = PanelNester().nest(panels, [small_board, large_board])

        assert plan.boards_used == 1
        placements = {p.panel.id: (p.x, p.y) for p in plan.sheets[0].placements}
        assert placements == {"p1": (0, 0), "p2": (1500, 0), "p3": (1500, 400)}
        assert plan.material_efficiency == pytest.approx(72.5)


class TestQuantities:
    """Quantity expansion."""

    def test_quantity_expands_to_pieces(self) -> None:
        board = Board(id="b", name="b", width=1000, height=1000, stock=2)
        plan = PanelNester().nest([_panel("p", 600, 600, quantity=2)], [board])

        assert plan.panels_count == 2
        assert plan.boards_used == 2
        assert all(p.panel.id == "p" for s in plan.sheets for p in s.placements)
        assert all(p.panel.quantity == 1 for s in plan.sheets for p in s.placements)

    def test_expansion_disabled_treats_record_as_one_piece(self, square_board: Board) -> None:
        nester = PanelNester(NestingConfig(expand_quantities=False))
        plan = nester.nest([_panel("p", 200, 200, quantity=3)], [square_board])

        assert plan.panels_count == 1
        assert plan.placed_count == 1

    def test_count_pieces_matches_plan(self, square_board: Board) -> None:
        panels = [_panel("a", 200, 200, quantity=3), _panel("b", 100, 100)]
        for expand in (True, False):
            nester = PanelNester(NestingConfig(expand_quantities=expand))
            assert nester.count_pieces(panels) == nester.nest(panels, [square_board]).panels_count

    def test_count_pieces_before_nesting(self) -> None:
        panels = [_panel("a", 200, 200, quantity=3), _panel("b", 100, 100)]
        assert PanelNester().count_pieces(panels) == 4
        assert PanelNester(NestingConfig(expand_quantities=False)).count_pieces(panels) == 2


class TestPlanProperties:
    """Invariants over a mixed workload."""

    @pytest.fixture
    def workload(self) -> list[Panel]:
        return [
            _panel("side", 720, 560, quantity=2),
            _panel("shelf", 764, 540, quantity=3),
            _panel("back", 764, 720),
            _panel("door", 715, 396, quantity=2),
            _panel("strip", 1200, 80, quantity=4),
        ]

    @pytest.fixture
    def boards(self) -> list[Board]:
        return [
            Board(id="full", name="Full", width=2800, height=2070, stock=2),
            Board(id="half", name="Half", width=1400, height=1000, stock=3),
        ]

    def test_no_overlaps_and_within_bounds(self, workload, boards) -> None:
        _assert_valid_plan(PanelNester().nest(workload, boards))

    def test_every_piece_accounted_for(self, workload, boards) -> None:
        plan = PanelNester().nest(workload, boards)
        assert plan.placed_count + len(plan.unused_panels) == plan.panels_count == 12

    def test_efficiency_bounds(self, workload, boards) -> None:
        plan = PanelNester().nest(workload, boards)
        assert 0 < plan.material_efficiency <= 100
        for sheet in plan.sheets:
            assert 0 < sheet.efficiency <= 100

    def test_deterministic(self, workload, boards) -> None:
        assert PanelNester().nest(workload, boards) == PanelNester().nest(workload, boards)

    def test_without_rotation_never_rotates(self, workload, boards) -> None:
        plan = PanelNester(NestingConfig(allow_rotation=False)).nest(workload, boards)
        assert not any(p.rotated for s in plan.sheets for p in s.placements)
        _assert_valid_plan(plan)


class TestCancellation:
    def test_cancel_between_panels(self, square_board: Board) -> None:
        polls = []

        def should_cancel() -> bool:
            polls.append(None)
            return len(polls) > 1

        panels = [_panel("a", 300, 300), _panel("b", 200, 200), _panel("c", 100, 100)]
        with pytest.raises(NestingCancelledError, match="Nesting run cancelled") as exc_info:
            PanelNester().nest(panels, [square_board], should_cancel=should_cancel)

        assert exc_info.value.processed == 1
        assert exc_info.value.total == 3

    def test_never_cancelled(self, square_board: Board, small_panel: Panel) -> None:
        plan = PanelNester().nest([small_panel], [square_board], should_cancel=lambda: False)
        assert plan.placed_count == 1


class TestSheetPlan:
    def test_negative_index_raises(self, square_board: Board) -> None:
        with pytest.raises(ValueError, match="Sheet index"):
            SheetPlan(board=square_board, sheet_index=-1, placements=())

    def test_empty_sheet_efficiency(self, square_board: Board) -> None:
        sheet = SheetPlan(board=square_board, sheet_index=0, placements=())
        assert sheet.efficiency == 0
        assert sheet.panel_count == 0
