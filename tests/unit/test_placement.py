"""Tests for best-fit placement selection."""

from __future__ import annotations

import pytest

from cabinet_nesting.domain.entities import PlacedPanel
from cabinet_nesting.domain.services.free_space import FreeSpaceTracker
from cabinet_nesting.domain.services.placement import PlacementChooser, does_panel_fit
from cabinet_nesting.domain.value_objects import Board, Panel, Placement, Rectangle


def _panel(width: float, height: float, panel_id: str = "p") -> Panel:
    return Panel(id=panel_id, name=panel_id, width=width, height=height)


class TestDoesPanelFit:
    """Tests for the orientation check."""

    @pytest.mark.parametrize(
        "width,height,allow_rotation,expected",
        [
            (500, 300, True, (True, False)),
            (300, 500, True, (True, True)),
            (300, 500, False, (False, False)),
            (600, 600, True, (False, False)),
            (500, 500, True, (False, False)),
        ],
    )
    def test_orientations(self, width, height, allow_rotation, expected) -> None:
        space = Rectangle(0, 0, 500, 300)
        assert does_panel_fit(_panel(width, height), space, allow_rotation) == expected

    def test_unrotated_preferred_when_both_fit(self) -> None:
        assert does_panel_fit(_panel(100, 100), Rectangle(0, 0, 500, 500)) == (True, False)


class TestChoose:
    """Tests for choosing among explicit free rectangles."""

    def test_minimum_waste_wins(self) -> None:
        chooser = PlacementChooser()
        free = [Rectangle(400, 0, 600, 1000), Rectangle(0, 300, 1000, 700)]
        assert chooser.choose(_panel(300, 200), free) == Placement(400, 0, False)

    def test_smaller_later_rectangle_wins(self) -> None:
        chooser = PlacementChooser()
        free = [Rectangle(0, 0, 1000, 1000), Rectangle(500, 500, 300, 300)]
        assert chooser.choose(_panel(300, 300), free) == Placement(500, 500, False)

    def test_rotation_used_when_only_rotated_fits(self) -> None:
        chooser = PlacementChooser(allow_rotation=True)
        assert chooser.choose(_panel(400, 100), [Rectangle(0, 0, 100, 500)]) == Placement(
            0, 0, True
        )

    def test_rotation_disabled(self) -> None:
        chooser = PlacementChooser(allow_rotation=False)
        assert chooser.choose(_panel(400, 100), [Rectangle(0, 0, 100, 500)]) is None

    def test_equal_waste_keeps_first(self) -> None:
        chooser = PlacementChooser()
        free = [Rectangle(0, 0, 200, 200), Rectangle(300, 0, 200, 200)]
        assert chooser.choose(_panel(100, 100), free) == Placement(0, 0, False)

    def test_no_fit_returns_none(self) -> None:
        chooser = PlacementChooser()
        assert chooser.choose(_panel(600, 600), [Rectangle(0, 0, 500, 500)]) is None

    def test_empty_free_list(self) -> None:
        assert PlacementChooser().choose(_panel(10, 10), []) is None


class TestFindBestPosition:
    """Tests for placement on a board given existing placements."""

    def test_empty_board_places_at_origin(self, large_board: Board) -> None:
        chooser = PlacementChooser()
        assert chooser.find_best_position(_panel(500, 500), large_board, []) == Placement(
            0, 0, False
        )

    def test_empty_board_rotates_when_needed(self) -> None:
        board = Board(id="tall", name="Tall", width=800, height=1500)
        chooser = PlacementChooser()
        assert chooser.find_best_position(_panel(1500, 800), board, []) == Placement(
            0, 0, True
        )

    def test_empty_board_rotation_disabled(self) -> None:
        board = Board(id="tall", name="Tall", width=800, height=1500)
        chooser = PlacementChooser(allow_rotation=False)
        assert chooser.find_best_position(_panel(1500, 800), board, []) is None

    def test_oversize_panel(self, large_board: Board) -> None:
        assert PlacementChooser().find_best_position(_panel(3000, 3000), large_board, []) is None

    def test_uses_free_space_after_placements(self, square_board: Board) -> None:
        first = PlacedPanel(
            panel=_panel(400, 300, "p1"), x=0, y=0, rotated=False, board_id="board-square"
        )
        placement = PlacementChooser().find_best_position(
            _panel(300, 200, "p2"), square_board, [first]
        )
        assert placement == Placement(400, 0, False)

    def test_full_board_rejects(self, square_board: Board) -> None:
        first = PlacedPanel(
            panel=_panel(1000, 1000, "p1"), x=0, y=0, rotated=False, board_id="board-square"
        )
        assert PlacementChooser().find_best_position(_panel(1, 1), square_board, [first]) is None


class RecordingTracker(FreeSpaceTracker):
    """Tracker that remembers which boards it was asked about."""

    def __init__(self) -> None:
        self.boards: list[str] = []

    def free_rectangles(self, board, placed):
        self.boards.append(board.id)
        return super().free_rectangles(board, placed)


class TestFreeSpaceSource:
    """The chooser gets free space from its tracker."""

    def test_default_tracker(self) -> None:
        assert isinstance(PlacementChooser().tracker, FreeSpaceTracker)

    def test_tracker_consulted_for_partly_filled_board(self, square_board: Board) -> None:
        tracker = RecordingTracker()
        chooser = PlacementChooser(tracker=tracker)
        first = PlacedPanel(
            panel=_panel(400, 300, "p1"), x=0, y=0, rotated=False, board_id="board-square"
        )

        placement = chooser.find_best_position(_panel(300, 200, "p2"), square_board, [first])

        assert placement == Placement(400, 0, False)
        assert tracker.boards == ["board-square"]

    def test_tracker_skipped_for_empty_board(self, square_board: Board) -> None:
        tracker = RecordingTracker()
        PlacementChooser(tracker=tracker).find_best_position(_panel(100, 100), square_board, [])
        assert tracker.boards == []
