"""Tests for the pointer paint state machine."""

import pytest

from glyphgrid.engine.errors import OutOfBounds, UnknownTile
from glyphgrid.engine.grid import GridModel
from glyphgrid.engine.paint import PaintController, PointerButton
from glyphgrid.engine.types import TileCatalog

CATALOG = TileCatalog.from_glyphs([".", "#", "T", "g", "o", "$", "?"])


def _setup(selected=5, rows=30, cols=10):
    controller = PaintController(CATALOG, selected_tile=selected)
    grid = GridModel.create(rows, cols, tile_count=len(CATALOG))
    return controller, grid


# ---------------------------------------------------------------------------
# Idle -> Painting -> Idle
# ---------------------------------------------------------------------------


class TestStroke:
    def test_drag_paints_each_entered_cell(self):
        controller, grid = _setup(selected=5)
        start = grid

        grid = controller.pointer_down(grid, 2, 3)
        assert controller.is_painting
        grid = controller.pointer_over(grid, 2, 4)
        grid = controller.pointer_over(grid, 2, 5)
        controller.pointer_up()
        assert not controller.is_painting

        for row, col, tile_id in grid.cells():
            if (row, col) in {(2, 3), (2, 4), (2, 5)}:
                assert tile_id == 5
            else:
                assert tile_id == start.get(row, col)

        # Hovering after release paints nothing.
        assert controller.pointer_over(grid, 2, 6) is grid
        assert grid.get(2, 6) == 0

    def test_hover_while_idle_does_nothing(self):
        controller, grid = _setup()
        assert controller.pointer_over(grid, 0, 0) is grid
        assert not controller.is_painting

    def test_same_cell_hover_does_not_repaint(self):
        controller, grid = _setup(selected=1)
        grid = controller.pointer_down(grid, 0, 0)
        # Switch tile mid-stroke; staying on the same cell must not retrigger.
        controller.select_tile(2)
        assert controller.pointer_over(grid, 0, 0) is grid
        assert grid.get(0, 0) == 1
        grid = controller.pointer_over(grid, 0, 1)
        assert grid.get(0, 1) == 2

    def test_returning_to_earlier_cell_repaints(self):
        controller, grid = _setup(selected=1)
        grid = controller.pointer_down(grid, 0, 0)
        grid = controller.pointer_over(grid, 0, 1)
        controller.select_tile(3)
        grid = controller.pointer_over(grid, 0, 0)
        assert grid.get(0, 0) == 3

    def test_leave_ends_stroke(self):
        controller, grid = _setup(selected=1)
        grid = controller.pointer_down(grid, 1, 1)
        controller.pointer_leave()
        assert not controller.is_painting
        assert controller.pointer_over(grid, 1, 2) is grid

    def test_up_has_no_paint_effect(self):
        controller, grid = _setup(selected=1)
        grid = controller.pointer_down(grid, 1, 1)
        before = grid
        controller.pointer_up()
        assert grid is before
        assert grid.get(1, 1) == 1

    def test_prior_states_survive_stroke(self):
        controller, grid = _setup(selected=4)
        snapshots = [grid]
        snapshots.append(controller.pointer_down(snapshots[-1], 0, 0))
        snapshots.append(controller.pointer_over(snapshots[-1], 0, 1))
        assert snapshots[0].get(0, 0) == 0
        assert snapshots[1].get(0, 1) == 0
        assert snapshots[2].get(0, 1) == 4


# ---------------------------------------------------------------------------
# Buttons and selection
# ---------------------------------------------------------------------------


class TestButtonsAndSelection:
    @pytest.mark.parametrize(
        "button", [PointerButton.MIDDLE, PointerButton.SECONDARY]
    )
    def test_non_primary_buttons_ignored(self, button):
        controller, grid = _setup()
        assert controller.pointer_down(grid, 0, 0, button) is grid
        assert not controller.is_painting
        assert controller.pointer_over(grid, 0, 1) is grid

    def test_default_selection_is_first_non_floor(self):
        controller = PaintController(CATALOG)
        assert controller.selected_tile == 1

    def test_select_tile_validates(self):
        controller, _ = _setup()
        with pytest.raises(UnknownTile):
            controller.select_tile(len(CATALOG))
        with pytest.raises(UnknownTile):
            controller.select_tile(-1)
        assert controller.selected_tile == 5

    def test_select_tile_keeps_painting_state(self):
        controller, grid = _setup()
        controller.pointer_down(grid, 0, 0)
        controller.select_tile(2)
        assert controller.is_painting
        controller.pointer_up()
        controller.select_tile(3)
        assert not controller.is_painting

    def test_repainting_same_tile_is_noop(self):
        controller, grid = _setup(selected=5)
        grid = controller.pointer_down(grid, 3, 3)
        controller.pointer_up()
        assert controller.pointer_down(grid, 3, 3) is grid

    def test_out_of_bounds_propagates(self):
        controller, grid = _setup(rows=3, cols=3)
        with pytest.raises(OutOfBounds):
            controller.pointer_down(grid, 3, 0)
