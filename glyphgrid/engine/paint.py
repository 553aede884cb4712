"""Pointer-driven painting.

``PaintController`` turns raw pointer events into grid mutations. It has
two states:

  * **Idle** - nothing happens on hover. A primary-button press over a cell
    paints that cell and enters Painting.
  * **Painting** - every time the pointer enters a *different* cell, that
    cell is painted. Releasing the button or leaving the paintable surface
    returns to Idle without painting.

Non-primary buttons never paint; they are left to camera controls.

The controller does not own the grid. Every event method takes the current
``GridModel`` and returns the resulting one (the same object when nothing
changed), so the caller decides where the state lives.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .grid import GridModel
from .types import Coord, TileCatalog, default_selection

logger = logging.getLogger(__name__)


class PointerButton(enum.IntEnum):
    """Pointer button codes, numbered like DOM ``MouseEvent.button``."""

    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


@dataclass
class PaintSession:
    selected_tile: int
    drawing: bool = False
    last_cell: Coord | None = None

    def stop(self) -> None:
        self.drawing = False
        self.last_cell = None


class PaintController:
    def __init__(self, catalog: TileCatalog, selected_tile: int | None = None):
        self.catalog = catalog
        if selected_tile is None:
            selected_tile = default_selection(catalog)
        self.session = PaintSession(catalog.validate(selected_tile))

    @property
    def selected_tile(self) -> int:
        return self.session.selected_tile

    @property
    def is_painting(self) -> bool:
        return self.session.drawing

    def select_tile(self, tile_id: int) -> None:
        """Change the active tile. Does not start or stop a stroke."""
        self.session.selected_tile = self.catalog.validate(tile_id)

    def _paint(self, grid: GridModel, row: int, col: int) -> GridModel:
        self.session.last_cell = (row, col)
        return grid.set(row, col, self.session.selected_tile)

    def pointer_down(
        self,
        grid: GridModel,
        row: int,
        col: int,
        button: int = PointerButton.PRIMARY,
    ) -> GridModel:
        if button != PointerButton.PRIMARY:
            return grid
        new_grid = self._paint(grid, row, col)
        self.session.drawing = True
        logger.debug("Stroke started at (%d, %d)", row, col)
        return new_grid

    def pointer_over(self, grid: GridModel, row: int, col: int) -> GridModel:
        if not self.session.drawing:
            return grid
        if self.session.last_cell == (row, col):
            return grid
        return self._paint(grid, row, col)

    def pointer_up(self) -> None:
        if self.session.drawing:
            logger.debug("Stroke ended at %s", self.session.last_cell)
        self.session.stop()

    def pointer_leave(self) -> None:
        self.session.stop()
