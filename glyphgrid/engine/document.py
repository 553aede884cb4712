"""One editing session's map: the single owner of the current GridModel.

``MapDocument`` wires the engine pieces together for a front end:

  * pointer events go to ``PaintController``, whose returned grid is
    committed here;
  * every commit updates the render grouping, incrementally for single-cell
    paints and from scratch for wholesale replacement (import, clear);
  * listeners registered with ``add_listener`` are called after each commit
    and after selection changes, so the UI can redraw.

Nothing outside this class ever sees a writable grid: ``grid`` returns the
current immutable ``GridModel``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .batching import IncrementalGrouping, RenderGroup, tile_counts
from .grid import GridModel
from .paint import PaintController, PointerButton
from .serializer import MapSerializer
from .types import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    FLOOR_TILE,
    EditorConfig,
    TileCatalog,
)

logger = logging.getLogger(__name__)

Listener = Callable[["MapDocument"], None]


class MapDocument:
    def __init__(
        self,
        catalog: TileCatalog,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        selected_tile: int | None = None,
    ):
        self.catalog = catalog
        self._grid = GridModel.create(
            rows, cols, FLOOR_TILE, tile_count=len(catalog)
        )
        self.controller = PaintController(catalog, selected_tile)
        self.serializer = MapSerializer(catalog)
        self._grouping = IncrementalGrouping(self._grid)
        self._listeners: list[Listener] = []

    @staticmethod
    def from_config(config: EditorConfig) -> MapDocument:
        return MapDocument(
            config.catalog,
            rows=config.rows,
            cols=config.cols,
            selected_tile=config.selected_tile,
        )

    # -- state --

    @property
    def grid(self) -> GridModel:
        return self._grid

    @property
    def groups(self) -> RenderGroup:
        return self._grouping.groups()

    @property
    def selected_tile(self) -> int:
        return self.controller.selected_tile

    @property
    def is_painting(self) -> bool:
        return self.controller.is_painting

    def tile_counts(self) -> dict[int, int]:
        return tile_counts(self.groups)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _commit_cell(self, new_grid: GridModel, row: int, col: int) -> None:
        if new_grid is self._grid:
            return
        old_tile = self._grid.get(row, col)
        self._grid = new_grid
        self._grouping.move(row, col, old_tile, new_grid.get(row, col))
        self._notify()

    def _commit_all(self, new_grid: GridModel) -> None:
        self._grid = new_grid
        self._grouping.reset(new_grid)
        self._notify()

    # -- painting --

    def select_tile(self, tile_id: int) -> None:
        self.controller.select_tile(tile_id)
        self._notify()

    def pointer_down(
        self, row: int, col: int, button: int = PointerButton.PRIMARY
    ) -> None:
        new_grid = self.controller.pointer_down(self._grid, row, col, button)
        self._commit_cell(new_grid, row, col)

    def pointer_over(self, row: int, col: int) -> None:
        new_grid = self.controller.pointer_over(self._grid, row, col)
        self._commit_cell(new_grid, row, col)

    def pointer_up(self) -> None:
        self.controller.pointer_up()

    def pointer_leave(self) -> None:
        self.controller.pointer_leave()

    # -- whole-map operations --

    def export(self) -> str:
        return self.serializer.export(self._grid)

    def import_text(self, text: str | bytes) -> GridModel:
        """Replace the map with one parsed from *text*.

        Raises ``ParseError`` or ``ShapeMismatch`` and leaves the current map
        untouched if *text* is not an importable map.
        """
        new_grid = self.serializer.import_map(text, self._grid)
        self._commit_all(new_grid)
        logger.info("Imported %dx%d map", new_grid.rows, new_grid.cols)
        return new_grid

    def load_matrix(self, matrix) -> GridModel:
        """Replace the map with an already-parsed TileId matrix."""
        new_grid = self._grid.replace(matrix)
        self._commit_all(new_grid)
        return new_grid

    def clear(self) -> None:
        self.controller.pointer_leave()
        self._commit_all(self._grid.fill(FLOOR_TILE))
