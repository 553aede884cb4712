"""Grouping of grid cells by tile type, for batched rendering.

A ``RenderGroup`` maps each TileId present in the grid to the coordinates
of every cell holding it, so a renderer can issue one batched draw per tile
type. Two ways of producing it are provided:

  * ``group(grid)`` - the reference: a single row-major pass over all cells.
  * ``IncrementalGrouping`` - keeps a grouping up to date by moving a single
    coordinate between groups when one cell changes. It must always return
    exactly what ``group()`` would for the same grid; the tests and
    ``scripts/bench_batching.py`` check this.

Invariants of every RenderGroup:
  * keys are ascending TileIds, each present in at least one cell;
  * coordinates within a group are in scan order (row 0 first, then by
    column);
  * the groups partition the full rows x cols coordinate space.
"""

from __future__ import annotations

import bisect

from .grid import GridModel
from .types import Coord

RenderGroup = dict[int, tuple[Coord, ...]]


def group(grid: GridModel) -> RenderGroup:
    groups: dict[int, list[Coord]] = {}
    for row, col, tile_id in grid.cells():
        if tile_id not in groups:
            groups[tile_id] = []
        groups[tile_id].append((row, col))
    return {tile_id: tuple(groups[tile_id]) for tile_id in sorted(groups)}


def tile_counts(groups: RenderGroup) -> dict[int, int]:
    return {tile_id: len(cells) for tile_id, cells in groups.items()}


class IncrementalGrouping:
    """A RenderGroup maintained under single-cell updates.

    Coordinates are stored internally as flat scan indices
    (``row * cols + col``) in sorted lists, so keeping scan order is a
    bisect insert.
    """

    def __init__(self, grid: GridModel):
        self.reset(grid)

    def reset(self, grid: GridModel) -> None:
        """Discard the current state and regroup *grid* from scratch."""
        self.rows, self.cols = grid.shape
        self._indices: dict[int, list[int]] = {}
        for row, col, tile_id in grid.cells():
            self._indices.setdefault(tile_id, []).append(row * self.cols + col)
        self._cache: RenderGroup | None = None

    def move(self, row: int, col: int, old_tile: int, new_tile: int) -> None:
        """Record that (row, col) changed from *old_tile* to *new_tile*."""
        if old_tile == new_tile:
            return
        index = row * self.cols + col
        old_list = self._indices[old_tile]
        pos = bisect.bisect_left(old_list, index)
        if pos == len(old_list) or old_list[pos] != index:
            raise KeyError(
                f"Cell ({row}, {col}) is not in the group for tile {old_tile}"
            )
        del old_list[pos]
        if not old_list:
            del self._indices[old_tile]
        bisect.insort(self._indices.setdefault(new_tile, []), index)
        self._cache = None

    def groups(self) -> RenderGroup:
        if self._cache is None:
            cols = self.cols
            self._cache = {
                tile_id: tuple(divmod(i, cols) for i in self._indices[tile_id])
                for tile_id in sorted(self._indices)
            }
        return dict(self._cache)
