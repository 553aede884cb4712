"""The authoritative rows x cols matrix of TileIds.

``GridModel`` is immutable: every mutation returns a new ``GridModel`` and
leaves the receiver untouched, so any state can be kept around as a
snapshot. The cells live in a numpy array whose ``writeable`` flag is
cleared, and ``to_matrix()`` hands out read-only views of it, so no
consumer ever holds a writable reference to the map.
"""

from __future__ import annotations

from collections.abc import Iterator
from numbers import Integral

import numpy as np

from .errors import (
    InvalidDimensions,
    OutOfBounds,
    ShapeMismatch,
    UnknownTile,
)
from .types import FLOOR_TILE

_DTYPE = np.int32


class GridModel:
    __slots__ = ("_cells", "tile_count")

    def __init__(self, cells: np.ndarray, tile_count: int | None = None):
        # Callers go through create()/set()/replace(); cells must already
        # be validated and owned exclusively by this instance.
        cells.flags.writeable = False
        self._cells = cells
        self.tile_count = tile_count

    @classmethod
    def create(
        cls,
        rows: int,
        cols: int,
        default_tile: int = FLOOR_TILE,
        tile_count: int | None = None,
    ) -> GridModel:
        """Create a grid filled with *default_tile*.

        *tile_count* bounds valid TileIds to ``[0, tile_count)``; pass the
        catalog size. ``None`` only rejects negative ids.
        """
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(
                f"Grid dimensions must be positive, got {rows}x{cols}"
            )
        _check_tile(default_tile, tile_count)
        cells = np.full((rows, cols), default_tile, dtype=_DTYPE)
        return cls(cells, tile_count)

    @property
    def rows(self) -> int:
        return self._cells.shape[0]

    @property
    def cols(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_coord(self, row: int, col: int) -> None:
        # numpy would silently wrap negative indices
        if not self.in_bounds(row, col):
            raise OutOfBounds(
                f"Cell ({row}, {col}) is outside the "
                f"{self.rows}x{self.cols} grid"
            )

    def get(self, row: int, col: int) -> int:
        self._check_coord(row, col)
        return int(self._cells[row, col])

    def set(self, row: int, col: int, tile_id: int) -> GridModel:
        """Return a new grid with one cell changed.

        Writing the value a cell already holds returns ``self``.
        """
        self._check_coord(row, col)
        _check_tile(tile_id, self.tile_count)
        if self._cells[row, col] == tile_id:
            return self
        cells = self._cells.copy()
        cells[row, col] = tile_id
        return GridModel(cells, self.tile_count)

    def replace(self, matrix) -> GridModel:
        """Return a new grid holding *matrix*, which must match our shape."""
        rows, cols = self.shape
        if isinstance(matrix, np.ndarray):
            if matrix.shape != (rows, cols):
                raise ShapeMismatch(
                    f"Expected a {rows}x{cols} matrix, got shape "
                    f"{matrix.shape}"
                )
            values = matrix.tolist()
        else:
            try:
                values = [list(r) for r in matrix]
            except TypeError as e:
                raise ShapeMismatch(
                    f"Expected a {rows}x{cols} matrix of rows"
                ) from e
            if len(values) != rows or any(len(r) != cols for r in values):
                raise ShapeMismatch(
                    f"Expected a {rows}x{cols} matrix, got "
                    f"{len(values)} rows with lengths "
                    f"{sorted({len(r) for r in values})}"
                )
        for r in values:
            for tile_id in r:
                _check_tile(tile_id, self.tile_count)
        return GridModel(np.array(values, dtype=_DTYPE), self.tile_count)

    def fill(self, tile_id: int = FLOOR_TILE) -> GridModel:
        _check_tile(tile_id, self.tile_count)
        cells = np.full(self.shape, tile_id, dtype=_DTYPE)
        return GridModel(cells, self.tile_count)

    def to_matrix(self) -> np.ndarray:
        """Read-only rows x cols view of the cells."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def to_lists(self) -> list[list[int]]:
        return self._cells.tolist()

    def cells(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(row, col, tile_id)`` in row-major order, row 0 first."""
        for row, values in enumerate(self._cells.tolist()):
            for col, tile_id in enumerate(values):
                yield row, col, tile_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridModel):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._cells, other._cells)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GridModel(rows={self.rows}, cols={self.cols})"


def _check_tile(tile_id, tile_count: int | None) -> None:
    if (
        not isinstance(tile_id, Integral)
        or isinstance(tile_id, bool)
        or tile_id < 0
        or (tile_count is not None and tile_id >= tile_count)
    ):
        bound = ""
        if tile_count is not None:
            bound = f" (valid ids: 0..{tile_count - 1})"
        raise UnknownTile(f"Tile {tile_id!r} is not a valid TileId{bound}")
