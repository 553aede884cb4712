"""Convert grids to and from the glyph-keyed JSON interchange format.

A map is serialized as a JSON array of ``rows`` arrays, each holding
``cols`` glyph strings taken from the tile catalog::

    [["▫️","⬛"],["⬛","▫️"]]

Importing is strict about shape and lenient about content: the text must
be valid JSON with exactly the target grid's rows x cols shape, but any
entry that is not a catalog glyph becomes the floor tile (TileId 0) so
maps survive catalog additions and removals.
"""

from __future__ import annotations

import json
import logging

from .errors import ParseError, ShapeMismatch
from .grid import GridModel
from .types import FLOOR_TILE, TileCatalog

logger = logging.getLogger(__name__)


class MapSerializer:
    def __init__(self, catalog: TileCatalog):
        self.catalog = catalog

    def export(self, grid: GridModel) -> str:
        glyphs = self.catalog.glyphs
        return json.dumps(
            [[glyphs[tile_id] for tile_id in row] for row in grid.to_lists()],
            ensure_ascii=False,
            separators=(",", ":"),
        )

    def parse(
        self, text: str | bytes, rows: int, cols: int
    ) -> list[list[int]]:
        """Parse and validate map text into a rows x cols TileId matrix.

        Pure: touches no grid, so it is safe to call from a worker thread.

        Raises:
            ParseError: *text* is not valid JSON.
            ShapeMismatch: the JSON is not a list of *rows* lists of *cols*
                entries.
        """
        try:
            # Integers are never glyphs; loading them as floats avoids the
            # int digit limit, and they become floor like any non-glyph.
            data = json.loads(text, parse_int=float)
        except (ValueError, RecursionError) as e:
            raise ParseError(f"Map is not valid JSON: {e}") from e

        if not isinstance(data, list) or len(data) != rows:
            found = (
                len(data) if isinstance(data, list) else type(data).__name__
            )
            raise ShapeMismatch(
                f"Map must have {rows} rows of {cols} tiles, got {found} rows"
            )
        for i, row in enumerate(data):
            if not isinstance(row, list) or len(row) != cols:
                found = (
                    len(row) if isinstance(row, list) else type(row).__name__
                )
                raise ShapeMismatch(
                    f"Map must have {rows} rows of {cols} tiles, "
                    f"row {i} has {found}"
                )

        unknown = 0
        matrix = []
        for row in data:
            ids = []
            for glyph in row:
                tile_id = self.catalog.tile_id(glyph)
                if tile_id is None:
                    unknown += 1
                    tile_id = FLOOR_TILE
                ids.append(tile_id)
            matrix.append(ids)
        if unknown:
            logger.info("Mapped %d unknown glyph(s) to floor", unknown)
        return matrix

    def import_map(self, text: str | bytes, grid: GridModel) -> GridModel:
        """Return a copy of *grid* holding the map parsed from *text*.

        *grid* supplies the required dimensions and is never modified; on
        any error the caller simply keeps it.
        """
        matrix = self.parse(text, grid.rows, grid.cols)
        return grid.replace(matrix)
