"""Grid editing engine: map model, painting, render batching, serialization.

No UI dependencies; the tkinter front end lives in ``glyphgrid.frontend``.
"""

from .batching import IncrementalGrouping, RenderGroup, group, tile_counts
from .catalog_io import (
    builtin_catalog_path,
    load_builtin_catalog,
    load_catalog,
)
from .document import MapDocument
from .errors import (
    GlyphGridError,
    InvalidDimensions,
    OutOfBounds,
    ParseError,
    ShapeMismatch,
    UnknownTile,
)
from .grid import GridModel
from .importer import ImportResult, MapImporter
from .paint import PaintController, PaintSession, PointerButton
from .serializer import MapSerializer
from .types import EditorConfig, TileCatalog, TileCategory

__all__ = [
    "EditorConfig",
    "GlyphGridError",
    "GridModel",
    "ImportResult",
    "IncrementalGrouping",
    "InvalidDimensions",
    "MapDocument",
    "MapImporter",
    "MapSerializer",
    "OutOfBounds",
    "PaintController",
    "PaintSession",
    "ParseError",
    "PointerButton",
    "RenderGroup",
    "ShapeMismatch",
    "TileCatalog",
    "TileCategory",
    "UnknownTile",
    "builtin_catalog_path",
    "group",
    "load_builtin_catalog",
    "load_catalog",
    "tile_counts",
]
