"""Error types raised by the map engine.

Each error also subclasses the builtin exception a caller would naturally
catch for it (``ValueError``, ``IndexError``), so code that only knows about
builtins still behaves sensibly.
"""

from __future__ import annotations


class GlyphGridError(Exception):
    """Base class for all engine errors."""


class InvalidDimensions(GlyphGridError, ValueError):
    """Grid rows or columns are not positive."""


class OutOfBounds(GlyphGridError, IndexError):
    """A (row, col) coordinate lies outside the grid."""


class UnknownTile(GlyphGridError, ValueError):
    """A TileId is not a valid index into the tile catalog."""


class ShapeMismatch(GlyphGridError, ValueError):
    """A matrix does not have the grid's fixed rows x cols shape."""


class ParseError(GlyphGridError, ValueError):
    """Map text is not valid JSON."""
