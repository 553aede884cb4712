"""glyphgrid: a tile-map editor for painting glyph tiles onto a grid."""

__version__ = "0.1.0"
