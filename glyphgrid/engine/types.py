"""Data types matching the glyphgrid catalog and config JSON schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral

from .errors import InvalidDimensions, UnknownTile

FLOOR_TILE = 0

DEFAULT_ROWS = 30
DEFAULT_COLS = 10
DEFAULT_CELL_PX = 28

Coord = tuple[int, int]


@dataclass(frozen=True)
class TileCategory:
    name: str
    glyphs: tuple[str, ...]
    fill_color: str | None = None

    @staticmethod
    def from_dict(d: dict) -> TileCategory:
        return TileCategory(
            name=d["name"],
            glyphs=tuple(d["glyphs"]),
            fill_color=d.get("fill_color"),
        )

    def to_dict(self) -> dict:
        d: dict = {"name": self.name, "glyphs": list(self.glyphs)}
        if self.fill_color:
            d["fill_color"] = self.fill_color
        return d


@dataclass(frozen=True)
class TileCatalog:
    """Ordered registry of tile glyphs, grouped into palette categories.

    The flattened glyph order (categories concatenated in order) is the
    TileId space: ``glyphs[tile_id]`` is the glyph for that tile. TileId 0
    is the floor tile, so the first category must contain at least one
    glyph.
    """

    categories: tuple[TileCategory, ...]
    name: str | None = None
    glyphs: tuple[str, ...] = field(init=False, repr=False, compare=False)
    _ids_by_glyph: dict[str, int] = field(
        init=False, repr=False, compare=False
    )
    _category_by_id: tuple[int, ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        glyphs: list[str] = []
        category_by_id: list[int] = []
        for ci, cat in enumerate(self.categories):
            glyphs.extend(cat.glyphs)
            category_by_id.extend([ci] * len(cat.glyphs))
        if not glyphs:
            raise ValueError("Tile catalog must contain at least one glyph")

        # First occurrence wins when a glyph is listed twice.
        ids_by_glyph: dict[str, int] = {}
        for tile_id, glyph in enumerate(glyphs):
            ids_by_glyph.setdefault(glyph, tile_id)

        object.__setattr__(self, "glyphs", tuple(glyphs))
        object.__setattr__(self, "_ids_by_glyph", ids_by_glyph)
        object.__setattr__(self, "_category_by_id", tuple(category_by_id))

    def __len__(self) -> int:
        return len(self.glyphs)

    def __contains__(self, tile_id: object) -> bool:
        return (
            isinstance(tile_id, Integral)
            and not isinstance(tile_id, bool)
            and 0 <= tile_id < len(self.glyphs)
        )

    def validate(self, tile_id: int) -> int:
        """Return *tile_id* unchanged, or raise ``UnknownTile``."""
        if tile_id not in self:
            raise UnknownTile(
                f"Tile {tile_id!r} is not in catalog "
                f"(valid ids: 0..{len(self.glyphs) - 1})"
            )
        return tile_id

    def glyph(self, tile_id: int) -> str:
        return self.glyphs[self.validate(tile_id)]

    def tile_id(self, glyph: object) -> int | None:
        """Reverse lookup of a glyph. Returns None for unknown glyphs."""
        if not isinstance(glyph, str):
            return None
        return self._ids_by_glyph.get(glyph)

    def category_of(self, tile_id: int) -> TileCategory:
        return self.categories[self._category_by_id[self.validate(tile_id)]]

    def palette(self) -> list[tuple[TileCategory, list[tuple[int, str]]]]:
        """Return ``(category, [(tile_id, glyph), ...])`` blocks in order.

        Palette widgets should keep the TileId from here rather than
        recomputing it from a button's position.
        """
        blocks = []
        tile_id = 0
        for cat in self.categories:
            entries = []
            for glyph in cat.glyphs:
                entries.append((tile_id, glyph))
                tile_id += 1
            blocks.append((cat, entries))
        return blocks

    @property
    def has_unique_glyphs(self) -> bool:
        return len(self._ids_by_glyph) == len(self.glyphs)

    @staticmethod
    def from_dict(d: dict) -> TileCatalog:
        return TileCatalog(
            categories=tuple(
                TileCategory.from_dict(c) for c in d.get("categories", [])
            ),
            name=d.get("name"),
        )

    @staticmethod
    def from_glyphs(glyphs, name: str | None = None) -> TileCatalog:
        """Build a single-category catalog from a flat glyph list."""
        return TileCatalog(
            categories=(TileCategory(name="tiles", glyphs=tuple(glyphs)),),
            name=name,
        )

    def to_dict(self) -> dict:
        d: dict = {"categories": [c.to_dict() for c in self.categories]}
        if self.name:
            d["name"] = self.name
        return d


def default_selection(catalog: TileCatalog) -> int:
    """Initial palette selection: the first non-floor tile, if any."""
    return 1 if len(catalog) > 1 else FLOOR_TILE


@dataclass
class EditorConfig:
    catalog: TileCatalog
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    selected_tile: int | None = None
    cell_px: int = DEFAULT_CELL_PX

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidDimensions(
                f"Grid dimensions must be positive, got "
                f"{self.rows}x{self.cols}"
            )
        if self.cell_px <= 0:
            raise ValueError(f"cell_px must be positive, got {self.cell_px}")
        if self.selected_tile is None:
            self.selected_tile = default_selection(self.catalog)
        else:
            self.catalog.validate(self.selected_tile)

    @staticmethod
    def from_dict(d: dict) -> EditorConfig:
        return EditorConfig(
            catalog=TileCatalog.from_dict(d["catalog"]),
            rows=d.get("rows", DEFAULT_ROWS),
            cols=d.get("cols", DEFAULT_COLS),
            selected_tile=d.get("selected_tile"),
            cell_px=d.get("cell_px", DEFAULT_CELL_PX),
        )

    def to_dict(self) -> dict:
        return {
            "catalog": self.catalog.to_dict(),
            "rows": self.rows,
            "cols": self.cols,
            "selected_tile": self.selected_tile,
            "cell_px": self.cell_px,
        }
