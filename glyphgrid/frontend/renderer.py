"""Draw a map to a Pillow image from its render grouping.

Each TileId gets one texture, rasterized from its glyph the first time it
is needed: the tile's category fill color with the glyph centered on top.
``MapRenderer.render`` then walks the ``RenderGroup`` one tile type at a
time and stamps that texture at every cell in the group, which is the
image equivalent of one instanced draw call per tile type.

Emoji need a color emoji font. The renderer tries a few common system
fonts and falls back to Pillow's built-in font, in which case emoji show
up as placeholder boxes on top of the category color.
"""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFont

from ..engine.batching import RenderGroup
from ..engine.types import Coord, TileCatalog

GRID_LINE = "#00000033"
DEFAULT_FILL = "#888888"
BACKGROUND = "#1e1e1e"

# (font file, pixel size). Bitmap emoji fonts only load at their native
# strike size, so sizes here are not arbitrary.
_FONT_CANDIDATES = [
    ("NotoColorEmoji.ttf", 109),
    ("/usr/share/fonts/truetype/noto/NotoColorEmoji.ttf", 109),
    ("/usr/share/fonts/noto/NotoColorEmoji.ttf", 109),
    ("/System/Library/Fonts/Apple Color Emoji.ttc", 160),
    ("seguiemj.ttf", 96),
    ("DejaVuSans.ttf", 96),
]
_FALLBACK_FONT_SIZE = 96

_font_cache: ImageFont.ImageFont | ImageFont.FreeTypeFont | None = None


def glyph_font():
    """Return the first available glyph font (cached)."""
    global _font_cache
    if _font_cache is None:
        for name, size in _FONT_CANDIDATES:
            try:
                _font_cache = ImageFont.truetype(name, size)
                break
            except OSError:
                continue
        else:
            _font_cache = ImageFont.load_default(size=_FALLBACK_FONT_SIZE)
    return _font_cache


def rasterize_glyph(glyph: str, size: int, fill: str | None = None):
    """Render *glyph* centered on an opaque *size* x *size* RGBA tile."""
    font = glyph_font()
    # Draw at the font's native size, then scale down to the tile.
    native = max(size, int(getattr(font, "size", size) * 1.25))
    big = Image.new("RGB", (native, native), fill or DEFAULT_FILL)
    # Bitmap fallback fonts cannot encode emoji; leave just the fill.
    if not isinstance(font, ImageFont.FreeTypeFont):
        return big.resize((size, size), Image.Resampling.LANCZOS).convert(
            "RGBA"
        )
    draw = ImageDraw.Draw(big)
    draw.text(
        (native / 2, native / 2),
        glyph,
        font=font,
        anchor="mm",
        embedded_color=True,
        fill="#000000",
    )
    return big.resize((size, size), Image.Resampling.LANCZOS).convert("RGBA")


class MapRenderer:
    """Renders a render grouping to a Pillow image."""

    def __init__(self, catalog: TileCatalog, cell_px: int):
        self.catalog = catalog
        self.cell_px = cell_px
        self._textures: dict[int, Image.Image] = {}

    def texture(self, tile_id: int) -> Image.Image:
        tex = self._textures.get(tile_id)
        if tex is None:
            glyph = self.catalog.glyph(tile_id)
            fill = self.catalog.category_of(tile_id).fill_color
            tex = rasterize_glyph(glyph, self.cell_px, fill)
            self._textures[tile_id] = tex
        return tex

    def render(self, groups: RenderGroup, rows: int, cols: int) -> Image.Image:
        px = self.cell_px
        img = Image.new("RGBA", (cols * px, rows * px), BACKGROUND)

        # One batch per tile type.
        for tile_id, cells in groups.items():
            tex = self.texture(tile_id)
            for row, col in cells:
                img.paste(tex, (col * px, row * px), tex)

        overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        for c in range(1, cols):
            draw.line([(c * px, 0), (c * px, rows * px - 1)], fill=GRID_LINE)
        for r in range(1, rows):
            draw.line([(0, r * px), (cols * px - 1, r * px)], fill=GRID_LINE)
        return Image.alpha_composite(img, overlay).convert("RGB")

    def cell_at(
        self, x: float, y: float, rows: int, cols: int
    ) -> Coord | None:
        """Image pixel coords -> (row, col), or None outside the map."""
        if x < 0 or y < 0:
            return None
        row = int(y // self.cell_px)
        col = int(x // self.cell_px)
        if row >= rows or col >= cols:
            return None
        return row, col
