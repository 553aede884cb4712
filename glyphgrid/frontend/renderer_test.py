"""Tests for the Pillow map renderer."""

from ..engine.batching import group
from ..engine.grid import GridModel
from ..engine.types import TileCatalog, TileCategory
from .renderer import MapRenderer

CATALOG = TileCatalog(
    categories=(
        TileCategory("floor", (".",), fill_color="#ffffff"),
        TileCategory("wall", ("#",), fill_color="#ff0000"),
    )
)
PX = 10


def _cell_pixel(img, row, col, x, y):
    return img.getpixel((col * PX + x, row * PX + y))


class TestRender:
    def test_image_size(self):
        grid = GridModel.create(3, 5, tile_count=2)
        img = MapRenderer(CATALOG, PX).render(group(grid), 3, 5)
        assert img.size == (5 * PX, 3 * PX)
        assert img.mode == "RGB"

    def test_each_group_drawn_with_its_texture(self):
        grid = GridModel.create(2, 2, tile_count=2).replace([[1, 0], [0, 1]])
        renderer = MapRenderer(CATALOG, PX)
        img = renderer.render(group(grid), 2, 2)
        # Grid lines sit on multiples of PX; sample strictly inside cells.
        for row, col, tile_id in grid.cells():
            tex = renderer.texture(tile_id).convert("RGB")
            for x, y in [(1, 1), (5, 5), (8, 3)]:
                assert _cell_pixel(img, row, col, x, y) == tex.getpixel(
                    (x, y)
                )

    def test_textures_cached_per_tile(self):
        renderer = MapRenderer(CATALOG, PX)
        assert renderer.texture(1) is renderer.texture(1)
        assert renderer.texture(0).size == (PX, PX)


class TestCellAt:
    def test_inside(self):
        renderer = MapRenderer(CATALOG, PX)
        assert renderer.cell_at(0, 0, 3, 4) == (0, 0)
        assert renderer.cell_at(39.5, 29.5, 3, 4) == (2, 3)
        assert renderer.cell_at(15, 25, 3, 4) == (2, 1)

    def test_outside(self):
        renderer = MapRenderer(CATALOG, PX)
        assert renderer.cell_at(-1, 5, 3, 4) is None
        assert renderer.cell_at(5, -0.5, 3, 4) is None
        assert renderer.cell_at(40, 5, 3, 4) is None
        assert renderer.cell_at(5, 30, 3, 4) is None
