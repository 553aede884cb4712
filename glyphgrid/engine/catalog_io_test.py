"""Tests for catalog JSON loading and saving."""

from glyphgrid.engine.catalog_io import (
    DEFAULT_CATALOG,
    builtin_catalog_path,
    load_builtin_catalog,
    load_catalog,
    save_catalog,
)
from glyphgrid.engine.types import TileCatalog


def test_builtin_catalog_exists():
    assert builtin_catalog_path(DEFAULT_CATALOG).is_file()


def test_builtin_catalog_layout():
    """Floor first, then wall/enemy/npc/reward blocks."""
    catalog = load_builtin_catalog()
    assert [c.name for c in catalog.categories] == [
        "floor",
        "wall",
        "enemy",
        "npc",
        "reward",
    ]
    assert [len(c.glyphs) for c in catalog.categories] == [1, 8, 7, 2, 4]
    assert len(catalog) == 22
    assert catalog.glyph(0) == "▫️"
    assert catalog.glyph(1) == "⬛"


def test_builtin_catalog_glyphs_unique():
    assert load_builtin_catalog().has_unique_glyphs


def test_save_and_load_roundtrip(tmp_path):
    catalog = TileCatalog.from_glyphs(["▫️", "⬛", "💰"], name="Mini")
    path = tmp_path / "nested" / "mini.json"

    save_catalog(catalog, path)
    loaded = load_catalog(path)

    assert loaded == catalog
    assert loaded.glyphs == catalog.glyphs
