"""Tests for map_io save/load helpers."""

from PIL import Image

from .map_io import (
    load_map_json,
    load_map_png,
    load_map_text,
    save_map_json,
    save_map_png,
)

SAMPLE_MAP = '[["▫️","⬛"],["💀","👩🏻‍🦰"]]'


def test_save_and_load_png_roundtrip(tmp_path):
    """Save map text in a PNG, load it back, and verify equality."""
    img = Image.new("RGB", (20, 20), "green")
    path = str(tmp_path / "map.png")

    save_map_png(img, SAMPLE_MAP, path)

    assert load_map_png(path) == SAMPLE_MAP


def test_load_png_missing_chunk(tmp_path):
    """A plain PNG without metadata raises ValueError."""
    img = Image.new("RGB", (20, 20), "red")
    path = str(tmp_path / "plain.png")
    img.save(path)

    try:
        load_map_png(path)
        assert False, "Expected ValueError"
    except ValueError as e:
        assert "glyphgrid_map" in str(e)


def test_json_roundtrip(tmp_path):
    path = str(tmp_path / "map.json")
    save_map_json(SAMPLE_MAP, path)
    assert load_map_json(path).strip() == SAMPLE_MAP


def test_load_map_text_dispatches_by_extension(tmp_path):
    """load_map_text dispatches to PNG or JSON loader based on extension."""
    png_path = str(tmp_path / "test.PNG")
    save_map_png(Image.new("RGB", (10, 10), "blue"), SAMPLE_MAP, png_path)
    assert load_map_text(png_path) == SAMPLE_MAP

    json_path = str(tmp_path / "test.json")
    save_map_json(SAMPLE_MAP, json_path)
    assert load_map_text(json_path).strip() == SAMPLE_MAP


def test_load_map_text_unsupported_extension(tmp_path):
    """load_map_text raises ValueError for unsupported extensions."""
    path = str(tmp_path / "map.txt")
    try:
        load_map_text(path)
        assert False, "Expected ValueError"
    except ValueError as e:
        assert "Unsupported" in str(e)
