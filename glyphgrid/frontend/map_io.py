"""Save and load maps as PNG (with embedded map text) or JSON.

A map saved as PNG is the rendered map image with the exported map JSON
embedded in a PNG iTXt chunk (key: ``glyphgrid_map``), so one file is both
a shareable picture and an importable map. Plain JSON files hold the
exported text as-is.

These helpers only move text in and out of files; parsing and validation
are left to ``engine.serializer``. Used by ``app.py`` for its Import and
Save buttons.
"""

from PIL import Image
from PIL.PngImagePlugin import PngInfo

METADATA_KEY = "glyphgrid_map"


def save_map_png(img: Image.Image, map_text: str, path: str) -> None:
    """Save a rendered map image with the map JSON as an iTXt chunk."""
    info = PngInfo()
    # iTXt keeps the UTF-8 glyphs intact; tEXt is Latin-1 only.
    info.add_itxt(METADATA_KEY, map_text)
    img.save(path, pnginfo=info)


def load_map_png(path: str) -> str:
    """Return the map text embedded in a PNG file.

    Raises ValueError if the PNG does not contain map metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                f"PNG file does not contain map metadata "
                f"(missing '{METADATA_KEY}' chunk)"
            )
        return str(text_data[METADATA_KEY])


def save_map_json(map_text: str, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(map_text)
        f.write("\n")


def load_map_json(path: str) -> str:
    """Return the raw text of a JSON map file."""
    with open(path, encoding="utf-8") as f:
        return f.read()


def load_map_text(path: str) -> str:
    """Load map text from a file, dispatching by extension.

    Supports .png (reads embedded metadata) and .json (reads raw text).
    Raises ValueError for unsupported extensions.
    """
    lower = path.lower()
    if lower.endswith(".png"):
        return load_map_png(path)
    elif lower.endswith(".json"):
        return load_map_json(path)
    else:
        raise ValueError(f"Unsupported file extension: {path}")
