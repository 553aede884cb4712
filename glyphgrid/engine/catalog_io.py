"""Load and save tile catalogs from/to JSON files.

Provides helpers for reading catalog JSON files into typed ``TileCatalog``
objects and a path helper for the built-in catalogs shipped under
``glyphgrid/catalogs/builtin/``.

Used by:
  - ``engine/document.py`` (indirectly, via ``EditorConfig``).
  - ``frontend/app.py`` - loads the built-in catalog or a ``--catalog`` file.
"""

from __future__ import annotations

import json
from pathlib import Path

from .types import TileCatalog

# glyphgrid/catalogs/ is one level up from glyphgrid/engine/catalog_io.py
_CATALOGS_DIR = Path(__file__).parent.parent / "catalogs"

DEFAULT_CATALOG = "dungeon"


def builtin_catalog_path(name: str) -> Path:
    """Return the path to a built-in catalog JSON file.

    Args:
        name: Catalog name without extension (e.g. "dungeon").

    Returns:
        Path to ``glyphgrid/catalogs/builtin/{name}.json``.
    """
    return _CATALOGS_DIR / "builtin" / f"{name}.json"


def load_catalog(path: Path | str) -> TileCatalog:
    """Load a JSON catalog file and return a typed ``TileCatalog``."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return TileCatalog.from_dict(data)


def load_builtin_catalog(name: str = DEFAULT_CATALOG) -> TileCatalog:
    return load_catalog(builtin_catalog_path(name))


def save_catalog(catalog: TileCatalog, path: Path) -> None:
    """Write a catalog to a JSON file.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(catalog.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
