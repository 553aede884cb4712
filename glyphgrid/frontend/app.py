"""Tkinter GUI for glyphgrid.

The window is assembled from three pieces:

  * ``PalettePanel`` - the left sidebar with one block of glyph buttons per
    catalog category. Buttons remember their TileId, so selection never
    depends on button position.
  * the map canvas - shows the map rendered by ``MapRenderer`` and forwards
    mouse press/motion/release/leave events, tagged with the cell under the
    pointer, to the ``MapDocument``. Only the left button paints; middle and
    right presses are passed through as non-primary and do nothing.
  * ``App`` - the top-level window: toolbar (Import, Export, Save, Clear),
    status bar, and the background import polling loop.

All map state lives in the ``MapDocument`` (see ``engine/document.py``);
the app redraws whenever the document notifies it of a change.
"""

import argparse
import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from PIL import ImageTk

from ..engine.catalog_io import load_builtin_catalog, load_catalog
from ..engine.document import MapDocument
from ..engine.importer import MapImporter
from ..engine.paint import PointerButton
from ..engine.types import (
    DEFAULT_CELL_PX,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    EditorConfig,
    TileCatalog,
)
from .map_io import load_map_text, save_map_json, save_map_png
from .renderer import MapRenderer

logger = logging.getLogger(__name__)

# -- Visual constants --

CANVAS_BG = "#1e1e1e"
SELECTED_BG = "#FFD700"  # gold highlight for the selected palette button
BUTTON_BG = "#f0f0f0"
PALETTE_COLUMNS = 4

IMPORT_POLL_MS = 50

# Tk button numbers -> pointer buttons
_TK_BUTTONS = {
    1: PointerButton.PRIMARY,
    2: PointerButton.MIDDLE,
    3: PointerButton.SECONDARY,
}

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _pointer_button(tk_num: int) -> PointerButton:
    """Map a Tk button number; anything unrecognized is non-primary."""
    return _TK_BUTTONS.get(tk_num, PointerButton.SECONDARY)


def _in_viewport(x: int, y: int, width: int, height: int) -> bool:
    """True if widget-relative (x, y) is inside the visible canvas area."""
    return 0 <= x < width and 0 <= y < height


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


class PalettePanel(ttk.Frame):
    """Glyph buttons grouped by catalog category."""

    def __init__(self, parent, catalog: TileCatalog, on_select):
        super().__init__(parent, padding=5)
        self._buttons: dict[int, tk.Button] = {}
        for cat, entries in catalog.palette():
            block = ttk.LabelFrame(self, text=cat.name.title(), padding=4)
            block.pack(side=tk.TOP, fill=tk.X, pady=(0, 6))
            for i, (tile_id, glyph) in enumerate(entries):
                btn = tk.Button(
                    block,
                    text=glyph,
                    width=2,
                    font=("TkDefaultFont", 16),
                    bg=BUTTON_BG,
                    relief="raised",
                    command=lambda tid=tile_id: on_select(tid),
                )
                btn.grid(
                    row=i // PALETTE_COLUMNS,
                    column=i % PALETTE_COLUMNS,
                    padx=1,
                    pady=1,
                )
                self._buttons[tile_id] = btn

    def set_selected(self, tile_id: int) -> None:
        for tid, btn in self._buttons.items():
            if tid == tile_id:
                btn.config(relief="sunken", bg=SELECTED_BG)
            else:
                btn.config(relief="raised", bg=BUTTON_BG)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


class App:
    def __init__(self, config: EditorConfig):
        self.config = config
        self.document = MapDocument.from_config(config)
        self.importer = MapImporter(self.document)
        self.renderer = MapRenderer(config.catalog, config.cell_px)

        self.root = tk.Tk()
        self.root.title("glyphgrid")
        self.root.configure(bg=CANVAS_BG)
        self.root.resizable(True, True)

        style = ttk.Style()
        style.theme_use("clam")

        # Toolbar across the top
        toolbar = ttk.Frame(self.root, padding=(5, 5))
        toolbar.pack(side=tk.TOP, fill=tk.X)
        ttk.Button(toolbar, text="Import...", command=self._on_import).pack(
            side=tk.LEFT, padx=(0, 5)
        )
        ttk.Button(toolbar, text="Export", command=self._on_export).pack(
            side=tk.LEFT, padx=(0, 5)
        )
        ttk.Button(toolbar, text="Save...", command=self._on_save).pack(
            side=tk.LEFT, padx=(0, 5)
        )
        ttk.Button(toolbar, text="Clear", command=self._on_clear).pack(
            side=tk.LEFT
        )

        # Status bar along the bottom
        self.status_label = ttk.Label(self.root, text="", padding=(5, 2))
        self.status_label.pack(side=tk.BOTTOM, fill=tk.X)

        self.palette = PalettePanel(
            self.root, config.catalog, self.document.select_tile
        )
        self.palette.pack(side=tk.LEFT, fill=tk.Y)

        # Map canvas with scrollbars; tall maps do not fit on screen.
        canvas_frame = ttk.Frame(self.root)
        canvas_frame.pack(
            side=tk.LEFT, fill=tk.BOTH, expand=True, padx=5, pady=5
        )
        self.canvas = tk.Canvas(
            canvas_frame, bg=CANVAS_BG, highlightthickness=0
        )
        vbar = ttk.Scrollbar(
            canvas_frame, orient=tk.VERTICAL, command=self.canvas.yview
        )
        self.canvas.configure(yscrollcommand=vbar.set)
        vbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.canvas.configure(
            width=min(config.cols * config.cell_px, 1000),
            height=min(config.rows * config.cell_px, 800),
        )

        self._photo = None  # prevent GC

        self.canvas.bind("<ButtonPress>", self._on_canvas_press)
        self.canvas.bind("<Motion>", self._on_canvas_motion)
        self.canvas.bind("<ButtonRelease>", self._on_canvas_release)
        self.canvas.bind("<Leave>", self._on_canvas_leave)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self.document.add_listener(self._on_document_changed)
        self._on_document_changed(self.document)

    # -- rendering --

    def _on_document_changed(self, document):
        self._render()
        self.palette.set_selected(document.selected_tile)
        self._update_status()

    def _render(self):
        grid = self.document.grid
        img = self.renderer.render(self.document.groups, grid.rows, grid.cols)
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, image=self._photo, anchor="nw")
        self.canvas.configure(scrollregion=(0, 0, img.width, img.height))

    def _update_status(self):
        catalog = self.config.catalog
        tile_id = self.document.selected_tile
        count = self.document.tile_counts().get(tile_id, 0)
        self.status_label.config(
            text=(
                f"Selected: {catalog.glyph(tile_id)} "
                f"({catalog.category_of(tile_id).name} #{tile_id}) - "
                f"{count} cell{'s' if count != 1 else ''}"
            )
        )

    # -- pointer events --

    def _event_cell(self, event):
        """Map cell under the pointer, or None off the map or viewport."""
        if not _in_viewport(
            event.x,
            event.y,
            self.canvas.winfo_width(),
            self.canvas.winfo_height(),
        ):
            return None
        grid = self.document.grid
        x = self.canvas.canvasx(event.x)
        y = self.canvas.canvasy(event.y)
        return self.renderer.cell_at(x, y, grid.rows, grid.cols)

    def _on_canvas_press(self, event):
        cell = self._event_cell(event)
        if cell is None:
            return
        button = _pointer_button(event.num)
        self.document.pointer_down(*cell, button)

    def _on_canvas_motion(self, event):
        cell = self._event_cell(event)
        if cell is None:
            # Off the map or scrolled out of view.
            self.document.pointer_leave()
            return
        self.document.pointer_over(*cell)

    def _on_canvas_release(self, _event):
        self.document.pointer_up()

    def _on_canvas_leave(self, _event):
        self.document.pointer_leave()

    # -- actions --

    def _on_export(self):
        text = self.document.export()
        print(text)
        self.root.clipboard_clear()
        self.root.clipboard_append(text)
        messagebox.showinfo(
            "Export", "Map exported to the console and copied to clipboard."
        )

    def _on_save(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".png",
            filetypes=[("PNG files", "*.png"), ("JSON files", "*.json")],
            initialfile="map.png",
        )
        if not path:
            return
        text = self.document.export()
        try:
            if path.lower().endswith(".json"):
                save_map_json(text, path)
            else:
                grid = self.document.grid
                img = self.renderer.render(
                    self.document.groups, grid.rows, grid.cols
                )
                save_map_png(img, text, path)
        except (OSError, ValueError) as e:
            messagebox.showerror("Save Error", str(e))
            return
        logger.info("Saved map to %s", path)

    def _on_import(self):
        path = filedialog.askopenfilename(
            filetypes=[
                ("Map files", "*.json *.png"),
                ("JSON files", "*.json"),
                ("PNG files", "*.png"),
            ],
        )
        if not path:
            return
        if not self.importer.submit(lambda: load_map_text(path)):
            messagebox.showwarning(
                "Import", "Another import is still in progress."
            )
            return
        self.root.after(IMPORT_POLL_MS, self._poll_import)

    def _poll_import(self):
        result = self.importer.poll()
        if result is None:
            if self.importer.pending:
                self.root.after(IMPORT_POLL_MS, self._poll_import)
            return
        if result.ok:
            messagebox.showinfo("Import", "Map imported successfully.")
        else:
            messagebox.showerror("Import Error", str(result.error))

    def _on_clear(self):
        self.document.clear()

    def _on_close(self):
        self.importer.shutdown()
        self.root.destroy()

    def run(self):
        self.root.mainloop()


def build_config(args) -> EditorConfig:
    if args.catalog:
        catalog = load_catalog(args.catalog)
    else:
        catalog = load_builtin_catalog()
    return EditorConfig(
        catalog=catalog,
        rows=args.rows,
        cols=args.cols,
        selected_tile=args.select,
        cell_px=args.cell_size,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Paint glyph tiles onto a fixed-size map grid"
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=DEFAULT_ROWS,
        help=f"Map rows (default: {DEFAULT_ROWS})",
    )
    parser.add_argument(
        "--cols",
        type=int,
        default=DEFAULT_COLS,
        help=f"Map columns (default: {DEFAULT_COLS})",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Path to a tile catalog JSON file (default: built-in dungeon)",
    )
    parser.add_argument(
        "--select",
        type=int,
        default=None,
        help="TileId selected at startup (default: first non-floor tile)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=DEFAULT_CELL_PX,
        help=f"Tile size in pixels (default: {DEFAULT_CELL_PX})",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = build_config(args)
    except (OSError, ValueError, KeyError) as e:
        parser.error(str(e))
    print(
        f"✓ {config.rows}x{config.cols} map, catalog "
        f"{config.catalog.name or '(unnamed)'} "
        f"({len(config.catalog)} tiles)"
    )
    App(config).run()


if __name__ == "__main__":
    main()
