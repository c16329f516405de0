"""Tkinter GUI for the hex map editor.

The window has three parts:

  * the map canvas on the left, showing the grid fitted to whatever size the
    canvas currently has. Primary-button drags paint with the active brush;
    the secondary-button context menu is suppressed.
  * ``ControlPanel``: map size, player count, name and description, brush
    mode and palette, the live player-base readout, and the Save / Export
    PNG buttons.
  * ``SavedMapsPanel``: maps already in the store, with a thumbnail preview
    of the selected one.

All editing goes through a ``MapEditor`` (``engine/editor.py``). Saving runs
the store write on a worker thread and polls for the result with
``root.after`` so the UI stays responsive; the Save button is disabled until
the write finishes.
"""

import argparse
import base64
import getpass
import io
import logging
import threading
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk

from PIL import Image, ImageTk

from ..engine.config import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    EditorSettings,
    load_settings,
)
from ..engine.editor import MapEditor
from ..engine.errors import MapEditorError
from ..engine.grid import MAX_DIMENSION, MIN_DIMENSION
from ..engine.render import MARKER_COLORS, TERRAIN_COLORS, HexMapRenderer
from ..engine.types import (
    BRUSH_MARKER,
    BRUSH_TERRAIN,
    MARKER_KINDS,
    NO_MARKER,
    TERRAIN_KINDS,
    MarkerCount,
    Operator,
)
from .map_io import export_map_png
from .store import DocumentStore, JsonDirectoryStore

log = logging.getLogger(__name__)

CANVAS_BG = "#1a1a2e"
PANEL_PREVIEW_SIZE = (240, 160)
SAVE_POLL_MS = 100

TERRAIN_LABELS = {
    "plains_light": "Plains (light)",
    "plains_medium": "Plains (medium)",
    "plains_dark": "Plains (dark)",
    "water": "Water",
    "mountain": "Mountain",
    "forest": "Forest",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clamp_dimension(text):
    """Parse a size field; blanks and junk become 1, then clamp to [1, 50]."""
    try:
        value = int(str(text).strip())
    except ValueError:
        value = MIN_DIMENSION
    return min(max(value, MIN_DIMENSION), MAX_DIMENSION)


def _clamp_players(text):
    """Parse the players field; junk becomes 2, then clamp to [2, 6]."""
    try:
        value = int(str(text).strip())
    except ValueError:
        value = MIN_PLAYERS
    return min(max(value, MIN_PLAYERS), MAX_PLAYERS)


def _palette(mode):
    """(value, label, swatch colour) for every brush of a mode."""
    if mode == BRUSH_TERRAIN:
        return [
            (k, TERRAIN_LABELS[k], TERRAIN_COLORS[k]) for k in TERRAIN_KINDS
        ]
    entries = [
        (k, "White (AI)" if k == "white" else k.capitalize(), MARKER_COLORS[k])
        for k in MARKER_KINDS
    ]
    entries.append((NO_MARKER, "None", None))
    return entries


def _describe_markers(markers: MarkerCount, required):
    text = f"Player bases: {markers.count} / {required}"
    if markers.values:
        text += f" ({', '.join(markers.values)})"
    return text


def _summarize_map(doc):
    shape = doc.get("grid_shape", {})
    return (
        f"{doc.get('name', '(unnamed)')} - "
        f"{shape.get('width', '?')}x{shape.get('height', '?')}, "
        f"{doc.get('required_players', '?')} players"
    )


# ---------------------------------------------------------------------------
# Panels
# ---------------------------------------------------------------------------


class ControlPanel(ttk.Frame):
    """Sidebar with map settings, brush selection, and save controls."""

    def __init__(
        self,
        parent,
        settings,
        on_apply_size,
        on_brush_changed,
        on_players_changed,
        on_save,
        on_export,
    ):
        super().__init__(parent, padding=10)
        self.on_apply_size = on_apply_size
        self.on_brush_changed = on_brush_changed
        self.on_players_changed = on_players_changed
        self.on_save = on_save
        self.on_export = on_export

        self.width_var = tk.StringVar(value=str(settings.grid_width))
        self.height_var = tk.StringVar(value=str(settings.grid_height))
        self.players_var = tk.StringVar(value=str(settings.required_players))
        self.name_var = tk.StringVar(value="")
        self.brush_mode_var = tk.StringVar(value=settings.brush_mode)
        self.brush_value = settings.brush_value
        self._last_value = {
            BRUSH_TERRAIN: "plains_medium",
            BRUSH_MARKER: "red",
        }
        self._last_value[settings.brush_mode] = settings.brush_value

        self.description_text: tk.Text = None
        self.palette_frame: ttk.Frame = None
        self.markers_label: ttk.Label = None
        self.save_button: ttk.Button = None
        self._palette_buttons = {}

        self._build()
        self.players_var.trace_add("write", self._players_changed)

    def _build(self):
        row = 0
        row = self._section(row, "Map")
        ttk.Label(self, text="Name:").grid(row=row, column=0, sticky="w")
        ttk.Entry(self, textvariable=self.name_var, width=24).grid(
            row=row, column=1, sticky="ew", pady=2
        )
        row += 1
        ttk.Label(self, text="Description:").grid(
            row=row, column=0, sticky="nw"
        )
        self.description_text = tk.Text(self, width=24, height=4, wrap="word")
        self.description_text.grid(row=row, column=1, sticky="ew", pady=2)
        row += 1
        ttk.Label(self, text="Players:").grid(row=row, column=0, sticky="w")
        ttk.Spinbox(
            self,
            from_=MIN_PLAYERS,
            to=MAX_PLAYERS,
            textvariable=self.players_var,
            width=6,
        ).grid(row=row, column=1, sticky="w", pady=2)
        row += 1

        row = self._section(row, "Size")
        sizes = (("Width:", self.width_var), ("Height:", self.height_var))
        for label, var in sizes:
            ttk.Label(self, text=label).grid(row=row, column=0, sticky="w")
            ttk.Spinbox(
                self,
                from_=MIN_DIMENSION,
                to=MAX_DIMENSION,
                textvariable=var,
                width=6,
            ).grid(row=row, column=1, sticky="w", pady=2)
            row += 1
        ttk.Button(self, text="Apply Size", command=self._apply_size).grid(
            row=row, column=0, columnspan=2, sticky="ew", pady=(4, 0)
        )
        row += 1

        row = self._section(row, "Brush")
        modes = ttk.Frame(self)
        modes.grid(row=row, column=0, columnspan=2, sticky="w")
        for mode, label in (
            (BRUSH_TERRAIN, "Terrain"),
            (BRUSH_MARKER, "Player Base"),
        ):
            ttk.Radiobutton(
                modes,
                text=label,
                value=mode,
                variable=self.brush_mode_var,
                command=self._mode_changed,
            ).pack(side=tk.LEFT, padx=(0, 8))
        row += 1
        self.palette_frame = ttk.Frame(self)
        self.palette_frame.grid(row=row, column=0, columnspan=2, sticky="ew")
        row += 1
        self._build_palette()

        self.markers_label = ttk.Label(self, text="")
        self.markers_label.grid(
            row=row, column=0, columnspan=2, sticky="w", pady=(10, 0)
        )
        row += 1

        self.save_button = ttk.Button(
            self, text="Save Map", command=self.on_save
        )
        self.save_button.grid(
            row=row, column=0, columnspan=2, sticky="ew", pady=(10, 2)
        )
        row += 1
        ttk.Button(self, text="Export PNG", command=self.on_export).grid(
            row=row, column=0, columnspan=2, sticky="ew"
        )

    def _section(self, row, title):
        ttk.Label(self, text=title, font=("", 11, "bold")).grid(
            row=row, column=0, columnspan=2, sticky="w", pady=(8, 4)
        )
        return row + 1

    def _build_palette(self):
        for child in self.palette_frame.winfo_children():
            child.destroy()
        self._palette_buttons = {}
        mode = self.brush_mode_var.get()
        for i, (value, label, color) in enumerate(_palette(mode)):
            btn = tk.Button(
                self.palette_frame,
                text=label,
                bg=color or "#444444",
                fg="black" if value in ("white", "yellow") else "white",
                relief="raised",
                borderwidth=1,
                command=lambda v=value: self._select_value(v),
            )
            btn.grid(row=i // 2, column=i % 2, sticky="ew", padx=1, pady=1)
            self._palette_buttons[value] = btn
        self._highlight_selected()

    def _highlight_selected(self):
        for value, btn in self._palette_buttons.items():
            selected = value == self.brush_value
            btn.config(
                relief="sunken" if selected else "raised",
                borderwidth=3 if selected else 1,
            )

    def _mode_changed(self):
        mode = self.brush_mode_var.get()
        self.brush_value = self._last_value[mode]
        self._build_palette()
        self.on_brush_changed(mode, self.brush_value)

    def _select_value(self, value):
        mode = self.brush_mode_var.get()
        self.brush_value = value
        self._last_value[mode] = value
        self._highlight_selected()
        self.on_brush_changed(mode, value)

    def _apply_size(self):
        width = _clamp_dimension(self.width_var.get())
        height = _clamp_dimension(self.height_var.get())
        self.width_var.set(str(width))
        self.height_var.set(str(height))
        self.on_apply_size(width, height)

    def _players_changed(self, *_args):
        text = self.players_var.get().strip()
        if not text:
            return
        players = _clamp_players(text)
        if str(players) != text:
            # Writing the clamped value re-enters this trace with it.
            self.players_var.set(str(players))
            return
        self.on_players_changed(players)

    @property
    def players(self):
        return _clamp_players(self.players_var.get())

    @property
    def name(self):
        return self.name_var.get()

    @property
    def description(self):
        return self.description_text.get("1.0", tk.END)

    def clear_form(self):
        self.name_var.set("")
        self.description_text.delete("1.0", tk.END)

    def show_markers(self, markers, required):
        self.markers_label.config(text=_describe_markers(markers, required))

    def set_saving(self, saving):
        self.save_button.state(["disabled"] if saving else ["!disabled"])
        self.save_button.config(text="Saving..." if saving else "Save Map")


class SavedMapsPanel(ttk.Frame):
    """Maps already in the store, newest last, with a thumbnail preview."""

    def __init__(self, parent, store):
        super().__init__(parent, padding=10)
        self.store = store
        self.maps = []
        self.listbox: tk.Listbox | None = None
        self.preview_label: ttk.Label | None = None
        self._preview_photo = None  # prevent GC
        self._build()

    def _build(self):
        ttk.Label(self, text="Saved Maps", font=("", 11, "bold")).pack(
            anchor="w", pady=(0, 8)
        )
        list_frame = ttk.Frame(self)
        list_frame.pack(fill=tk.BOTH, expand=True)
        scrollbar = ttk.Scrollbar(list_frame)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.listbox = tk.Listbox(
            list_frame, yscrollcommand=scrollbar.set, font=("", 9), width=36
        )
        self.listbox.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.listbox.bind("<<ListboxSelect>>", self._on_select)
        scrollbar.config(command=self.listbox.yview)
        self.preview_label = ttk.Label(self)
        self.preview_label.pack(pady=(8, 0))

    def refresh(self):
        assert self.listbox is not None
        self.maps = sorted(
            self.store.list_documents("maps"),
            key=lambda d: d.get("created_at", ""),
        )
        self.listbox.delete(0, tk.END)
        for doc in self.maps:
            self.listbox.insert(tk.END, _summarize_map(doc))

    def _on_select(self, _event):
        assert self.listbox is not None and self.preview_label is not None
        selection = self.listbox.curselection()
        if not selection or selection[0] >= len(self.maps):
            return
        doc = self.maps[selection[0]]
        encoded = doc.get("thumbnail_png")
        if not encoded:
            self.preview_label.config(image="", text="(no preview)")
            return
        img = Image.open(io.BytesIO(base64.b64decode(encoded)))
        img.thumbnail(PANEL_PREVIEW_SIZE)
        self._preview_photo = ImageTk.PhotoImage(img)
        self.preview_label.config(image=self._preview_photo, text="")


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------


class App:
    def __init__(self, operator: Operator, store: DocumentStore, settings):
        self.root = tk.Tk()
        self.root.title("Hexagonal Map Editor")
        self.root.geometry("1400x800")
        self.root.configure(bg=CANVAS_BG)

        style = ttk.Style()
        style.theme_use("clam")

        self.editor = MapEditor(operator, store, settings)
        # Interactive frames redraw on every stroke; 2x is smooth enough.
        self.editor.renderer = HexMapRenderer(supersample=2)

        self.canvas = tk.Canvas(self.root, bg=CANVAS_BG, highlightthickness=0)
        self.canvas.pack(
            side=tk.LEFT, fill=tk.BOTH, expand=True, padx=5, pady=5
        )

        self.right_panel = ttk.Frame(self.root)
        self.right_panel.pack(side=tk.RIGHT, fill=tk.BOTH, pady=5, padx=(0, 5))

        self.controls = ControlPanel(
            self.right_panel,
            settings,
            on_apply_size=self._on_apply_size,
            on_brush_changed=self._on_brush_changed,
            on_players_changed=self._on_players_changed,
            on_save=self._on_save,
            on_export=self._on_export,
        )
        self.controls.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 5))

        self.saved_maps = SavedMapsPanel(self.right_panel, store)
        self.saved_maps.pack(side=tk.RIGHT, fill=tk.BOTH, expand=True)

        self._photo = None  # prevent GC

        self.canvas.bind("<Configure>", self._on_canvas_configure)
        self.canvas.bind("<ButtonPress-1>", self._on_pointer_down)
        self.canvas.bind("<B1-Motion>", self._on_pointer_move)
        self.canvas.bind("<ButtonRelease-1>", self._on_pointer_up)
        self.canvas.bind("<Leave>", self._on_pointer_leave)
        self.canvas.bind("<Button-2>", self._suppress_context_menu)
        self.canvas.bind("<Button-3>", self._suppress_context_menu)

        self.root.after(50, self._render)
        self.saved_maps.refresh()

    # -- rendering --

    def _render(self):
        cw = self.canvas.winfo_width()
        ch = self.canvas.winfo_height()
        if cw < 20 or ch < 20:
            return
        img = self.editor.render(cw, ch)
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.delete("all")
        self.canvas.create_image(0, 0, image=self._photo, anchor="nw")
        self.controls.show_markers(
            self.editor.count_markers(), self.editor.required_players
        )

    def _on_canvas_configure(self, _event):
        self._render()

    # -- painting --

    def _raster_xy(self, event):
        # The frame is drawn at the canvas origin, so raster space is canvas
        # space once scrolling is accounted for.
        return self.canvas.canvasx(event.x), self.canvas.canvasy(event.y)

    def _on_pointer_down(self, event):
        if self.editor.pointer_down(*self._raster_xy(event)):
            self._render()

    def _on_pointer_move(self, event):
        if self.editor.pointer_move(*self._raster_xy(event)):
            self._render()

    def _on_pointer_up(self, _event):
        self.editor.pointer_up()

    def _on_pointer_leave(self, _event):
        self.editor.pointer_leave()

    def _suppress_context_menu(self, _event):
        return "break"

    # -- controls --

    def _on_apply_size(self, width, height):
        if not messagebox.askyesno(
            "Resize Map",
            "Changing the map size will reset the current map. Are you sure?",
        ):
            return
        try:
            self.editor.resize(width, height)
        except MapEditorError as e:
            messagebox.showerror("Resize Error", str(e))
            return
        self._render()

    def _on_brush_changed(self, mode, value):
        try:
            self.editor.set_brush(mode, value)
        except MapEditorError as e:
            messagebox.showerror("Brush Error", str(e))

    def _on_players_changed(self, players):
        self.editor.required_players = players
        self.controls.show_markers(self.editor.count_markers(), players)

    # -- saving --

    def _on_save(self):
        if self.editor.saving:
            return
        try:
            self.editor.required_players = self.controls.players
            document = self.editor.build_document(
                self.controls.name, self.controls.description
            )
        except MapEditorError as e:
            messagebox.showerror("Cannot Save Map", str(e))
            return

        self.controls.set_saving(True)
        result = {}

        def worker():
            try:
                result["id"] = self.editor.saver.save(document)
            except MapEditorError as e:
                result["error"] = e

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        self.root.after(
            SAVE_POLL_MS, self._poll_save, thread, result, document.name
        )

    def _poll_save(self, thread, result, name):
        if thread.is_alive():
            self.root.after(
                SAVE_POLL_MS, self._poll_save, thread, result, name
            )
            return
        self.controls.set_saving(False)
        if "error" in result:
            messagebox.showerror("Save Error", str(result["error"]))
            return
        messagebox.showinfo("Map Saved", f'Map "{name}" created successfully!')
        self.controls.clear_form()
        self.editor.start_over()
        self.saved_maps.refresh()
        self._render()

    def _on_export(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".png",
            filetypes=[("PNG files", "*.png")],
            initialfile="map.png",
        )
        if not path:
            return
        export_map_png(
            self.editor.grid,
            path,
            name=self.controls.name,
            description=self.controls.description,
            required_players=self.editor.required_players,
        )

    def run(self):
        self.root.mainloop()


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Hexagonal map editor")
    parser.add_argument(
        "--settings", type=Path, help="JSON file with editor settings"
    )
    parser.add_argument(
        "--store-dir", help="Directory holding saved map documents"
    )
    parser.add_argument(
        "--seed", type=int, help="Seed for the default plains terrain"
    )
    parser.add_argument(
        "--operator",
        help="User id recorded as the map author (default: login name)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    settings = (
        load_settings(args.settings) if args.settings else EditorSettings()
    )
    if args.store_dir:
        settings.store_dir = args.store_dir
    if args.seed is not None:
        settings.seed = args.seed
    store = JsonDirectoryStore(settings.store_dir)
    log.info("Saving maps to %s", Path(settings.store_dir).resolve())
    operator = Operator(args.operator or getpass.getuser(), is_admin=True)
    App(operator, store, settings).run()


if __name__ == "__main__":
    main()
