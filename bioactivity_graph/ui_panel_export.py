from __future__ import annotations

import logging
import tkinter as tk
from tkinter import filedialog, ttk
from typing import Callable

from .export_csv import points_csv_string, write_points_csv

logger = logging.getLogger(__name__)


class ExportPanel:
    def __init__(
        self,
        owner,
        parent: tk.Widget,
        *,
        on_save_png: Callable[[], None],
        on_export_csv: Callable[[], None],
        on_copy_csv: Callable[[], None],
        on_close: Callable[[], None],
    ) -> None:
        self.owner = owner
        frame = ttk.Frame(parent)
        self.frame = frame
        frame.pack(side="bottom", fill="x", pady=(8, 0))

        ttk.Button(frame, text="Save PNG...", command=on_save_png).pack(side="left")
        ttk.Button(frame, text="Export CSV...", command=on_export_csv).pack(side="left", padx=(8, 0))
        ttk.Button(frame, text="Copy CSV", command=on_copy_csv).pack(side="left", padx=(8, 0))
        ttk.Button(frame, text="Close", command=on_close).pack(side="right")


class Exporter:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _default_stem(self) -> str:
        name = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in (self.chart.name or ""))
        return name or "bioactivity"

    def _save_png(self):
        path = filedialog.asksaveasfilename(
            parent=self,
            defaultextension=".png",
            initialfile=f"{self._default_stem()}.png",
            filetypes=[("PNG images", "*.png"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            self.renderer.save_png(self.chart, path)
        except OSError as e:
            logger.error("Saving %s failed: %s", path, e)
            self._show_error("Save PNG", str(e))
            return
        self._show_info("Save PNG", f"Saved:\n{path}")

    def _export_csv(self):
        path = filedialog.asksaveasfilename(
            parent=self,
            defaultextension=".csv",
            initialfile=f"{self._default_stem()}.csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            write_points_csv(path, self.chart.points)
        except OSError as e:
            logger.error("Writing %s failed: %s", path, e)
            self._show_error("Export CSV", str(e))
            return
        logger.info("Exported %d points to %s", len(self.chart.points), path)
        self._show_info("Export CSV", f"Saved:\n{path}")

    def _copy_csv(self):
        """Put the points, as CSV text, on the clipboard."""
        txt = points_csv_string(self.chart.points)
        self.clipboard_clear()
        self.clipboard_append(txt)
        logger.info("Copied %d points to the clipboard", len(self.chart.points))
