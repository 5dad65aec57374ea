from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Dict, Optional

import numpy as np

from .chart import NO_DATA_MESSAGE, BioActivityChart
from .config import ChartSettings
from .controller import InteractionController, ModalKind
from .render import ChartRenderer
from .ui_panel_canvas import CanvasActor, CanvasPanel
from .ui_panel_export import ExportPanel, Exporter
from .ui_panel_rules import RuleActor, RulesPanel
from .ui_panel_visuals import VisualsPanel

logger = logging.getLogger(__name__)


class BioActivityWindow(tk.Toplevel):
    def __init__(
        self,
        parent: tk.Tk,
        *,
        compound: Dict[str, Any],
        settings: Optional[ChartSettings] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        super().__init__(parent)
        self.settings = settings or ChartSettings()
        self.chart = BioActivityChart(compound, self.settings, rng=rng)
        self.title(f"Bioactivity - {self.chart.name}" if self.chart.name else "Bioactivity")
        self.geometry("900x560")
        self.resizable(True, True)

        if not self.chart.has_data:
            ttk.Label(self, text=NO_DATA_MESSAGE, padding=20).pack(fill="both", expand=True)
            return

        self.renderer = ChartRenderer(self.settings)
        self.controller = InteractionController(self.chart, on_change=self._on_chart_change)

        self.var_violin = tk.BooleanVar(value=self.chart.violin_enabled)
        self.var_jitter = tk.BooleanVar(value=self.chart.jitter_enabled)

        self.canvas_actor = CanvasActor(self)
        self.rule_actor = RuleActor(self)
        self.exporter = Exporter(self)

        self._build_ui()
        self.rule_actor._refresh_rule_tables()
        self.canvas_actor._set_tip(None)

    # ---------- UI ----------
    def _build_ui(self):
        root = ttk.Frame(self, padding=8)
        root.pack(fill="both", expand=True)

        self._panes = ttk.Panedwindow(root, orient="horizontal")
        self._panes.pack(fill="both", expand=True)

        left = ttk.Frame(self._panes)
        right = ttk.Frame(self._panes, width=300)
        self._panes.add(left, weight=2)
        self._panes.add(right, weight=1)

        self.canvas_panel = CanvasPanel(self, left, actor=self.canvas_actor)

        self.color_panel = RulesPanel(
            self,
            right,
            kind=ModalKind.COLOR,
            title="Colors",
            on_add=lambda: self.rule_actor._add_rule(ModalKind.COLOR),
            on_remove=lambda: self.rule_actor._remove_selected_rule(ModalKind.COLOR),
        )
        self.shape_panel = RulesPanel(
            self,
            right,
            kind=ModalKind.SHAPE,
            title="Shapes",
            on_add=lambda: self.rule_actor._add_rule(ModalKind.SHAPE),
            on_remove=lambda: self.rule_actor._remove_selected_rule(ModalKind.SHAPE),
        )
        self.visuals_panel = VisualsPanel(
            self,
            right,
            on_violin_toggle=self._on_violin_toggle,
            on_jitter_toggle=self._on_jitter_toggle,
        )
        self.export_panel = ExportPanel(
            self,
            right,
            on_save_png=self.exporter._save_png,
            on_export_csv=self.exporter._export_csv,
            on_copy_csv=self.exporter._copy_csv,
            on_close=self.destroy,
        )

    def _on_violin_toggle(self):
        # checkbutton already flipped its variable; keep the chart in step
        if self.var_violin.get() != self.chart.violin_enabled:
            self.controller.toggle_violin()

    def _on_jitter_toggle(self):
        if self.var_jitter.get() != self.chart.jitter_enabled:
            self.controller.toggle_jitter()

    def _on_chart_change(self):
        self.rule_actor._refresh_rule_tables()
        self.canvas_actor._render_chart()

    def _show_info(self, title: str, message: str) -> None:
        messagebox.showinfo(title, message, parent=self)

    def _show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self)
