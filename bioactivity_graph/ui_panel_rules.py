from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable

from PIL import ImageTk

from .classification import DEFAULT_KEY
from .controller import ModalKind
from .render import render_swatch
from .ui_dialog import RuleDialog


class RulesPanel:
    """One rule table (colors or shapes) with Add / Remove buttons."""

    def __init__(
        self,
        owner,
        parent: tk.Widget,
        *,
        kind: ModalKind,
        title: str,
        on_add: Callable[[], None],
        on_remove: Callable[[], None],
    ) -> None:
        self.owner = owner
        self.kind = kind
        frame = ttk.LabelFrame(parent, text=title, padding=8)
        self.frame = frame
        frame.pack(side="top", fill="x", pady=(8, 0))

        tree = ttk.Treeview(
            frame,
            columns=("value",),
            show="tree headings",
            selectmode="browse",
            height=5,
        )
        tree.heading("#0", text="Match")
        tree.heading("value", text="Value")
        tree.column("#0", width=170, anchor="w")
        tree.column("value", width=90, anchor="w")
        tree.pack(side="top", fill="x")
        self.tree = tree

        btns = ttk.Frame(frame)
        btns.pack(side="top", fill="x", pady=(6, 0))
        ttk.Button(btns, text="Add", command=on_add).pack(side="left")
        ttk.Button(btns, text="Remove", command=on_remove).pack(side="left", padx=(8, 0))

        tree.bind("<Delete>", lambda _e: on_remove())


class RuleActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _panel(self, kind: ModalKind) -> RulesPanel:
        return self.color_panel if kind == ModalKind.COLOR else self.shape_panel

    def _refresh_rule_tables(self) -> None:
        # PhotoImages must outlive the tree rows that show them
        self._swatches = {}
        for kind in (ModalKind.COLOR, ModalKind.SHAPE):
            panel = self._panel(kind)
            tree = panel.tree
            for item in tree.get_children(""):
                tree.delete(item)
            for key, value in self.chart.table(kind.value).items():
                label = getattr(value, "value", value)
                photo = ImageTk.PhotoImage(render_swatch(label))
                self._swatches[(kind, key)] = photo
                tree.insert("", "end", iid=key, text=key, image=photo, values=(label,))

    def _add_rule(self, kind: ModalKind) -> None:
        if not self.controller.is_idle:
            return
        dlg = RuleDialog(self.owner, controller=self.controller, kind=kind)
        self.wait_window(dlg)

    def _remove_selected_rule(self, kind: ModalKind) -> None:
        tree = self._panel(kind).tree
        sel = tree.selection()
        if not sel:
            return
        key = sel[0]
        if key == DEFAULT_KEY:
            self._show_info("Remove rule", "The Default rule cannot be removed.")
            return
        self.controller.remove_rule_row(kind, key)
