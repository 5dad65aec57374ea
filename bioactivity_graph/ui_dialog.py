from __future__ import annotations

import tkinter as tk
from tkinter import colorchooser, messagebox, ttk

from .controller import InteractionController, ModalKind
from .data_model import Axis, ShapeKind


class RuleDialog(tk.Toplevel):
    """
    Modal add-rule dialog. Every change is pushed to the controller's modal
    session; Apply confirms it, Cancel or closing the window discards it.
    """

    def __init__(self, parent: tk.Misc, *, controller: InteractionController, kind: ModalKind):
        super().__init__(parent)
        self.controller = controller
        self.kind = ModalKind(kind)
        self.title(f"Select {self.kind.value} to apply")
        self.resizable(False, False)
        self.transient(parent)

        session = controller.open_modal(self.kind)

        self.var_axis = tk.StringVar(value=session.axis.value)
        self.var_key = tk.StringVar(value=session.selected_key or "")
        self.var_value = tk.StringVar(value=session.selected_value or "")

        self._build()
        self.protocol("WM_DELETE_WINDOW", self._cancel)
        self.bind("<Escape>", lambda _e: self._cancel())
        self.grab_set()

    def _build(self):
        pad = {"padx": 10, "pady": 6}
        frm = ttk.Frame(self)
        frm.pack(fill="both", expand=True, padx=10, pady=10)

        cat = ttk.LabelFrame(frm, text="Category", padding=6)
        cat.pack(side="top", fill="x", **pad)
        for axis in Axis:
            ttk.Radiobutton(
                cat, text=axis.label, value=axis.value,
                variable=self.var_axis, command=self._on_axis_change,
            ).pack(side="top", anchor="w")

        val = ttk.LabelFrame(frm, text="Value", padding=6)
        val.pack(side="top", fill="x", **pad)
        self.key_combo = ttk.Combobox(
            val, textvariable=self.var_key, state="readonly", width=28,
            values=self.controller.session.candidate_keys,
        )
        self.key_combo.pack(side="top", fill="x")
        self.key_combo.bind("<<ComboboxSelected>>", lambda _e: self.controller.select_key(self.var_key.get()))

        inp = ttk.LabelFrame(frm, text=self.kind.value.capitalize(), padding=6)
        inp.pack(side="top", fill="x", **pad)
        if self.kind == ModalKind.COLOR:
            self.color_chip = tk.Label(inp, width=4, background=self.var_value.get(), relief="groove")
            self.color_chip.pack(side="left")
            ttk.Label(inp, textvariable=self.var_value).pack(side="left", padx=(8, 0))
            ttk.Button(inp, text="Choose...", command=self._choose_color).pack(side="right")
        else:
            for name in ShapeKind.names():
                ttk.Radiobutton(inp, text=name, value=name, variable=self.var_value).pack(side="top", anchor="w")

        btns = ttk.Frame(frm)
        btns.pack(side="bottom", fill="x", **pad)
        ttk.Button(btns, text="Apply", command=self._apply).pack(side="right")
        ttk.Button(btns, text="Cancel", command=self._cancel).pack(side="right", padx=(0, 8))

    def _on_axis_change(self):
        keys = self.controller.change_axis(self.var_axis.get())
        self.key_combo.configure(values=keys)
        self.var_key.set(self.controller.session.selected_key or "")

    def _choose_color(self):
        _rgb, hex_color = colorchooser.askcolor(color=self.var_value.get(), parent=self)
        if not hex_color:
            return
        self.var_value.set(hex_color)
        self.color_chip.configure(background=hex_color)

    def _apply(self):
        try:
            self.controller.select_key(self.var_key.get())
            self.controller.select_value(self.var_value.get())
        except ValueError as e:
            messagebox.showerror("Invalid value", str(e), parent=self)
            return
        self.grab_release()
        self.destroy()
        self.controller.confirm()

    def _cancel(self):
        if not self.controller.is_idle:
            self.controller.cancel()
        self.grab_release()
        self.destroy()
