from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable


class VisualsPanel:
    def __init__(
        self,
        owner,
        parent: tk.Widget,
        *,
        on_violin_toggle: Callable[[], None],
        on_jitter_toggle: Callable[[], None],
    ) -> None:
        self.owner = owner
        self.frame = ttk.LabelFrame(parent, text="Visual Aids", padding=8)
        self.frame.pack(side="top", fill="x", pady=(8, 0))

        ttk.Checkbutton(
            self.frame,
            text="Violin plot",
            variable=owner.var_violin,
            command=on_violin_toggle,
        ).pack(side="top", anchor="w")
        ttk.Checkbutton(
            self.frame,
            text="Jitter",
            variable=owner.var_jitter,
            command=on_jitter_toggle,
        ).pack(side="top", anchor="w")
