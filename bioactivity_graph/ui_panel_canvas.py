from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from PIL import ImageTk

from .layout import nearest_point


class CanvasPanel:
    def __init__(self, owner, parent: tk.Widget, *, actor) -> None:
        self.owner = owner
        self.actor = actor

        frame = ttk.Frame(parent)
        self.frame = frame
        frame.pack(side="top", fill="both", expand=True)

        owner.tip_var = tk.StringVar(value="")
        owner.tip_label = ttk.Label(frame, textvariable=owner.tip_var, justify="left")
        owner.tip_label.pack(side="top", fill="x", pady=(0, 6))

        owner.canvas = tk.Canvas(frame, background="white", highlightthickness=1, highlightbackground="#999")
        owner.canvas.pack(side="bottom", fill="both", expand=True)
        owner.canvas.bind("<Configure>", actor._on_canvas_configure)
        owner.canvas.bind("<Motion>", actor._on_motion)
        owner.canvas.bind("<Leave>", actor._on_canvas_leave)


class CanvasActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _on_canvas_configure(self, _evt=None):
        # Avoid thrashing when resizing: schedule a single re-render
        if getattr(self, "_render_after_id", None) is not None:
            try:
                self.after_cancel(self._render_after_id)
            except tk.TclError:
                pass
        self._render_after_id = self.after(30, self._render_chart)

    def _render_chart(self):
        self._render_after_id = None
        self.canvas.delete("all")
        self.canvas.update_idletasks()
        cw = max(10, self.canvas.winfo_width())
        ch = max(10, self.canvas.winfo_height())

        s = self.settings
        self._scale = min(cw / s.width, ch / s.height)
        img = self.renderer.render(self.chart, scale=self._scale)
        self._offx = (cw - img.width) // 2
        self._offy = (ch - img.height) // 2

        self._photo = ImageTk.PhotoImage(img)
        self.canvas.create_image(self._offx, self._offy, image=self._photo, anchor="nw", tags=("chart",))

    def _to_chart(self, cx: int, cy: int) -> Tuple[float, float]:
        k = getattr(self, "_scale", 1.0) or 1.0
        return (cx - self._offx) / k, (cy - self._offy) / k

    def _on_motion(self, event):
        if not self.chart.has_data or getattr(self, "_photo", None) is None:
            return
        x, y = self._to_chart(event.x, event.y)
        k = getattr(self, "_scale", 1.0) or 1.0
        hit = nearest_point(self.chart.points, x, y, radius=max(4.0, 8.0 / k))
        self._set_tip(hit.tooltip().replace("\n", "   ") if hit is not None else None)

    def _on_canvas_leave(self, _evt=None):
        self._set_tip(None)

    def _set_tip(self, text: Optional[str]) -> None:
        self.tip_var.set(text or "Hover a point for details.")
