from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .chart import BioActivityChart
from .classification import DEFAULT_KEY, add_rule, is_hex_color, remove_rule
from .data_model import Axis, ShapeKind

logger = logging.getLogger(__name__)


class ModalKind(str, Enum):
    COLOR = "color"
    SHAPE = "shape"


class ModalStateError(RuntimeError):
    pass


@dataclass
class ModalSession:
    kind: ModalKind
    axis: Axis = Axis.ACCESSION
    candidate_keys: List[str] = field(default_factory=list)
    selected_key: Optional[str] = None
    selected_value: Optional[str] = None


class InteractionController:
    """
    Idle -> ModalOpen(kind) -> Idle state machine for the add-rule dialog,
    plus the rule-table and visual-aid toggles.

    on_change is called after every edit that needs a re-render.
    """

    def __init__(
        self,
        chart: BioActivityChart,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.chart = chart
        self.on_change = on_change
        self.session: Optional[ModalSession] = None
        self._last_axis = Axis.ACCESSION

    @property
    def is_idle(self) -> bool:
        return self.session is None

    # ---------- modal ----------
    def open_modal(self, kind: ModalKind | str) -> ModalSession:
        if self.session is not None:
            raise ModalStateError(f"A {self.session.kind.value} dialog is already open.")
        kind = ModalKind(kind)
        default = "#000000" if kind == ModalKind.COLOR else ShapeKind.CIRCLE.value
        self.session = ModalSession(kind=kind, selected_value=default)
        self._fill_candidates(self._last_axis)
        logger.debug("Modal opened: %s", kind.value)
        return self.session

    def change_axis(self, axis: Axis | str) -> List[str]:
        self._require_open()
        self._fill_candidates(Axis(axis))
        return self.session.candidate_keys

    def select_key(self, key: str) -> None:
        self._require_open()
        self.session.selected_key = key

    def select_value(self, value: str) -> None:
        self._require_open()
        if self.session.kind == ModalKind.COLOR:
            if not is_hex_color(value):
                raise ValueError(f"Not a #rrggbb color: {value!r}")
        else:
            value = ShapeKind(value).value
        self.session.selected_value = value

    def confirm(self) -> None:
        self._require_open()
        s = self.session
        self.session = None
        self._last_axis = s.axis
        if not s.selected_key:
            logger.debug("Modal confirmed without a key; nothing applied")
            return
        if not self.chart.has_data:
            logger.debug("Modal confirmed on an empty chart; nothing applied")
            return
        value = s.selected_value if s.kind == ModalKind.COLOR else ShapeKind(s.selected_value)
        add_rule(self.chart.table(s.kind.value), s.selected_key, value)
        logger.info("Added %s rule %s -> %s", s.kind.value, s.selected_key, s.selected_value)
        self._reclassify()

    def cancel(self) -> None:
        self._require_open()
        logger.debug("Modal cancelled: %s", self.session.kind.value)
        self.session = None

    # ---------- idle actions ----------
    def remove_rule_row(self, kind: ModalKind | str, key: str) -> None:
        kind = ModalKind(kind)
        if key == DEFAULT_KEY or not self.chart.has_data:
            return
        table = self.chart.table(kind.value)
        if key not in table:
            return
        remove_rule(table, key)
        logger.info("Removed %s rule %s", kind.value, key)
        self._reclassify()

    def toggle_jitter(self) -> bool:
        self.chart.jitter_enabled = not self.chart.jitter_enabled
        self.chart.update_positions()
        self._notify()
        return self.chart.jitter_enabled

    def toggle_violin(self) -> bool:
        self.chart.violin_enabled = not self.chart.violin_enabled
        if self.chart.violin_enabled and self.chart.bins is None:
            self.chart.update_bins()
        self.chart.update_positions()
        self._notify()
        return self.chart.violin_enabled

    # ---------- helpers ----------
    def _fill_candidates(self, axis: Axis) -> None:
        keys: List[str] = []
        for p in self.chart.points:
            v = p.axis_value(axis)
            if v is not None and v not in keys:
                keys.append(v)
        self.session.axis = axis
        self.session.candidate_keys = keys
        self.session.selected_key = keys[0] if keys else None

    def _require_open(self) -> None:
        if self.session is None:
            raise ModalStateError("No rule dialog is open.")

    def _reclassify(self) -> None:
        self.chart.assign_visuals()
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
