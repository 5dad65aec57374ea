from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .data_model import Point, ShapeKind

logger = logging.getLogger(__name__)

DEFAULT_KEY = "Default"
DEFAULT_COLOR = "#C0C0C0"
DEFAULT_SHAPE = ShapeKind.CIRCLE

# d3.schemeCategory10
CATEGORY10 = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

VisualValue = Union[str, ShapeKind]


def is_hex_color(s: str) -> bool:
    return bool(_HEX_COLOR.match(s or ""))


class ClassificationTable:
    """
    Ordered match key -> visual value mapping with a reserved Default entry.

    Default is always present and always first; it is the fallback when no
    other key matches a point.
    """

    def __init__(self, default: VisualValue) -> None:
        self._rules: Dict[str, VisualValue] = {DEFAULT_KEY: default}

    @property
    def default(self) -> VisualValue:
        return self._rules[DEFAULT_KEY]

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: str) -> bool:
        return key in self._rules

    def __getitem__(self, key: str) -> VisualValue:
        return self._rules[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def items(self) -> List[Tuple[str, VisualValue]]:
        return list(self._rules.items())

    def rules(self) -> List[Tuple[str, VisualValue]]:
        """Non-Default entries in table order."""
        return [(k, v) for k, v in self._rules.items() if k != DEFAULT_KEY]

    def set(self, key: str, value: VisualValue) -> None:
        # dict keeps an overwritten key at its original position
        self._rules[key] = value

    def discard(self, key: str) -> bool:
        if key == DEFAULT_KEY or key not in self._rules:
            return False
        del self._rules[key]
        return True


def resolve(table: ClassificationTable, point: Point) -> VisualValue:
    values = point.match_values()
    for key, visual in table.rules():
        if key in values:
            return visual
    return table.default


def add_rule(table: ClassificationTable, match_key: str, visual_value: VisualValue) -> None:
    table.set(match_key, visual_value)
    logger.debug("Rule set: %s -> %s", match_key, visual_value)


def remove_rule(table: ClassificationTable, match_key: str) -> None:
    if table.discard(match_key):
        logger.debug("Rule removed: %s", match_key)


def assign_colors(points: Sequence[Point], table: ClassificationTable) -> None:
    for p in points:
        p.color = str(resolve(table, p))


def assign_shapes(points: Sequence[Point], table: ClassificationTable) -> None:
    for p in points:
        p.shape = ShapeKind(resolve(table, p))


def initial_color_table(
    labels: Optional[Sequence[str]] = None,
    *,
    default: str = DEFAULT_COLOR,
) -> ClassificationTable:
    """
    Color table holding only Default, or, when labels are given, one
    category-10 color per label as well.
    """
    table = ClassificationTable(default)
    for i, label in enumerate(labels or []):
        table.set(label, CATEGORY10[i % len(CATEGORY10)])
    return table


def initial_shape_table(default: VisualValue = DEFAULT_SHAPE) -> ClassificationTable:
    return ClassificationTable(ShapeKind(default))
