"""
Chart settings.

Defaults can be overridden from a JSON file (``~/.bioactivity_graph.json`` or
an explicit path). The file is only ever read; rule tables and toggles are
not persisted.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .classification import is_hex_color
from .data_model import ShapeKind

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".bioactivity_graph.json"


@dataclass
class ChartSettings:
    width: int = 400
    height: int = 400
    margin_top: int = 40
    margin_right: int = 40
    margin_bottom: int = 40
    margin_left: int = 40

    band_padding: float = 0.05
    tick_count: int = 10
    bucket_count: int = 10

    default_color: str = "#C0C0C0"
    default_shape: str = "Circle"
    # d3.symbol size: area in px^2
    point_size: float = 50.0
    # one category-10 color rule per activity type on load
    color_by_category: bool = False

    x_title: str = "Bio-Activity Type"
    y_title: str = "Activity Concentration (nM)"

    @property
    def plot_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


def load_settings(path: Optional[str | Path] = None) -> ChartSettings:
    """
    Defaults merged with the JSON file at path (or CONFIG_PATH).
    Unknown keys are ignored; an unreadable file falls back to defaults, and
    so does any single value that does not fit its field.
    """
    settings = ChartSettings()
    cfg = Path(path) if path else CONFIG_PATH
    if not cfg.exists():
        if path:
            logger.warning("Config file not found: %s (using defaults)", cfg)
        return settings

    try:
        data = json.loads(cfg.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read config %s: %s (using defaults)", cfg, e)
        return settings
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object (using defaults)", cfg)
        return settings

    known = {f.name for f in fields(ChartSettings)}
    for key, value in data.items():
        if key not in known:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        try:
            value = _coerce(key, value, getattr(settings, key))
        except (TypeError, ValueError) as e:
            logger.warning("Bad value for config key %s: %s (using default)", key, e)
            continue
        setattr(settings, key, value)
    logger.info("Loaded chart settings from %s", cfg)
    return settings


def _coerce(key: str, value, default):
    """value converted to the type of the field's default, or ValueError."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"expected true or false, got {value!r}")
        return value
    if isinstance(default, (int, float)):
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"expected a number, got {value!r}")
        value = type(default)(value)
        if value < 0:
            raise ValueError(f"must not be negative, got {value!r}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    if key == "default_shape":
        return ShapeKind(value).value
    if key == "default_color" and not is_hex_color(value):
        raise ValueError(f"not a #rrggbb color: {value!r}")
    return value
