from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np

from .binning import bin_points
from .classification import (
    ClassificationTable,
    assign_colors,
    assign_shapes,
    initial_color_table,
    initial_shape_table,
)
from .config import ChartSettings
from .data_model import Bucket, Point
from .layout import position
from .loader import extract_x_labels, load_points
from .scales import BandScale, LogScale, build_x_scale, build_y_scale

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No BioActivity Data to Display."


class BioActivityChart:
    """
    Derived state of one chart: points, scales, bins, rule tables, toggles.

    Built once per source document. A document without any activity record
    (no target proteins, or only proteins with empty activity lists) leaves
    the chart in the no-data state: nothing past the name is initialised.
    """

    def __init__(
        self,
        compound: Dict[str, Any],
        settings: Optional[ChartSettings] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.settings = settings or ChartSettings()
        self.name: str = compound.get("name") or ""
        self.rng = rng if rng is not None else np.random.default_rng()

        self.points: List[Point] = []
        self.x_scale: Optional[BandScale] = None
        self.y_scale: Optional[LogScale] = None
        self.colors: Optional[ClassificationTable] = None
        self.shapes: Optional[ClassificationTable] = None
        self.bins: Optional[Dict[str, List[Bucket]]] = None

        self.jitter_enabled = False
        self.violin_enabled = False

        proteins = compound.get("targetProteins") or []
        if len(proteins) == 0:
            logger.info("Compound %r has no target proteins; nothing to plot", self.name)
            return

        self.points = load_points(proteins)
        if not self.points:
            logger.info("Compound %r has no activity records; nothing to plot", self.name)
            return

        s = self.settings
        self.x_scale = build_x_scale(
            self.points, s.plot_width, left=s.margin_left, padding=s.band_padding,
        )
        self.y_scale = build_y_scale(self.points, s.plot_height, top=s.margin_top)

        labels = extract_x_labels(proteins) if s.color_by_category else None
        self.colors = initial_color_table(labels, default=s.default_color)
        self.shapes = initial_shape_table(s.default_shape)

        self.update_positions()
        self.assign_visuals()
        self.update_bins()
        logger.info(
            "Chart %r: %d points over %d activity types",
            self.name, len(self.points), len(self.x_scale.domain),
        )

    @property
    def has_data(self) -> bool:
        return bool(self.points)

    def update_positions(self) -> None:
        if not self.has_data:
            return
        position(
            self.points, self.x_scale, self.y_scale,
            jitter_enabled=self.jitter_enabled,
            violin_enabled=self.violin_enabled,
            rng=self.rng,
        )

    def update_bins(self) -> None:
        if not self.has_data:
            return
        self.bins = bin_points(self.points, self.y_scale, self.settings.bucket_count)

    def assign_visuals(self) -> None:
        if not self.has_data:
            return
        assign_colors(self.points, self.colors)
        assign_shapes(self.points, self.shapes)

    def table(self, kind: str) -> ClassificationTable:
        """Rule table for 'color' or 'shape'."""
        if kind == "color":
            return self.colors
        if kind == "shape":
            return self.shapes
        raise ValueError(f"Unsupported table kind: {kind}")
