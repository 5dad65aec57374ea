"""Bioactivity scatter/violin chart for one compound's target proteins."""

from .chart import BioActivityChart
from .config import ChartSettings, load_settings
from .controller import InteractionController, ModalKind
from .data_model import Axis, Point, ShapeKind

__all__ = [
    "Axis",
    "BioActivityChart",
    "ChartSettings",
    "InteractionController",
    "ModalKind",
    "Point",
    "ShapeKind",
    "load_settings",
]
