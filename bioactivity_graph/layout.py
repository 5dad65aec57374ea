from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from .data_model import Point
from .scales import BandScale, LogScale


def position(
    points: Sequence[Point],
    x_scale: BandScale,
    y_scale: LogScale,
    jitter_enabled: bool = False,
    violin_enabled: bool = False,
    rng: Optional[np.random.Generator] = None,
) -> Sequence[Point]:
    """
    Set display coordinates on every point, in place.

    Without jitter or violin every point of a type sits on the band center.
    Jitter spreads points over the inner half of the band. With the violin on,
    points move to the left half of the band; the right half is left for the
    violin silhouette.
    """
    if rng is None:
        rng = np.random.default_rng()
    bw = x_scale.bandwidth
    n = len(points)
    if jitter_enabled and violin_enabled:
        offsets = -bw / 8.0 + rng.uniform(-bw / 8.0, bw / 8.0, size=n)
    elif jitter_enabled:
        offsets = rng.uniform(-bw / 4.0, bw / 4.0, size=n)
    elif violin_enabled:
        offsets = np.full(n, -bw / 8.0)
    else:
        offsets = np.zeros(n)

    for p, dx in zip(points, offsets.tolist()):
        p.x = x_scale.center(p.activity_type) + dx
        p.y = y_scale(p.value)
    return points


def nearest_point(
    points: Sequence[Point],
    px: float,
    py: float,
    radius: float = 6.0,
) -> Optional[Point]:
    """Closest point to (px, py) within radius, or None."""
    best: Optional[Point] = None
    best_d = radius
    for p in points:
        d = math.hypot(p.x - px, p.y - py)
        if d <= best_d:
            best = p
            best_d = d
    return best
