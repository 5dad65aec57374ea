from __future__ import annotations

from typing import Dict, List, Sequence

import numpy as np

from .data_model import Bucket, Point
from .scales import LogScale


def bucket_edges(y_scale: LogScale, bucket_count: int = 10) -> List[float]:
    """Domain ends plus the scale ticks lying strictly inside the domain."""
    lo, hi = sorted(y_scale.domain)
    inner = [t for t in y_scale.ticks(bucket_count) if lo < t < hi]
    return [lo] + inner + [hi]


def histogram(values: Sequence[float], edges: Sequence[float]) -> List[Bucket]:
    """
    Bucket values by edges. Buckets are [lower, upper) except the last, which
    also holds its upper bound; values outside the edges are dropped.
    """
    buckets = [Bucket(lower=edges[i], upper=edges[i + 1]) for i in range(len(edges) - 1)]
    if not buckets:
        return buckets
    arr = np.asarray(values, dtype=float)
    idx = np.searchsorted(np.asarray(edges[1:-1], dtype=float), arr, side="right")
    inside = (arr >= edges[0]) & (arr <= edges[-1])
    for v, i, ok in zip(arr.tolist(), idx.tolist(), inside.tolist()):
        if ok:
            buckets[i].values.append(v)
    return buckets


def bin_points(
    points: Sequence[Point],
    y_scale: LogScale,
    bucket_count: int = 10,
) -> Dict[str, List[Bucket]]:
    """Per activity type (first-seen order), histogram of concentrations."""
    edges = bucket_edges(y_scale, bucket_count)
    grouped: Dict[str, List[float]] = {}
    for p in points:
        grouped.setdefault(p.activity_type, []).append(p.value)
    return {t: histogram(vals, edges) for t, vals in grouped.items()}


def max_bucket_count(bins: Dict[str, List[Bucket]]) -> int:
    return max((b.count for buckets in bins.values() for b in buckets), default=0)
