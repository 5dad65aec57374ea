from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .data_model import Point

# Tick mantissas tried per decade, coarsest first.
_LOG_LADDERS: Tuple[Tuple[int, ...], ...] = (
    (1,),
    (1, 3),
    (1, 2, 5),
    (1, 2, 3, 5),
    (1, 2, 3, 4, 5, 6, 7, 8, 9),
)

_EPS = 1e-9


@dataclass
class BandScale:
    """Ordinal scale: each label owns a contiguous band of the range."""
    domain: List[str]
    r0: float
    r1: float
    padding: float = 0.05
    _index: Dict[str, int] = field(init=False, repr=False)

    def __post_init__(self):
        self._index = {label: i for i, label in enumerate(self.domain)}

    @property
    def step(self) -> float:
        n = len(self.domain)
        return (self.r1 - self.r0) / max(1.0, n - self.padding + 2 * self.padding)

    @property
    def bandwidth(self) -> float:
        return self.step * (1.0 - self.padding)

    @property
    def start(self) -> float:
        n = len(self.domain)
        return self.r0 + (self.r1 - self.r0 - self.step * (n - self.padding)) * 0.5

    def __contains__(self, label: str) -> bool:
        return label in self._index

    def __call__(self, label: str) -> float:
        return self.start + self.step * self._index[label]

    def center(self, label: str) -> float:
        return self(label) + self.bandwidth / 2.0


@dataclass
class LogScale:
    """Base-10 logarithmic scale; domain bounds must be > 0."""
    d0: float
    d1: float
    r0: float
    r1: float

    def is_valid(self) -> bool:
        return self.d0 > 0 and self.d1 > 0 and self.d0 != self.d1

    @property
    def domain(self) -> Tuple[float, float]:
        return (self.d0, self.d1)

    def __call__(self, v: float) -> float:
        lv = np.log10(v)
        lv0 = math.log10(self.d0)
        lv1 = math.log10(self.d1)
        t = (lv - lv0) / (lv1 - lv0)
        return float(self.r0 + t * (self.r1 - self.r0))

    def invert(self, p: float) -> float:
        lv0 = math.log10(self.d0)
        lv1 = math.log10(self.d1)
        t = (p - self.r0) / (self.r1 - self.r0)
        return 10 ** (lv0 + t * (lv1 - lv0))

    def nice(self) -> "LogScale":
        """Round the domain outward to whole decades."""
        lo = math.floor(math.log10(self.d0) + _EPS)
        hi = math.ceil(math.log10(self.d1) - _EPS)
        self.d0 = _pow10(1, lo)
        self.d1 = _pow10(1, hi)
        return self

    def ticks(self, count: int = 10) -> List[float]:
        lo = math.floor(math.log10(self.d0) + _EPS)
        hi = math.ceil(math.log10(self.d1) - _EPS)
        if hi - lo > count:
            stride = math.ceil((hi - lo) / count)
            return [_pow10(1, e) for e in range(lo, hi + 1, stride)
                    if self._in_domain(_pow10(1, e))]

        best: List[float] = []
        for ladder in _LOG_LADDERS:
            cand = [_pow10(m, e) for e in range(lo, hi + 1) for m in ladder]
            cand = [t for t in cand if self._in_domain(t)]
            if not best or abs(len(cand) - count) < abs(len(best) - count):
                best = cand
        return best

    def tick_format(self, v: float) -> str:
        return f"{v:.6g}"

    def _in_domain(self, v: float) -> bool:
        lo, hi = min(self.d0, self.d1), max(self.d0, self.d1)
        return lo * (1 - _EPS) <= v <= hi * (1 + _EPS)


def _pow10(mantissa: int, exponent: int) -> float:
    # exact decimal, avoids 3*10**-2 == 0.030000000000000002
    return float(f"{mantissa}e{exponent}")


def build_x_scale(
    points: Sequence[Point],
    width: float,
    *,
    left: float = 0.0,
    padding: float = 0.05,
) -> BandScale:
    """Band per activity type, in first-seen order, over [left, left+width]."""
    labels: List[str] = []
    for p in points:
        if p.activity_type not in labels:
            labels.append(p.activity_type)
    return BandScale(domain=labels, r0=float(left), r1=float(left + width), padding=padding)


def build_y_scale(points: Sequence[Point], height: float, *, top: float = 0.0) -> LogScale:
    """
    Log scale over the points' concentrations, inverted so larger values
    plot higher. A single distinct value is widened one decade each side.
    """
    values = [p.value for p in points]
    vmin = min(values)
    vmax = max(values)
    if vmin == vmax:
        vmin = vmin / 10.0
        vmax = vmax * 10.0
    return LogScale(d0=vmin, d1=vmax, r0=float(top + height), r1=float(top)).nice()
