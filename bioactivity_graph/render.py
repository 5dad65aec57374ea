from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .binning import max_bucket_count
from .chart import NO_DATA_MESSAGE, BioActivityChart
from .classification import is_hex_color
from .config import ChartSettings
from .data_model import Bucket, ShapeKind

logger = logging.getLogger(__name__)

Pt = Tuple[float, float]

_SQRT3 = math.sqrt(3.0)
AXIS_COLOR = "#333333"
VIOLIN_FILL = "#D8E4F0"
VIOLIN_OUTLINE = "#6A8CAF"


def shape_polygon(kind: ShapeKind | str, cx: float, cy: float, size: float = 50.0) -> List[Pt]:
    """
    Vertices of a marker centered on (cx, cy). size is the marker area in
    px^2, proportions follow the d3 symbol set.
    """
    kind = ShapeKind(kind)
    pts: List[Pt]
    if kind == ShapeKind.CIRCLE:
        r = math.sqrt(size / math.pi)
        pts = [(r * math.cos(a), r * math.sin(a)) for a in np.linspace(0, 2 * math.pi, 24, endpoint=False)]
    elif kind == ShapeKind.CROSS:
        r = math.sqrt(size / 5) / 2
        pts = [(-3 * r, -r), (-r, -r), (-r, -3 * r), (r, -3 * r), (r, -r), (3 * r, -r),
               (3 * r, r), (r, r), (r, 3 * r), (-r, 3 * r), (-r, r), (-3 * r, r)]
    elif kind == ShapeKind.DIAMOND:
        tan30 = math.sqrt(1 / 3)
        y = math.sqrt(size / (tan30 * 2))
        x = y * tan30
        pts = [(0, -y), (x, 0), (0, y), (-x, 0)]
    elif kind == ShapeKind.SQUARE:
        h = math.sqrt(size) / 2
        pts = [(-h, -h), (h, -h), (h, h), (-h, h)]
    elif kind == ShapeKind.STAR:
        ka = 0.8908130915292852
        kr = math.sin(math.pi / 10) / math.sin(7 * math.pi / 10)
        kx = math.sin(2 * math.pi / 10) * kr
        ky = -math.cos(2 * math.pi / 10) * kr
        r = math.sqrt(size * ka)
        x, y = kx * r, ky * r
        pts = [(0, -r), (x, y)]
        for i in range(1, 5):
            a = 2 * math.pi * i / 5
            c, s = math.cos(a), math.sin(a)
            pts.append((s * r, -c * r))
            pts.append((c * x - s * y, s * x + c * y))
    elif kind == ShapeKind.TRIANGLE:
        y = -math.sqrt(size / (_SQRT3 * 3))
        pts = [(0, y * 2), (-_SQRT3 * y, -y), (_SQRT3 * y, -y)]
    elif kind == ShapeKind.WYE:
        c, s = -0.5, _SQRT3 / 2
        k = 1 / math.sqrt(12)
        r = math.sqrt(size / ((k / 2 + 1) * 3))
        x0, y0 = r / 2, r * k
        x1, y1 = x0, r * k + r
        x2, y2 = -x1, y1
        pts = [
            (x0, y0), (x1, y1), (x2, y2),
            (c * x0 - s * y0, s * x0 + c * y0),
            (c * x1 - s * y1, s * x1 + c * y1),
            (c * x2 - s * y2, s * x2 + c * y2),
            (c * x0 + s * y0, c * y0 - s * x0),
            (c * x1 + s * y1, c * y1 - s * x1),
            (c * x2 + s * y2, c * y2 - s * x2),
        ]
    else:
        raise ValueError(f"Unsupported shape: {kind}")
    return [(cx + dx, cy + dy) for dx, dy in pts]


def _catmull_rom(pts: Sequence[Pt], samples: int = 6) -> List[Pt]:
    """Smooth an open polyline through pts (end points kept)."""
    if len(pts) < 3:
        return list(pts)
    arr = np.asarray(pts, dtype=float)
    padded = np.vstack([arr[0], arr, arr[-1]])
    out: List[Pt] = []
    t = np.linspace(0.0, 1.0, samples, endpoint=False)[:, None]
    for i in range(1, len(padded) - 2):
        p0, p1, p2, p3 = padded[i - 1], padded[i], padded[i + 1], padded[i + 2]
        seg = 0.5 * (
            2 * p1
            + (-p0 + p2) * t
            + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t ** 2
            + (-p0 + 3 * p1 - 3 * p2 + p3) * t ** 3
        )
        out.extend((float(x), float(y)) for x, y in seg)
    out.append((float(arr[-1][0]), float(arr[-1][1])))
    return out


def violin_polygon(
    buckets: Sequence[Bucket],
    x0: float,
    half_width: float,
    max_count: int,
    y_of,
) -> List[Pt]:
    """
    Closed outline of one violin: a flat edge at x0 and a bulge to the right
    whose width at each bucket is proportional to its count.
    """
    if not buckets or max_count <= 0:
        return []
    outline: List[Pt] = [(x0, y_of(buckets[0].lower))]
    for b in buckets:
        mid = math.sqrt(b.lower * b.upper)
        outline.append((x0 + half_width * b.count / max_count, y_of(mid)))
    outline.append((x0, y_of(buckets[-1].upper)))
    return _catmull_rom(outline)


def render_swatch(value: str, size: int = 16) -> Image.Image:
    """Small preview for a rule-table row: a color chip or a black marker."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    if is_hex_color(str(value)):
        draw.rectangle([1, 1, size - 2, size - 2], fill=str(value), outline="#666666")
    else:
        area = (size * 0.55) ** 2
        draw.polygon(shape_polygon(value, size / 2, size / 2, area), fill="black")
    return img


class ChartRenderer:
    def __init__(self, settings: Optional[ChartSettings] = None) -> None:
        self.settings = settings or ChartSettings()
        self._font = ImageFont.load_default()

    def render(self, chart: BioActivityChart, scale: float = 1.0) -> Image.Image:
        s = self.settings
        w = max(1, int(round(s.width * scale)))
        h = max(1, int(round(s.height * scale)))
        img = Image.new("RGB", (w, h), "white")
        draw = ImageDraw.Draw(img)

        if not chart.has_data:
            self._text(draw, (w / 2, h / 2), NO_DATA_MESSAGE, anchor="mm")
            return img

        self._draw_axes(img, draw, chart, scale)
        if chart.violin_enabled and chart.bins:
            self._draw_violins(draw, chart, scale)
        for p in chart.points:
            poly = shape_polygon(p.shape, p.x * scale, p.y * scale, s.point_size * scale * scale)
            draw.polygon(poly, fill=p.color, outline=None)
        return img

    def save_png(self, chart: BioActivityChart, path: str, scale: float = 2.0) -> None:
        self.render(chart, scale=scale).save(path, format="PNG")
        logger.info("Chart image saved: %s", path)

    # ---------- pieces ----------
    def _draw_axes(self, img: Image.Image, draw: ImageDraw.ImageDraw, chart: BioActivityChart, k: float) -> None:
        s = self.settings
        X, Y = chart.x_scale, chart.y_scale
        left = s.margin_left * k
        right = (s.width - s.margin_right) * k
        top = s.margin_top * k
        bottom = (s.height - s.margin_bottom) * k

        # x axis: baseline, one tick + label per band
        draw.line([(left, bottom), (right, bottom)], fill=AXIS_COLOR, width=1)
        for label in X.domain:
            cx = X.center(label) * k
            draw.line([(cx, bottom), (cx, bottom + 6 * k)], fill=AXIS_COLOR)
            self._text(draw, (cx, bottom + 8 * k), str(label), anchor="ma")
        self._text(draw, ((s.width / 2) * k, (s.height - s.margin_bottom / 3) * k), s.x_title, anchor="mm")

        # y axis: baseline, log ticks
        draw.line([(left, top), (left, bottom)], fill=AXIS_COLOR, width=1)
        for t in Y.ticks(s.tick_count):
            ty = Y(t) * k
            draw.line([(left - 6 * k, ty), (left, ty)], fill=AXIS_COLOR)
            self._text(draw, (left - 8 * k, ty), Y.tick_format(t), anchor="rm")
        self._draw_vertical_title(img, s.y_title, (s.margin_left / 3) * k, (s.height / 2) * k)

    def _draw_violins(self, draw: ImageDraw.ImageDraw, chart: BioActivityChart, k: float) -> None:
        X, Y = chart.x_scale, chart.y_scale
        max_count = max_bucket_count(chart.bins)
        half = X.bandwidth / 2 * 0.9
        for label, buckets in chart.bins.items():
            poly = violin_polygon(buckets, X.center(label), half, max_count, Y)
            if len(poly) >= 3:
                draw.polygon([(x * k, y * k) for x, y in poly], fill=VIOLIN_FILL, outline=VIOLIN_OUTLINE)

    def _draw_vertical_title(self, img: Image.Image, text: str, cx: float, cy: float) -> None:
        measure = ImageDraw.Draw(img)
        x0, y0, x1, y1 = measure.textbbox((0, 0), text, font=self._font)
        tw, th = int(x1 - x0) + 2, int(y1 - y0) + 2
        label = Image.new("RGBA", (tw, th), (255, 255, 255, 0))
        ImageDraw.Draw(label).text((-x0 + 1, -y0 + 1), text, fill=AXIS_COLOR, font=self._font)
        label = label.rotate(90, expand=True)
        img.paste(label, (int(cx - label.width / 2), int(cy - label.height / 2)), label)

    def _text(self, draw: ImageDraw.ImageDraw, xy: Pt, text: str, *, anchor: str) -> None:
        # anchor: horizontal m|r, vertical m|a. Placed by hand since the
        # bitmap fallback font does not take PIL's anchor argument.
        x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=self._font)
        tw, th = x1 - x0, y1 - y0
        x, y = xy
        x -= tw / 2 if anchor[0] == "m" else tw
        if anchor[1] == "m":
            y -= th / 2
        draw.text((x - x0, y - y0), text, fill=AXIS_COLOR, font=self._font)
