import pytest

from bioactivity_graph.loader import load_points
from bioactivity_graph.scales import BandScale, LogScale, build_x_scale, build_y_scale


def _points(values, type_="IC50"):
    proteins = [{
        "protein": {"symbol": "S", "primaryAccession": "P1"},
        "activities": [{"type": type_, "conc": v, "unit": "nM"} for v in values],
    }]
    return load_points(proteins)


def test_x_domain_first_seen(mixed_compound):
    points = load_points(mixed_compound["targetProteins"])
    scale = build_x_scale(points, 320, left=40)
    assert scale.domain == ["IC50", "Ki", "Kd"]


def test_single_band_is_centered():
    scale = build_x_scale(_points([5, 50]), 320, left=40)
    assert scale.center("IC50") == pytest.approx(200.0)
    assert scale.bandwidth < 320


def test_bands_are_padded_and_inside_range():
    scale = BandScale(domain=["a", "b", "c"], r0=0.0, r1=100.0, padding=0.05)
    starts = [scale(label) for label in scale.domain]
    assert starts[0] > 0
    for s0, s1 in zip(starts, starts[1:]):
        assert s0 + scale.bandwidth < s1
    assert starts[-1] + scale.bandwidth < 100.0
    assert scale.bandwidth == pytest.approx(scale.step * 0.95)


def test_y_domain_nice_and_inverted():
    scale = build_y_scale(_points([5, 50]), 320, top=40)
    assert scale.domain == (1.0, 100.0)
    assert scale(1.0) == pytest.approx(360.0)
    assert scale(100.0) == pytest.approx(40.0)
    assert scale(10.0) == pytest.approx(200.0)
    assert scale.invert(200.0) == pytest.approx(10.0)


def test_y_domain_contains_data_and_tick_count():
    scale = build_y_scale(_points([10, 100, 1000]), 320)
    lo, hi = scale.domain
    assert lo <= 10 and hi >= 1000
    ticks = scale.ticks(10)
    assert abs(len(ticks) - 10) <= 1
    assert ticks[0] == 10 and ticks[-1] == 1000
    assert ticks == sorted(ticks)


def test_degenerate_domain_is_widened():
    scale = build_y_scale(_points([7, 7, 7]), 320)
    lo, hi = scale.domain
    assert lo < 7 < hi
    assert scale.is_valid()
    assert scale(lo) != scale(hi)


def test_many_decades_are_thinned():
    scale = LogScale(d0=1e-6, d1=1e9, r0=100, r1=0)
    ticks = scale.ticks(5)
    assert 2 <= len(ticks) <= 6
    assert all(lo < hi for lo, hi in zip(ticks, ticks[1:]))


def test_tick_format_is_compact():
    scale = LogScale(d0=0.01, d1=1000, r0=100, r1=0)
    assert scale.tick_format(0.03) == "0.03"
    assert scale.tick_format(1000.0) == "1000"
    assert scale.tick_format(200.0) == "200"
