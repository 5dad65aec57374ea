import pytest

from bioactivity_graph.chart import BioActivityChart
from bioactivity_graph.classification import add_rule
from bioactivity_graph.config import ChartSettings
from bioactivity_graph.data_model import ShapeKind


def test_no_data_state(empty_compound):
    chart = BioActivityChart(empty_compound)
    assert not chart.has_data
    assert chart.points == []
    assert chart.x_scale is None and chart.colors is None
    chart.update_positions()
    chart.assign_visuals()


def test_proteins_without_activities_are_no_data():
    compound = {
        "name": "X",
        "targetProteins": [
            {"protein": {"symbol": "A", "primaryAccession": "P1"}, "activities": []},
            {"protein": {"symbol": "B", "primaryAccession": "P2"}},
        ],
    }
    chart = BioActivityChart(compound)
    assert not chart.has_data
    assert chart.y_scale is None and chart.bins is None


def test_two_protein_scenario(two_protein_compound, rng):
    chart = BioActivityChart(two_protein_compound, rng=rng)
    assert len(chart.points) == 2
    assert chart.x_scale.domain == ["IC50"]
    lo, hi = chart.y_scale.domain
    assert lo <= 5 and hi >= 50
    assert all(p.color == "#C0C0C0" and p.shape == ShapeKind.CIRCLE for p in chart.points)

    add_rule(chart.colors, "IC50", "#e41a1c")
    chart.assign_visuals()
    assert [p.color for p in chart.points] == ["#e41a1c", "#e41a1c"]


def test_points_placed_inside_plot_area(mixed_compound, rng):
    s = ChartSettings()
    chart = BioActivityChart(mixed_compound, s, rng=rng)
    for p in chart.points:
        assert s.margin_left <= p.x <= s.width - s.margin_right
        assert s.margin_top <= p.y <= s.height - s.margin_bottom


def test_bins_built_once_with_data(mixed_compound, rng):
    chart = BioActivityChart(mixed_compound, rng=rng)
    assert set(chart.bins) == {"IC50", "Ki", "Kd"}


def test_color_by_category_setting(mixed_compound, rng):
    chart = BioActivityChart(mixed_compound, ChartSettings(color_by_category=True), rng=rng)
    assert [k for k, _ in chart.colors.rules()] == ["IC50", "Ki", "Kd"]
    assert len({p.color for p in chart.points}) == 3


def test_unknown_table_kind(two_protein_compound):
    chart = BioActivityChart(two_protein_compound)
    with pytest.raises(ValueError):
        chart.table("size")
