import pytest

from bioactivity_graph.chart import BioActivityChart
from bioactivity_graph.controller import InteractionController, ModalKind, ModalStateError
from bioactivity_graph.data_model import Axis, ShapeKind


@pytest.fixture
def controlled(mixed_compound, rng):
    chart = BioActivityChart(mixed_compound, rng=rng)
    calls = []
    ctl = InteractionController(chart, on_change=lambda: calls.append(1))
    return chart, ctl, calls


def test_open_modal_lists_accessions(controlled):
    _chart, ctl, _calls = controlled
    session = ctl.open_modal(ModalKind.COLOR)
    assert not ctl.is_idle
    assert session.axis == Axis.ACCESSION
    assert session.candidate_keys == ["P00533", "P04626", "Q01279"]
    assert session.selected_key == "P00533"
    assert session.selected_value == "#000000"


def test_change_axis_recomputes_candidates(controlled):
    _chart, ctl, _calls = controlled
    ctl.open_modal("shape")
    assert ctl.change_axis(Axis.TYPE) == ["IC50", "Ki", "Kd"]
    assert ctl.change_axis("symbol") == ["EGFR", "ERBB2", "Egfr"]
    assert ctl.session.selected_value == "Circle"
    assert not ctl.is_idle


def test_confirm_adds_rule_and_rerenders(controlled):
    chart, ctl, calls = controlled
    ctl.open_modal(ModalKind.COLOR)
    ctl.change_axis(Axis.TYPE)
    ctl.select_key("Ki")
    ctl.select_value("#00ff00")
    ctl.confirm()
    assert ctl.is_idle
    assert calls == [1]
    assert chart.colors["Ki"] == "#00ff00"
    for p in chart.points:
        assert p.color == ("#00ff00" if p.activity_type == "Ki" else "#C0C0C0")


def test_shape_rule(controlled):
    chart, ctl, _calls = controlled
    ctl.open_modal(ModalKind.SHAPE)
    ctl.change_axis(Axis.SYMBOL)
    ctl.select_key("ERBB2")
    ctl.select_value("Star")
    ctl.confirm()
    assert chart.shapes["ERBB2"] == ShapeKind.STAR
    assert {p.shape for p in chart.points if p.symbol == "ERBB2"} == {ShapeKind.STAR}
    assert {p.shape for p in chart.points if p.symbol != "ERBB2"} == {ShapeKind.CIRCLE}


def test_axis_remembered_between_dialogs(controlled):
    _chart, ctl, _calls = controlled
    ctl.open_modal(ModalKind.COLOR)
    ctl.change_axis(Axis.TYPE)
    ctl.confirm()
    assert ctl.open_modal(ModalKind.SHAPE).axis == Axis.TYPE


def test_cancel_discards(controlled):
    chart, ctl, calls = controlled
    ctl.open_modal(ModalKind.COLOR)
    ctl.select_value("#123456")
    ctl.cancel()
    assert ctl.is_idle
    assert calls == []
    assert len(chart.colors) == 1


def test_invalid_transitions(controlled):
    _chart, ctl, _calls = controlled
    with pytest.raises(ModalStateError):
        ctl.confirm()
    with pytest.raises(ModalStateError):
        ctl.change_axis(Axis.TYPE)
    ctl.open_modal(ModalKind.COLOR)
    with pytest.raises(ModalStateError):
        ctl.open_modal(ModalKind.SHAPE)


def test_invalid_values_rejected(controlled):
    _chart, ctl, _calls = controlled
    ctl.open_modal(ModalKind.COLOR)
    with pytest.raises(ValueError):
        ctl.select_value("red")
    ctl.cancel()
    ctl.open_modal(ModalKind.SHAPE)
    with pytest.raises(ValueError):
        ctl.select_value("Hexagon")


def test_remove_rule_row(controlled):
    chart, ctl, calls = controlled
    ctl.open_modal(ModalKind.COLOR)
    ctl.change_axis(Axis.TYPE)
    ctl.select_key("IC50")
    ctl.select_value("#ff0000")
    ctl.confirm()
    ctl.remove_rule_row(ModalKind.COLOR, "Default")
    assert len(calls) == 1
    ctl.remove_rule_row(ModalKind.COLOR, "IC50")
    assert len(calls) == 2
    assert "IC50" not in chart.colors
    assert all(p.color == "#C0C0C0" for p in chart.points)


def test_toggles(controlled):
    chart, ctl, calls = controlled
    assert ctl.toggle_jitter() is True
    assert ctl.toggle_violin() is True
    assert chart.bins is not None
    quarter = chart.x_scale.bandwidth / 4
    for p in chart.points:
        c = chart.x_scale.center(p.activity_type)
        assert c - quarter - 1e-9 <= p.x <= c
    assert ctl.toggle_jitter() is False
    assert ctl.toggle_violin() is False
    for p in chart.points:
        assert p.x == pytest.approx(chart.x_scale.center(p.activity_type))
    assert len(calls) == 4


def test_empty_chart_edits_are_no_ops(empty_compound):
    chart = BioActivityChart(empty_compound)
    calls = []
    ctl = InteractionController(chart, on_change=lambda: calls.append(1))
    session = ctl.open_modal(ModalKind.COLOR)
    assert session.candidate_keys == []
    ctl.select_key("P00533")
    ctl.select_value("#ff0000")
    ctl.confirm()
    assert ctl.is_idle
    ctl.remove_rule_row(ModalKind.SHAPE, "P00533")
    assert calls == []
    assert chart.colors is None
