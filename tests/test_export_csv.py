import csv

from bioactivity_graph.chart import BioActivityChart
from bioactivity_graph.export_csv import HEADER, points_csv_string, write_points_csv


def test_csv_string(two_protein_compound, rng):
    chart = BioActivityChart(two_protein_compound, rng=rng)
    lines = points_csv_string(chart.points).splitlines()
    assert lines[0] == ",".join(HEADER)
    assert lines[1] == "ABL1,P00519,Homo sapiens,IC50,=,5.0,nM,#C0C0C0,Circle"
    assert len(lines) == 3


def test_missing_fields_written_empty(mixed_compound, rng):
    chart = BioActivityChart(mixed_compound, rng=rng)
    rows = list(csv.reader(points_csv_string(chart.points).splitlines()))
    kd = [r for r in rows[1:] if r[3] == "Kd"][0]
    assert kd[2] == ""
    assert kd[6] == ""


def test_write_file_with_delimiter(tmp_path, two_protein_compound, rng):
    chart = BioActivityChart(two_protein_compound, rng=rng)
    out = tmp_path / "points.tsv"
    write_points_csv(str(out), chart.points, delimiter="\t")
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f, delimiter="\t"))
    assert rows[0] == HEADER
    assert [r[0] for r in rows[1:]] == ["ABL1", "KIT"]
