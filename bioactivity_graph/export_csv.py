from __future__ import annotations

import csv
import io
from typing import List, Sequence, Tuple

from .data_model import Point

HEADER = ["symbol", "primaryAccession", "organism", "type", "relation", "conc", "unit", "color", "shape"]


def points_to_rows(points: Sequence[Point]) -> List[Tuple]:
    rows: List[Tuple] = []
    for p in points:
        shape = p.shape.value if p.shape is not None else ""
        rows.append((
            p.symbol or "",
            p.primary_accession or "",
            p.organism or "",
            p.activity_type or "",
            p.relation or "",
            p.value,
            p.unit or "",
            p.color or "",
            shape,
        ))
    return rows


def write_points_csv(path: str, points: Sequence[Point], delimiter: str = ",") -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f, delimiter=delimiter)
        w.writerow(HEADER)
        w.writerows(points_to_rows(points))


def points_csv_string(points: Sequence[Point], delimiter: str = ",") -> str:
    buf = io.StringIO()
    w = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
    w.writerow(HEADER)
    w.writerows(points_to_rows(points))
    return buf.getvalue().rstrip()
