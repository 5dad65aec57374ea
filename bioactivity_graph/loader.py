from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .data_model import Point

logger = logging.getLogger(__name__)


def _organism_name(protein: Dict[str, Any]):
    org = protein.get("organism")
    if isinstance(org, dict):
        return org.get("name")
    return None


def load_points(target_proteins: Sequence[Dict[str, Any]]) -> List[Point]:
    """
    Flatten the compound's target proteins into one Point per activity record.

    Source order is kept: proteins first, then their activities. An empty
    sequence yields an empty list (the "no data" state).
    """
    points: List[Point] = []
    for tp in target_proteins:
        protein = tp.get("protein") or {}
        for act in tp.get("activities") or []:
            points.append(Point(
                symbol=protein.get("symbol"),
                primary_accession=protein.get("primaryAccession"),
                organism=_organism_name(protein),
                value=float(act.get("conc")),
                activity_type=act.get("type"),
                relation=act.get("relation"),
                unit=act.get("unit"),
            ))
    return points


def extract_x_labels(target_proteins: Sequence[Dict[str, Any]]) -> List[str]:
    labels: List[str] = []
    for tp in target_proteins:
        for act in tp.get("activities") or []:
            t = act.get("type")
            if t not in labels:
                labels.append(t)
    return labels


def load_query_result(path: str | Path) -> Dict[str, Any]:
    """
    Read a compound query result from JSON.

    Accepts the compound object itself or a list of records, in which case the
    first record is used.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, list):
        if not data:
            raise ValueError(f"No records in {path}")
        data = data[0]
    if not isinstance(data, dict) or "targetProteins" not in data:
        raise ValueError(f"Not a compound query result (missing 'targetProteins'): {path}")
    logger.info(
        "Loaded compound %s with %d target proteins from %s",
        data.get("name"), len(data["targetProteins"]), path,
    )
    return data
