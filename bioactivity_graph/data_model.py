from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ShapeKind(str, Enum):
    CIRCLE = "Circle"
    CROSS = "Cross"
    DIAMOND = "Diamond"
    SQUARE = "Square"
    STAR = "Star"
    TRIANGLE = "Triangle"
    WYE = "Wye"

    @classmethod
    def names(cls) -> List[str]:
        return [k.value for k in cls]


class Axis(str, Enum):
    """Point attribute a classification rule is picked from."""
    ACCESSION = "primaryAccession"
    SYMBOL = "symbol"
    TYPE = "type"

    @property
    def label(self) -> str:
        return {
            Axis.ACCESSION: "Primary Accession",
            Axis.SYMBOL: "Gene Symbol",
            Axis.TYPE: "Activity Type",
        }[self]


@dataclass
class Point:
    symbol: str
    primary_accession: str
    value: float
    activity_type: str
    unit: Optional[str] = None
    relation: Optional[str] = None
    organism: Optional[str] = None

    # visual attributes (Classification Engine)
    color: Optional[str] = None
    shape: Optional[ShapeKind] = None

    # display coordinates (Layout Engine)
    x: float = 0.0
    y: float = 0.0

    def match_values(self) -> List[str]:
        """String-valued attributes a classification key is compared against."""
        vals = [
            self.symbol,
            self.primary_accession,
            self.organism,
            self.activity_type,
            self.unit,
            self.relation,
        ]
        return [v for v in vals if isinstance(v, str)]

    def axis_value(self, axis: Axis) -> Optional[str]:
        if axis == Axis.ACCESSION:
            return self.primary_accession
        if axis == Axis.SYMBOL:
            return self.symbol
        if axis == Axis.TYPE:
            return self.activity_type
        raise ValueError(f"Unsupported axis: {axis}")

    def tooltip(self) -> str:
        unit = self.unit or ""
        return (
            f"Organism: {self.organism or 'n/a'}\n"
            f"Gene: {self.symbol or 'n/a'}\n"
            f"Concentration: {self.value:g}{unit}"
        )


@dataclass
class Bucket:
    lower: float
    upper: float
    values: List[float] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.values)
