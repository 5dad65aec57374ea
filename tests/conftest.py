import os
import sys

import numpy as np
import pytest

# Repository root on the path so the launcher module imports too
root_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if root_path not in sys.path:
    sys.path.insert(0, root_path)


def _protein(symbol, accession, activities, organism="Homo sapiens"):
    protein = {"symbol": symbol, "primaryAccession": accession}
    if organism is not None:
        protein["organism"] = {"name": organism}
    return {"protein": protein, "activities": activities}


def _activity(type_, conc, unit="nM", relation="="):
    return {"type": type_, "conc": conc, "relation": relation, "unit": unit}


@pytest.fixture
def two_protein_compound():
    """Protein A IC50 5 nM, protein B IC50 50 nM."""
    return {
        "name": "Imatinib",
        "targetProteins": [
            _protein("ABL1", "P00519", [_activity("IC50", 5)]),
            _protein("KIT", "P10721", [_activity("IC50", 50)]),
        ],
    }


@pytest.fixture
def mixed_compound():
    return {
        "name": "Gefitinib",
        "targetProteins": [
            _protein("EGFR", "P00533", [
                _activity("IC50", 10),
                _activity("Ki", 100),
                _activity("IC50", 1000),
            ]),
            _protein("ERBB2", "P04626", [
                _activity("Kd", 30, unit=None),
                _activity("IC50", 300),
            ], organism=None),
            _protein("Egfr", "Q01279", [
                _activity("Ki", 3),
            ], organism="Mus musculus"),
        ],
    }


@pytest.fixture
def empty_compound():
    return {"name": "Nothing", "targetProteins": []}


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
