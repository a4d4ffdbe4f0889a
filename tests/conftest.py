import pytest

from rxnotes.core import config
from rxnotes.schemas.validation import validate_medication

@pytest.fixture(autouse=True)
def _no_mock_mode(monkeypatch):
    # a local config.env must not leak into tests
    monkeypatch.setattr(config, "MOCK_MODE", False)

@pytest.fixture
def metformin_raw():
    return {
        "name": "Metformin",
        "strength": "500mg",
        "frequency": "BD",
        "food_instruction": "After food",
        "duration_days": 30,
        "confidence": {"frequency": 0.88},
        "needs_confirmation": [],
    }

@pytest.fixture
def paracetamol_raw():
    return {
        "name": "Paracetamol",
        "frequency": "SOS",
        "duration_days": None,
        "needs_confirmation": ["duration_days"],
    }

@pytest.fixture
def metformin(metformin_raw):
    return validate_medication(metformin_raw)

@pytest.fixture
def paracetamol(paracetamol_raw):
    return validate_medication(paracetamol_raw)
