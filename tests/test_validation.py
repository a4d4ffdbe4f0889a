import logging

import pytest

from rxnotes.schemas.models import Medication
from rxnotes.schemas.validation import (
    ShapeError,
    validate_extract,
    validate_medication,
    validate_notes_request,
)

ALL_NULL = {
    "strength": None,
    "form": None,
    "route": None,
    "dose": None,
    "frequency": None,
    "timing": None,
    "duration_days": None,
    "food_instruction": None,
    "instructions": None,
    "confidence": None,
    "needs_confirmation": None,
}

@pytest.mark.parametrize("name", ["", "   ", None, 42])
def test_bad_name_is_rejected(name):
    with pytest.raises(ShapeError) as exc:
        validate_medication({**ALL_NULL, "name": name})
    assert exc.value.field == "name"

def test_missing_name_is_rejected():
    with pytest.raises(ShapeError) as exc:
        validate_medication(dict(ALL_NULL))
    assert exc.value.field == "name"

def test_every_other_field_may_be_null():
    med = validate_medication({**ALL_NULL, "name": "Adequate fluid intake"})
    assert med.name == "Adequate fluid intake"
    assert med.confidence == {}
    assert med.needs_confirmation == []
    assert med.timing is None

def test_name_only_is_enough():
    assert validate_medication({"name": "ORS"}).name == "ORS"

def test_advice_items_use_open_form():
    med = validate_medication({"name": "Adequate fluid intake", "form": "advice"})
    assert med.form == "advice"

def test_non_mapping_is_rejected():
    with pytest.raises(ShapeError) as exc:
        validate_medication("Metformin 500mg BD")
    assert exc.value.field == "medication"

@pytest.mark.parametrize("value", [["name", 3], "duration_days", {"name": True}])
def test_needs_confirmation_must_be_list_of_strings(value):
    with pytest.raises(ShapeError) as exc:
        validate_medication({"name": "X", "needs_confirmation": value})
    assert exc.value.field == "needs_confirmation"

def test_needs_confirmation_keeps_first_occurrence_order():
    med = validate_medication({"name": "X", "needs_confirmation": ["dose", "name", "dose"]})
    assert med.needs_confirmation == ["dose", "name"]

@pytest.mark.parametrize("scores", [{"name": "0.9"}, {"name": True}, ["name"]])
def test_confidence_must_be_numeric_mapping(scores):
    with pytest.raises(ShapeError) as exc:
        validate_medication({"name": "X", "confidence": scores})
    assert exc.value.field == "confidence"

def test_confidence_allows_null_and_is_not_clamped():
    med = validate_medication({"name": "X", "confidence": {"name": None, "dose": 1.4, "frequency": 1}})
    assert med.confidence == {"name": None, "dose": 1.4, "frequency": 1.0}

def test_unknown_confidence_keys_only_warn(caplog):
    with caplog.at_level(logging.WARNING):
        med = validate_medication({"name": "X", "confidence": {"brand": 0.5}})
    assert med.confidence == {"brand": 0.5}
    assert "brand" in caplog.text

def test_timing_is_normalised_to_lowercase():
    med = validate_medication({"name": "X", "timing": ["Morning", " NIGHT "]})
    assert med.timing == ["morning", "night"]

@pytest.mark.parametrize("timing", [["noon"], ["morning", "morning"], "morning", ["prn"]])
def test_bad_timing_is_rejected(timing):
    with pytest.raises(ShapeError) as exc:
        validate_medication({"name": "X", "timing": timing})
    assert exc.value.field == "timing"

def test_wrong_type_for_string_field():
    with pytest.raises(ShapeError) as exc:
        validate_medication({"name": "X", "strength": 500})
    assert exc.value.field == "strength"

def test_already_valid_medication_passes_through():
    med = Medication(name="X", dose="1 tab")
    assert validate_medication(med) == med

def test_validate_extract_reports_nested_path():
    with pytest.raises(ShapeError) as exc:
        validate_extract({"prescription_id": "rx-1", "medications": [{"strength": "5mg"}]})
    assert exc.value.field == "medications.0.name"

def test_validate_extract_with_clinical_context():
    extract = validate_extract({
        "prescription_id": "rx-1",
        "ocr_text": "Tab X OD",
        "vitals": {"bp": "120/80"},
        "medications": [{"name": "X", "frequency": "OD"}],
        "advice": ["Low salt diet"],
    })
    ctx = extract.clinical_context()
    assert ctx.vitals.bp == "120/80"
    assert ctx.advice == ["Low salt diet"]
    assert extract.source_type == "image"

def test_validate_notes_request_requires_medication_list():
    with pytest.raises(ShapeError) as exc:
        validate_notes_request({"prescription_id": "rx-1", "medications": "Metformin"})
    assert exc.value.field == "medications"

def test_shape_error_message_names_field():
    err = ShapeError("dose", "bad")
    assert str(err) == "dose: bad"
    assert isinstance(err, ValueError)

@pytest.mark.parametrize("days", [True, "30", 30.0])
def test_duration_days_must_be_a_real_integer(days):
    with pytest.raises(ShapeError) as exc:
        validate_medication({"name": "X", "duration_days": days})
    assert exc.value.field == "duration_days"

def test_name_is_kept_as_given():
    assert validate_medication({"name": " Tab. Dolo "}).name == " Tab. Dolo "
