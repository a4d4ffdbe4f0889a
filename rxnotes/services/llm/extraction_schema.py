# rxnotes/services/llm/extraction_schema.py

_NULLABLE_STR = {"type": ["string", "null"]}
_NULLABLE_STR_LIST = {"type": ["array", "null"], "items": {"type": "string"}}

MEDICATION_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "strength": _NULLABLE_STR,
        "form": _NULLABLE_STR,
        "route": _NULLABLE_STR,
        "dose": _NULLABLE_STR,
        "frequency": _NULLABLE_STR,
        "timing": {
            "type": ["array", "null"],
            "items": {"type": "string", "enum": ["morning", "afternoon", "evening", "night", "as_needed"]},
        },
        "duration_days": {"type": ["integer", "null"]},
        "food_instruction": _NULLABLE_STR,
        "instructions": _NULLABLE_STR_LIST,
        "confidence": {
            "type": "object",
            "additionalProperties": {"type": ["number", "null"]},
        },
        "needs_confirmation": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["name", "confidence", "needs_confirmation"],
}

PRESCRIPTION_SCHEMA = {
    "type": "object",
    "properties": {
        "patient_info": {
            "type": ["object", "null"],
            "properties": {k: _NULLABLE_STR for k in ("name", "age", "sex", "uhid")},
        },
        "date": _NULLABLE_STR,
        "doctor_info": {
            "type": ["object", "null"],
            "properties": {k: _NULLABLE_STR for k in ("name", "qualifications", "hospital")},
        },
        "complaints": _NULLABLE_STR_LIST,
        "vitals": {
            "type": ["object", "null"],
            "properties": {k: _NULLABLE_STR for k in ("bp", "pulse", "rbs", "fbs", "ppbs", "spo2", "temperature")},
        },
        "diagnosis": _NULLABLE_STR,
        "medications": {"type": "array", "items": MEDICATION_SCHEMA},
        "follow_up": _NULLABLE_STR,
        "tests": _NULLABLE_STR_LIST,
        "advice": _NULLABLE_STR_LIST,
    },
    "required": ["medications"],
}
