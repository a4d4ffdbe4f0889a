# rxnotes/schemas/validation.py
"""
Single gate for data coming from outside the core: the extraction model's
structured guess and user corrections made during review.

Malformed records are rejected whole, never patched. The error names the
offending field so the UI can ask for just that field again.
"""
from typing import Any, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from rxnotes.schemas.models import GenerateNotesRequest, Medication, PrescriptionExtract

M = TypeVar("M", bound=BaseModel)

class ShapeError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

def _field_path(loc: Sequence[Any], root: str) -> str:
    parts = [str(p) for p in loc]
    return ".".join(parts) if parts else root

def _validate(model: Type[M], data: Any, root: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        raise ShapeError(_field_path(err.get("loc") or (), root), err.get("msg", "invalid value")) from e

def validate_medication(data: Any) -> Medication:
    """Validate one medication record; `ShapeError.field` is the top-level field name."""
    try:
        return Medication.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "medication"
        raise ShapeError(field, err.get("msg", "invalid value")) from e

def validate_extract(data: Any) -> PrescriptionExtract:
    return _validate(PrescriptionExtract, data, "prescription")

def validate_notes_request(data: Any) -> GenerateNotesRequest:
    return _validate(GenerateNotesRequest, data, "request")
