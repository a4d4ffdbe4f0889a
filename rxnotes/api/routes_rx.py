# rxnotes/api/routes_rx.py
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from rxnotes.core import config
from rxnotes.schemas.models import (
    ExtractRequest, PrescriptionExtract,
    MedicationReviewResponse, NotesOutput,
)
from rxnotes.schemas.validation import validate_extract, validate_medication, validate_notes_request
from rxnotes.services.confidence import fields_to_verify, review_medication
from rxnotes.services.llm.extraction import llm_extract_prescription
from rxnotes.services.mock_data import mock_extract_payload
from rxnotes.services.notes import generate_notes

router = APIRouter(prefix="/rx", tags=["prescription"])

@router.post("/extract", response_model=PrescriptionExtract)
def rx_extract(req: ExtractRequest):
    if not req.prescription_id:
        raise HTTPException(status_code=400, detail="prescription_id is required")
    if not (req.ocr_text or "").strip():
        raise HTTPException(status_code=400, detail="ocr_text is required")

    return llm_extract_prescription(
        req.ocr_text,
        req.prescription_id,
        source_type=req.source_type,
        locale=req.locale,
    )

@router.post("/medications/validate", response_model=MedicationReviewResponse)
def rx_validate_medication(payload: Dict[str, Any] = Body(...)):
    """User correction from the review screen; same gate as extraction output."""
    med = validate_medication(payload)
    return MedicationReviewResponse(
        medication=med,
        review=review_medication(med),
        verify_fields=fields_to_verify(med),
    )

@router.post("/generate-notes", response_model=NotesOutput)
def rx_generate_notes(payload: Dict[str, Any] = Body(...)):
    if not payload.get("prescription_id") or payload.get("medications") is None:
        raise HTTPException(status_code=400, detail="prescription_id and medications are required")

    if config.MOCK_MODE and not payload["medications"]:
        extract = validate_extract(mock_extract_payload(payload["prescription_id"]))
        return generate_notes(extract.prescription_id, extract.medications, extract.clinical_context())

    req = validate_notes_request(payload)
    return generate_notes(req.prescription_id, req.medications, req.clinical_context())
