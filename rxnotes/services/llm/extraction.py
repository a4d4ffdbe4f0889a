# rxnotes/services/llm/extraction.py
import logging
from typing import Any, Dict

from rxnotes.core import config
from rxnotes.schemas.models import PrescriptionExtract
from rxnotes.schemas.validation import validate_extract
from rxnotes.services.llm.extraction_prompt import EXTRACT_SYSTEM_PROMPT, extraction_user_prompt
from rxnotes.services.llm.extraction_schema import PRESCRIPTION_SCHEMA
from rxnotes.services.mock_data import mock_extract_payload
from rxnotes.services.ollama_client import ollama_chat_json

logger = logging.getLogger(__name__)

_OPTIONAL_KEYS = (
    "patient_info", "date", "doctor_info", "complaints", "vitals",
    "diagnosis", "follow_up", "tests", "advice",
)

def build_extract_payload(raw: Dict[str, Any], prescription_id: str, ocr_text: str, source_type: str) -> Dict[str, Any]:
    """Wrap the model's JSON in the extract envelope. Content is left as-is for validation."""
    payload: Dict[str, Any] = {
        "prescription_id": prescription_id,
        "source_type": source_type,
        "ocr_text": ocr_text,
        "medications": raw.get("medications") or [],
    }
    for key in _OPTIONAL_KEYS:
        payload[key] = raw.get(key)
    return payload

def llm_extract_prescription(
    ocr_text: str,
    prescription_id: str,
    source_type: str = "image",
    locale: str = "en",
) -> PrescriptionExtract:
    if config.MOCK_MODE:
        logger.info("mock mode: returning sample extract for %s", prescription_id)
        return validate_extract(mock_extract_payload(prescription_id, ocr_text))

    logger.info("extraction started prescription_id=%s chars=%d", prescription_id, len(ocr_text or ""))
    raw = ollama_chat_json(
        model=config.OLLAMA_MODEL_EXTRACT,
        system=EXTRACT_SYSTEM_PROMPT,
        user=extraction_user_prompt(ocr_text, locale),
        schema=PRESCRIPTION_SCHEMA,
    )
    extract = validate_extract(build_extract_payload(raw, prescription_id, ocr_text, source_type))
    logger.info("extraction done prescription_id=%s medications=%d", prescription_id, len(extract.medications))
    return extract
