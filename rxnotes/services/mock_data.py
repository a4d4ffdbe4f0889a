# rxnotes/services/mock_data.py
"""Sample prescription used when MOCK_MODE is on."""
import copy
from typing import Any, Dict

MOCK_OCR_TEXT = """Dr. Rajesh Kumar, MBBS, MD
Apollo Hospital, New Delhi
Date: 15/01/2024

Patient: Mr. Sharma
Age: 45 years

Rx:
1. Tab Metformin 500mg - 1 tab BD after food x 30 days
2. Tab Amlodipine 5mg - 1 tab OD morning x 30 days
3. Cap Omeprazole 20mg - 1 cap AC morning x 14 days
4. Tab Paracetamol 650mg - 1 tab SOS for fever

Advice:
- Check blood sugar fasting after 2 weeks
- Follow up after 1 month
- Low salt diet recommended
"""

_MOCK_EXTRACT: Dict[str, Any] = {
    "prescription_id": "mock-rx-001",
    "source_type": "image",
    "ocr_text": MOCK_OCR_TEXT,
    "patient_info": {"name": "Mr. Sharma", "age": "45 years", "sex": None, "uhid": None},
    "date": "15/01/2024",
    "doctor_info": {"name": "Dr. Rajesh Kumar", "qualifications": "MBBS, MD", "hospital": "Apollo Hospital, New Delhi"},
    "complaints": None,
    "vitals": None,
    "diagnosis": None,
    "medications": [
        {
            "name": "Metformin",
            "strength": "500mg",
            "form": "Tablet",
            "route": "Oral",
            "dose": "1 tablet",
            "frequency": "BD",
            "timing": ["morning", "night"],
            "duration_days": 30,
            "food_instruction": "After food",
            "instructions": ["Take with meals to reduce stomach upset"],
            "confidence": {"name": 0.95, "strength": 0.92, "frequency": 0.88, "duration_days": 0.90, "food_instruction": 0.85},
            "needs_confirmation": [],
        },
        {
            "name": "Amlodipine",
            "strength": "5mg",
            "form": "Tablet",
            "route": "Oral",
            "dose": "1 tablet",
            "frequency": "OD",
            "timing": ["morning"],
            "duration_days": 30,
            "food_instruction": None,
            "instructions": ["Take at the same time each day"],
            "confidence": {"name": 0.93, "strength": 0.90, "frequency": 0.95, "duration_days": 0.88},
            "needs_confirmation": [],
        },
        {
            "name": "Omeprazole",
            "strength": "20mg",
            "form": "Capsule",
            "route": "Oral",
            "dose": "1 capsule",
            "frequency": "OD",
            "timing": ["morning"],
            "duration_days": 14,
            "food_instruction": "AC",
            "instructions": ["Take 30 minutes before breakfast"],
            "confidence": {"name": 0.91, "strength": 0.89, "frequency": 0.92, "duration_days": 0.85, "food_instruction": 0.80},
            "needs_confirmation": [],
        },
        {
            "name": "Paracetamol",
            "strength": "650mg",
            "form": "Tablet",
            "route": "Oral",
            "dose": "1 tablet",
            "frequency": "SOS",
            "timing": ["as_needed"],
            "duration_days": None,
            "food_instruction": None,
            "instructions": ["Take only when you have fever", "Do not exceed 4 tablets in 24 hours"],
            "confidence": {"name": 0.96, "strength": 0.94, "frequency": 0.88},
            "needs_confirmation": ["duration_days"],
        },
    ],
    "follow_up": "Follow up after 1 month",
    "tests": ["Check blood sugar fasting after 2 weeks"],
    "advice": ["Low salt diet recommended"],
}

def mock_extract_payload(prescription_id: str, ocr_text: str = "") -> Dict[str, Any]:
    payload = copy.deepcopy(_MOCK_EXTRACT)
    payload["prescription_id"] = prescription_id
    if ocr_text:
        payload["ocr_text"] = ocr_text
    return payload
