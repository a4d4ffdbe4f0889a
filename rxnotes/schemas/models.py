import logging
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, StrictInt, field_validator, model_validator

logger = logging.getLogger(__name__)

TimingSlot = Literal["morning", "afternoon", "evening", "night", "as_needed"]
TIMING_SLOTS = ("morning", "afternoon", "evening", "night", "as_needed")

SourceType = Literal["image", "pdf"]
ConfidenceLevel = Literal["high", "medium", "low"]

class Medication(BaseModel):
    name: str = Field(..., description="Drug or treatment label as read from the prescription. Never empty.")
    strength: Optional[str] = None
    # Open vocabulary. Non-drug advice items ("adequate fluid intake") are
    # carried as medications with form="advice" so they schedule and display
    # like everything else.
    form: Optional[str] = None
    route: Optional[str] = None
    dose: Optional[str] = None
    frequency: Optional[str] = Field(default=None, description="OD, BD, TDS, QID, HS, SOS ... (case-insensitive)")
    timing: Optional[List[TimingSlot]] = None
    duration_days: Optional[StrictInt] = Field(default=None, description="Null means indefinite/unspecified.")
    food_instruction: Optional[str] = None
    instructions: Optional[List[str]] = None
    confidence: Dict[str, Optional[float]] = Field(default_factory=dict)
    needs_confirmation: List[str] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _name_required(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("name is required and must be a non-empty string")
        return v

    @field_validator("timing", mode="before")
    @classmethod
    def _timing_slots(cls, v: Any) -> Any:
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            raise ValueError("timing must be a list of slots")
        out: List[Any] = []
        for slot in v:
            if isinstance(slot, str):
                slot = slot.strip().lower()
            if slot in out:
                raise ValueError(f"duplicate timing slot {slot!r}")
            out.append(slot)
        return out

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence_scores(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("confidence must be a mapping of field name to score")
        for key, score in v.items():
            if score is None:
                continue
            # bool is an int subclass; a flag is not a score
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                raise ValueError(f"confidence[{key!r}] must be a number or null")
        return v

    @field_validator("needs_confirmation", mode="before")
    @classmethod
    def _confirmation_fields(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)) or not all(isinstance(x, str) for x in v):
            raise ValueError("needs_confirmation must be a list of field names")
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def _warn_unknown_fields(self) -> "Medication":
        known = set(type(self).model_fields)
        unknown_scores = [k for k in self.confidence if k not in known]
        if unknown_scores:
            logger.warning("confidence has unknown field keys: %s", ", ".join(unknown_scores))
        unknown_flags = [k for k in self.needs_confirmation if k not in known]
        if unknown_flags:
            logger.warning("needs_confirmation has unknown field names: %s", ", ".join(unknown_flags))
        return self

class ScheduleItem(BaseModel):
    name: str
    dose: Optional[str] = None
    instructions: Optional[str] = None

class Schedule(BaseModel):
    morning: List[ScheduleItem] = Field(default_factory=list)
    afternoon: List[ScheduleItem] = Field(default_factory=list)
    evening: List[ScheduleItem] = Field(default_factory=list)
    night: List[ScheduleItem] = Field(default_factory=list)
    as_needed: List[ScheduleItem] = Field(default_factory=list)

class PatientInfo(BaseModel):
    name: Optional[str] = None
    age: Optional[str] = None
    sex: Optional[str] = None
    uhid: Optional[str] = None

class DoctorInfo(BaseModel):
    name: Optional[str] = None
    qualifications: Optional[str] = None
    hospital: Optional[str] = None

class Vitals(BaseModel):
    bp: Optional[str] = None
    pulse: Optional[str] = None
    rbs: Optional[str] = None
    fbs: Optional[str] = None
    ppbs: Optional[str] = None
    spo2: Optional[str] = None
    temperature: Optional[str] = None

class ClinicalContext(BaseModel):
    """Optional blocks rendered around the medication list."""
    patient_info: Optional[PatientInfo] = None
    date: Optional[str] = None
    doctor_info: Optional[DoctorInfo] = None
    complaints: Optional[List[str]] = None
    vitals: Optional[Vitals] = None
    diagnosis: Optional[str] = None
    follow_up: Optional[str] = None
    tests: Optional[List[str]] = None
    advice: Optional[List[str]] = None

class PrescriptionExtract(BaseModel):
    prescription_id: str
    source_type: SourceType = "image"
    ocr_text: str = ""

    patient_info: Optional[PatientInfo] = None
    date: Optional[str] = None
    doctor_info: Optional[DoctorInfo] = None
    complaints: Optional[List[str]] = None   # c/o items
    vitals: Optional[Vitals] = None
    diagnosis: Optional[str] = None          # Imp / impression

    medications: List[Medication] = Field(default_factory=list)
    follow_up: Optional[str] = None
    tests: Optional[List[str]] = None
    advice: Optional[List[str]] = None

    def clinical_context(self) -> ClinicalContext:
        return ClinicalContext.model_validate(self.model_dump(include=set(ClinicalContext.model_fields)))

class NotesOutput(BaseModel):
    prescription_id: str
    notes_markdown: str
    schedule: Schedule
    meds_display: List[Medication]

    # clinical data for document rendering
    patient_info: Optional[PatientInfo] = None
    date: Optional[str] = None
    doctor_info: Optional[DoctorInfo] = None
    complaints: Optional[List[str]] = None
    vitals: Optional[Vitals] = None
    diagnosis: Optional[str] = None
    advice: Optional[List[str]] = None

class FieldReview(BaseModel):
    field: str
    confidence: Optional[float] = None
    level: ConfidenceLevel
    flagged: bool = False   # listed in needs_confirmation by the extractor
    verify: bool = False    # show a "please verify" marker

class ExtractRequest(BaseModel):
    prescription_id: Optional[str] = None
    ocr_text: Optional[str] = None
    source_type: SourceType = "image"
    locale: str = "en"

class GenerateNotesRequest(BaseModel):
    prescription_id: str
    medications: List[Medication]
    follow_up: Optional[str] = None
    tests: Optional[List[str]] = None
    patient_info: Optional[PatientInfo] = None
    date: Optional[str] = None
    doctor_info: Optional[DoctorInfo] = None
    complaints: Optional[List[str]] = None
    vitals: Optional[Vitals] = None
    diagnosis: Optional[str] = None
    advice: Optional[List[str]] = None

    def clinical_context(self) -> ClinicalContext:
        return ClinicalContext.model_validate(self.model_dump(include=set(ClinicalContext.model_fields)))

class MedicationReviewResponse(BaseModel):
    medication: Medication
    review: List[FieldReview]
    verify_fields: List[str]

class FeedbackRequest(BaseModel):
    prescription_id: str
    helpful: Optional[bool] = None
    issue_type: Optional[str] = None
    comment: Optional[str] = None

class Feedback(FeedbackRequest):
    timestamp: str

class FeedbackResponse(BaseModel):
    success: bool
    message: str

class ConfigResponse(BaseModel):
    test_mode: bool
    mock_mode: bool
