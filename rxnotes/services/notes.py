# rxnotes/services/notes.py
from typing import List, Optional, Sequence

from rxnotes.schemas.models import ClinicalContext, Medication, NotesOutput, Vitals
from rxnotes.services.abbreviations import AbbreviationDictionary, format_food_instruction, format_frequency
from rxnotes.services.planning import build_schedule
from rxnotes.services.timing import TimingResolver

TITLE = "## Prescription Summary"

IMPORTANT_REMINDERS = (
    "Take your medications at the same time each day",
    "Complete the full course as prescribed",
    "Do not stop or change medications without consulting your doctor",
    "Contact your doctor if you experience any unusual symptoms",
)

DISCLAIMER = (
    "**⚠️ Disclaimer**: This summary is for informational purposes only and does NOT constitute medical advice. "
    "Always verify with your doctor or pharmacist before taking any medication."
)

DETAIL_SEPARATOR = " • "

_VITAL_LABELS = (
    ("bp", "BP"),
    ("pulse", "Pulse"),
    ("rbs", "RBS"),
    ("fbs", "FBS"),
    ("ppbs", "PPBS"),
    ("spo2", "SpO2"),
    ("temperature", "Temp"),
)

def _bullets(items: Sequence[str]) -> List[str]:
    return [f"- {x}" for x in items]

def _header_block(ctx: ClinicalContext) -> List[str]:
    lines: List[str] = []
    if ctx.date:
        lines += [f"**Date:** {ctx.date}", ""]

    doctor = ctx.doctor_info
    if doctor and doctor.hospital:
        lines.append(f"**Hospital:** {doctor.hospital}")
    if doctor and doctor.name:
        quals = f" ({doctor.qualifications})" if doctor.qualifications else ""
        lines.append(f"**Doctor:** {doctor.name}{quals}")

    patient = ctx.patient_info
    if patient and patient.name:
        extra = "".join(f", {v}" for v in (patient.age, patient.sex) if v)
        lines.append(f"**Patient:** {patient.name}{extra}")

    if not lines:
        return []
    if lines[-1] != "":
        lines.append("")
    return lines

def vitals_line(vitals: Optional[Vitals]) -> Optional[str]:
    if vitals is None:
        return None
    parts = [f"{label}: {getattr(vitals, key)}" for key, label in _VITAL_LABELS if getattr(vitals, key)]
    return DETAIL_SEPARATOR.join(parts) or None

def _section(title: str, body: List[str]) -> List[str]:
    return [f"### {title}", "", *body, ""]

def medication_block(index: int, med: Medication, dictionary: Optional[AbbreviationDictionary] = None) -> List[str]:
    header = f"**{index}. {med.name}**"
    if med.strength:
        header += f" {med.strength}"
    lines = [header]

    details: List[str] = []
    if med.form:
        details.append(f"Form: {med.form}")
    if med.dose:
        details.append(f"Dose: {med.dose}")
    if med.frequency:
        details.append(f"Frequency: {format_frequency(med.frequency, dictionary)}")
    if med.duration_days:
        details.append(f"Duration: {med.duration_days} days")
    if med.food_instruction:
        details.append(format_food_instruction(med.food_instruction, dictionary))
    if details:
        lines.append(f"- {DETAIL_SEPARATOR.join(details)}")

    lines += _bullets(med.instructions or [])

    if med.needs_confirmation:
        lines.append(f"- ⚠️ Please verify: {', '.join(med.needs_confirmation)}")

    lines.append("")
    return lines

def compose(
    medications: Sequence[Medication],
    clinical: Optional[ClinicalContext] = None,
    dictionary: Optional[AbbreviationDictionary] = None,
) -> str:
    """
    Render the patient-facing markdown document.

    Section order is fixed: title, date/hospital/doctor/patient, complaints,
    vitals, diagnosis, medications, follow-up, tests, reminders, disclaimer.
    Optional sections are left out entirely when there is nothing to show.
    Pure: identical input gives identical output.
    """
    ctx = clinical or ClinicalContext()
    lines: List[str] = [TITLE, ""]

    lines += _header_block(ctx)

    if ctx.complaints:
        lines += _section("Chief Complaints", _bullets(ctx.complaints))

    vitals = vitals_line(ctx.vitals)
    if vitals:
        lines += _section("Vitals", [vitals])

    if ctx.diagnosis:
        lines += _section("Diagnosis", [ctx.diagnosis])

    lines += [f"### Medications ({len(medications)})", ""]
    for i, med in enumerate(medications, start=1):
        lines += medication_block(i, med, dictionary)

    if ctx.follow_up:
        lines += _section("Follow-up", [ctx.follow_up])

    if ctx.tests:
        lines += _section("Tests / Investigations", _bullets(ctx.tests))

    lines += _section("Important Reminders", _bullets(IMPORTANT_REMINDERS))
    lines += ["---", "", DISCLAIMER]

    return "\n".join(lines) + "\n"

def generate_notes(
    prescription_id: str,
    medications: Sequence[Medication],
    clinical: Optional[ClinicalContext] = None,
    resolver: Optional[TimingResolver] = None,
    dictionary: Optional[AbbreviationDictionary] = None,
) -> NotesOutput:
    ctx = clinical or ClinicalContext()
    return NotesOutput(
        prescription_id=prescription_id,
        notes_markdown=compose(medications, ctx, dictionary),
        schedule=build_schedule(medications, resolver),
        meds_display=list(medications),
        patient_info=ctx.patient_info,
        date=ctx.date,
        doctor_info=ctx.doctor_info,
        complaints=ctx.complaints,
        vitals=ctx.vitals,
        diagnosis=ctx.diagnosis,
        advice=ctx.advice,
    )
