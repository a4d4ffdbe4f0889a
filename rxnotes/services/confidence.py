# rxnotes/services/confidence.py
from typing import List, Optional

from rxnotes.schemas.models import ConfidenceLevel, FieldReview, Medication

HIGH_CONFIDENCE = 0.85
MEDIUM_CONFIDENCE = 0.70

def classify(score: Optional[float]) -> ConfidenceLevel:
    # a missing score is not confidence
    if score is None:
        return "low"
    if score >= HIGH_CONFIDENCE:
        return "high"
    if score >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"

def review_medication(med: Medication) -> List[FieldReview]:
    """
    Per-field overlay for the review screen.
    - extractor-flagged fields come first (in flag order) and always need verifying,
      whatever their score
    - remaining scored fields follow in map order; only "low" ones need verifying
    Values are only annotated here, never dropped or changed.
    """
    out: List[FieldReview] = []
    flagged = med.needs_confirmation

    for field in flagged:
        score = med.confidence.get(field)
        out.append(FieldReview(field=field, confidence=score, level=classify(score), flagged=True, verify=True))

    for field, score in med.confidence.items():
        if field in flagged:
            continue
        level = classify(score)
        out.append(FieldReview(field=field, confidence=score, level=level, flagged=False, verify=(level == "low")))

    return out

def fields_to_verify(med: Medication) -> List[str]:
    return [r.field for r in review_medication(med) if r.verify]
