import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from rxnotes.core import config
from rxnotes.schemas.models import ConfigResponse, Feedback, FeedbackRequest, FeedbackResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feedback"])

@router.post("/feedback", response_model=FeedbackResponse)
def feedback(req: FeedbackRequest):
    fb = Feedback(**req.model_dump(), timestamp=datetime.now(timezone.utc).isoformat())

    # no PHI in logs: the comment text itself is never written out
    logger.info(
        "feedback prescription_id=%s helpful=%s issue_type=%s has_comment=%s at=%s",
        fb.prescription_id, fb.helpful, fb.issue_type, bool(fb.comment), fb.timestamp,
    )
    return FeedbackResponse(success=True, message="Thank you for your feedback!")

@router.get("/config", response_model=ConfigResponse)
def get_config():
    return ConfigResponse(test_mode=config.TEST_MODE, mock_mode=config.MOCK_MODE)
