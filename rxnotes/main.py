import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rxnotes.core.config import LOG_LEVEL
from rxnotes.api.routes_rx import router as rx_router
from rxnotes.api.routes_feedback import router as feedback_router
from rxnotes.schemas.validation import ShapeError
from rxnotes.services.ollama_client import ExtractionError

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Prescription Notes", version="1.0")

app.include_router(rx_router)
app.include_router(feedback_router)

@app.exception_handler(ShapeError)
async def shape_error_handler(request: Request, exc: ShapeError):
    logger.info("rejected record at %s: field=%s", request.url.path, exc.field)
    return JSONResponse(
        status_code=422,
        content={
            "error": "Please retry or re-enter this field.",
            "field": exc.field,
            "detail": exc.message,
        },
    )

@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError):
    logger.error("extraction failed at %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"error": "Failed to extract prescription data. Please try again."},
    )

@app.get("/health")
def health():
    return {"ok": True}
@app.get("/")
def root():
    return {"ok": True, "service": "Prescription Notes"}
