"""
Purpose:
- POST /api/generate: relay {prompt, images} to the LLM provider and return {text}.
- Any provider/transport failure is logged here and surfaced as one fixed message + 500.
"""

import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..relay.schema import GenerateRequest, GenerateResponse, GenerateError
from ..relay.provider import generate_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])

GENERIC_FAILURE = "Failed to generate caption"

@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={500: {"model": GenerateError}},
)
def generate(payload: GenerateRequest):
    try:
        text = generate_text(payload.prompt, payload.images)
    except Exception:
        logger.exception("Error generating caption (%d images)", len(payload.images))
        return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE})
    return GenerateResponse(text=text)
