"""
POST /api/ocr - extract text from a LinkedIn post or profile screenshot.

Body: {"image_base64": "...", "media_type": "image/png", "mode": "post"|"profile"}
"""

import json

from aiohttp import web

from roast_ocr.config import config
from roast_ocr.extraction.pipeline import ExtractionOutcome, run_extraction
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.fallback import FallbackChain

logger = get_logger(__name__)

FALLBACK_CHAIN_KEY = web.AppKey("fallback_chain", FallbackChain)


def _json_outcome(outcome: ExtractionOutcome) -> web.Response:
    return web.json_response(outcome.body, status=outcome.status)


async def ocr_handler(request: web.Request) -> web.Response:
    """Run the extraction pipeline on the request body."""
    try:
        payload = await request.json()
    except web.HTTPRequestEntityTooLarge as e:
        logger.info("Rejected oversized OCR request", error=str(e))
        return _json_outcome(ExtractionOutcome.failure(
            400, f"image_base64 exceeds the size limit of {config.max_image_bytes} bytes"
        ))
    except (json.JSONDecodeError, UnicodeDecodeError, LookupError) as e:
        logger.info("Rejected OCR request with invalid JSON", error=str(e))
        return _json_outcome(ExtractionOutcome.failure(400, "Request body must be valid JSON"))

    outcome = await run_extraction(payload, chain=request.app.get(FALLBACK_CHAIN_KEY))
    return _json_outcome(outcome)
