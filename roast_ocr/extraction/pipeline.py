"""
Screenshot extraction pipeline.

Strategy:
1. Validate the request (image, media type, mode - in that order)
2. Resolve the mode into a prompt and a post-processor
3. Get raw text from the vision providers via FallbackChain
4. Post-process the raw text into a typed result
5. Convert the result, or any failure, into an ExtractionOutcome

Nothing raised inside the pipeline escapes run_extraction: every failure
becomes an outcome with a status code and a JSON body.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from roast_ocr.config import config
from roast_ocr.extraction.modes import ExtractionMode, InvalidModeError, parse_mode, resolve_mode
from roast_ocr.extraction.results import (
    ExtractionResult,
    MalformedOutputFailure,
    PostExtraction,
    ProfileExtraction,
    SentinelFailure,
)
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.base import ConfigurationError, NoTextExtractedError, VisionProviderError
from roast_ocr.vision.factory import VisionProviderFactory
from roast_ocr.vision.fallback import FallbackChain

logger = get_logger(__name__)

SERVER_ERROR_MESSAGE = "Server error during OCR"


class RequestValidationError(ValueError):
    """A request field is missing or invalid; nothing was sent to a provider."""


@dataclass(frozen=True)
class ExtractionRequest:
    """
    A validated extraction request.

    Attributes:
        image_base64: Base64 screenshot bytes, without a data URL prefix
        media_type: MIME type of the screenshot
        mode: Kind of screenshot
    """

    image_base64: str
    media_type: str
    mode: ExtractionMode

    @classmethod
    def from_payload(cls, payload: Any, max_image_bytes: Optional[int] = None) -> "ExtractionRequest":
        """
        Validate a decoded JSON request body.

        Checks run in order and stop at the first failure: image_base64,
        media_type, mode, then the image size limit.

        Args:
            payload: Decoded request body
            max_image_bytes: Optional cap on the decoded image size

        Returns:
            ExtractionRequest

        Raises:
            RequestValidationError: If a field is missing or invalid
        """
        if not isinstance(payload, dict):
            raise RequestValidationError("Request body must be a JSON object")

        image_base64 = strip_data_url(payload.get('image_base64'))
        if not image_base64:
            raise RequestValidationError("image_base64 is required")

        media_type = payload.get('media_type')
        if not media_type or not isinstance(media_type, str):
            raise RequestValidationError("media_type is required")

        try:
            mode = parse_mode(payload.get('mode'))
        except InvalidModeError as e:
            raise RequestValidationError(str(e)) from e

        if max_image_bytes and estimated_decoded_size(image_base64) > max_image_bytes:
            raise RequestValidationError(
                f"image_base64 exceeds the size limit of {max_image_bytes} bytes"
            )

        return cls(image_base64=image_base64, media_type=media_type, mode=mode)


def strip_data_url(value: Any) -> str:
    """
    Drop a leading ``data:<mime>;base64,`` prefix.

    Args:
        value: image_base64 as sent by the client

    Returns:
        Bare base64 text, "" for anything that is not a string
    """
    if not isinstance(value, str):
        return ''
    if value.startswith('data:') and ';base64,' in value:
        return value.split(';base64,', 1)[1]
    return value


def estimated_decoded_size(image_base64: str) -> int:
    """Decoded byte count of a base64 string, without decoding it."""
    padding = len(image_base64) - len(image_base64.rstrip('='))
    return len(image_base64) * 3 // 4 - padding


@dataclass(frozen=True)
class ExtractionOutcome:
    """
    Tagged response of the pipeline.

    Attributes:
        status: HTTP status code for the response
        body: JSON body, always carrying a ``success`` flag
    """

    status: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.body.get('success'))

    @classmethod
    def failure(cls, status: int, message: str) -> "ExtractionOutcome":
        return cls(status=status, body={'success': False, 'error': message})

    @classmethod
    def from_result(cls, result: ExtractionResult) -> "ExtractionOutcome":
        """
        Build the response for a post-processed model answer.

        Sentinel failures keep a 200 status: the round-trip worked, the image
        just was not the expected content. Unrecoverable profile JSON is 422.
        """
        if isinstance(result, SentinelFailure):
            return cls.failure(200, result.message)
        if isinstance(result, MalformedOutputFailure):
            return cls.failure(422, result.message)
        if isinstance(result, PostExtraction):
            return cls(status=200, body={
                'success': True,
                'mode': ExtractionMode.POST.value,
                'extracted_text': result.extracted_text,
            })
        if isinstance(result, ProfileExtraction):
            return cls(status=200, body={
                'success': True,
                'mode': ExtractionMode.PROFILE.value,
                'profile_data': result.profile_data,
                'raw_extraction': result.raw,
            })
        raise TypeError(f"Unsupported extraction result: {type(result).__name__}")


def build_fallback_chain() -> FallbackChain:
    """Create a FallbackChain from the configured providers."""
    return FallbackChain(
        VisionProviderFactory.from_env_config(),
        timeout_sec=config.vision_timeout
    )


async def run_extraction(
    payload: Any,
    chain: Optional[FallbackChain] = None
) -> ExtractionOutcome:
    """
    Run one screenshot through the extraction pipeline.

    Args:
        payload: Decoded request body ``{image_base64, media_type, mode}``
        chain: FallbackChain to use, built from config when omitted

    Returns:
        ExtractionOutcome: never raises
    """
    try:
        request = ExtractionRequest.from_payload(payload, max_image_bytes=config.max_image_bytes)
        handler = resolve_mode(request.mode)
    except (RequestValidationError, InvalidModeError) as e:
        logger.info("Rejected extraction request", error=str(e))
        return ExtractionOutcome.failure(400, str(e))

    logger.info(
        "Starting screenshot extraction",
        mode=request.mode.value,
        media_type=request.media_type,
        image_length=len(request.image_base64)
    )

    try:
        if chain is None:
            chain = build_fallback_chain()
        raw_text = await chain.extract_text(
            request.image_base64,
            request.media_type,
            handler.prompt
        )
        result = handler.post_processor(raw_text)

    except ConfigurationError as e:
        logger.error("Vision extraction not configured", error=e.message)
        return ExtractionOutcome.failure(500, e.message)

    except NoTextExtractedError as e:
        return ExtractionOutcome.failure(422, e.message)

    except VisionProviderError as e:
        logger.error("Vision extraction failed", error=str(e))
        return ExtractionOutcome.failure(500, e.message)

    except Exception as e:
        logger.error(
            "Unexpected error during extraction",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True
        )
        return ExtractionOutcome.failure(500, str(e) or SERVER_ERROR_MESSAGE)

    outcome = ExtractionOutcome.from_result(result)
    logger.info(
        "Screenshot extraction complete",
        mode=request.mode.value,
        success=outcome.success,
        status=outcome.status
    )
    return outcome
