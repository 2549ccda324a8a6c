"""
Post Parser Module
Turn raw vision output for a post screenshot into a typed result.
"""

from roast_ocr.extraction.results import PostExtraction, PostExtractionResult, SentinelFailure
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.prompts import POST_NOT_RECOGNIZED_MARKER

logger = get_logger(__name__)

NOT_A_POST_MESSAGE = (
    "This does not appear to be a LinkedIn post screenshot. "
    "Please upload a post screenshot or type your post instead."
)


def is_not_a_post(raw_text: str) -> bool:
    """
    Check if the model reported that the image is not a post.

    Args:
        raw_text: Raw model output

    Returns:
        True if the not-a-post marker appears anywhere in the text
    """
    return POST_NOT_RECOGNIZED_MARKER in (raw_text or '')


def parse_post_extraction(raw_text: str) -> PostExtractionResult:
    """
    Interpret raw model output for a post screenshot.

    No JSON parsing happens here: the text is either the sentinel or the
    post body itself.

    Args:
        raw_text: Raw model output

    Returns:
        SentinelFailure when the marker is present, otherwise PostExtraction
        with the trimmed text

    Example:
        >>> parse_post_extraction("  Hello #hiring  \\n").extracted_text
        'Hello #hiring'
    """
    if is_not_a_post(raw_text):
        logger.info("Model reported image is not a post")
        return SentinelFailure(NOT_A_POST_MESSAGE)

    return PostExtraction(extracted_text=(raw_text or '').strip())
