"""Vision provider prompts for post and profile screenshot extraction."""

from roast_ocr.vision.prompts.post_extraction import (
    POST_EXTRACTION_PROMPT,
    POST_NOT_RECOGNIZED_MARKER,
)
from roast_ocr.vision.prompts.profile_extraction import (
    PROFILE_EXTRACTION_PROMPT,
    PROFILE_NOT_RECOGNIZED_ERROR,
)

__all__ = [
    'POST_EXTRACTION_PROMPT',
    'POST_NOT_RECOGNIZED_MARKER',
    'PROFILE_EXTRACTION_PROMPT',
    'PROFILE_NOT_RECOGNIZED_ERROR',
]
