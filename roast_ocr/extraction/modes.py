"""Extraction modes: which prompt to send and how to read the answer."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Union

from roast_ocr.extraction.results import ExtractionResult
from roast_ocr.parsers.post_parser import parse_post_extraction
from roast_ocr.parsers.profile_parser import parse_profile_extraction
from roast_ocr.vision.prompts import POST_EXTRACTION_PROMPT, PROFILE_EXTRACTION_PROMPT


class ExtractionMode(str, Enum):
    """Kind of screenshot the caller uploaded."""

    POST = "post"
    PROFILE = "profile"


class InvalidModeError(ValueError):
    """Raised for a mode other than "post" or "profile"."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__('mode must be "post" or "profile"')


@dataclass(frozen=True)
class ModeHandler:
    """
    Prompt and post-processor for one extraction mode.

    Attributes:
        mode: The mode this handler serves
        prompt: Instruction sent to the vision model
        post_processor: Turns raw model text into a typed result
    """

    mode: ExtractionMode
    prompt: str
    post_processor: Callable[[str], ExtractionResult]


MODE_HANDLERS: Dict[ExtractionMode, ModeHandler] = {
    ExtractionMode.POST: ModeHandler(
        mode=ExtractionMode.POST,
        prompt=POST_EXTRACTION_PROMPT,
        post_processor=parse_post_extraction,
    ),
    ExtractionMode.PROFILE: ModeHandler(
        mode=ExtractionMode.PROFILE,
        prompt=PROFILE_EXTRACTION_PROMPT,
        post_processor=parse_profile_extraction,
    ),
}


def parse_mode(mode: Union[str, ExtractionMode, None]) -> ExtractionMode:
    """
    Convert a caller-supplied tag into an ExtractionMode.

    Raises:
        InvalidModeError: If the tag is missing or unknown
    """
    if isinstance(mode, ExtractionMode):
        return mode
    if not isinstance(mode, str):
        raise InvalidModeError(mode)
    try:
        return ExtractionMode(mode)
    except ValueError:
        raise InvalidModeError(mode) from None


def resolve_mode(mode: Union[str, ExtractionMode, None]) -> ModeHandler:
    """
    Look up the prompt and post-processor for a mode.

    Pure lookup with no side effects, so it can run before any provider call.

    Args:
        mode: "post", "profile" or an ExtractionMode

    Returns:
        ModeHandler for the mode

    Raises:
        InvalidModeError: If the mode is not recognised
    """
    return MODE_HANDLERS[parse_mode(mode)]
