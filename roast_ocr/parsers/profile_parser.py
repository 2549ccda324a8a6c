"""
Profile Parser Module
Recover the profile JSON object from raw vision output and flatten it.

The model is asked for bare JSON but often wraps it in a markdown fence or
surrounds it with prose. Recovery tries a fixed list of strategies in order;
each returns the parsed object or None, and the first object wins.
"""

import json
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from roast_ocr.extraction.results import (
    MalformedOutputFailure,
    ProfileExtraction,
    ProfileExtractionResult,
    SentinelFailure,
)
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.prompts import PROFILE_NOT_RECOGNIZED_ERROR

logger = get_logger(__name__)

NOT_A_PROFILE_MESSAGE = (
    "This does not appear to be a LinkedIn profile screenshot. "
    "Please upload a profile screenshot or enter details manually."
)
UNPARSEABLE_PROFILE_MESSAGE = (
    "Could not parse profile data from the image. "
    "Try entering your profile details manually."
)

# ```json ... ``` or ``` ... ```
FENCED_BLOCK_PATTERN = re.compile(r'```(?:json)?\s*\n?(.*?)\n?```', re.DOTALL | re.IGNORECASE)


def _reject_constant(name: str) -> Any:
    """Refuse NaN and Infinity, which are not valid JSON."""
    raise ValueError(f"Invalid JSON constant: {name}")


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse text as strict JSON, returning the value only if it is an object."""
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def parse_whole_text(raw_text: str) -> Optional[Dict[str, Any]]:
    """Strategy 1: the whole output is the JSON object."""
    return _load_object(raw_text)


def parse_fenced_block(raw_text: str) -> Optional[Dict[str, Any]]:
    """Strategy 2: the object sits inside a markdown code fence."""
    match = FENCED_BLOCK_PATTERN.search(raw_text)
    if not match:
        return None
    return _load_object(match.group(1).strip())


def parse_brace_span(raw_text: str) -> Optional[Dict[str, Any]]:
    """Strategy 3: everything from the first '{' to the last '}'."""
    start = raw_text.find('{')
    end = raw_text.rfind('}')
    if start == -1 or end <= start:
        return None
    return _load_object(raw_text[start:end + 1])


PARSE_STRATEGIES: List[Tuple[str, Callable[[str], Optional[Dict[str, Any]]]]] = [
    ("whole_text", parse_whole_text),
    ("fenced_block", parse_fenced_block),
    ("brace_span", parse_brace_span),
]


def recover_profile_object(raw_text: str) -> Optional[Dict[str, Any]]:
    """
    Run the parse strategies in order and return the first object found.

    Args:
        raw_text: Raw model output

    Returns:
        Parsed JSON object, or None if no strategy succeeded
    """
    if not raw_text:
        return None

    for strategy_name, strategy in PARSE_STRATEGIES:
        data = strategy(raw_text)
        if data is not None:
            logger.debug("Profile JSON recovered", strategy=strategy_name)
            return data

    return None


def _text(value: Any) -> str:
    """Render a scalar JSON value for display, "" for null/empty."""
    if not value:
        return ''
    return value if isinstance(value, str) else str(value)


def format_experience_entry(entry: Any) -> str:
    """
    Render one experience as "title at company", "(duration)", description.

    Args:
        entry: One element of the ``experiences`` array

    Returns:
        Lines joined with newlines, "" when the entry has nothing usable
    """
    if not isinstance(entry, dict):
        return ''

    title = _text(entry.get('title'))
    company = _text(entry.get('company'))
    duration = _text(entry.get('duration'))
    description = _text(entry.get('description'))

    if title and company:
        heading = f"{title} at {company}"
    else:
        heading = title or company

    parts = [
        heading,
        f"({duration})" if duration else '',
        description,
    ]
    return '\n'.join(part for part in parts if part)


def flatten_experience(data: Dict[str, Any]) -> str:
    """
    Flatten the experience section into one display string.

    ``experiences`` as a list is rendered entry by entry with a blank line
    between entries; as a string it is used verbatim. Otherwise the legacy
    singular ``experience`` string is used.

    Args:
        data: Parsed profile object

    Returns:
        Flattened experience text, "" when nothing usable is present

    Example:
        >>> flatten_experience({"experiences": [{"title": "Engineer", "company": "Acme"}]})
        'Engineer at Acme'
    """
    experiences = data.get('experiences')
    if isinstance(experiences, list):
        rendered = (format_experience_entry(entry) for entry in experiences)
        return '\n\n'.join(block for block in rendered if block)
    if isinstance(experiences, str):
        return experiences

    legacy = data.get('experience')
    if isinstance(legacy, str):
        return legacy
    return ''


def flatten_skills(skills: Any) -> str:
    """
    Join a skills list with ", "; strings pass through.

    Args:
        skills: Value of the ``skills`` key

    Returns:
        Skills as one string, "" for anything else
    """
    if isinstance(skills, list):
        return ', '.join('' if skill is None else str(skill) for skill in skills)
    if isinstance(skills, str):
        return skills
    return ''


def _embedded_error(data: Dict[str, Any]) -> Optional[SentinelFailure]:
    """Map a top-level "error" key to a SentinelFailure."""
    error = data.get('error')
    if not error:
        return None

    if error == PROFILE_NOT_RECOGNIZED_ERROR:
        logger.info("Model reported image is not a profile")
        return SentinelFailure(NOT_A_PROFILE_MESSAGE)

    message = error if isinstance(error, str) else json.dumps(error)
    logger.info("Model returned an error object", error=message[:200])
    return SentinelFailure(message)


def parse_profile_extraction(raw_text: str) -> ProfileExtractionResult:
    """
    Interpret raw model output for a profile screenshot.

    Never raises: malformed output is an expected outcome and is reported as
    MalformedOutputFailure.

    Args:
        raw_text: Raw model output

    Returns:
        SentinelFailure for an error object, MalformedOutputFailure when no
        JSON object can be recovered, otherwise ProfileExtraction
    """
    data = recover_profile_object(raw_text)
    if data is None:
        logger.warning(
            "Could not recover profile JSON",
            response_preview=(raw_text or '')[:200]
        )
        return MalformedOutputFailure(UNPARSEABLE_PROFILE_MESSAGE)

    sentinel = _embedded_error(data)
    if sentinel is not None:
        return sentinel

    return ProfileExtraction(
        headline=data.get('headline') or '',
        about=data.get('about') or '',
        experience=flatten_experience(data),
        skills=flatten_skills(data.get('skills')),
        raw=data,
    )
