"""
Typed results of the screenshot extraction pipeline.

Parsers return one of these records; the pipeline turns them into the JSON
bodies the web layer sends back.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class SentinelFailure:
    """
    The model answered, but reported the image is not the expected content.

    Attributes:
        message: User-facing explanation with a manual-entry suggestion
    """

    message: str


@dataclass(frozen=True)
class MalformedOutputFailure:
    """Profile JSON could not be recovered from the model output."""

    message: str


@dataclass(frozen=True)
class PostExtraction:
    """Text of a LinkedIn post, trimmed."""

    extracted_text: str


@dataclass(frozen=True)
class ProfileExtraction:
    """
    Flattened profile fields plus the parsed object they came from.

    Attributes:
        headline: Profile headline, "" when absent
        about: About section, "" when absent
        experience: Experiences flattened to one display string
        skills: Skills joined with ", "
        raw: The parsed JSON object, unmodified
    """

    headline: Any = ""
    about: Any = ""
    experience: str = ""
    skills: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def profile_data(self) -> Dict[str, Any]:
        """The four flattened fields as a dict."""
        return {
            "headline": self.headline,
            "about": self.about,
            "experience": self.experience,
            "skills": self.skills,
        }


PostExtractionResult = Union[SentinelFailure, PostExtraction]
ProfileExtractionResult = Union[SentinelFailure, MalformedOutputFailure, ProfileExtraction]
ExtractionResult = Union[SentinelFailure, MalformedOutputFailure, PostExtraction, ProfileExtraction]
