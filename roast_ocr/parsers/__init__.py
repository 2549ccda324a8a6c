"""Parsers turning raw vision model output into typed extraction results."""

from roast_ocr.parsers.post_parser import parse_post_extraction
from roast_ocr.parsers.profile_parser import parse_profile_extraction

__all__ = [
    'parse_post_extraction',
    'parse_profile_extraction',
]
