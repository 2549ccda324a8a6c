"""Vision provider implementations for the RoastMyPost OCR service."""

from roast_ocr.vision.providers.anthropic import AnthropicVisionProvider
from roast_ocr.vision.providers.openrouter import OpenRouterVisionProvider

__all__ = [
    'AnthropicVisionProvider',
    'OpenRouterVisionProvider',
]
