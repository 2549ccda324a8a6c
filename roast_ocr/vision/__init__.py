"""
Vision providers module for text extraction from screenshots.

This module provides a unified interface for the remote vision models that
read LinkedIn screenshots. All providers implement the VisionProvider
abstract base class.

Public API:
    - VisionProvider: Abstract base class for all providers
    - ProviderConfig: Endpoint/model/credential record for one provider
    - VisionProviderError: Exception for provider errors
    - ConfigurationError: No provider configured
    - NoTextExtractedError: Providers answered without text
    - FallbackChain: Orchestrates fallback between multiple providers
"""

from roast_ocr.vision.base import (
    ConfigurationError,
    HTTPVisionProvider,
    NoTextExtractedError,
    ProviderConfig,
    VisionProvider,
    VisionProviderError,
)
from roast_ocr.vision.fallback import FallbackChain
from roast_ocr.vision.factory import VisionProviderFactory

__all__ = [
    "VisionProvider",
    "HTTPVisionProvider",
    "VisionProviderFactory",
    "ProviderConfig",
    "VisionProviderError",
    "ConfigurationError",
    "NoTextExtractedError",
    "FallbackChain",
]
