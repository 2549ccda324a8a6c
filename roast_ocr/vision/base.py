"""
Base abstractions for vision providers in the RoastMyPost OCR service.

This module provides the foundation for the remote vision/chat completion
APIs that turn a screenshot plus an instruction prompt into raw model text.
All providers must implement the VisionProvider abstract base class; the
HTTP-backed ones share HTTPVisionProvider for transport and error handling.
"""

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from roast_ocr.utils.logger import get_logger

logger = get_logger(__name__)

# How ProviderConfig.api_key is sent
AUTH_BEARER = "bearer"
AUTH_X_API_KEY = "x-api-key"


# ============================================================================
# Data Classes
# ============================================================================


@dataclass(frozen=True)
class ProviderConfig:
    """
    Static description of one vision provider endpoint.

    Attributes:
        identifier: Registry name of the provider (e.g. "openrouter")
        endpoint: Completion endpoint URL
        auth_scheme: How the API key is sent (AUTH_BEARER or AUTH_X_API_KEY)
        model_name: Model requested from the provider
        priority: Position in the fallback order, lower runs first
        api_key: Credential; None or empty means the provider is unconfigured
        max_tokens: Generation limit sent with every request
        extra_headers: Provider-specific headers added to every request
    """

    identifier: str
    endpoint: str
    auth_scheme: str
    model_name: str
    priority: int = 0
    api_key: Optional[str] = field(default=None, repr=False)
    max_tokens: int = 4096
    extra_headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_configured(self) -> bool:
        """True when an API key is present."""
        return bool(self.api_key)


def dig(data: Any, *path: Any) -> Any:
    """
    Walk nested dicts/lists, returning None as soon as a step is absent.

    Args:
        data: Decoded JSON value
        *path: Dict keys (str) and list indexes (int) to follow

    Returns:
        The value at the end of the path, or None
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


# ============================================================================
# Exceptions
# ============================================================================


class VisionProviderError(Exception):
    """
    Base exception for all vision provider errors.

    This exception is raised when a vision provider encounters an error during
    text extraction, and by the fallback chain when every provider failed.
    """

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message describing what went wrong
            provider: Optional name of the provider that raised the error
        """
        self.provider = provider
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with provider name if available."""
        if self.provider:
            return f"[{self.provider}] {super().__str__()}"
        return super().__str__()


class ConfigurationError(VisionProviderError):
    """No vision provider is configured, so nothing was attempted."""


class NoTextExtractedError(VisionProviderError):
    """Providers answered successfully but none returned any text."""


# ============================================================================
# Abstract Base Class
# ============================================================================


class VisionProvider(ABC):
    """
    Abstract base class for vision providers.

    All vision providers must implement this interface so the fallback chain
    can treat them interchangeably.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Get the name of this vision provider.

        Returns:
            str: Provider name (e.g., "openrouter", "anthropic")
        """
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this provider is configured.

        Returns:
            bool: True if provider can be called, False otherwise
        """
        pass

    @abstractmethod
    async def invoke(self, image_base64: str, media_type: str, prompt: str) -> str:
        """
        Send one screenshot and prompt to the model (async).

        Args:
            image_base64: Base64-encoded image bytes, without a data URL prefix
            media_type: MIME type of the image (e.g. "image/png")
            prompt: Instruction prompt for the vision model

        Returns:
            str: Generated text, or "" when the response carried none

        Raises:
            VisionProviderError: If the request fails
        """
        pass


class HTTPVisionProvider(VisionProvider):
    """
    Vision provider speaking JSON over HTTPS with aiohttp.

    Subclasses describe the provider's envelope (request body and where
    the generated text lives); this class owns the headers, the single POST,
    error message extraction and latency logging.

    Attributes:
        provider_config: Endpoint, model and credential for this provider
        label: Human readable provider name used in fallback error messages
    """

    label = "Vision"

    def __init__(
        self,
        provider_config: ProviderConfig,
        session: Optional[aiohttp.ClientSession] = None
    ) -> None:
        """
        Initialize the provider.

        Args:
            provider_config: Endpoint, model and credential for this provider
            session: Optional shared ClientSession; a short-lived one is
                opened per call when omitted
        """
        self.provider_config = provider_config
        self._session = session

    @property
    def name(self) -> str:
        """Get the provider name."""
        return self.provider_config.identifier

    @property
    def is_available(self) -> bool:
        """Check if an API key is configured."""
        return self.provider_config.is_configured

    def auth_headers(self) -> Dict[str, str]:
        """
        Build the credential header named by ``auth_scheme``.

        Returns:
            Dict: ``Authorization: Bearer <key>`` or ``x-api-key: <key>``

        Raises:
            VisionProviderError: If the auth scheme is not supported
        """
        api_key = self.provider_config.api_key or ""
        scheme = self.provider_config.auth_scheme
        if scheme == AUTH_BEARER:
            return {"Authorization": f"Bearer {api_key}"}
        if scheme == AUTH_X_API_KEY:
            return {"x-api-key": api_key}
        raise VisionProviderError(
            f"Unsupported auth scheme: {scheme}",
            provider=self.name
        )

    def build_headers(self) -> Dict[str, str]:
        """Return JSON, auth and provider headers for one request."""
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth_headers())
        headers.update(self.provider_config.extra_headers)
        return headers

    @abstractmethod
    def build_payload(self, image_base64: str, media_type: str, prompt: str) -> Dict[str, Any]:
        """Return the JSON request body embedding image and prompt."""

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Return the first generated text field of a decoded response, or ""."""

    def extract_error_message(self, status: int, body: str) -> str:
        """
        Build a readable message from a non-success response body.

        Prefers the structured ``error.message`` field, then a top-level
        ``message``, then a generic message carrying the status code.

        Args:
            status: HTTP status code
            body: Raw response body

        Returns:
            str: Error message
        """
        fallback = f"{self.label} API failed with status {status}"
        try:
            data = json.loads(body)
        except ValueError:
            return fallback
        message = dig(data, "error", "message") or dig(data, "message")
        return message if isinstance(message, str) and message else fallback

    async def invoke(self, image_base64: str, media_type: str, prompt: str) -> str:
        """
        Extract text from a screenshot with one POST to the provider.

        Args:
            image_base64: Base64-encoded image bytes
            media_type: MIME type of the image
            prompt: Instruction prompt for the vision model

        Returns:
            str: Generated text, "" when the response has no text field

        Raises:
            VisionProviderError: On transport failure, non-2xx status or a
                response body that is not JSON
        """
        if not self.is_available:
            raise VisionProviderError(
                f"{self.label} provider is not available (missing API key)",
                provider=self.name
            )

        start_time = time.perf_counter()
        headers = self.build_headers()
        payload = self.build_payload(image_base64, media_type, prompt)

        logger.info(
            "Calling vision API",
            provider=self.name,
            model=self.provider_config.model_name,
            media_type=media_type,
            image_length=len(image_base64)
        )

        try:
            if self._session is not None:
                status, body = await self._post(self._session, headers, payload)
            else:
                async with aiohttp.ClientSession() as session:
                    status, body = await self._post(session, headers, payload)
        except aiohttp.ClientError as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Vision API request failed",
                provider=self.name,
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=round(latency_ms, 2)
            )
            raise VisionProviderError(
                f"{self.label} API request failed: {str(e)}",
                provider=self.name
            ) from e

        latency_ms = (time.perf_counter() - start_time) * 1000

        if not 200 <= status < 300:
            message = self.extract_error_message(status, body)
            logger.error(
                "Vision API returned error status",
                provider=self.name,
                status=status,
                error=message,
                latency_ms=round(latency_ms, 2)
            )
            raise VisionProviderError(message, provider=self.name)

        try:
            data = json.loads(body)
        except ValueError as e:
            raise VisionProviderError(
                f"{self.label} API returned invalid JSON: {str(e)}",
                provider=self.name
            ) from e

        text = self.extract_text(data)
        logger.info(
            "Vision API response received",
            provider=self.name,
            text_length=len(text),
            latency_ms=round(latency_ms, 2)
        )
        return text

    async def _post(
        self,
        session: aiohttp.ClientSession,
        headers: Dict[str, str],
        payload: Dict[str, Any]
    ):
        async with session.post(
            self.provider_config.endpoint,
            json=payload,
            headers=headers
        ) as response:
            return response.status, await response.text()
