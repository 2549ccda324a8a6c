"""
FallbackChain - Orchestrates fallback between multiple vision providers.
"""
import asyncio
from typing import List, Optional

from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.base import (
    ConfigurationError,
    NoTextExtractedError,
    VisionProvider,
    VisionProviderError,
)

logger = get_logger(__name__)

NO_PROVIDER_MESSAGE = (
    "No API key configured for vision extraction. "
    "Set OPENROUTER_API_KEY or ANTHROPIC_API_KEY."
)
NO_TEXT_MESSAGE = "No text extracted from image"


class FallbackChain:
    """Orchestrates fallback between multiple vision providers."""

    def __init__(
        self,
        providers: List[VisionProvider],
        timeout_sec: Optional[float] = None
    ):
        """
        Initialize FallbackChain.

        Args:
            providers: Vision providers in priority order; unconfigured ones
                are kept and skipped at call time
            timeout_sec: Optional timeout for each provider attempt
        """
        self.timeout_sec = timeout_sec
        self._providers = list(providers)

    @property
    def available_providers(self) -> List[str]:
        """Return names of configured providers, in order."""
        return [p.name for p in self._providers if p.is_available]

    async def extract_text(self, image_base64: str, media_type: str, prompt: str) -> str:
        """
        Try configured providers in order until one returns text.

        Providers are awaited strictly one after another. A failure, timeout
        or empty answer moves on to the next provider without surfacing the
        error.

        Args:
            image_base64: Base64-encoded screenshot
            media_type: MIME type of the screenshot
            prompt: Extraction prompt

        Returns:
            str: Text from the first provider that produced any

        Raises:
            ConfigurationError: If no provider is configured
            VisionProviderError: If the last attempted provider failed
            NoTextExtractedError: If providers answered but returned no text
        """
        providers = [p for p in self._providers if p.is_available]
        if not providers:
            logger.error(
                "No vision provider configured",
                providers=[p.name for p in self._providers]
            )
            raise ConfigurationError(NO_PROVIDER_MESSAGE)

        last_error: Optional[VisionProviderError] = None

        for provider in providers:
            try:
                logger.info("Trying vision provider", provider=provider.name)

                call = provider.invoke(image_base64, media_type, prompt)
                if self.timeout_sec:
                    text = await asyncio.wait_for(call, timeout=self.timeout_sec)
                else:
                    text = await call

            except asyncio.TimeoutError:
                logger.warning(
                    "Vision provider timeout",
                    provider=provider.name,
                    timeout_sec=self.timeout_sec
                )
                last_error = VisionProviderError(
                    f"{provider.name} timed out after {self.timeout_sec}s",
                    provider=provider.name
                )
                continue

            except VisionProviderError as e:
                logger.warning(
                    "Vision provider failed",
                    provider=provider.name,
                    error=str(e)
                )
                last_error = e
                continue

            except Exception as e:
                logger.warning(
                    "Vision provider failed",
                    provider=provider.name,
                    error=str(e),
                    error_type=type(e).__name__
                )
                last_error = VisionProviderError(str(e) or type(e).__name__, provider=provider.name)
                continue

            if text:
                logger.info(
                    "Vision extraction successful",
                    provider=provider.name,
                    text_length=len(text)
                )
                return text

            logger.warning("Vision provider returned no text", provider=provider.name)
            last_error = None

        if last_error is not None:
            logger.error(
                "All vision providers failed",
                providers=[p.name for p in providers],
                last_error=str(last_error)
            )
            raise last_error

        logger.warning(
            "Vision providers returned no text",
            providers=[p.name for p in providers]
        )
        raise NoTextExtractedError(NO_TEXT_MESSAGE)
