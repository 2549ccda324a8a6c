"""
Vision provider factory with registry pattern and environment-based configuration.

This module provides a factory for creating vision provider instances.
It supports:
- Registry pattern for extensible provider registration
- Building ProviderConfig records from the application config
- An ordered provider list driven by VISION_PROVIDERS
"""

from typing import Callable, Dict, List, Optional, Type

import aiohttp

from roast_ocr.config import Config, config
from roast_ocr.utils.logger import get_logger
from roast_ocr.vision.base import (
    AUTH_BEARER,
    AUTH_X_API_KEY,
    HTTPVisionProvider,
    ProviderConfig,
    VisionProviderError,
)
from roast_ocr.vision.providers import AnthropicVisionProvider, OpenRouterVisionProvider

logger = get_logger(__name__)


def _openrouter_config(settings: Config, priority: int) -> ProviderConfig:
    return ProviderConfig(
        identifier="openrouter",
        endpoint=settings.OPENROUTER_ENDPOINT,
        auth_scheme=AUTH_BEARER,
        model_name=settings.OPENROUTER_VISION_MODEL,
        priority=priority,
        api_key=settings.OPENROUTER_API_KEY,
        max_tokens=settings.VISION_MAX_TOKENS,
        extra_headers={
            "HTTP-Referer": settings.OPENROUTER_REFERER,
            "X-Title": settings.OPENROUTER_TITLE,
        },
    )


def _anthropic_config(settings: Config, priority: int) -> ProviderConfig:
    return ProviderConfig(
        identifier="anthropic",
        endpoint=settings.ANTHROPIC_ENDPOINT,
        auth_scheme=AUTH_X_API_KEY,
        model_name=settings.ANTHROPIC_VISION_MODEL,
        priority=priority,
        api_key=settings.ANTHROPIC_API_KEY,
        max_tokens=settings.VISION_MAX_TOKENS,
        extra_headers={"anthropic-version": settings.ANTHROPIC_VERSION},
    )


class VisionProviderFactory:
    """
    Factory for creating vision provider instances.

    Each registered provider pairs a provider class with a builder that reads
    its endpoint, model and credential from the application config.

    Class Attributes:
        _providers: Registry mapping provider names to provider classes
        _config_builders: Registry mapping provider names to ProviderConfig builders
    """

    _providers: Dict[str, Type[HTTPVisionProvider]] = {}
    _config_builders: Dict[str, Callable[[Config, int], ProviderConfig]] = {}

    @classmethod
    def register(
        cls,
        name: str,
        provider_class: Type[HTTPVisionProvider],
        config_builder: Callable[[Config, int], ProviderConfig]
    ) -> None:
        """
        Register a vision provider class in the factory.

        Args:
            name: Provider name (e.g., "openrouter", "anthropic")
            provider_class: Provider class that extends HTTPVisionProvider
            config_builder: Callable building the provider's ProviderConfig
                from the app config and its priority

        Raises:
            ValueError: If name is empty or provider_class is invalid

        Example:
            >>> VisionProviderFactory.register("anthropic", AnthropicVisionProvider, _anthropic_config)
        """
        if not name:
            raise ValueError("Provider name cannot be empty")

        if not isinstance(provider_class, type) or not issubclass(provider_class, HTTPVisionProvider):
            raise ValueError(
                f"Provider class must be a subclass of HTTPVisionProvider, got {provider_class}"
            )

        if name in cls._providers:
            logger.warning(
                "Provider already registered, overwriting",
                provider_name=name,
                existing_class=cls._providers[name].__name__,
                new_class=provider_class.__name__
            )

        cls._providers[name] = provider_class
        cls._config_builders[name] = config_builder
        logger.debug(
            "Vision provider registered",
            provider_name=name,
            provider_class=provider_class.__name__
        )

    @classmethod
    def build_provider_configs(cls, settings: Optional[Config] = None) -> List[ProviderConfig]:
        """
        Build the ordered ProviderConfig list from VISION_PROVIDERS.

        Unconfigured providers (no API key) are included; the fallback chain
        decides what to skip.

        Args:
            settings: Config to read from, defaults to the global config

        Returns:
            List[ProviderConfig]: Sorted by priority, highest priority first

        Raises:
            VisionProviderError: If a listed provider is not registered
        """
        settings = settings or config
        configs = []
        for priority, name in enumerate(settings.vision_provider_list):
            builder = cls._config_builders.get(name)
            if builder is None:
                available = ", ".join(cls._providers.keys()) if cls._providers else "none"
                raise VisionProviderError(
                    f"Vision provider '{name}' is not registered. "
                    f"Available providers: {available}"
                )
            configs.append(builder(settings, priority))
        return sorted(configs, key=lambda c: c.priority)

    @classmethod
    def create(
        cls,
        provider_config: ProviderConfig,
        session: Optional[aiohttp.ClientSession] = None
    ) -> HTTPVisionProvider:
        """
        Instantiate the provider class registered for a ProviderConfig.

        Args:
            provider_config: Config whose identifier selects the class
            session: Optional shared aiohttp session

        Returns:
            HTTPVisionProvider: New provider instance

        Raises:
            VisionProviderError: If the identifier is not registered
        """
        provider_class = cls._providers.get(provider_config.identifier)
        if provider_class is None:
            raise VisionProviderError(
                f"Vision provider '{provider_config.identifier}' is not registered"
            )
        return provider_class(provider_config, session=session)

    @classmethod
    def from_env_config(
        cls,
        settings: Optional[Config] = None,
        session: Optional[aiohttp.ClientSession] = None
    ) -> List[HTTPVisionProvider]:
        """
        Create the ordered provider list from environment configuration.

        Returns:
            List[HTTPVisionProvider]: Providers in fallback order

        Example:
            >>> # VISION_PROVIDERS=openrouter,anthropic in .env
            >>> [p.name for p in VisionProviderFactory.from_env_config()]
            ['openrouter', 'anthropic']
        """
        providers = [
            cls.create(provider_config, session=session)
            for provider_config in cls.build_provider_configs(settings)
        ]
        logger.debug(
            "Vision providers created from config",
            providers=[p.name for p in providers],
            configured=[p.name for p in providers if p.is_available]
        )
        return providers

    @classmethod
    def list_providers(cls) -> Dict[str, str]:
        """
        List all registered providers with their class names.

        Returns:
            Dict[str, str]: Mapping of provider names to class names
        """
        return {
            name: provider_class.__name__
            for name, provider_class in cls._providers.items()
        }


# ============================================================================
# Register built-in providers
# ============================================================================

VisionProviderFactory.register("openrouter", OpenRouterVisionProvider, _openrouter_config)
VisionProviderFactory.register("anthropic", AnthropicVisionProvider, _anthropic_config)
