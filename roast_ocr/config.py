"""
Configuration module for the RoastMyPost screenshot OCR service.

Uses Pydantic Settings to load configuration from .env file.
All environment variables are validated and type-checked.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Providers that have a client implementation in roast_ocr.vision.providers
KNOWN_VISION_PROVIDERS = ("openrouter", "anthropic")


class Config(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Environment variables are automatically loaded from .env file.
    Every setting has a default so the service can start with no provider
    keys; the extraction pipeline reports the missing keys per request.
    """

    # ============ OPENROUTER API (Optional) ============
    OPENROUTER_API_KEY: Optional[str] = Field(
        default=None,
        description="OpenRouter API key (primary vision provider)"
    )
    OPENROUTER_ENDPOINT: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="OpenRouter chat completions endpoint"
    )
    OPENROUTER_VISION_MODEL: str = Field(
        default="anthropic/claude-sonnet-4",
        description="Model slug requested from OpenRouter"
    )
    OPENROUTER_REFERER: str = Field(
        default="https://roastmypost.ai",
        description="HTTP-Referer header sent to OpenRouter for app attribution"
    )
    OPENROUTER_TITLE: str = Field(
        default="RoastMyPost AI",
        description="X-Title header sent to OpenRouter for app attribution"
    )

    # ============ ANTHROPIC API (Optional) ============
    ANTHROPIC_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ANTHROPIC_API_KEY", "LYZR_ANTHROPIC_KEY"),
        description="Anthropic API key (fallback vision provider)"
    )
    ANTHROPIC_ENDPOINT: str = Field(
        default="https://api.anthropic.com/v1/messages",
        description="Anthropic Messages API endpoint"
    )
    ANTHROPIC_VISION_MODEL: str = Field(
        default="claude-sonnet-4-5-20250514",
        description="Anthropic Claude model to use for vision OCR"
    )
    ANTHROPIC_VERSION: str = Field(
        default="2023-06-01",
        description="Value of the anthropic-version header"
    )

    # ============ VISION PROVIDERS ============
    VISION_PROVIDERS: str = Field(
        default="openrouter,anthropic",
        description="Comma-separated vision providers in priority order"
    )
    VISION_MAX_TOKENS: int = Field(
        default=4096,
        description="Max tokens requested from the vision model"
    )
    VISION_TIMEOUT_SEC: float = Field(
        default=60,
        description="Timeout per vision provider attempt in seconds (0 disables)"
    )

    # ============ APPLICATION ============
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    ENVIRONMENT: str = Field(
        default="production",
        description="Environment name (development, staging, production)"
    )
    API_HOST: str = Field(
        default="0.0.0.0",
        description="Interface for the HTTP server"
    )
    API_PORT: int = Field(
        default=8000,
        description="Port for the HTTP server"
    )
    MAX_IMAGE_SIZE_MB: int = Field(
        default=10,
        description="Maximum decoded screenshot size accepted in megabytes"
    )

    # Pydantic settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True
    )

    # ============ VALIDATORS ============

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {allowed_levels}, got {v}"
            )
        return v_upper

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed_envs = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(
                f"ENVIRONMENT must be one of {allowed_envs}, got {v}"
            )
        return v_lower

    @field_validator("VISION_PROVIDERS")
    @classmethod
    def validate_vision_providers(cls, v: str) -> str:
        """Validate every listed vision provider is known."""
        names = [p.strip().lower() for p in v.split(",") if p.strip()]
        unknown = [name for name in names if name not in KNOWN_VISION_PROVIDERS]
        if unknown:
            raise ValueError(
                f"VISION_PROVIDERS entries must be in {KNOWN_VISION_PROVIDERS}, got {unknown}"
            )
        return ",".join(names)

    # ============ HELPER PROPERTIES ============

    @property
    def vision_provider_list(self) -> List[str]:
        """
        Parse VISION_PROVIDERS into an ordered list.

        Returns:
            List of provider names, highest priority first.
        """
        if not self.VISION_PROVIDERS:
            return []
        return [p.strip().lower() for p in self.VISION_PROVIDERS.split(",") if p.strip()]

    @property
    def vision_timeout(self) -> Optional[float]:
        """Per-provider timeout, or None when disabled."""
        return self.VISION_TIMEOUT_SEC if self.VISION_TIMEOUT_SEC > 0 else None

    @property
    def max_image_bytes(self) -> int:
        """MAX_IMAGE_SIZE_MB expressed in bytes."""
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024


# ============ SINGLETON INSTANCE ============

# Create singleton config instance for easy import throughout the application
# Usage: from roast_ocr.config import config
config = Config()
