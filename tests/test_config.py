"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from roast_ocr.config import Config


class TestConfig:
    """Tests for Config settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("VISION_PROVIDERS", raising=False)
        monkeypatch.delenv("VISION_TIMEOUT_SEC", raising=False)
        settings = Config(_env_file=None)

        assert settings.vision_provider_list == ["openrouter", "anthropic"]
        assert settings.OPENROUTER_VISION_MODEL == "anthropic/claude-sonnet-4"
        assert settings.ANTHROPIC_VERSION == "2023-06-01"
        assert settings.vision_timeout == 60

    def test_lyzr_key_alias(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.setenv("LYZR_ANTHROPIC_KEY", "sk-ant-from-lyzr")

        assert Config(_env_file=None).ANTHROPIC_API_KEY == "sk-ant-from-lyzr"

    def test_anthropic_key_wins_over_alias(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-primary")
        monkeypatch.setenv("LYZR_ANTHROPIC_KEY", "sk-ant-from-lyzr")

        assert Config(_env_file=None).ANTHROPIC_API_KEY == "sk-ant-primary"

    def test_provider_list_normalized(self):
        settings = Config(_env_file=None, VISION_PROVIDERS=" Anthropic ,OPENROUTER,")
        assert settings.vision_provider_list == ["anthropic", "openrouter"]

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            Config(_env_file=None, VISION_PROVIDERS="openrouter,gemini")

    def test_empty_provider_list(self):
        assert Config(_env_file=None, VISION_PROVIDERS="").vision_provider_list == []

    def test_timeout_disabled(self):
        assert Config(_env_file=None, VISION_TIMEOUT_SEC=0).vision_timeout is None

    def test_log_level_uppercased(self):
        assert Config(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Config(_env_file=None, ENVIRONMENT="qa")

    def test_max_image_bytes(self):
        assert Config(_env_file=None, MAX_IMAGE_SIZE_MB=2).max_image_bytes == 2 * 1024 * 1024
