"""Tests for logger utilities."""

from roast_ocr.utils.logger import SENSITIVE_PATTERNS, mask_sensitive_data


class TestMaskSensitiveData:
    """Tests for mask_sensitive_data structlog processor."""

    def test_masks_api_key(self):
        """Test that api_key values are masked."""
        event = {"error": "api_key=secret123"}
        result = mask_sensitive_data(None, None, event)
        assert "secret123" not in result["error"]
        assert "MASKED" in result["error"]

    def test_masks_token(self):
        """Test that token values are masked."""
        event = {"msg": "token: abc123xyz"}
        result = mask_sensitive_data(None, None, event)
        assert "abc123xyz" not in result["msg"]
        assert "MASKED" in result["msg"]

    def test_masks_bearer_token(self):
        """Test that bearer tokens are masked."""
        event = {"auth": "Bearer eyJhbGciOiJIUzI1NiJ9"}
        result = mask_sensitive_data(None, None, event)
        assert "eyJhbGciOiJIUzI1NiJ9" not in result["auth"]
        assert "Bearer ***MASKED***" in result["auth"]

    def test_masks_x_api_key_header_json(self):
        """Test that an x-api-key header dumped as JSON is masked."""
        event = {"headers": '{"x-api-key": "anthropic-key-value"}'}
        result = mask_sensitive_data(None, None, event)
        assert "anthropic-key-value" not in result["headers"]
        assert "MASKED" in result["headers"]

    def test_masks_bare_provider_keys(self):
        """Test that OpenRouter and Anthropic key formats are masked anywhere."""
        event = {
            "a": "invalid key sk-or-v1-0123456789abcdef",
            "b": "invalid key sk-ant-api03-ABCDEFGHIJ",
        }
        result = mask_sensitive_data(None, None, event)
        assert "0123456789abcdef" not in result["a"]
        assert "ABCDEFGHIJ" not in result["b"]

    def test_masks_inline_image_payload(self):
        """Test that base64 data URLs keep their media type but lose the bytes."""
        payload = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB" * 4
        event = {"url": f"data:image/png;base64,{payload}"}
        result = mask_sensitive_data(None, None, event)
        assert payload not in result["url"]
        assert result["url"] == "data:image/png;base64,***IMAGE***"

    def test_short_data_url_untouched(self):
        """Test that tiny data URLs (not screenshots) are left alone."""
        event = {"url": "data:image/gif;base64,R0lG"}
        result = mask_sensitive_data(None, None, event)
        assert result == {"url": "data:image/gif;base64,R0lG"}

    def test_preserves_non_sensitive_data(self):
        """Test that non-sensitive data is preserved."""
        event = {"provider": "openrouter", "mode": "post", "status": "success"}
        result = mask_sensitive_data(None, None, event)
        assert result == event

    def test_handles_non_string_values(self):
        """Test that non-string values are passed through."""
        event = {"count": 42, "active": True, "data": None}
        result = mask_sensitive_data(None, None, event)
        assert result == event

    def test_case_insensitive(self):
        """Test that matching is case-insensitive."""
        event = {"err": "API_KEY=secret", "auth": "TOKEN=abc123"}
        result = mask_sensitive_data(None, None, event)
        assert "secret" not in result["err"]
        assert "abc123" not in result["auth"]

    def test_multiple_patterns_in_one_string(self):
        """Test that multiple sensitive values in one string are all masked."""
        event = {"config": "api_key=secret123 token:abc456 password=pass789"}
        result = mask_sensitive_data(None, None, event)
        assert "secret123" not in result["config"]
        assert "abc456" not in result["config"]
        assert "pass789" not in result["config"]
        assert result["config"].count("MASKED") == 3

    def test_masks_preserve_prefix(self):
        """Test that masking preserves the pattern prefix."""
        event = {"log": "Found api_key=secret123"}
        result = mask_sensitive_data(None, None, event)
        assert "api_key=" in result["log"]
        assert "secret123" not in result["log"]

    def test_sensitive_patterns_count(self):
        """Test that expected number of patterns are defined."""
        assert len(SENSITIVE_PATTERNS) >= 6
