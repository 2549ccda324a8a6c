"""
Anthropic Claude Vision Provider.

Calls the Anthropic Messages API directly. Used as the fallback when
OpenRouter is not configured, fails, or returns no text.
"""

from typing import Any, Dict

from roast_ocr.vision.base import HTTPVisionProvider, dig


class AnthropicVisionProvider(HTTPVisionProvider):
    """
    Vision provider implementation using the Anthropic Messages API.

    The screenshot is sent as a base64 ``image`` content block followed by
    the extraction prompt as a ``text`` block.
    """

    label = "Anthropic"

    def build_payload(self, image_base64: str, media_type: str, prompt: str) -> Dict[str, Any]:
        """Build a Messages API body with an image block and a text block."""
        return {
            "model": self.provider_config.model_name,
            "max_tokens": self.provider_config.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": media_type,
                                "data": image_base64,
                            },
                        },
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        }

    def extract_text(self, data: Any) -> str:
        """Return ``content[0].text`` or ""."""
        text = dig(data, "content", 0, "text")
        return text if isinstance(text, str) else ""
