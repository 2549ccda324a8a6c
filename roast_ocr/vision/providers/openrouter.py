"""
OpenRouter Vision Provider.

OpenRouter exposes Claude (and other vision models) through an
OpenAI-compatible chat completions API. It is the primary provider: the
screenshot travels as an ``image_url`` data URL next to the prompt text.
"""

from typing import Any, Dict

from roast_ocr.vision.base import HTTPVisionProvider, dig


class OpenRouterVisionProvider(HTTPVisionProvider):
    """Vision provider for the OpenRouter chat completions endpoint."""

    label = "OpenRouter"

    def build_payload(self, image_base64: str, media_type: str, prompt: str) -> Dict[str, Any]:
        """
        Build a single user message with an image_url part and a text part.

        Args:
            image_base64: Base64-encoded image bytes
            media_type: MIME type of the image
            prompt: Instruction prompt

        Returns:
            Dict: chat completions request body
        """
        return {
            "model": self.provider_config.model_name,
            "max_tokens": self.provider_config.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image_url",
                            "image_url": {"url": f"data:{media_type};base64,{image_base64}"},
                        },
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        }

    def extract_text(self, data: Any) -> str:
        """Return ``choices[0].message.content`` or ""."""
        content = dig(data, "choices", 0, "message", "content")
        return content if isinstance(content, str) else ""
