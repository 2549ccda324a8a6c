"""Tests for the extraction pipeline boundary."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from roast_ocr.config import Config
from roast_ocr.extraction.modes import ExtractionMode
from roast_ocr.extraction.pipeline import (
    ExtractionOutcome,
    ExtractionRequest,
    RequestValidationError,
    estimated_decoded_size,
    run_extraction,
    strip_data_url,
)
from roast_ocr.extraction.results import MalformedOutputFailure, SentinelFailure
from roast_ocr.vision.base import ConfigurationError, NoTextExtractedError, VisionProviderError
from roast_ocr.vision.factory import VisionProviderFactory
from roast_ocr.vision.fallback import FallbackChain
from roast_ocr.vision.prompts import POST_EXTRACTION_PROMPT, PROFILE_EXTRACTION_PROMPT


def make_chain(result="", error=None):
    chain = MagicMock(spec=FallbackChain)
    if error is not None:
        chain.extract_text = AsyncMock(side_effect=error)
    else:
        chain.extract_text = AsyncMock(return_value=result)
    return chain


def payload(**overrides):
    body = {"image_base64": "aGVsbG8=", "media_type": "image/png", "mode": "post"}
    body.update(overrides)
    return body


class TestExtractionRequest:
    """Tests for ExtractionRequest.from_payload validation."""

    def test_valid(self):
        request = ExtractionRequest.from_payload(payload(mode="profile"))
        assert request == ExtractionRequest("aGVsbG8=", "image/png", ExtractionMode.PROFILE)

    def test_strips_data_url_prefix(self):
        request = ExtractionRequest.from_payload(payload(image_base64="data:image/png;base64,aGVsbG8="))
        assert request.image_base64 == "aGVsbG8="

    @pytest.mark.parametrize("body, message", [
        ({}, "image_base64 is required"),
        (payload(image_base64=""), "image_base64 is required"),
        (payload(image_base64=None), "image_base64 is required"),
        (payload(image_base64="data:image/png;base64,"), "image_base64 is required"),
        (payload(media_type=""), "media_type is required"),
        (payload(media_type=None), "media_type is required"),
        (payload(mode=None), 'mode must be "post" or "profile"'),
        (payload(mode="story"), 'mode must be "post" or "profile"'),
    ])
    def test_invalid(self, body, message):
        with pytest.raises(RequestValidationError) as exc_info:
            ExtractionRequest.from_payload(body)
        assert str(exc_info.value) == message

    def test_checks_run_in_order(self):
        with pytest.raises(RequestValidationError, match="image_base64"):
            ExtractionRequest.from_payload({"mode": "nope"})
        with pytest.raises(RequestValidationError, match="media_type"):
            ExtractionRequest.from_payload({"image_base64": "aGk=", "mode": "nope"})

    def test_non_object_body(self):
        with pytest.raises(RequestValidationError):
            ExtractionRequest.from_payload(["image_base64"])

    def test_image_size_limit(self):
        big = "A" * 4000
        with pytest.raises(RequestValidationError, match="limit"):
            ExtractionRequest.from_payload(payload(image_base64=big), max_image_bytes=1024)

    def test_helpers(self):
        assert strip_data_url("aGk=") == "aGk="
        assert strip_data_url(123) == ""
        assert estimated_decoded_size("aGVsbG8=") == 5


class TestOutcomeFromResult:
    """Tests for ExtractionOutcome.from_result."""

    def test_sentinel_keeps_ok_status(self):
        outcome = ExtractionOutcome.from_result(SentinelFailure("nope"))
        assert outcome.status == 200
        assert outcome.body == {"success": False, "error": "nope"}

    def test_malformed_has_distinct_status(self):
        outcome = ExtractionOutcome.from_result(MalformedOutputFailure("bad json"))
        assert outcome.status == 422
        assert outcome.success is False


class TestRunExtraction:
    """Tests for run_extraction."""

    @pytest.mark.asyncio
    async def test_post_success(self):
        chain = make_chain("  My new role!\n#career  ")

        outcome = await run_extraction(payload(), chain=chain)

        assert outcome.status == 200
        assert outcome.body == {"success": True, "mode": "post", "extracted_text": "My new role!\n#career"}
        chain.extract_text.assert_awaited_once_with("aGVsbG8=", "image/png", POST_EXTRACTION_PROMPT)

    @pytest.mark.asyncio
    async def test_whitespace_only_post_is_empty_success(self):
        provider = MagicMock()
        provider.name = "openrouter"
        provider.is_available = True
        provider.invoke = AsyncMock(return_value="   ")

        outcome = await run_extraction(payload(), chain=FallbackChain([provider]))

        assert outcome.status == 200
        assert outcome.body == {"success": True, "mode": "post", "extracted_text": ""}

    @pytest.mark.asyncio
    async def test_post_sentinel(self):
        outcome = await run_extraction(payload(), chain=make_chain("ERROR: Not a LinkedIn post"))

        assert outcome.status == 200
        assert outcome.body["success"] is False
        assert "does not appear to be a LinkedIn post" in outcome.body["error"]
        assert "extracted_text" not in outcome.body

    @pytest.mark.asyncio
    async def test_profile_success(self):
        raw = {
            "headline": "CTO",
            "about": "Builder",
            "experiences": [{"title": "Engineer", "company": "Acme", "duration": "2020-2022",
                             "description": "Built things"}],
            "skills": ["Go", "Rust"],
            "education": [],
        }
        chain = make_chain(f"```json\n{json.dumps(raw)}\n```")

        outcome = await run_extraction(payload(mode="profile"), chain=chain)

        assert outcome.status == 200
        assert outcome.body == {
            "success": True,
            "mode": "profile",
            "profile_data": {
                "headline": "CTO",
                "about": "Builder",
                "experience": "Engineer at Acme\n(2020-2022)\nBuilt things",
                "skills": "Go, Rust",
            },
            "raw_extraction": raw,
        }
        chain.extract_text.assert_awaited_once_with("aGVsbG8=", "image/png", PROFILE_EXTRACTION_PROMPT)

    @pytest.mark.asyncio
    async def test_profile_sentinel(self):
        outcome = await run_extraction(
            payload(mode="profile"), chain=make_chain('{"error": "Not a LinkedIn profile"}')
        )

        assert outcome.status == 200
        assert "does not appear to be a LinkedIn profile" in outcome.body["error"]

    @pytest.mark.asyncio
    async def test_profile_unparseable(self):
        outcome = await run_extraction(payload(mode="profile"), chain=make_chain("not json at all"))

        assert outcome.status == 422
        assert outcome.body["success"] is False
        assert "manually" in outcome.body["error"]

    @pytest.mark.asyncio
    async def test_validation_error_makes_no_call(self):
        chain = make_chain("unused")

        outcome = await run_extraction(payload(mode="carousel"), chain=chain)

        assert outcome.status == 400
        assert outcome.body == {"success": False, "error": 'mode must be "post" or "profile"'}
        chain.extract_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_configuration_error(self):
        outcome = await run_extraction(payload(), chain=make_chain(error=ConfigurationError("No API key configured")))

        assert outcome.status == 500
        assert outcome.body == {"success": False, "error": "No API key configured"}

    @pytest.mark.asyncio
    async def test_provider_error_message_without_prefix(self):
        error = VisionProviderError("Anthropic API failed with status 500", provider="anthropic")

        outcome = await run_extraction(payload(), chain=make_chain(error=error))

        assert outcome.status == 500
        assert outcome.body["error"] == "Anthropic API failed with status 500"

    @pytest.mark.asyncio
    async def test_no_text(self):
        outcome = await run_extraction(
            payload(), chain=make_chain(error=NoTextExtractedError("No text extracted from image"))
        )

        assert outcome.status == 422
        assert outcome.body == {"success": False, "error": "No text extracted from image"}

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self):
        outcome = await run_extraction(payload(), chain=make_chain(error=RuntimeError()))

        assert outcome.status == 500
        assert outcome.body == {"success": False, "error": "Server error during OCR"}

    @pytest.mark.asyncio
    async def test_no_configured_provider_makes_no_outbound_call(self):
        settings = Config(OPENROUTER_API_KEY=None, ANTHROPIC_API_KEY=None)
        chain = FallbackChain(VisionProviderFactory.from_env_config(settings))

        with patch("roast_ocr.vision.base.aiohttp.ClientSession") as mock_session:
            outcome = await run_extraction(payload(), chain=chain)

        assert outcome.status == 500
        assert outcome.body["error"] == (
            "No API key configured for vision extraction. "
            "Set OPENROUTER_API_KEY or ANTHROPIC_API_KEY."
        )
        mock_session.assert_not_called()
