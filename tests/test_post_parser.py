"""Tests for post parser module."""

from roast_ocr.extraction.results import PostExtraction, SentinelFailure
from roast_ocr.parsers.post_parser import NOT_A_POST_MESSAGE, is_not_a_post, parse_post_extraction


class TestIsNotAPost:
    """Tests for is_not_a_post function."""

    def test_exact_marker(self):
        assert is_not_a_post("ERROR: Not a LinkedIn post") is True

    def test_marker_inside_text(self):
        assert is_not_a_post('I think: "ERROR: Not a LinkedIn post"') is True

    def test_regular_post(self):
        assert is_not_a_post("Excited to share that I started a new role!") is False

    def test_case_sensitive(self):
        assert is_not_a_post("error: not a linkedin post") is False

    def test_none(self):
        assert is_not_a_post(None) is False


class TestParsePostExtraction:
    """Tests for parse_post_extraction function."""

    def test_sentinel(self):
        result = parse_post_extraction("ERROR: Not a LinkedIn post")

        assert isinstance(result, SentinelFailure)
        assert result.message == NOT_A_POST_MESSAGE
        assert "type your post" in result.message

    def test_text_is_trimmed(self):
        result = parse_post_extraction("\n  I got promoted 🎉\n\n#career #growth  \n")
        assert result == PostExtraction(extracted_text="I got promoted 🎉\n\n#career #growth")

    def test_inner_line_breaks_preserved(self):
        text = "Line one\n\nLine three\n- bullet"
        assert parse_post_extraction(text).extracted_text == text

    def test_json_looking_post_is_not_parsed(self):
        text = '{"headline": "not parsed in post mode"}'
        assert parse_post_extraction(text).extracted_text == text
