"""Tests for response normalization."""

import pytest

from stability_ai.exceptions import ServerError
from stability_ai.response import (
    EMPTY_RESPONSE_MESSAGE,
    ResponseBody,
    extract_error_message,
    normalize_response,
)


class TestNormalizeResponse:
    """Tests for normalize_response."""

    @pytest.mark.parametrize("body", [None, False, "", "  ", b"", {}, []])
    def test_blank_body_raises(self, body):
        """Test that empty bodies raise the retry message."""
        with pytest.raises(ServerError) as exc_info:
            normalize_response(body)

        assert str(exc_info.value) == EMPTY_RESPONSE_MESSAGE
        assert "retrying" in exc_info.value.message

    def test_error_message_raises(self):
        """Test that an embedded error message becomes the ServerError message."""
        with pytest.raises(ServerError) as exc_info:
            normalize_response({"error": {"message": "Invalid prompt"}})

        assert str(exc_info.value) == "Invalid prompt"
        assert exc_info.value.error_code == "SERVER_ERROR"

    def test_blank_error_message_is_ignored(self):
        """Test that an error object without a message is passed through."""
        result = normalize_response({"error": {"message": ""}, "image": "abc"})

        assert result["image"] == "abc"

    def test_mapping_becomes_response_body(self):
        """Test that valid mappings are wrapped."""
        result = normalize_response({"image": "abc", "finish_reason": "SUCCESS"})

        assert isinstance(result, ResponseBody)
        assert result == {"image": "abc", "finish_reason": "SUCCESS"}

    def test_bytes_pass_through(self):
        """Test that raw image bytes are returned unchanged."""
        assert normalize_response(b"\x89PNG") == b"\x89PNG"

    def test_list_passes_through(self):
        """Test that non-empty arrays are returned unchanged."""
        assert normalize_response([1, 2]) == [1, 2]


class TestExtractErrorMessage:
    """Tests for extract_error_message."""

    def test_non_mapping(self):
        """Test that non-mappings carry no message."""
        assert extract_error_message(b"bytes") is None

    def test_error_not_mapping(self):
        """Test that a string error field is not treated as a message path."""
        assert extract_error_message({"error": "boom"}) is None

    def test_message_present(self):
        """Test the error.message path."""
        assert extract_error_message({"error": {"message": "Boom"}}) == "Boom"


class TestResponseBody:
    """Tests for ResponseBody key access."""

    def test_string_and_attribute_access(self):
        """Test that keys are reachable as items and attributes."""
        body = ResponseBody({"image": "abc", "finish_reason": "SUCCESS"})

        assert body["image"] == body.image == "abc"
        assert body["finish_reason"] == body.finish_reason == "SUCCESS"

    def test_case_insensitive_access(self):
        """Test that lookups ignore key case."""
        body = ResponseBody({"finish_reason": "SUCCESS"})

        assert body["FINISH_REASON"] == "SUCCESS"
        assert "Finish_Reason" in body
        assert body.get("FINISH_REASON") == "SUCCESS"

    def test_missing_key(self):
        """Test that missing keys still raise."""
        body = ResponseBody({"image": "abc"})

        with pytest.raises(KeyError):
            body["seed"]
        with pytest.raises(AttributeError):
            body.seed
        assert body.get("seed", 0) == 0

    def test_nested_mappings_are_wrapped(self):
        """Test that nested objects and lists of objects get the same access."""
        body = ResponseBody({"artifacts": [{"Seed": 1}], "meta": {"model": "sd3"}})

        assert body.artifacts[0].seed == 1
        assert body.meta.MODEL == "sd3"
