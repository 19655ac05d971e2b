"""Tests for geo_backend.openai_client - OpenAIClient with mocked HTTP calls."""
from __future__ import annotations

import os
from unittest.mock import MagicMock, patch

import pytest

from geo_backend.openai_client import (
    EMPTY_RESPONSE_TEXT,
    OpenAIClient,
    OpenAIHTTPError,
    _is_retryable,
)


def _response(status=200, payload=None, ok=None):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = (200 <= status < 300) if ok is None else ok
    resp.json.return_value = payload if payload is not None else {}
    return resp


def _completion(text="Hello from ChatGPT"):
    return {
        "model": "gpt-4o",
        "choices": [{"message": {"role": "assistant", "content": text}}],
        "usage": {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15},
    }


# =====================================================================
# _is_retryable
# =====================================================================

class TestIsRetryable:

    @pytest.mark.parametrize("code", [429, 500, 502, 503, 504])
    def test_retryable_status(self, code):
        assert _is_retryable(OpenAIHTTPError(code, "nope")) is True

    @pytest.mark.parametrize("code", [400, 401, 403, 404])
    def test_client_errors_not_retried(self, code):
        assert _is_retryable(OpenAIHTTPError(code, "Server said 500 times no")) is False

    def test_connection_error(self):
        assert _is_retryable(ConnectionError("refused")) is True

    def test_value_error(self):
        assert _is_retryable(ValueError("bad")) is False


# =====================================================================
# __init__
# =====================================================================

class TestOpenAIClientInit:

    def test_requires_api_key(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("OPENAI_API_KEY", None)
            with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
                OpenAIClient()

    def test_custom_base_url_trailing_slash_stripped(self):
        client = OpenAIClient(api_key="k", base_url="https://proxy.local/v1/")
        assert client.base_url == "https://proxy.local/v1"

    def test_default_model(self):
        assert OpenAIClient(api_key="k").default_model == "gpt-4o"


# =====================================================================
# generate
# =====================================================================

class TestOpenAIGenerate:

    @patch("geo_backend.openai_client.requests.post")
    def test_success(self, mock_post):
        mock_post.return_value = _response(payload=_completion())
        client = OpenAIClient(api_key="sk-test")
        assert client.generate("Say hello") == "Hello from ChatGPT"
        assert client.last_usage.total_tokens == 15

    @patch("geo_backend.openai_client.requests.post")
    def test_request_shape(self, mock_post):
        mock_post.return_value = _response(payload=_completion())
        client = OpenAIClient(api_key="sk-test", base_url="https://api.example/v1")
        client.generate("user text", model="gpt-4o-mini", max_tokens=64, temperature=0.7, system_instruction="sys")

        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.example/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        body = kwargs["json"]
        assert body["model"] == "gpt-4o-mini"
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 64
        assert body["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "user text"},
        ]

    @patch("geo_backend.openai_client.requests.post")
    def test_no_system_message_when_absent(self, mock_post):
        mock_post.return_value = _response(payload=_completion())
        OpenAIClient(api_key="k").generate("hi")
        messages = mock_post.call_args.kwargs["json"]["messages"]
        assert [m["role"] for m in messages] == ["user"]

    @patch("geo_backend.openai_client.requests.post")
    def test_empty_choices_placeholder(self, mock_post):
        mock_post.return_value = _response(payload={"choices": []})
        assert OpenAIClient(api_key="k").generate("hi") == EMPTY_RESPONSE_TEXT

    @patch("geo_backend.openai_client.requests.post")
    def test_api_error_message_surfaced(self, mock_post):
        mock_post.return_value = _response(
            status=401, payload={"error": {"message": "Incorrect API key provided"}},
        )
        with pytest.raises(RuntimeError, match="OpenAI API error: Incorrect API key provided"):
            OpenAIClient(api_key="k").generate("hi")
        assert mock_post.call_count == 1

    @patch("geo_backend.openai_client.requests.post")
    def test_status_fallback_message(self, mock_post):
        resp = _response(status=404)
        resp.json.side_effect = ValueError("no json")
        mock_post.return_value = resp
        with pytest.raises(RuntimeError, match="HTTP Error! status: 404"):
            OpenAIClient(api_key="k").generate("hi")

    @patch("geo_backend.openai_client.OPENAI_BACKOFF_MIN", 0.01)
    @patch("geo_backend.openai_client.OPENAI_BACKOFF_MAX", 0.02)
    @patch("geo_backend.openai_client.requests.post")
    def test_retries_on_503(self, mock_post):
        mock_post.side_effect = [_response(status=503), _response(payload=_completion("ok"))]
        assert OpenAIClient(api_key="k").generate("hi") == "ok"
        assert mock_post.call_count == 2

    @patch("geo_backend.openai_client.OPENAI_MAX_RETRIES", 2)
    @patch("geo_backend.openai_client.OPENAI_BACKOFF_MIN", 0.01)
    @patch("geo_backend.openai_client.OPENAI_BACKOFF_MAX", 0.02)
    @patch("geo_backend.openai_client.requests.post")
    def test_gives_up_after_max_retries(self, mock_post):
        mock_post.return_value = _response(status=429, payload={"error": {"message": "Rate limit reached"}})
        with pytest.raises(RuntimeError, match="Rate limit reached"):
            OpenAIClient(api_key="k").generate("hi")
        assert mock_post.call_count == 2
