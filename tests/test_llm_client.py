import pytest
import requests
from unittest.mock import MagicMock

from app.models.ai_settings import LLMSettings
from app.services.llm import LLMClient, parse_json_object
from app.utils.exceptions import ConfigurationError, ExternalServiceError, ModelError


def _response(status_code=200, body=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def settings():
    return LLMSettings(api_key="sk-test-key", base_url="https://llm.example.com/v1/", model_name="test-model")


class TestLLMClient:
    """Test cases for the chat-completion client"""

    def test_complete_success(self, settings):
        session = MagicMock()
        session.post.return_value = _response(body={"choices": [{"message": {"content": '{"ok": true}'}}]})
        client = LLMClient(settings, session=session)

        assert client.complete("hello", max_tokens=100) == '{"ok": true}'

        args, kwargs = session.post.call_args
        assert args[0] == "https://llm.example.com/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test-key"
        assert kwargs["json"]["model"] == "test-model"
        assert kwargs["json"]["temperature"] == 0.0
        assert kwargs["json"]["max_tokens"] == 100
        assert kwargs["json"]["messages"] == [{"role": "user", "content": "hello"}]
        assert "response_format" not in kwargs["json"]
        assert kwargs["timeout"] == settings.timeout

    def test_schema_mode_adds_response_format(self, settings):
        client = LLMClient(settings, session=MagicMock())
        schema = {"type": "object", "properties": {}}

        payload = client.build_payload("p", 10, schema=schema, schema_name="job_match")

        assert payload["response_format"]["type"] == "json_schema"
        assert payload["response_format"]["json_schema"]["name"] == "job_match"
        assert payload["response_format"]["json_schema"]["schema"] is schema

    def test_schema_mode_disabled(self, settings):
        settings = settings.model_copy(update={"json_schema_mode": False})
        payload = LLMClient(settings, session=MagicMock()).build_payload("p", 10, schema={"type": "object"})
        assert "response_format" not in payload

    def test_missing_api_key(self):
        session = MagicMock()
        client = LLMClient(LLMSettings(api_key=None), session=session)

        with pytest.raises(ConfigurationError):
            client.complete("hello", max_tokens=10)
        session.post.assert_not_called()

    def test_network_error(self, settings):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ExternalServiceError) as exc_info:
            LLMClient(settings, session=session).complete("hello", max_tokens=10)
        assert "connection refused" in exc_info.value.message

    def test_http_error_status(self, settings):
        session = MagicMock()
        session.post.return_value = _response(status_code=401, text="invalid key")

        with pytest.raises(ExternalServiceError) as exc_info:
            LLMClient(settings, session=session).complete("hello", max_tokens=10)
        assert exc_info.value.details["status_code"] == 401

    @pytest.mark.parametrize("body", [
        ValueError("not json"),
        {"choices": []},
        {"error": "overloaded"},
        {"choices": [{"message": {"content": "   "}}]},
    ])
    def test_unusable_body(self, settings, body):
        session = MagicMock()
        session.post.return_value = _response(body=body)

        with pytest.raises(ModelError):
            LLMClient(settings, session=session).complete("hello", max_tokens=10)


class TestParseJsonObject:

    def test_plain_object(self):
        assert parse_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_object_with_prose(self):
        assert parse_json_object('Here you go:\n```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    @pytest.mark.parametrize("text", ["", "no braces", "{not: json}", None])
    def test_invalid(self, text):
        with pytest.raises(ModelError):
            parse_json_object(text)
