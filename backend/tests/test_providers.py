"""
Quillnote Backend - Provider Adapter Unit Tests
=================================================

What:  Tests for OpenAIService and GeminiService against an
       httpx.MockTransport double (no real API calls).

What we test:
    ✅ Request shape per provider (URL, auth placement, body)
    ✅ Text extraction from the expected field path
    ✅ Fallback string when the field path is missing
    ✅ ProviderError on non-success status, with the status text
    ✅ ConfigurationMissingError before any network call
    ✅ Bodies that are not JSON raise
"""

import json

import httpx
import pytest

from app.config import settings
from app.exceptions import ConfigurationMissingError, ProviderError
from app.services.gemini_service import GeminiService
from app.services.llm_base import FALLBACK_SUMMARY, dig, text_or_fallback
from app.services.openai_service import OpenAIService


class TestJsonPathHelpers:

    def test_dig_follows_dicts_and_lists(self):
        data = {"choices": [{"message": {"content": "hi"}}]}
        assert dig(data, "choices", 0, "message", "content") == "hi"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"choices": []},
            {"choices": None},
            {"choices": [{}]},
            {"choices": [{"message": "not-a-dict"}]},
            ["choices"],
            None,
        ],
    )
    def test_dig_returns_none_on_any_miss(self, data):
        assert dig(data, "choices", 0, "message", "content") is None

    def test_text_or_fallback(self):
        assert text_or_fallback("Short summary.") == "Short summary."
        assert text_or_fallback("") == FALLBACK_SUMMARY
        assert text_or_fallback(None) == FALLBACK_SUMMARY
        assert text_or_fallback(42) == FALLBACK_SUMMARY


class TestOpenAIService:

    @pytest.mark.asyncio
    async def test_builds_chat_completion_request(self, provider_stub, openai_body):
        stub = provider_stub(json_body=openai_body("Short summary."))
        service = OpenAIService(transport=stub.transport)

        await service.summarize("Long text...")

        assert stub.call_count == 1
        request = stub.requests[0]
        assert request.method == "POST"
        assert str(request.url) == settings.openai_api_url
        assert request.headers["Authorization"] == "Bearer test-openai-key"

        payload = json.loads(request.content)
        assert payload["model"] == settings.openai_model
        assert payload["max_tokens"] == 150
        assert payload["temperature"] == 0.7
        assert payload["messages"] == [
            {"role": "system", "content": OpenAIService.SYSTEM_PROMPT},
            {"role": "user", "content": "Long text..."},
        ]
        assert "2-3 sentences" in OpenAIService.SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_returns_first_choice_content(self, provider_stub, openai_body):
        stub = provider_stub(json_body=openai_body("Short summary."))
        service = OpenAIService(transport=stub.transport)

        assert await service.summarize("Long text...") == "Short summary."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": ""}}]},
            {"choices": [{"message": {"content": None}}]},
        ],
    )
    async def test_missing_content_degrades_to_fallback(self, provider_stub, body):
        stub = provider_stub(json_body=body)
        service = OpenAIService(transport=stub.transport)

        assert await service.summarize("Long text...") == FALLBACK_SUMMARY

    @pytest.mark.asyncio
    async def test_non_success_status_raises_provider_error(self, provider_stub):
        stub = provider_stub(status_code=401, json_body={"error": {"message": "bad key sk-..."}})
        service = OpenAIService(transport=stub.transport)

        with pytest.raises(ProviderError) as exc_info:
            await service.summarize("Long text...")

        assert exc_info.value.status_code == 401
        assert exc_info.value.status_text == "Unauthorized"
        assert exc_info.value.provider == "openai"

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_any_request(self, provider_stub, openai_body, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", "")
        stub = provider_stub(json_body=openai_body("unused"))
        service = OpenAIService(transport=stub.transport)

        with pytest.raises(ConfigurationMissingError) as exc_info:
            await service.summarize("Long text...")

        assert exc_info.value.setting == "OPENAI_API_KEY"
        assert stub.call_count == 0
        assert service.is_configured() is False

    @pytest.mark.asyncio
    async def test_key_is_read_at_call_time(self, provider_stub, openai_body, monkeypatch):
        stub = provider_stub(json_body=openai_body("ok"))
        service = OpenAIService(transport=stub.transport)
        monkeypatch.setattr(settings, "openai_api_key", "rotated-key")

        await service.summarize("Long text...")

        assert stub.requests[0].headers["Authorization"] == "Bearer rotated-key"

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self, provider_stub):
        stub = provider_stub(content=b"<html>gateway hiccup</html>")
        service = OpenAIService(transport=stub.transport)

        with pytest.raises(ValueError):
            await service.summarize("Long text...")

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, provider_stub):
        stub = provider_stub(error=httpx.ConnectError("connection refused"))
        service = OpenAIService(transport=stub.transport)

        with pytest.raises(httpx.ConnectError):
            await service.summarize("Long text...")


class TestGeminiService:

    @pytest.mark.asyncio
    async def test_builds_generate_content_request(self, provider_stub, gemini_body):
        stub = provider_stub(json_body=gemini_body("Gemini summary."))
        service = GeminiService(transport=stub.transport)

        await service.summarize("Long text...")

        assert stub.call_count == 1
        request = stub.requests[0]
        assert request.method == "POST"
        assert request.url.path.endswith(f"/{settings.gemini_model}:generateContent")
        assert request.url.params["key"] == "test-gemini-key"
        assert "Authorization" not in request.headers

        payload = json.loads(request.content)
        assert payload == {
            "contents": [
                {"parts": [{"text": f"{GeminiService.PROMPT}\n\nLong text..."}]},
            ],
        }

    @pytest.mark.asyncio
    async def test_returns_first_candidate_text(self, provider_stub, gemini_body):
        stub = provider_stub(json_body=gemini_body("Gemini summary."))
        service = GeminiService(transport=stub.transport)

        assert await service.summarize("Long text...") == "Gemini summary."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"finishReason": "SAFETY"}]},
        ],
    )
    async def test_missing_text_degrades_to_fallback(self, provider_stub, body):
        stub = provider_stub(json_body=body)
        service = GeminiService(transport=stub.transport)

        assert await service.summarize("Long text...") == FALLBACK_SUMMARY

    @pytest.mark.asyncio
    async def test_non_success_status_raises_provider_error(self, provider_stub):
        stub = provider_stub(status_code=503, json_body={"error": {"status": "UNAVAILABLE"}})
        service = GeminiService(transport=stub.transport)

        with pytest.raises(ProviderError) as exc_info:
            await service.summarize("Long text...")

        assert exc_info.value.status_code == 503
        assert exc_info.value.status_text == "Service Unavailable"
        assert "test-gemini-key" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_any_request(self, provider_stub, monkeypatch):
        monkeypatch.setattr(settings, "gemini_api_key", "   ")
        stub = provider_stub(json_body={})
        service = GeminiService(transport=stub.transport)

        with pytest.raises(ConfigurationMissingError) as exc_info:
            await service.summarize("Long text...")

        assert exc_info.value.setting == "GEMINI_API_KEY"
        assert stub.call_count == 0
