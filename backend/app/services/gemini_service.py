"""
Quillnote Backend - Google Gemini Summarization Provider
==========================================================

What:  Summarizes note content with the Gemini generateContent REST API.
How:   The instruction and the note are joined into a single prompt (Gemini
       has no system/user split here). The API key travels as the `key`
       query parameter instead of a header.
Who:   Registered as "gemini" in SummaryService.

Request shape:
    POST {gemini_api_url}/{gemini_model}:generateContent?key=<GEMINI_API_KEY>
    {"contents": [{"parts": [{"text": "<PROMPT>\\n\\n<note content>"}]}]}

Response path: candidates[0].content.parts[0].text

Logging note:
    The request URL contains the API key. setup_logging() clamps the
    httpx/httpcore loggers to WARNING, and this module never logs the URL.
"""

import logging
import time

from app.config import settings
from app.exceptions import ProviderError
from app.services.llm_base import SummarizationProvider, dig, text_or_fallback

logger = logging.getLogger(__name__)


class GeminiService(SummarizationProvider):
    """Google Gemini implementation of SummarizationProvider."""

    name = "gemini"
    api_key_setting = "gemini_api_key"

    PROMPT = (
        "Please summarize the following text in 2-3 sentences, "
        "highlighting the key points:"
    )

    def endpoint(self) -> str:
        base = settings.gemini_api_url.rstrip("/")
        return f"{base}/{settings.gemini_model}:generateContent"

    def build_payload(self, text: str) -> dict:
        return {
            "contents": [
                {"parts": [{"text": f"{self.PROMPT}\n\n{text}"}]},
            ],
        }

    async def summarize(self, text: str) -> str:
        api_key = self.require_api_key()

        start_time = time.time()
        async with self._client() as client:
            response = await client.post(
                self.endpoint(),
                params={"key": api_key},
                json=self.build_payload(text),
            )

        duration_ms = (time.time() - start_time) * 1000

        if not response.is_success:
            logger.warning(
                "Gemini returned %d %s after %.0fms",
                response.status_code,
                response.reason_phrase,
                duration_ms,
            )
            raise ProviderError(
                provider=self.name,
                status_code=response.status_code,
                status_text=response.reason_phrase,
            )

        data = response.json()
        summary = text_or_fallback(
            dig(data, "candidates", 0, "content", "parts", 0, "text")
        )

        logger.info(
            "Gemini summary completed in %.0fms: %d chars in, %d chars out",
            duration_ms,
            len(text),
            len(summary),
        )
        return summary
