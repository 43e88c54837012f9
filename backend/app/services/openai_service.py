"""
Quillnote Backend - OpenAI Summarization Provider
===================================================

What:  Summarizes note content with the OpenAI chat completions API.
How:   One POST per call with a fixed system instruction and the note as
       the user turn. Output bounded to 150 tokens, temperature 0.7, so
       two calls with the same input may return different text.
Who:   Registered as "openai" (the default provider) in SummaryService.

Request shape:
    POST {openai_api_url}
    Authorization: Bearer <OPENAI_API_KEY>
    {
        "model": "gpt-3.5-turbo",
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": <note content>}
        ],
        "max_tokens": 150,
        "temperature": 0.7
    }

Response path: choices[0].message.content
"""

import logging
import time

from app.config import settings
from app.exceptions import ProviderError
from app.services.llm_base import SummarizationProvider, dig, text_or_fallback

logger = logging.getLogger(__name__)


class OpenAIService(SummarizationProvider):
    """OpenAI chat-completions implementation of SummarizationProvider."""

    name = "openai"
    api_key_setting = "openai_api_key"

    SYSTEM_PROMPT = (
        "You are a helpful assistant that creates concise, informative summaries. "
        "Summarize the following text in 2-3 sentences, highlighting the key points:"
    )
    MAX_TOKENS = 150
    TEMPERATURE = 0.7

    def build_payload(self, text: str) -> dict:
        return {
            "model": settings.openai_model,
            "messages": [
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            "max_tokens": self.MAX_TOKENS,
            "temperature": self.TEMPERATURE,
        }

    async def summarize(self, text: str) -> str:
        api_key = self.require_api_key()

        start_time = time.time()
        async with self._client() as client:
            response = await client.post(
                settings.openai_api_url,
                headers={"Authorization": f"Bearer {api_key}"},
                json=self.build_payload(text),
            )

        duration_ms = (time.time() - start_time) * 1000

        if not response.is_success:
            logger.warning(
                "OpenAI returned %d %s after %.0fms",
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
        summary = text_or_fallback(dig(data, "choices", 0, "message", "content"))

        logger.info(
            "OpenAI summary completed in %.0fms: %d chars in, %d chars out",
            duration_ms,
            len(text),
            len(summary),
        )
        return summary
