"""
Quillnote Backend - Abstract Summarization Provider Interface
===============================================================

What:  Abstract base class defining the contract for AI summarization providers.
How:   Concrete implementations inherit from SummarizationProvider and
       implement summarize(). SummaryService picks one by name from its
       registry and never branches on provider type anywhere else.
Who:   Called by SummaryService during the summarize workflow.
When:  After the access gate has confirmed the caller owns the note.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from app.config import settings
from app.exceptions import ConfigurationMissingError

# Returned when a provider answers 200 but the expected text field is absent.
FALLBACK_SUMMARY = "Unable to generate summary"


def dig(data: Any, *path: Any) -> Any:
    """
    Walk a decoded JSON document along `path`.

    String steps index into dicts, integer steps into lists. Returns None
    as soon as a step does not apply, so callers can treat any missing or
    mistyped segment as "field absent".

        >>> dig({"a": [{"b": "x"}]}, "a", 0, "b")
        'x'
        >>> dig({"a": []}, "a", 0, "b") is None
        True
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
        elif not isinstance(current, dict) or step not in current:
            return None
        current = current[step]
    return current


def text_or_fallback(value: Any) -> str:
    """Provider text if it is a non-empty string, else FALLBACK_SUMMARY."""
    if isinstance(value, str) and value:
        return value
    return FALLBACK_SUMMARY


class SummarizationProvider(ABC):
    """
    Abstract interface for AI-powered text summarization.

    Contract:
        - summarize() accepts plain text and returns summary text
        - A single attempt per call: no retries, no caching, no truncation
        - The API key is read from settings at call time
        - Missing key      → ConfigurationMissingError
        - Non-2xx response → ProviderError (status text attached)
        - 2xx without the expected field → FALLBACK_SUMMARY (not an error)
        - Transport errors and non-JSON bodies propagate as raised

    Implementations:
        - OpenAIService: chat completions, bearer header auth
        - GeminiService: generateContent, API key as query parameter
    """

    # Registry key, also used in logs and health output
    name: str = ""

    # Settings attribute holding this provider's API key
    api_key_setting: str = ""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            transport: Optional httpx transport. Production leaves it unset;
                tests pass httpx.MockTransport to stand in for the provider.
        """
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        """A fresh client per call; no connection reuse across requests."""
        return httpx.AsyncClient(transport=self.transport)

    def api_key(self) -> str:
        """Current API key from settings (blank if unset)."""
        return (getattr(settings, self.api_key_setting, "") or "").strip()

    def is_configured(self) -> bool:
        """True if this provider's API key is present in settings."""
        return bool(self.api_key())

    def require_api_key(self) -> str:
        """
        Resolve the API key for this call.

        Raises:
            ConfigurationMissingError: key is absent or blank
        """
        key = self.api_key()
        if not key:
            raise ConfigurationMissingError(
                provider=self.name,
                setting=self.api_key_setting.upper(),
            )
        return key

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Summarize a document.

        Args:
            text: Note content. Non-empty, arbitrary length, sent as-is.

        Returns:
            str: Summary text, or FALLBACK_SUMMARY when the provider's
                 success response lacks the expected field.

        Raises:
            ConfigurationMissingError: API key not configured
            ProviderError: provider returned a non-success status
            httpx.HTTPError: network/transport failure
            ValueError: success response body was not JSON
        """
        ...
