"""
Quillnote Backend - Summary Service (Summarization Orchestrator)
==================================================================

What:  Coordinates the summarize workflow: validate input → check ownership
       → pick a provider → call it once → return text or one uniform error.
Who:   Called by POST /api/summarize.

Orchestration Flow:
    ┌───────────┐    ┌──────────────┐    ┌─────────────┐    ┌──────────────┐
    │ Session   │───▶│ Access Gate  │───▶│ Provider    │───▶│ Adapter call │
    │ (auth.py) │    │ (owner+id)   │    │ registry    │    │ (1 attempt)  │
    └───────────┘    └──────────────┘    └─────────────┘    └──────────────┘

    Unauthorized / NotFound / missing note ID surface as-is.
    Every adapter failure (missing key, non-2xx, network error, body
    that is not JSON, anything else) is logged with full detail and
    re-raised as SummarizationFailedError.

Provider Selection:
    PROVIDER_REGISTRY maps selector → provider class. Unknown, empty or
    missing selectors resolve to DEFAULT_PROVIDER ("openai"). Adding a
    provider means adding one registry entry.
"""

import logging
from typing import Dict, Mapping, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import CurrentUser
from app.exceptions import (
    ConfigurationMissingError,
    SummarizationFailedError,
    ValidationError,
)
from app.middleware.request_id import request_id_var
from app.schemas.note import DEFAULT_PROVIDER, Provider
from app.services.access_gate import AccessGate, access_gate
from app.services.gemini_service import GeminiService
from app.services.llm_base import SummarizationProvider
from app.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)


PROVIDER_REGISTRY: Dict[str, Type[SummarizationProvider]] = {
    Provider.OPENAI.value: OpenAIService,
    Provider.GEMINI.value: GeminiService,
}


class SummaryService:
    """
    Summarization orchestrator.

    Responsibilities:
        - resolve_provider(): selector → provider instance (permissive default)
        - summarize(): one adapter call, failures collapsed
        - summarize_note(): full request flow including the access gate

    Holds no per-request state; the provider instances it owns are
    stateless apart from an optional test transport.
    """

    def __init__(
        self,
        providers: Optional[Mapping[str, SummarizationProvider]] = None,
        gate: Optional[AccessGate] = None,
        default_provider: str = DEFAULT_PROVIDER.value,
    ):
        if providers is None:
            providers = {name: cls() for name, cls in PROVIDER_REGISTRY.items()}
        self.providers: Dict[str, SummarizationProvider] = dict(providers)
        self.gate = gate or access_gate
        self.default_provider = default_provider

    def resolve_provider(self, name: Optional[str]) -> SummarizationProvider:
        """
        Pick the provider for a selector.

        Any value that is not a registered name falls back to the default
        provider rather than failing.
        """
        provider = self.providers.get(name) if name else None
        if provider is None:
            if name:
                logger.debug(
                    "Unknown provider %r, falling back to %s", name, self.default_provider
                )
            provider = self.providers[self.default_provider]
        return provider

    async def summarize(self, text: str, provider: Optional[str] = None) -> str:
        """
        Summarize text with exactly one provider call.

        Args:
            text: Document to summarize (non-empty)
            provider: Provider selector; unknown values use the default

        Returns:
            Summary text (possibly FALLBACK_SUMMARY)

        Raises:
            SummarizationFailedError: the adapter raised anything at all
        """
        adapter = self.resolve_provider(provider)
        rid = request_id_var.get("")

        try:
            return await adapter.summarize(text)
        except ConfigurationMissingError as e:
            logger.error(
                "[%s] Summarization provider %s is not configured: %s",
                rid,
                adapter.name,
                e.message,
            )
            raise SummarizationFailedError(
                provider=adapter.name,
                context={"cause": "configuration_missing", "setting": e.setting},
            ) from e
        except Exception as e:
            logger.error(
                "[%s] Summarization via %s failed (%s): %s",
                rid,
                adapter.name,
                type(e).__name__,
                str(e),
                exc_info=True,
            )
            raise SummarizationFailedError(
                provider=adapter.name,
                context={"cause": type(e).__name__},
            ) from e

    async def summarize_note(
        self,
        db: AsyncSession,
        user: CurrentUser,
        note_id: Optional[str],
        provider: Optional[str] = None,
    ) -> str:
        """
        Full summarize flow for a note the caller owns.

        The ownership lookup completes before the provider is contacted,
        so unauthorized requests never spend provider quota.

        Raises:
            ValidationError: note ID missing or empty (→ 400)
            NotFoundError: note missing or not owned by `user` (→ 404)
            DatabaseError: lookup failed (→ 500)
            SummarizationFailedError: provider failure (→ 500)
        """
        if not note_id:
            raise ValidationError(message="Note ID is required", field="noteId")

        note = await self.gate.resolve_owned_note(db, owner_id=user.id, note_id=note_id)

        logger.info(
            "Summarizing note %s for user %s (provider=%s)",
            note.id,
            user.id,
            provider or self.default_provider,
        )
        return await self.summarize(note.content, provider)


summary_service = SummaryService()
