"""
Quillnote Backend - Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a client-safe message and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return `{"error": <message>}` with the right status code.
       The context is logged, never returned.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    QuillnoteError (base)
    ├── ValidationError            → 400 Bad Request
    ├── UnauthorizedError          → 401 Unauthorized
    ├── NotFoundError              → 404 Not Found
    ├── DatabaseError              → 500 Internal Server Error (generic body)
    ├── SummarizationFailedError   → 500 Internal Server Error (summary body)
    └── LLMServiceError            (adapter-level, collapsed by SummaryService)
        ├── ConfigurationMissingError
        └── ProviderError

Adapter-level errors never reach an HTTP handler on their own: the
summarization orchestrator catches them, logs them and raises
SummarizationFailedError instead.
"""

from typing import Any, Dict, Optional


class QuillnoteError(Exception):
    """
    Base exception for all Quillnote application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(QuillnoteError):
    """
    Raised when client input fails a business rule.

    When:    Missing note ID on summarize, blank title or content.
    HTTP:    400 Bad Request

    Schema-level problems (body is not JSON, wrong types) are reported by
    FastAPI's RequestValidationError and rendered with the same status.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(QuillnoteError):
    """
    Raised when the request carries no valid session.

    When:    Missing bearer token, bad signature, expired or malformed token,
             or no verification secret configured.
    HTTP:    401 Unauthorized

    The reason is kept in `context` for the logs; the client always sees
    the same "Unauthorized" message.
    """

    def __init__(
        self,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message="Unauthorized", context=ctx)
        self.reason = reason


class NotFoundError(QuillnoteError):
    """
    Raised when a requested resource does not exist for the caller.

    When:    The note ID is unknown OR the note belongs to another user.
    HTTP:    404 Not Found

    Both cases produce the same message so a caller cannot probe for
    the existence of other users' notes.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(QuillnoteError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Query details
    stay in `context` and the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SummarizationFailedError(QuillnoteError):
    """
    Umbrella error surfaced to callers for any provider-side failure.

    HTTP:    500 Internal Server Error

    Callers only learn that summarization did not succeed. Which provider
    failed and why is recorded in `context` and chained as `__cause__`.
    """

    MESSAGE = "Failed to generate summary. Please check your API key configuration."

    def __init__(
        self,
        provider: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if provider:
            ctx["provider"] = provider
        super().__init__(message=self.MESSAGE, context=ctx)
        self.provider = provider


class LLMServiceError(QuillnoteError):
    """
    Base class for failures raised inside a provider adapter.

    Never rendered directly; SummaryService collapses every subclass
    into SummarizationFailedError.
    """

    def __init__(
        self,
        message: str = "AI summarization service failed",
        provider: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if provider:
            ctx["provider"] = provider
        super().__init__(message=message, context=ctx)
        self.provider = provider


class ConfigurationMissingError(LLMServiceError):
    """
    Raised when the selected provider's API key is not configured.

    Kept separate from ProviderError so operators can tell "never
    configured" apart from "configured but failing" in the logs.
    """

    def __init__(
        self,
        provider: str,
        setting: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["setting"] = setting
        super().__init__(
            message=f"{provider} API key not configured ({setting})",
            provider=provider,
            context=ctx,
        )
        self.setting = setting


class ProviderError(LLMServiceError):
    """
    Raised when a provider answers with a non-success HTTP status.

    Attributes:
        status_code: HTTP status returned by the provider
        status_text: Reason phrase returned by the provider
    """

    def __init__(
        self,
        provider: str,
        status_code: int,
        status_text: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["status_code"] = status_code
        super().__init__(
            message=f"{provider} API error: {status_text}",
            provider=provider,
            context=ctx,
        )
        self.status_code = status_code
        self.status_text = status_text
