# src/core/errors.py - v1
"""Error taxonomy surfaced by the query layer.

Every failure reaching the caller is a QueryError subclass with a stable
``kind`` and a ``user_message`` fit for display. Provider errors also carry a
structured ``category`` assigned by the LLM adapter.
"""

from __future__ import annotations

from typing import Literal

ProviderErrorCategory = Literal["quota", "rate_limit", "auth", "timeout", "generic"]


class QueryError(Exception):
    """Base class for all query-layer failures."""

    kind: str = "query_error"

    @property
    def user_message(self) -> str:
        return str(self)


class InvalidInput(QueryError):
    """Document text or question list is missing/blank."""

    kind = "invalid_input"

    @property
    def user_message(self) -> str:
        return (
            "Please provide the document text and at least one question. "
            f"({self})"
        )


class NotConfigured(QueryError):
    """The LLM client has no credential configured."""

    kind = "not_configured"

    @property
    def user_message(self) -> str:
        return (
            "API key is missing. Please set the GEMINI_API_KEY "
            "(or API_KEY) environment variable."
        )


class MalformedResponse(QueryError):
    """Provider output is not JSON or does not match {"answers": [str, ...]}."""

    kind = "malformed_response"

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text

    @property
    def user_message(self) -> str:
        return (
            "The model did not return a valid response. The document might be "
            "too complex or the query too ambiguous. Please try again with a "
            "clearer document or questions."
        )


class ProviderError(QueryError):
    """Outbound LLM call failed."""

    kind = "provider_error"

    def __init__(
        self,
        provider_message: str,
        category: ProviderErrorCategory = "generic",
        provider: str = "",
    ) -> None:
        self.provider_message = provider_message
        self.category: ProviderErrorCategory = category
        self.provider = provider
        prefix = f"{provider} " if provider else ""
        super().__init__(f"{prefix}provider error ({category}): {provider_message}")

    @property
    def user_message(self) -> str:
        hints = {
            "quota": "The API quota has been exceeded.",
            "rate_limit": "Too many requests were sent; wait a moment and retry.",
            "auth": "The API key was rejected by the provider.",
            "timeout": "The provider did not respond in time.",
            "generic": "The provider returned an error.",
        }
        return f"Failed to retrieve answers. {hints[self.category]} ({self.provider_message})"
