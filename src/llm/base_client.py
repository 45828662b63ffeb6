# src/llm/base_client.py - v2
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from docquery.llm.models import LLMResponse, Message


class BaseLLMClient(ABC):
    """Unified interface for LLM providers.

    Adapters translate provider failures into ``ProviderError`` with an
    explicit category; callers never parse provider messages.
    """

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 8192,
        temperature: float = 0.1,
        response_format: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Text completion, JSON-constrained when response_format is given."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (google, ...)."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether a credential is available for outbound calls."""
