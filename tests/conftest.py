# tests/conftest.py - v2
"""Shared test fixtures for unit and integration tests.

Provides a mock LLM client, a controllable clock and isolated settings.
No network: every outbound call goes to an AsyncMock.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from docquery.cache.memory_store import InMemoryCacheStore
from docquery.config.settings import Settings
from docquery.llm.models import LLMResponse
from docquery.query.orchestrator import QueryOrchestrator


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(content: str) -> LLMResponse:
    return LLMResponse(
        content=content,
        input_tokens=120,
        output_tokens=30,
        model="gemini-2.5-flash",
        provider="google",
        latency_ms=250,
    )


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_document() -> str:
    return "Grace period is thirty days."


@pytest.fixture
def sample_questions() -> list[str]:
    return ["What is the grace period?"]


# === FIXTURES: Settings / clock / store ===


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from .env, with a dummy credential."""
    return Settings(_env_file=None, gemini_api_key="test-key")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(ttl_seconds=300.0, clock=clock)


# === FIXTURES: Mock LLM ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Standard mock LLM response for the sample document."""
    return make_response('{"answers": ["The grace period is thirty days."]}')


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.is_configured = True
    client.provider_name = "mock"
    return client


@pytest.fixture
def orchestrator(
    mock_llm_client: AsyncMock,
    cache_store: InMemoryCacheStore,
    settings: Settings,
) -> QueryOrchestrator:
    return QueryOrchestrator(
        llm_client=mock_llm_client,
        cache_store=cache_store,
        settings=settings,
    )


@pytest.fixture
def response_factory():
    """Build an LLMResponse from raw model text."""
    return make_response
