# src/api/facade.py - v2
"""Public API facade: wire settings, client, cache and orchestrator.

Usage:
    from docquery.api.facade import create_orchestrator
    orchestrator = create_orchestrator()
    answers = await orchestrator.answer(document_text, questions)

Keep one orchestrator per process to benefit from the answer cache; the
one-shot ``answer_questions`` builds a fresh one unless given an instance.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from docquery.api.models import AnswerReport, ConfigOverrides
from docquery.config.settings import Settings
from docquery.core.models import build_results
from docquery.query.orchestrator import QueryOrchestrator

if TYPE_CHECKING:
    from docquery.cache.base_cache_store import BaseCacheStore
    from docquery.llm.base_client import BaseLLMClient
    from docquery.tracking.call_logger import CallLogger

logger = logging.getLogger(__name__)


def parse_questions(text: str) -> list[str]:
    """Split pasted text into questions, one per line, dropping blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def create_orchestrator(
    settings: Settings | None = None,
    llm_client: BaseLLMClient | None = None,
    cache_store: BaseCacheStore | None = None,
    call_logger: CallLogger | None = None,
) -> QueryOrchestrator:
    """Build a QueryOrchestrator from settings.

    Args:
        settings: Global settings. Loaded from environment/.env if None.
        llm_client: Client override (tests, custom providers).
        cache_store: Store override; created from settings if None.
        call_logger: Optional call tracking.

    Raises:
        NotConfigured: No API key available to the client.
    """
    settings = settings or Settings()

    if llm_client is None:
        from docquery.llm.client_factory import create_client_from_settings

        llm_client = create_client_from_settings(settings)

    if cache_store is None:
        from docquery.cache.cache_factory import create_cache_store

        cache_store = create_cache_store(settings)

    return QueryOrchestrator(
        llm_client=llm_client,
        cache_store=cache_store,
        settings=settings,
        call_logger=call_logger,
    )


async def answer_questions(
    document_text: str,
    questions: Sequence[str],
    settings: Settings | None = None,
    overrides: ConfigOverrides | None = None,
    orchestrator: QueryOrchestrator | None = None,
) -> AnswerReport:
    """Answer questions about a document and return display-ready results.

    Args:
        document_text: Pasted document text.
        questions: Questions in display order; blank entries are ignored.
        settings: Global settings. Loaded from environment/.env if None.
        overrides: Per-call overrides applied on top of settings.
        orchestrator: Existing orchestrator to reuse (and its cache).

    Raises:
        QueryError: Any of InvalidInput, NotConfigured, MalformedResponse,
            ProviderError.
    """
    if orchestrator is None:
        settings = _apply_overrides(settings or Settings(), overrides)
        orchestrator = create_orchestrator(settings)
    elif overrides is not None:
        logger.warning("Overrides ignored: an orchestrator instance was supplied")

    t0 = time.monotonic()
    results = await orchestrator.answer_results(document_text, questions)
    elapsed = int((time.monotonic() - t0) * 1000)

    logger.info("Answered %d question(s) in %dms", len(results), elapsed)
    return AnswerReport(results=results, elapsed_ms=elapsed)


def _apply_overrides(settings: Settings, overrides: ConfigOverrides | None) -> Settings:
    """Apply per-call config overrides if provided."""
    if overrides is None:
        return settings
    values = overrides.model_dump(exclude_none=True)
    if not values:
        return settings
    current = settings.model_dump()
    current.update(values)
    return Settings(_env_file=None, **current)
