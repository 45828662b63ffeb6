# src/query/orchestrator.py - v2
"""Query orchestrator: validated request -> cached or freshly generated answers.

Flow per call:
  1. Normalize and validate input (InvalidInput before any I/O)
  2. Fingerprint (document, ordered questions)
  3. Sweep expired entries, then consult the cache store
  4. On a miss, issue exactly one structured LLM call
  5. Parse strictly, pad short answer lists, store, return

Failed calls write nothing to the cache and are never retried here.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING

from docquery.cache.fingerprint import compute_fingerprint
from docquery.core.errors import MalformedResponse, NotConfigured, ProviderError, QueryError
from docquery.core.models import QueryRequest, QueryResult, build_results
from docquery.llm.models import Message
from docquery.logging.context import clear_context, set_query_context
from docquery.query.prompts import SYSTEM_PROMPT, AnswerPayload, build_answer_prompt
from docquery.query.response_parser import align_answers, parse_answers

if TYPE_CHECKING:
    from docquery.cache.base_cache_store import BaseCacheStore
    from docquery.config.settings import Settings
    from docquery.llm.base_client import BaseLLMClient
    from docquery.tracking.call_logger import CallLogger

logger = logging.getLogger(__name__)

_DEFAULT_TEMPERATURE = 0.1
_DEFAULT_MAX_OUTPUT_TOKENS = 8192


class QueryOrchestrator:
    """Answers questions about a document through the cache and one LLM call.

    Args:
        llm_client: Client used for outbound calls. Must be configured.
        cache_store: Shared answer cache; the orchestrator keeps no other state.
        settings: Generation parameters and single-flight switch. Defaults
            apply when None.
        call_logger: Optional per-call tracking.

    Raises:
        NotConfigured: If the client has no credential.
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        cache_store: BaseCacheStore,
        settings: Settings | None = None,
        call_logger: CallLogger | None = None,
    ) -> None:
        if not llm_client.is_configured:
            raise NotConfigured(
                f"LLM client '{llm_client.provider_name}' has no API key configured"
            )
        self._client = llm_client
        self._cache = cache_store
        self._call_logger = call_logger

        if settings is None:
            self._model = ""
            self._temperature = _DEFAULT_TEMPERATURE
            self._max_tokens = _DEFAULT_MAX_OUTPUT_TOKENS
            self._single_flight = False
        else:
            self._model = settings.llm_model
            self._temperature = settings.llm_temperature
            self._max_tokens = settings.llm_max_output_tokens
            self._single_flight = settings.query_single_flight

        self._inflight: dict[str, asyncio.Future[list[str]]] = {}

    @property
    def cache_store(self) -> BaseCacheStore:
        return self._cache

    async def answer(
        self, document_text: str, questions: Sequence[str]
    ) -> list[str]:
        """Return one answer per non-blank question, in question order.

        Raises:
            InvalidInput: Blank document, no non-blank question, or text that
                is not valid unicode.
            MalformedResponse: Model output is not ``{"answers": [str, ...]}``.
            ProviderError: The outbound call failed.
        """
        request = QueryRequest.from_raw(document_text, questions)
        return await self.answer_request(request)

    async def answer_results(
        self, document_text: str, questions: Sequence[str]
    ) -> list[QueryResult]:
        """Like answer(), paired with the normalized questions for display."""
        request = QueryRequest.from_raw(document_text, questions)
        answers = await self.answer_request(request)
        return build_results(request.questions, answers)

    async def answer_request(self, request: QueryRequest) -> list[str]:
        """Answer an already-normalized request."""
        fingerprint = compute_fingerprint(request.document_text, request.questions)
        set_query_context(uuid.uuid4().hex[:12], fingerprint[:12])
        try:
            await self._cache.sweep()

            cached = await self._cache.get(fingerprint)
            if cached is not None:
                logger.info("Cache hit for %d question(s)", len(request.questions))
                return cached

            if self._single_flight:
                return await self._coalesced_fetch(request, fingerprint)
            return await self._fetch_and_store(request, fingerprint)
        finally:
            clear_context()

    # ------------------------------------------------------------------
    # Miss path
    # ------------------------------------------------------------------

    async def _coalesced_fetch(self, request: QueryRequest, fingerprint: str) -> list[str]:
        """Share one outbound call between concurrent identical misses.

        If the leading call is cancelled, a waiting follower takes over as
        the new leader instead of inheriting the cancellation.
        """
        while True:
            pending = self._inflight.get(fingerprint)
            if pending is None:
                break
            logger.debug("Joining in-flight request")
            try:
                # shield: a cancelled follower must not cancel the shared call
                return list(await asyncio.shield(pending))
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                logger.debug("In-flight request was cancelled; retrying as leader")
                if self._inflight.get(fingerprint) is pending:
                    del self._inflight[fingerprint]

        future: asyncio.Future[list[str]] = asyncio.get_running_loop().create_future()
        self._inflight[fingerprint] = future
        try:
            answers = await self._fetch_and_store(request, fingerprint)
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unawaited future does not log a traceback
            future.exception()
            raise
        else:
            future.set_result(answers)
            return list(answers)
        finally:
            if not future.done():
                future.cancel()
            if self._inflight.get(fingerprint) is future:
                del self._inflight[fingerprint]

    async def _fetch_and_store(self, request: QueryRequest, fingerprint: str) -> list[str]:
        question_count = len(request.questions)
        prompt = build_answer_prompt(request.document_text, request.questions)
        provider = self._client.provider_name

        logger.info(
            "Cache miss: querying %s for %d question(s), document=%d chars",
            provider, question_count, len(request.document_text),
        )

        try:
            response = await self._client.complete(
                messages=[Message(role="user", content=prompt)],
                system=SYSTEM_PROMPT,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                response_format=AnswerPayload,
            )
        except ProviderError as e:
            logger.warning("Provider call failed (%s): %s", e.category, e.provider_message)
            self._record_failure(fingerprint, e)
            raise
        except QueryError as e:
            self._record_failure(fingerprint, e)
            raise
        except Exception as e:
            logger.warning("Provider call failed (unclassified): %s", e)
            err = ProviderError(str(e) or type(e).__name__, category="generic", provider=provider)
            self._record_failure(fingerprint, err)
            raise err from e

        try:
            answers = parse_answers(response.content)
        except MalformedResponse as e:
            logger.warning("Malformed model response: %s", e)
            self._record_failure(fingerprint, e)
            raise

        if self._call_logger is not None:
            self._call_logger.record_success(fingerprint, response)

        answers = align_answers(answers, question_count)
        await self._cache.put(fingerprint, answers)
        return answers

    def _record_failure(self, fingerprint: str, error: QueryError) -> None:
        if self._call_logger is None:
            return
        error_kind = error.kind
        if isinstance(error, ProviderError):
            error_kind = f"{error.kind}:{error.category}"
        self._call_logger.record_failure(
            fingerprint=fingerprint,
            provider=self._client.provider_name,
            model=self._model,
            error_kind=error_kind,
        )
