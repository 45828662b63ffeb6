# src/tracking/call_logger.py - v2
"""LLM call logging: one record per outbound call, success or failure."""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone

from docquery.llm.models import LLMResponse
from docquery.tracking.models import LLMCallRecord

logger = logging.getLogger(__name__)


class CallLogger:
    """Accumulates LLM call records for the lifetime of an orchestrator."""

    def __init__(self) -> None:
        self._records: list[LLMCallRecord] = []
        self._lock = threading.Lock()

    def record_success(self, fingerprint: str, response: LLMResponse) -> LLMCallRecord:
        """Record a completed call with its token usage."""
        record = LLMCallRecord(
            call_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            fingerprint=fingerprint,
            provider=response.provider,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            total_tokens=response.input_tokens + response.output_tokens,
            latency_ms=response.latency_ms,
            status="success",
        )
        self._append(record)
        return record

    def record_failure(
        self,
        fingerprint: str,
        provider: str,
        model: str,
        error_kind: str,
    ) -> LLMCallRecord:
        """Record a call that raised before producing usable output."""
        record = LLMCallRecord(
            call_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            fingerprint=fingerprint,
            provider=provider,
            model=model,
            status="failed",
            error_kind=error_kind,
        )
        self._append(record)
        return record

    def _append(self, record: LLMCallRecord) -> None:
        with self._lock:
            self._records.append(record)
        logger.debug(
            "LLM call %s: status=%s tokens=%d latency=%dms",
            record.call_id, record.status, record.total_tokens, record.latency_ms,
        )

    @property
    def records(self) -> list[LLMCallRecord]:
        """All recorded calls."""
        with self._lock:
            return list(self._records)

    @property
    def total_tokens(self) -> int:
        return sum(r.total_tokens for r in self.records)

    @property
    def total_calls(self) -> int:
        return len(self.records)

    @property
    def failed_calls(self) -> int:
        return sum(1 for r in self.records if r.status == "failed")
