# src/tracking/models.py - v2
"""Tracking domain models: LLMCallRecord."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class LLMCallRecord(BaseModel):
    """Individual outbound LLM call log entry."""

    call_id: str
    timestamp: datetime
    fingerprint: str
    provider: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0
    status: Literal["success", "failed"]
    error_kind: str | None = None
