# src/api/models.py - v2
"""API-level models: ConfigOverrides, QueryInput, AnswerReport."""

from __future__ import annotations

from pydantic import BaseModel, Field

from docquery.core.models import QueryResult


class ConfigOverrides(BaseModel):
    """Per-call overrides, a validated subset of Settings."""

    llm_model: str | None = None
    llm_temperature: float | None = None
    llm_max_output_tokens: int | None = None
    llm_timeout_s: float | None = None
    cache_ttl_seconds: float | None = None
    query_single_flight: bool | None = None


class QueryInput(BaseModel):
    """Raw caller input before normalization."""

    document_text: str
    questions: list[str] = Field(default_factory=list)


class AnswerReport(BaseModel):
    """Return value of facade.answer_questions()."""

    results: list[QueryResult] = Field(default_factory=list)
    elapsed_ms: int = 0

    @property
    def answers(self) -> list[str]:
        return [r.answer for r in self.results]
