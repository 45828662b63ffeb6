# src/core/models.py - v2
"""Core domain models: QueryRequest, QueryResult."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

from pydantic import BaseModel, Field, ValidationError, computed_field

from docquery.core.errors import InvalidInput


class QueryRequest(BaseModel):
    """Normalized (document, questions) pair.

    Build through ``from_raw`` so trimming and blank-dropping are applied
    before anything downstream sees the values.
    """

    model_config = {"frozen": True}

    document_text: str = Field(min_length=1)
    questions: tuple[str, ...] = Field(min_length=1)

    @classmethod
    def from_raw(cls, document_text: str | None, questions: Sequence[str] | None) -> QueryRequest:
        """Validate and normalize raw caller input.

        Raises:
            InvalidInput: Blank document, no non-blank question, or text that
                is not valid unicode.
        """
        document = (document_text or "").strip()
        if not document:
            raise InvalidInput("document text is empty")

        if isinstance(questions, str):
            raise InvalidInput("questions must be a sequence of strings, not a single string")

        cleaned = tuple(q.strip() for q in (questions or ()) if q and q.strip())
        if not cleaned:
            raise InvalidInput("no non-blank question supplied")

        try:
            return cls(document_text=document, questions=cleaned)
        except ValidationError as e:
            # e.g. lone surrogates from surrogateescape-decoded input
            raise InvalidInput(f"input is not valid text: {e.errors()[0]['msg']}") from e


class QueryResult(BaseModel):
    """One (question, answer) pair for display."""

    position: int
    question: str
    answer: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def result_id(self) -> str:
        """Stable identifier from position and question text."""
        digest = hashlib.sha256(self.question.encode("utf-8")).hexdigest()[:12]
        return f"{self.position}-{digest}"


def build_results(questions: Sequence[str], answers: Sequence[str]) -> list[QueryResult]:
    """Pair questions with their answers, position by position."""
    return [
        QueryResult(position=i, question=q, answer=a)
        for i, (q, a) in enumerate(zip(questions, answers))
    ]
