# src/query/prompts.py - v1
"""Prompt and structured response schema for document-grounded answering."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

SYSTEM_PROMPT = (
    "You are an expert legal and policy analysis assistant acting as an "
    "intelligent query-retrieval system."
)

_ANSWER_PROMPT_TEMPLATE = """\
Carefully and thoroughly read the document text provided below.
Based *only* on the information contained within this document, answer each of the user's questions.
Ensure your answers are accurate, concise, and directly reference the information available in the document.
Do not use any external knowledge. If an answer cannot be found in the document, state that clearly.
Return your response as a JSON object with a single field "answers": an array of strings.
Answer the questions in the order they are numbered. The "answers" array must contain exactly {count} entries, one per question.

--- DOCUMENT TEXT START ---
{document}
--- DOCUMENT TEXT END ---

--- QUESTIONS START ---
{questions}
--- QUESTIONS END ---
"""


class AnswerPayload(BaseModel):
    """Expected JSON shape of the model output."""

    answers: list[str] = Field(
        description="The detailed answer to each of the user's questions, in order.",
    )


def format_questions(questions: Sequence[str]) -> str:
    """Number questions one per line, starting at 1."""
    return "\n".join(f"{i}. {q}" for i, q in enumerate(questions, start=1))


def build_answer_prompt(document_text: str, questions: Sequence[str]) -> str:
    """Build the single user prompt embedding the document and numbered questions."""
    return _ANSWER_PROMPT_TEMPLATE.format(
        count=len(questions),
        document=document_text,
        questions=format_questions(questions),
    )
