# src/query/response_parser.py - v1
"""Strict parsing of the model's JSON answer payload."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from docquery.core.errors import MalformedResponse
from docquery.query.prompts import AnswerPayload

logger = logging.getLogger(__name__)

NO_ANSWER_SENTINEL = "No answer found."


def parse_answers(raw_text: str) -> list[str]:
    """Parse raw model output into an ordered list of answers.

    Raises:
        MalformedResponse: Empty text, invalid JSON, missing ``answers`` or a
            non-string element.
    """
    text = (raw_text or "").strip()
    if not text:
        raise MalformedResponse("model returned an empty response", raw_text=raw_text)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"response is not valid JSON: {e}", raw_text=raw_text) from e

    if not isinstance(data, dict):
        raise MalformedResponse(
            f"expected a JSON object, got {type(data).__name__}", raw_text=raw_text
        )

    try:
        payload = AnswerPayload.model_validate(data, strict=True)
    except ValidationError as e:
        raise MalformedResponse(
            f"response does not match {{answers: string[]}}: {e.error_count()} error(s)",
            raw_text=raw_text,
        ) from e

    return payload.answers


def align_answers(answers: list[str], question_count: int) -> list[str]:
    """Return exactly ``question_count`` answers.

    Missing or blank positions are filled with NO_ANSWER_SENTINEL; surplus
    answers are dropped so a cached entry always matches its question list.
    """
    answers = [a if a.strip() else NO_ANSWER_SENTINEL for a in answers]
    if len(answers) < question_count:
        logger.info(
            "Model returned %d answers for %d questions; padding",
            len(answers), question_count,
        )
        return answers + [NO_ANSWER_SENTINEL] * (question_count - len(answers))
    if len(answers) > question_count:
        logger.warning(
            "Model returned %d answers for %d questions; truncating",
            len(answers), question_count,
        )
        return answers[:question_count]
    return list(answers)
