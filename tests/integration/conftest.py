# tests/integration/conftest.py - v9
"""Fixtures for integration tests.

The full stack is wired through the facade; only the Gemini SDK boundary is
replaced, by a scripted GenerativeModel that records every request.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from docquery.config.settings import Settings


class ScriptedGemini:
    """Stand-in for google.generativeai.GenerativeModel.

    Replies are keyed by question text, so a request for N questions returns
    N answers in the asked order. Unknown questions get an empty answer.
    """

    def __init__(self, replies: dict[str, str]) -> None:
        self.replies = replies
        self.calls: list[dict] = []
        self.fail_with: Exception | None = None
        self.raw_override: str | None = None
        self.blocked = False

    async def generate_content_async(self, contents, generation_config=None, request_options=None):
        self.calls.append({
            "contents": contents,
            "generation_config": generation_config,
            "request_options": request_options,
        })
        if self.fail_with is not None:
            raise self.fail_with
        if self.blocked:
            return _BlockedResponse()
        if self.raw_override is not None:
            text = self.raw_override
        else:
            prompt = contents[0]["parts"][0]["text"]
            block = prompt.split("--- QUESTIONS START ---")[1].split("--- QUESTIONS END ---")[0]
            asked = [
                line.split(". ", 1)[1].strip()
                for line in block.strip().splitlines()
                if ". " in line
            ]
            text = json.dumps({"answers": [self.replies.get(q, "") for q in asked]})
        return SimpleNamespace(
            text=text,
            usage_metadata=SimpleNamespace(prompt_token_count=50, candidates_token_count=10),
        )


class _BlockedResponse:
    """Candidate without parts, as returned for a safety block."""

    usage_metadata = None

    @property
    def text(self) -> str:
        raise ValueError("The `response.text` quick accessor requires a valid `Part`")


@pytest.fixture
def gemini():
    """Patch the Gemini SDK and yield the scripted model."""
    scripted = ScriptedGemini({
        "What is the grace period?": "The grace period is thirty days.",
        "Is maternity covered?": "Yes, after 24 months of continuous coverage.",
    })
    with patch("google.generativeai.configure"), patch(
        "google.generativeai.GenerativeModel", MagicMock(return_value=scripted),
    ):
        yield scripted


@pytest.fixture
def int_settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key="integration-key", llm_timeout_s=30)
