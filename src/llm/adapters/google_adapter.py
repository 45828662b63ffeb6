# src/llm/adapters/google_adapter.py - v3
"""Google Gemini adapter implementing BaseLLMClient.

Uses the google-generativeai SDK. Provider exceptions are mapped to
ProviderError categories by exception type; see classify_google_error.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from pydantic import BaseModel

from docquery.core.errors import MalformedResponse, ProviderError, ProviderErrorCategory
from docquery.llm.base_client import BaseLLMClient
from docquery.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)


class GoogleAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        api_key: str = "",
        timeout_s: float = 120.0,
        **kwargs: Any,
    ):
        self._model = model
        self._api_key = api_key.strip()
        self._timeout_s = timeout_s

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 8192,
        temperature: float = 0.1,
        response_format: type[BaseModel] | None = None,
    ) -> LLMResponse:
        import google.generativeai as genai

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(
            self._model,
            system_instruction=system,
        )

        gen_config: dict[str, Any] = {
            "max_output_tokens": max_tokens,
            "temperature": temperature,
        }
        if response_format is not None:
            gen_config["response_mime_type"] = "application/json"
            gen_config["response_schema"] = _to_gemini_schema(
                response_format.model_json_schema()
            )

        contents = []
        for m in messages:
            role = "model" if m.role == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": m.content}]})

        t0 = time.monotonic()
        try:
            resp = await model.generate_content_async(
                contents,
                generation_config=gen_config,
                request_options={"timeout": self._timeout_s},
            )
        except Exception as e:
            category = classify_google_error(e)
            logger.warning("Gemini call failed (%s): %s", category, e)
            raise ProviderError(str(e), category=category, provider="google") from e
        latency = int((time.monotonic() - t0) * 1000)

        try:
            text = resp.text or ""
        except ValueError as e:
            # No parts: safety block or empty candidate
            logger.warning("Gemini returned no text: %s", e)
            raise MalformedResponse(f"model returned no text: {e}") from e

        usage = getattr(resp, "usage_metadata", None)
        return LLMResponse(
            content=text,
            input_tokens=getattr(usage, "prompt_token_count", 0) if usage else 0,
            output_tokens=getattr(usage, "candidates_token_count", 0) if usage else 0,
            model=self._model,
            provider="google",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)


def classify_google_error(error: Exception) -> ProviderErrorCategory:
    """Map a google-generativeai / google-api-core exception to a category.

    Unknown exception types fall back to "generic".
    """
    import asyncio

    from google.api_core import exceptions as gexc

    if isinstance(error, gexc.ResourceExhausted):
        # 429 covers both per-minute throttling and exhausted billing quota
        return "quota" if "quota" in str(error).lower() else "rate_limit"
    if isinstance(error, gexc.TooManyRequests):
        return "rate_limit"
    if isinstance(error, (gexc.Unauthenticated, gexc.PermissionDenied)):
        return "auth"
    if isinstance(error, gexc.InvalidArgument) and "api key" in str(error).lower():
        return "auth"
    if isinstance(error, (gexc.DeadlineExceeded, asyncio.TimeoutError, TimeoutError)):
        return "timeout"
    return "generic"


def _to_gemini_schema(schema: Any) -> Any:
    """Strip JSON-schema keys the Gemini schema subset rejects (titles, defaults)."""
    if isinstance(schema, dict):
        return {
            k: _to_gemini_schema(v)
            for k, v in schema.items()
            if k not in ("title", "default", "additionalProperties")
        }
    if isinstance(schema, list):
        return [_to_gemini_schema(v) for v in schema]
    return schema
