# src/llm/client_factory.py - v3
"""Factory: instantiate an LLM client from provider name."""

from __future__ import annotations

import importlib
import logging

from docquery.config.settings import Settings
from docquery.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "google": "docquery.llm.adapters.google_adapter.GoogleAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the correct adapter from provider name.

    Args:
        provider: Provider identifier (google, or a registered custom name).
        model: Model name (e.g. gemini-2.5-flash).
        settings: Application settings (API key, timeout).
        **kwargs: Additional provider-specific arguments.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs["model"] = model
    if settings is not None:
        init_kwargs.setdefault("api_key", settings.gemini_api_key)
        init_kwargs.setdefault("timeout_s", settings.llm_timeout_s)

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def create_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Create the client configured by LLM_PROVIDER / LLM_MODEL."""
    return create_llm_client(settings.llm_provider, settings.llm_model, settings)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider identifier.
        class_path: Fully qualified class path implementing BaseLLMClient.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
