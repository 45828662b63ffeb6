# src/config/settings.py - v1
"""Typed configuration loaded from environment / .env via pydantic-settings.

Single source of truth for deployment-specific settings. The only required
value is the Gemini credential; its absence is reported as NotConfigured by
the query layer rather than failing here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM ===
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    llm_provider: str = "google"
    llm_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.1
    llm_max_output_tokens: int = 8192
    llm_timeout_s: float = 120.0

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["memory"] = "memory"
    cache_ttl_seconds: float = 300.0

    # === Query ===
    query_single_flight: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("llm_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:  # noqa: N805
        if not 0.0 <= v <= 2.0:
            raise ValueError("llm_temperature must be between 0.0 and 2.0")
        return v

    @field_validator("llm_max_output_tokens")
    @classmethod
    def validate_max_output_tokens(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("llm_max_output_tokens must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.llm_timeout_s <= 0:
            errors.append("LLM_TIMEOUT_S must be > 0")

        if self.cache_ttl_seconds <= 0:
            errors.append("CACHE_TTL_SECONDS must be > 0")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def has_credentials(self) -> bool:
        """Whether an LLM API key is configured."""
        return bool(self.gemini_api_key.strip())


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment/.env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or the CLI).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
