"""Configuration schema and validation using Pydantic.

Validates and coerces values from the environment and from programmatic
overrides into typed settings with defaults. The credential keeps its
historical ``GEMINI_API_KEY`` name; every other field reads an
``SRS_ASSIST_``-prefixed environment variable.
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    API_KEY_ENV_VAR,
    DEFAULT_CONFIDENCE,
    DEFAULT_MODEL,
    MAX_ATTEMPTS,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BACKOFF_STEP,
)


class SRSAssistSettings(BaseSettings):
    """Pydantic settings schema for the assistant."""

    model_config = SettingsConfigDict(
        env_prefix="SRS_ASSIST_",
        env_file=None,  # .env files are loaded explicitly by env_loader
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
        validation_alias=AliasChoices(API_KEY_ENV_VAR, "SRS_ASSIST_API_KEY"),
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier",
        min_length=1,
    )

    request_timeout_seconds: float = Field(
        default=REQUEST_TIMEOUT_SECONDS,
        description="Per-attempt request timeout",
        gt=0,
    )

    max_attempts: int = Field(
        default=MAX_ATTEMPTS,
        description="Attempts per logical LLM call",
        ge=1,
    )

    backoff_step_seconds: float = Field(
        default=RETRY_BACKOFF_STEP,
        description="Linear backoff step between attempts",
        ge=0,
    )

    rate_limit_max_requests: int = Field(
        default=RATE_LIMIT_MAX_REQUESTS,
        description="Requests admitted per rate window",
        ge=1,
    )

    rate_limit_window_seconds: float = Field(
        default=RATE_LIMIT_WINDOW,
        description="Length of the rolling rate window",
        gt=0,
    )

    default_confidence: float = Field(
        default=DEFAULT_CONFIDENCE,
        description="Confidence used when the model omits one",
        ge=0,
        le=1,
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, v: Any) -> Any:
        """Treat an empty or whitespace-only key as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("model")
    @classmethod
    def strip_model(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("model must not be blank")
        return v
