"""Resolved configuration for the generation pipeline.

Configuration is resolved once and then flows through the client as an
immutable value. ``origin`` records where each field came from.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from ..client.configuration import RateLimitConfig, RetryConfig
from .schema import SRSAssistSettings

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]


@dataclass(frozen=True)
class ResolvedConfig:
    """Validated, merged settings. Never prints the API key."""

    api_key: str | None
    model: str
    request_timeout_seconds: float
    max_attempts: int
    backoff_step_seconds: float
    rate_limit_max_requests: int
    rate_limit_window_seconds: float
    default_confidence: float
    origin: SourceMap = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"ResolvedConfig({', '.join(f'{k}={v!r}' for k, v in self.redacted_summary().items())})"

    def __repr__(self) -> str:
        return self.__str__()

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def redacted_summary(self) -> dict[str, Any]:
        """Field values safe for logs and terminals."""
        values = asdict(self)
        values.pop("origin")
        values["api_key"] = "[SET]" if self.api_key else "[NOT SET]"
        return values

    def with_overrides(self, **overrides: Any) -> "ResolvedConfig":
        """Return a re-validated copy with overrides applied and marked programmatic.

        Raises:
            ValueError: If an override names an unknown field.
            pydantic.ValidationError: If the merged values fail validation.
        """
        names = [name for name in self.__dataclass_fields__ if name != "origin"]
        unknown = set(overrides) - set(names)
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

        merged = {name: getattr(self, name) for name in names} | overrides
        settings = SRSAssistSettings(**merged)
        origin = {**self.origin, **dict.fromkeys(overrides, "programmatic")}
        return ResolvedConfig(**settings.model_dump(), origin=origin)

    def rate_limit_config(self) -> RateLimitConfig:
        return RateLimitConfig(
            max_requests=self.rate_limit_max_requests,
            window_seconds=self.rate_limit_window_seconds,
        )

    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.max_attempts,
            backoff_step=self.backoff_step_seconds,
        )
