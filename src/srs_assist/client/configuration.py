"""
Client configuration handling for Gemini API integration
"""

from dataclasses import dataclass

from ..constants import (
    MAX_ATTEMPTS,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW,
    RETRY_BACKOFF_STEP,
)


@dataclass(frozen=True)
class RateLimitConfig:
    """Admission parameters for the shared request window"""

    max_requests: int = RATE_LIMIT_MAX_REQUESTS
    window_seconds: float = RATE_LIMIT_WINDOW

    def __post_init__(self):
        if self.max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")


@dataclass(frozen=True)
class RetryConfig:
    """Attempt bound and linear backoff for one logical LLM call"""

    max_attempts: int = MAX_ATTEMPTS
    backoff_step: float = RETRY_BACKOFF_STEP

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.backoff_step < 0:
            raise ValueError("backoff_step must be >= 0")

    def delay_after(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return self.backoff_step * attempt
