"""Supporting components for the Gemini API client

The client itself lives at ``srs_assist.gemini_client.GeminiClient``; this
package holds the pieces it is assembled from.
"""  # noqa: D415

from .configuration import RateLimitConfig, RetryConfig
from .error_handler import AttemptFailure, GenerationErrorHandler
from .rate_limiter import RateLimiter

__all__ = [
    "AttemptFailure",
    "GenerationErrorHandler",
    "RateLimitConfig",
    "RateLimiter",
    "RetryConfig",
]
