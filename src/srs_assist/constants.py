"""Project-wide constants for the SRS assistant.

Centralizes the magic numbers of the generation pipeline: provider defaults,
retry and backoff bounds, rate-limit window, and normalization defaults.
"""

# Provider
DEFAULT_MODEL = "gemini-2.5-flash"
REQUEST_TIMEOUT_SECONDS = 60.0
API_KEY_ENV_VAR = "GEMINI_API_KEY"

# Retry policy for a single logical LLM call
MAX_ATTEMPTS = 3
RETRY_BACKOFF_STEP = 0.8  # seconds, multiplied by the attempt number
AUTH_FAILURE_STATUS_CODES = frozenset({401, 403})
TRANSIENT_STATUS_CODES = frozenset({429, 500, 503})

# Schema validation: the original call plus one corrective round-trip
MAX_VALIDATION_ATTEMPTS = 2

# Rate limiting (shared across all operations)
RATE_LIMIT_MAX_REQUESTS = 30
RATE_LIMIT_WINDOW = 60  # seconds

# Normalization
DEFAULT_CONFIDENCE = 0.5
LONG_SELECTION_WORD_LIMIT = 500

# Logged prompt/response excerpts
LOG_PROMPT_EXCERPT = 1000
LOG_RESPONSE_EXCERPT = 2000

# User-facing messages
MSG_MISSING_KEY = f"{API_KEY_ENV_VAR} environment variable is not set"
MSG_INVALID_KEY = "Invalid API key - please check your configuration"
MSG_TEMPORARILY_UNAVAILABLE = (
    "LLM temporarily unavailable, please try again in a few moments"
)
MSG_SERVICE_ERROR = "LLM service error, please try again"
MSG_RETRY_EXHAUSTED = "Failed to get valid JSON after retry"
