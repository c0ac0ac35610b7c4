"""Gemini API client with rate limiting, bounded retry and error classification"""

from collections.abc import Callable
import logging
import time
from typing import Any

from google import genai
from google.genai import types

from .client.error_handler import AttemptFailure, GenerationErrorHandler
from .client.rate_limiter import RateLimiter
from .config import ResolvedConfig, resolve_config
from .constants import LOG_PROMPT_EXCERPT, MSG_MISSING_KEY
from .exceptions import MisconfiguredCredentialError
from .response.extraction import strip_json_fence
from .telemetry import TelemetryContext, TelemetryContextProtocol

log = logging.getLogger(__name__)


class EmptyCompletionError(ValueError):
    """The provider answered without any text (e.g. a blocked candidate)."""


class GeminiClient:
    """Executes one logical generation call against Gemini.

    Every attempt first passes the shared ``RateLimiter``. Credential failures
    end the call at once; anything else is retried with linear backoff up to
    ``max_attempts``.

    Examples:
        client = GeminiClient()  # ambient configuration
        client = GeminiClient(model="gemini-2.5-pro")  # one override
    """

    def __init__(
        self,
        config: ResolvedConfig | None = None,
        *,
        rate_limiter: RateLimiter | None = None,
        telemetry_context: TelemetryContextProtocol | None = None,
        sleep: Callable[[float], None] = time.sleep,
        **config_overrides: Any,
    ):
        base = config or resolve_config()
        if config_overrides:
            base = base.with_overrides(**config_overrides)
        self.config = base
        self.retry = base.retry_config()
        self.rate_limiter = rate_limiter or RateLimiter(base.rate_limit_config())
        self.error_handler = GenerationErrorHandler()
        self.tele = telemetry_context or TelemetryContext()
        self._sleep = sleep
        self._client: genai.Client | None = None

        log.debug(
            "GeminiClient initialized with model '%s' (%d attempts, %ss timeout).",
            self.config.model,
            self.retry.max_attempts,
            self.config.request_timeout_seconds,
        )

    @property
    def client(self) -> genai.Client:
        """The underlying SDK client, built on first use."""
        if self._client is None:
            if not self.config.api_key:
                raise MisconfiguredCredentialError(MSG_MISSING_KEY)
            self._client = genai.Client(
                api_key=self.config.api_key,
                http_options=types.HttpOptions(
                    timeout=int(self.config.request_timeout_seconds * 1000)
                ),
            )
        return self._client

    def generate(self, prompt: str) -> str:
        """Return the model's completion for ``prompt``, with any JSON fence removed.

        Raises:
            MisconfiguredCredentialError: No API key, or the provider rejected it.
            RateLimitedError: The shared window is full; raised without retrying.
            TransientProviderError: Attempts exhausted on timeouts, network
                failures or 429/500/503.
            PermanentProviderError: Attempts exhausted on any other error.
        """
        if not self.config.api_key:
            log.error("No API key configured; refusing to call the provider.")
            raise MisconfiguredCredentialError(MSG_MISSING_KEY)

        log.debug("Prompt excerpt: %s", prompt[:LOG_PROMPT_EXCERPT])
        with self.tele("llm.generate", model=self.config.model):
            text = self._generate_with_retry(prompt)

        return strip_json_fence(text)

    def _generate_with_retry(self, prompt: str) -> str:
        last_failure: AttemptFailure | None = None
        last_error: Exception | None = None

        for attempt in range(1, self.retry.max_attempts + 1):
            self.rate_limiter.try_acquire()
            self.tele.count("llm.attempts")
            try:
                with self.tele("llm.attempt", attempt=attempt):
                    text = self._call_model(prompt)
            except Exception as error:
                failure = self.error_handler.classify(error)
                if failure.fatal:
                    log.error(
                        "Provider rejected the API key (status %s).", failure.status
                    )
                    raise self.error_handler.to_terminal_error(failure) from error

                last_failure, last_error = failure, error
                log.warning(
                    "LLM attempt %d/%d failed (kind=%s, status=%s): %s",
                    attempt,
                    self.retry.max_attempts,
                    failure.kind.value,
                    failure.status,
                    error,
                )
                if attempt < self.retry.max_attempts:
                    self.tele.count("llm.retryable_errors")
                    delay = self.retry.delay_after(attempt)
                    log.debug("Retrying in %.2fs", delay)
                    self._sleep(delay)
                continue

            log.debug("LLM call succeeded on attempt %d", attempt)
            return text

        if last_failure is None:
            raise RuntimeError("Retry loop ended without an attempt")
        terminal = self.error_handler.to_terminal_error(last_failure)
        log.error(
            "LLM call failed after %d attempts: %s",
            self.retry.max_attempts,
            terminal.message,
        )
        raise terminal from last_error

    def _call_model(self, prompt: str) -> str:
        response = self.client.models.generate_content(
            model=self.config.model,
            contents=prompt,
        )
        text = response.text
        if not text:
            raise EmptyCompletionError("Provider returned an empty completion")
        return text
