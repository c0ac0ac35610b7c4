"""Schema-validated generation with one corrective round-trip.

``StructuredGenerator`` turns raw completions into a ``ValidatedResult``:
extract, parse (with repair), validate against a JSON Schema, and, if any of
that fails, send exactly one retry prompt that embeds the schema. A second
failure is terminal. The bound lives in ``RetryPolicy`` rather than in the
shape of the control flow.
"""

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import Any, Protocol

from ..constants import MAX_VALIDATION_ATTEMPTS, MSG_RETRY_EXHAUSTED
from ..core.types import (
    GenerationRequest,
    Result,
    Success,
    ValidatedResult,
    error_outcome,
)
from ..exceptions import MalformedResponseError, SchemaViolationError, SRSAssistError
from ..prompts.loader import build_schema_retry_prompt
from ..telemetry import TelemetryContext, TelemetryContextProtocol
from .parsing import parse_llm_json
from .validation import schema_errors

log = logging.getLogger(__name__)

RetryPromptSource = str | Callable[[], str]


class TextGenerator(Protocol):
    """Anything that can turn a prompt into completion text."""

    def generate(self, prompt: str) -> str: ...  # noqa: D102


@dataclass(frozen=True)
class RetryPolicy:
    """How many completions one validated generation may consume.

    The default of two means the original completion plus one corrective retry.
    """

    max_attempts: int = MAX_VALIDATION_ATTEMPTS

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def allows_another(self, attempts_made: int) -> bool:
        return attempts_made < self.max_attempts


class StructuredGenerator:
    """Composes the LLM client with extraction, repair and schema validation."""

    def __init__(
        self,
        client: TextGenerator,
        policy: RetryPolicy | None = None,
        telemetry_context: TelemetryContextProtocol | None = None,
    ):
        self.client = client
        self.policy = policy or RetryPolicy()
        self.tele = telemetry_context or TelemetryContext()

    def generate_validated(
        self,
        prompt: str,
        schema: dict[str, Any],
        retry_prompt: RetryPromptSource | None = None,
    ) -> ValidatedResult:
        """Generate from ``prompt`` and return a schema-conforming object.

        Args:
            prompt: The first prompt sent to the model.
            schema: JSON Schema the result must satisfy.
            retry_prompt: Prompt (or zero-argument builder) for the corrective
                call. Defaults to the schema-annotated retry prompt with
                ``prompt`` as the project context.

        Raises:
            SchemaViolationError: If the corrective completion is still
                unparseable or invalid.
            InvalidRequestError: If ``prompt`` is empty.
            SRSAssistError: Any provider failure from either call, unchanged.
        """
        request = GenerationRequest(prompt, retry_prompt)
        with self.tele("pipeline.generate_validated"):
            raw = self.client.generate(request.prompt)
            return self.validate_response(
                raw,
                schema,
                request.retry_prompt
                if request.retry_prompt is not None
                else (lambda: build_schema_retry_prompt(schema, request.prompt)),
            )

    def validate_response(
        self,
        raw_text: str,
        schema: dict[str, Any],
        retry_prompt: RetryPromptSource,
    ) -> ValidatedResult:
        """Validate an already-received completion, retrying once if needed."""
        attempts = 1
        while True:
            value, errors, cause = self._check(raw_text, schema)
            if not errors:
                if attempts > 1:
                    log.info("Model output validated after %d attempts", attempts)
                return ValidatedResult(value=value, raw_text=raw_text, attempts=attempts)

            if not self.policy.allows_another(attempts):
                log.error(
                    "Model output invalid after %d attempts: %s",
                    attempts,
                    "; ".join(errors),
                )
                raise SchemaViolationError(MSG_RETRY_EXHAUSTED, errors) from cause

            log.warning(
                "Model output invalid (attempt %d/%d), retrying with schema: %s",
                attempts,
                self.policy.max_attempts,
                "; ".join(errors),
            )
            self.tele.count("pipeline.retries")
            prompt = retry_prompt() if callable(retry_prompt) else retry_prompt
            with self.tele("pipeline.retry", attempt=attempts + 1):
                raw_text = self.client.generate(prompt)
            attempts += 1

    def try_generate_validated(
        self,
        prompt: str,
        schema: dict[str, Any],
        retry_prompt: RetryPromptSource | None = None,
    ) -> Result[ValidatedResult, SRSAssistError]:
        """``generate_validated`` with failures returned as ``Failure`` values."""
        try:
            return Success(self.generate_validated(prompt, schema, retry_prompt))
        except SRSAssistError as e:
            return error_outcome(e)

    @staticmethod
    def _check(
        raw_text: str, schema: dict[str, Any]
    ) -> tuple[Any, list[str], Exception | None]:
        try:
            value = parse_llm_json(raw_text)
        except MalformedResponseError as e:
            return None, [f"malformed JSON: {e.message}"], e

        if not isinstance(value, dict):
            return value, [f"<root>: expected a JSON object, got {type(value).__name__}"], None
        return value, schema_errors(schema, value), None
