"""Core data types that flow through the generation pipeline.

Failures are ordinary values here: ``Success`` and ``Failure`` let callers that
prefer explicit branching consume the pipeline without try/except, while the
exception-raising API stays the default.
"""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
import typing
from typing import Generic, TypeAlias, TypeVar

from srs_assist.exceptions import InvalidRequestError, SRSAssistError

TSuccess = TypeVar("TSuccess")
TFailure = TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(Generic[TSuccess]):
    """A successful result in the pipeline."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(Generic[TFailure]):
    """A failure in the pipeline, containing the error."""

    error: TFailure


Result: TypeAlias = typing.Union[Success[TSuccess], Failure[TFailure]]


@dataclasses.dataclass(frozen=True, slots=True)
class GenerationRequest:
    """One logical generation: the prompt plus the schema-annotated retry prompt.

    ``retry_prompt`` may be a string or a zero-argument builder, so the retry
    text is only rendered when a retry actually happens. Ephemeral; built per
    call and never persisted by the pipeline itself.
    """

    prompt: str
    retry_prompt: str | Callable[[], str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.prompt, str) or not self.prompt.strip():
            raise InvalidRequestError("prompt must be a non-empty string")


@dataclasses.dataclass(frozen=True, slots=True)
class ValidatedResult:
    """A JSON object that passed schema validation.

    ``attempts`` is 1 when the first completion was valid and 2 when the
    corrective retry was needed.
    """

    value: dict[str, typing.Any]
    raw_text: str
    attempts: int = 1

    @property
    def retried(self) -> bool:
        return self.attempts > 1


def error_outcome(error: SRSAssistError) -> Failure[SRSAssistError]:
    """Wrap a classified error as a terminal pipeline outcome."""
    return Failure(error)
