"""Core value types shared across the pipeline."""

from .types import (
    Failure,
    GenerationRequest,
    Result,
    Success,
    ValidatedResult,
    error_outcome,
)

__all__ = [
    "Failure",
    "GenerationRequest",
    "Result",
    "Success",
    "ValidatedResult",
    "error_outcome",
]
