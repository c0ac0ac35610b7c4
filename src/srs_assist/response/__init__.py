"""Turning raw model completions into validated JSON objects."""

from .extraction import extract_json, strip_json_fence
from .parsing import parse_llm_json, parse_repaired, repair_backslashes
from .processor import RetryPolicy, StructuredGenerator, TextGenerator
from .validation import is_valid, schema_errors

__all__ = [
    "RetryPolicy",
    "StructuredGenerator",
    "TextGenerator",
    "extract_json",
    "is_valid",
    "parse_llm_json",
    "parse_repaired",
    "repair_backslashes",
    "schema_errors",
    "strip_json_fence",
]
