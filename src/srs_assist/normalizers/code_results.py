"""Result shaping for the code generation, translation, testing and review operations.

Each function takes the parsed model object, enforces the fields the
operation cannot do without, and fills every other field with its default so
callers always receive the same keys.
"""

from typing import Any

from ..exceptions import DomainInvariantViolation
from .classification import require_fields, require_list

MSG_NO_CODE = "LLM did not return code"
MSG_NO_TRANSLATION = "LLM did not return translated code"
MSG_NO_TEST_REPORT = "LLM did not return a valid test report"
MSG_NO_REVIEW = "LLM did not return a valid review document"


def _require_object(parsed: Any, message: str) -> dict[str, Any]:
    if not isinstance(parsed, dict):
        raise DomainInvariantViolation(message)
    return parsed


def shape_generated_code(parsed: Any, target_language: str) -> dict[str, Any]:
    result = require_fields(parsed, ("code",), MSG_NO_CODE)
    return {
        "language": result.get("language") or target_language,
        "filename_suggestion": result.get("filename_suggestion") or None,
        "code": result["code"],
        "summary": result.get("summary") or "",
        "run_steps": result.get("run_steps") or "",
        "tests_or_usage": result.get("tests_or_usage") or None,
        "assumptions": result.get("assumptions") or None,
        "warnings": result.get("warnings") or None,
    }


def shape_translated_code(parsed: Any, target_language: str) -> dict[str, Any]:
    result = require_fields(parsed, ("code",), MSG_NO_TRANSLATION)
    return {
        "target_language": result.get("target_language") or target_language,
        "code": result["code"],
        "summary": result.get("summary") or "",
        "notes": result.get("notes") or None,
        "assumptions": result.get("assumptions") or None,
        "warnings": result.get("warnings") or None,
    }


def shape_test_report(parsed: Any, want_fix: bool) -> dict[str, Any]:
    """``improved_code`` is only passed through when a fix was requested."""
    result = require_list(_require_object(parsed, MSG_NO_TEST_REPORT), "tests", MSG_NO_TEST_REPORT)
    return {
        "summary": result.get("summary") or "",
        "overall_verdict": result.get("overall_verdict") or "mixed",
        "overall_score": result.get("overall_score") or 0,
        "tests": result["tests"],
        "metrics": result.get("metrics") or {},
        "failures_summary": result.get("failures_summary") or "",
        "critical_issues": result.get("critical_issues") or [],
        "recommendations": result.get("recommendations") or [],
        "improved_code": (result.get("improved_code") or None) if want_fix else None,
    }


def shape_review(parsed: Any) -> dict[str, Any]:
    result = require_list(
        require_fields(parsed, ("summary",), MSG_NO_REVIEW), "findings", MSG_NO_REVIEW
    )
    return {
        "summary": result["summary"],
        "overall_score": result.get("overall_score"),
        "positives": result.get("positives") or [],
        "findings": result["findings"],
        "recommendations_summary": result.get("recommendations_summary") or "",
    }
