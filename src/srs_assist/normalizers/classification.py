"""Allow-list checks for enumerated fields and required-field checks.

Allow-list matching is substring containment, not equality, so a model that
answers "Agile (Scrum flavour)" still matches. The cost is that a value such
as "Non-Agile" also matches "Agile"; callers that need exact membership must
compare themselves.
"""

from collections.abc import Iterable
from typing import Any

from ..exceptions import DomainInvariantViolation

SDLC_MODELS = ("Waterfall", "Agile", "Scrum", "Kanban", "Spiral", "V-Model")


def match_allowed(value: Any, allowed: Iterable[str]) -> str | None:
    """First entry of ``allowed`` contained in ``value``, if any."""
    if not isinstance(value, str):
        return None
    return next((candidate for candidate in allowed if candidate in value), None)


def require_allowed(value: Any, allowed: Iterable[str], message: str) -> str:
    """Return ``value`` unchanged when it contains an allowed entry."""
    if match_allowed(value, allowed) is None:
        raise DomainInvariantViolation(message)
    return value


def require_fields(result: Any, fields: Iterable[str], message: str) -> dict[str, Any]:
    """Require ``result`` to be an object whose ``fields`` are all non-empty."""
    if not isinstance(result, dict) or not all(result.get(f) for f in fields):
        raise DomainInvariantViolation(message)
    return result


def require_list(result: Any, field: str, message: str) -> dict[str, Any]:
    """Require ``result[field]`` to be a JSON array (possibly empty)."""
    if not isinstance(result, dict) or not isinstance(result.get(field), list):
        raise DomainInvariantViolation(message)
    return result
