"""Confidence scores coerced into ``[0, 1]``."""

import math
from typing import Any

from ..constants import DEFAULT_CONFIDENCE


def normalize_confidence(value: Any, default: float = DEFAULT_CONFIDENCE) -> float:
    """Clamp a model-reported confidence into ``[0, 1]``.

    Numbers and numeric strings are clamped. Anything else (absent, booleans,
    NaN, free text) becomes ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default

    if math.isnan(number):
        return default
    return max(0.0, min(1.0, number))


def with_normalized_confidence(
    result: dict[str, Any],
    key: str = "confidence",
    default: float = DEFAULT_CONFIDENCE,
) -> dict[str, Any]:
    """Copy of ``result`` whose ``key`` holds a normalized confidence."""
    return {**result, key: normalize_confidence(result.get(key), default)}
