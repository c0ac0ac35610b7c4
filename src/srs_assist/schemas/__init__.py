"""JSON Schemas that structured model output is validated against."""

import copy
from functools import lru_cache
import json
from pathlib import Path
from typing import Any

SCHEMA_DIR = Path(__file__).parent

SDLC_RECOMMENDATION = "sdlc_recommendation"
PLAN_REQUIREMENTS = "plan_requirements"


@lru_cache(maxsize=8)
def _read_schema(name: str) -> dict[str, Any]:
    path = SCHEMA_DIR / f"{name}.schema.json"
    if not path.is_file():
        raise FileNotFoundError(f"Schema '{name}' not found at {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def load_schema(name: str) -> dict[str, Any]:
    """Return a fresh copy of a packaged schema, e.g. ``load_schema("plan_requirements")``."""
    return copy.deepcopy(_read_schema(name))


__all__ = ["PLAN_REQUIREMENTS", "SDLC_RECOMMENDATION", "load_schema"]
