"""Packaged prompt templates and the helpers that fill them.

Templates mark their slots as ``<<<NAME>>>``. Each value replaces only the
first occurrence of its marker, and values are applied in keyword order.
"""

from functools import lru_cache
import json
from pathlib import Path
from typing import Any

TEMPLATE_DIR = Path(__file__).parent / "templates"

NO_CONTEXT = "(none provided)"


@lru_cache(maxsize=32)
def load_prompt(name: str) -> str:
    """Read a packaged template such as ``sdlc_prompt.txt``."""
    if "/" in name or "\\" in name or name.startswith("."):
        raise ValueError(f"Invalid prompt template name: {name!r}")

    path = TEMPLATE_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        available = ", ".join(sorted(p.name for p in TEMPLATE_DIR.glob("*.txt")))
        raise FileNotFoundError(
            f"Prompt template '{name}' not found. Available: {available}"
        ) from None


def fill_template(template: str, **values: str) -> str:
    """Replace ``<<<KEY>>>`` markers with the given values, in order."""
    for key, value in values.items():
        template = template.replace(f"<<<{key}>>>", value, 1)
    return template


def render_prompt(name: str, **values: str) -> str:
    return fill_template(load_prompt(name), **values)


def format_context_block(context: Any) -> str:
    """Render optional caller context for inclusion in a prompt.

    Falsy values become a placeholder, strings pass through, and anything else
    is pretty-printed as JSON, or ``str()``-ed when it is not serializable.
    """
    if not context:
        return NO_CONTEXT
    if isinstance(context, str):
        return context
    try:
        return json.dumps(context, indent=2)
    except (TypeError, ValueError):
        return str(context)


def build_schema_retry_prompt(schema: dict[str, Any], context: str) -> str:
    """The corrective prompt sent after an invalid completion."""
    return (
        "Previous output invalid. Please return ONLY JSON matching schema: "
        f"{json.dumps(schema, separators=(',', ':'))}. Project: {context}"
    )
