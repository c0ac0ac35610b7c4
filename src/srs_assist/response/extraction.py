"""Recovering a JSON payload from free-form model text.

Both functions here are heuristics, not parsers. ``extract_json`` picks the
most likely JSON substring; whatever it returns must still be parsed, and the
parse may still fail.
"""

import re

_JSON_FENCE = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)
_LEADING_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")


def extract_json(text: str) -> str:
    """Return the best-guess JSON substring of ``text``.

    Tried in order:

    1. the trimmed interior of the first fenced block tagged ``json``;
    2. the span from the first ``{`` to the last ``}`` inclusive, when the
       closing brace comes after the opening one;
    3. the trimmed original text.
    """
    if not text:
        return text

    fenced = _JSON_FENCE.search(text)
    if fenced and fenced.group(1):
        return fenced.group(1).strip()

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first : last + 1]

    return text.strip()


def strip_json_fence(text: str) -> str:
    """Remove a leading ```` ```json ```` and a trailing ```` ``` ```` from a completion."""
    text = text.strip()
    text = _LEADING_JSON_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()
