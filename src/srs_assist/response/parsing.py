"""JSON parsing with a single repair pass for stray backslashes."""

import json
import logging
import re
from typing import Any

from ..exceptions import MalformedResponseError
from .extraction import extract_json

log = logging.getLogger(__name__)

# A backslash that does not start a valid JSON escape sequence.
_LONE_BACKSLASH = re.compile(r'\\(?!["\\/bfnrtu])')


def repair_backslashes(text: str) -> str:
    """Double every backslash that is not already a valid escape."""
    return _LONE_BACKSLASH.sub(r"\\\\", text)


def parse_repaired(text: str) -> Any:
    """Parse ``text`` as JSON, retrying once after repairing backslashes.

    Models writing Windows paths or regexes often emit ``"C:\\path"`` with a
    single backslash, which strict JSON rejects.

    Raises:
        MalformedResponseError: If both parses fail. The message and
            ``__cause__`` come from the first (unrepaired) parse, which points
            at the real defect rather than at the repair.
    """
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as original:
        repaired = repair_backslashes(text) if isinstance(text, str) else text
        try:
            value = json.loads(repaired)
        except (json.JSONDecodeError, TypeError):
            raise MalformedResponseError(str(original)) from original
        log.debug("Parsed model output after backslash repair")
        return value


def parse_llm_json(raw_text: str) -> Any:
    """Extract the JSON candidate from a raw completion and parse it."""
    return parse_repaired(extract_json(raw_text))
