"""Guards for edits to selections that contain source code."""

import re

from ..constants import LONG_SELECTION_WORD_LIMIT
from ..exceptions import DomainInvariantViolation

_CODE_INDICATORS = (
    re.compile(r"^```[\s\S]*```$", re.MULTILINE),
    re.compile(r"^    [\s\S]*$", re.MULTILINE),
    re.compile(r"^\t[\s\S]*$", re.MULTILINE),
    re.compile(
        r"\{[\s\S]*\}|function\s*\(|class\s+\w+|import\s+|export\s+|const\s+|let\s+|var\s+",
        re.MULTILINE,
    ),
)
_COMMENT = re.compile(r"/\*[\s\S]*?\*/|//.*")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_WHITESPACE = re.compile(r"\s+")

CODE_REQUEST_KEYWORDS = ("code", "implement")

MSG_STRUCTURE_MODIFIED = "Code structure was modified when it should have been preserved"


def is_code_block(text: str) -> bool:
    """Loose test for code in a selection.

    Any brace pair or keyword such as ``import `` counts, so prose that merely
    mentions them is flagged too.
    """
    return any(pattern.search(text) for pattern in _CODE_INDICATORS)


def word_count(text: str) -> int:
    # Counts the empty piece before leading whitespace.
    return len(_WHITESPACE.split(text))


def is_long_selection(text: str, limit: int = LONG_SELECTION_WORD_LIMIT) -> bool:
    return word_count(text) > limit


def extract_relevant_paragraph(text: str, cursor: int) -> str:
    """The trimmed paragraph of ``text`` spanning offset ``cursor``.

    Paragraphs are separated by blank lines and each is assumed to be followed
    by exactly two newline characters. Falls back to the whole text.
    """
    position = 0
    for paragraph in _PARAGRAPH_BREAK.split(text):
        length = len(paragraph) + 2
        if position <= cursor <= position + length:
            return paragraph.strip()
        position += length
    return text


def strip_comments(text: str) -> str:
    """Remove ``/* ... */`` and ``// ...`` comments and trim."""
    return _COMMENT.sub("", text).strip()


def instruction_requests_code(instruction: str) -> bool:
    lowered = instruction.lower()
    return any(keyword in lowered for keyword in CODE_REQUEST_KEYWORDS)


def ensure_structure_preserved(original: str, suggestion: str, instruction: str) -> None:
    """Reject a suggestion that changes code beyond its comments.

    Skipped when the instruction asks for code changes.

    Raises:
        DomainInvariantViolation: The comment-free texts differ.
    """
    if instruction_requests_code(instruction):
        return
    if strip_comments(original) != strip_comments(suggestion):
        raise DomainInvariantViolation(MSG_STRUCTURE_MODIFIED)
