"""Operation-specific post-processing of parsed model output.

Every function here is pure: it takes a parsed object or raw text and returns
a normalized value, or raises ``DomainInvariantViolation``.
"""

from .classification import (
    SDLC_MODELS,
    match_allowed,
    require_allowed,
    require_fields,
    require_list,
)
from .code_guard import (
    ensure_structure_preserved,
    extract_relevant_paragraph,
    instruction_requests_code,
    is_code_block,
    is_long_selection,
    strip_comments,
)
from .code_results import (
    shape_generated_code,
    shape_review,
    shape_test_report,
    shape_translated_code,
)
from .confidence import normalize_confidence, with_normalized_confidence
from .mermaid import DIAGRAM_TYPES, expand_multi_edges, normalize_er_diagram, repair_diagram

__all__ = [
    "DIAGRAM_TYPES",
    "SDLC_MODELS",
    "ensure_structure_preserved",
    "expand_multi_edges",
    "extract_relevant_paragraph",
    "instruction_requests_code",
    "is_code_block",
    "is_long_selection",
    "match_allowed",
    "normalize_confidence",
    "normalize_er_diagram",
    "repair_diagram",
    "require_allowed",
    "require_fields",
    "require_list",
    "shape_generated_code",
    "shape_review",
    "shape_test_report",
    "shape_translated_code",
    "strip_comments",
    "with_normalized_confidence",
]
