"""Software Requirements Specification outline and assembly."""

from .assemble import (
    PENDING_PLACEHOLDER,
    ApprovedSection,
    AssembledSRS,
    assemble_srs_document,
)
from .structure import (
    SRS_OUTLINE,
    TOTAL_SUBSECTIONS,
    Section,
    Subsection,
    normalize_section_id,
)

__all__ = [
    "PENDING_PLACEHOLDER",
    "SRS_OUTLINE",
    "TOTAL_SUBSECTIONS",
    "ApprovedSection",
    "AssembledSRS",
    "Section",
    "Subsection",
    "assemble_srs_document",
    "normalize_section_id",
]
