"""Assembling approved subsection content into the final SRS text."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import datetime
import logging
from typing import Any

from ..exceptions import InvalidRequestError
from .structure import SRS_OUTLINE, TOTAL_SUBSECTIONS, content_key

log = logging.getLogger(__name__)

PENDING_PLACEHOLDER = "[This section is pending completion]"
UNTITLED_PROJECT = "Untitled Project"


@dataclass(frozen=True)
class ApprovedSection:
    section_id: str
    subsection_id: str
    content: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ApprovedSection":
        missing = [key for key in ("section_id", "subsection_id") if data.get(key) is None]
        if missing:
            raise InvalidRequestError(f"Approved section is missing {', '.join(missing)}")
        return cls(
            section_id=str(data["section_id"]),
            subsection_id=str(data["subsection_id"]),
            content=data.get("content") or "",
        )


@dataclass(frozen=True)
class AssembledSRS:
    content: str
    completed_sections: int
    total_sections: int = TOTAL_SUBSECTIONS


def _format_date(day: datetime.date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


def assemble_srs_document(
    title: str | None,
    project_text: str | None,
    sections: Iterable[ApprovedSection | Mapping[str, Any]],
    generated_on: datetime.date | None = None,
) -> AssembledSRS:
    """Render the full outline, filling approved subsections and marking the rest pending.

    Section and subsection ids may use dots or underscores. Approved content
    whose ids fall outside the outline is ignored and not counted.
    """
    contents: dict[str, str] = {}
    for item in sections:
        section = item if isinstance(item, ApprovedSection) else ApprovedSection.from_mapping(item)
        if section.content:
            contents[content_key(section.section_id, section.subsection_id)] = section.content

    parts = [
        "Software Requirements Specification\n",
        f"Project: {title or UNTITLED_PROJECT}\n",
        f"Generated on: {_format_date(generated_on or datetime.date.today())}\n\n",
    ]
    if project_text:
        parts.append(f"Project Description:\n{project_text}\n\n")

    completed = 0
    for section in SRS_OUTLINE:
        parts.append(f"{section.title}\n{'=' * len(section.title)}\n\n")
        for subsection in section.subsections:
            parts.append(f"{subsection.title}\n{'-' * len(subsection.title)}\n")
            body = contents.get(f"{section.id}_{subsection.id}")
            if body:
                completed += 1
                parts.append(f"{body}\n\n")
            else:
                parts.append(f"{PENDING_PLACEHOLDER}\n\n")

    log.debug("Assembled SRS with %d/%d subsections", completed, TOTAL_SUBSECTIONS)
    return AssembledSRS(content="".join(parts), completed_sections=completed)
