"""The fixed IEEE 830 outline every assembled SRS follows."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Subsection:
    id: str
    title: str


@dataclass(frozen=True)
class Section:
    id: str
    title: str
    subsections: tuple[Subsection, ...]


SRS_OUTLINE: tuple[Section, ...] = (
    Section(
        "1_introduction",
        "1. Introduction",
        (
            Subsection("1_1_purpose", "1.1 Purpose"),
            Subsection("1_2_scope", "1.2 Scope"),
            Subsection("1_3_definitions", "1.3 Definitions, Acronyms and Abbreviations"),
            Subsection("1_4_references", "1.4 References"),
            Subsection("1_5_overview", "1.5 Overview"),
        ),
    ),
    Section(
        "2_overall_description",
        "2. Overall Description",
        (
            Subsection("2_1_product_perspective", "2.1 Product Perspective"),
            Subsection("2_2_product_functions", "2.2 Product Functions"),
            Subsection("2_3_user_characteristics", "2.3 User Characteristics"),
            Subsection("2_4_constraints", "2.4 Constraints"),
            Subsection("2_5_assumptions", "2.5 Assumptions and Dependencies"),
        ),
    ),
    Section(
        "3_specific_requirements",
        "3. Specific Requirements",
        (
            Subsection("3_1_external_interfaces", "3.1 External Interfaces"),
            Subsection("3_2_functions", "3.2 Functions"),
            Subsection("3_3_performance", "3.3 Performance Requirements"),
            Subsection("3_4_logical_database", "3.4 Logical Database Requirements"),
            Subsection("3_5_design_constraints", "3.5 Design Constraints"),
            Subsection("3_6_software_attributes", "3.6 Software System Attributes"),
        ),
    ),
)

TOTAL_SUBSECTIONS = sum(len(section.subsections) for section in SRS_OUTLINE)


def normalize_section_id(section_id: str) -> str:
    """``"1.1_purpose"`` -> ``"1_1_purpose"``."""
    return section_id.replace(".", "_")


def content_key(section_id: str, subsection_id: str) -> str:
    return f"{normalize_section_id(section_id)}_{normalize_section_id(subsection_id)}"
