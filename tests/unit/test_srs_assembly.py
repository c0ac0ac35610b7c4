import datetime

import pytest

from srs_assist.exceptions import ErrorKind, InvalidRequestError
from srs_assist.srs import (
    PENDING_PLACEHOLDER,
    SRS_OUTLINE,
    TOTAL_SUBSECTIONS,
    ApprovedSection,
    assemble_srs_document,
    normalize_section_id,
)

GENERATED_ON = datetime.date(2024, 3, 7)


@pytest.mark.unit
class TestOutline:
    def test_outline_has_sixteen_subsections(self):
        assert TOTAL_SUBSECTIONS == 16
        assert [s.title for s in SRS_OUTLINE] == [
            "1. Introduction",
            "2. Overall Description",
            "3. Specific Requirements",
        ]

    def test_dotted_ids_are_normalized(self):
        assert normalize_section_id("1.1_purpose") == "1_1_purpose"
        assert normalize_section_id("2_overall_description") == "2_overall_description"


@pytest.mark.unit
class TestAssembleSrsDocument:
    def test_empty_document_is_all_placeholders(self):
        srs = assemble_srs_document("Bakery Orders", None, [], generated_on=GENERATED_ON)

        assert srs.completed_sections == 0
        assert srs.total_sections == 16
        assert srs.content.count(PENDING_PLACEHOLDER) == 16
        assert srs.content.startswith(
            "Software Requirements Specification\n"
            "Project: Bakery Orders\n"
            "Generated on: 3/7/2024\n\n"
            "1. Introduction\n"
            "===============\n\n"
            "1.1 Purpose\n"
            "-----------\n"
        )

    def test_approved_content_fills_its_subsection(self):
        sections = [
            ApprovedSection("1_introduction", "1_1_purpose", "Explain the ordering system."),
            {"section_id": "3_specific_requirements", "subsection_id": "3_2_functions", "content": "FR-1"},
        ]

        srs = assemble_srs_document("Bakery", None, sections, generated_on=GENERATED_ON)

        assert srs.completed_sections == 2
        assert srs.content.count(PENDING_PLACEHOLDER) == 14
        assert "1.1 Purpose\n-----------\nExplain the ordering system.\n\n" in srs.content
        assert "3.2 Functions\n-------------\nFR-1\n\n" in srs.content

    def test_dotted_ids_match_outline(self):
        sections = [{"section_id": "1_introduction", "subsection_id": "1.2_scope", "content": "Scope."}]

        srs = assemble_srs_document("Bakery", None, sections, generated_on=GENERATED_ON)

        assert srs.completed_sections == 1
        assert "1.2 Scope\n---------\nScope.\n\n" in srs.content

    def test_unknown_and_empty_sections_are_not_counted(self):
        sections = [
            {"section_id": "9_appendix", "subsection_id": "9_1_extra", "content": "Extra"},
            {"section_id": "1_introduction", "subsection_id": "1_5_overview", "content": ""},
        ]

        srs = assemble_srs_document("Bakery", None, sections, generated_on=GENERATED_ON)

        assert srs.completed_sections == 0
        assert "Extra" not in srs.content

    def test_project_description_and_untitled_fallback(self):
        srs = assemble_srs_document(
            "", "Online ordering for a bakery.", [], generated_on=GENERATED_ON
        )

        assert "Project: Untitled Project\n" in srs.content
        assert "Project Description:\nOnline ordering for a bakery.\n\n1. Introduction" in srs.content

    def test_defaults_to_today(self):
        srs = assemble_srs_document("Bakery", None, [])
        today = datetime.date.today()
        assert f"Generated on: {today.month}/{today.day}/{today.year}\n" in srs.content

    @pytest.mark.parametrize("missing", ["section_id", "subsection_id"])
    def test_section_without_ids_is_rejected(self, missing):
        item = {"section_id": "1_introduction", "subsection_id": "1_2_scope", "content": "Scope."}
        del item[missing]

        with pytest.raises(InvalidRequestError, match=missing) as exc_info:
            assemble_srs_document("Bakery", None, [item], generated_on=GENERATED_ON)

        assert exc_info.value.kind is ErrorKind.INVALID_REQUEST
