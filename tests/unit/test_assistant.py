"""
Tests for RequirementsAssistant operations against a scripted client.

Every test drives the real prompt rendering, extraction, validation and
normalization; only the text generator is replaced.
"""

import json

import pytest

from srs_assist.assistant import (
    CODE_PROMPT_SUFFIX,
    MSG_EMPTY_SUGGESTION,
    MSG_INVALID_QUESTIONS,
    MSG_INVALID_SDLC_MODEL,
    NOTE_CODE_SELECTION,
    NOTE_LONG_SELECTION,
    RequirementsAssistant,
    format_qa_pairs,
)
from srs_assist.exceptions import (
    DomainInvariantViolation,
    ErrorKind,
    InvalidRequestError,
    MalformedResponseError,
    SchemaViolationError,
)
from srs_assist.normalizers.code_guard import MSG_STRUCTURE_MODIFIED
from tests.helpers import RecordingLog, ScriptedClient


def make_assistant(*completions, **kwargs):
    client = ScriptedClient(*completions)
    log = RecordingLog()
    return RequirementsAssistant(client, log, **kwargs), client, log


PLAN = {
    "milestones": [
        {"title": "Discovery", "duration_weeks": 2, "deliverables": ["Interview notes"]},
        {"title": "MVP", "duration_weeks": 6, "deliverables": ["Ordering flow"]},
    ]
}


@pytest.mark.unit
class TestRecommendSdlc:
    def test_confidence_is_defaulted_and_model_kept(self):
        assistant, client, log = make_assistant('{"model": "Agile", "why": "Changing scope"}')

        result = assistant.recommend_sdlc("A bakery ordering site")

        assert result == {"model": "Agile", "why": "Changing scope", "confidence": 0.5}
        assert "A bakery ordering site" in client.prompts[0]
        assert log.records[0][0] == "sdlc.recommend"
        assert log.records[0][3] == result

    def test_confidence_is_clamped(self):
        assistant, _, _ = make_assistant(
            '{"model": "Scrum", "why": "Sprints", "confidence": 1.7}'
        )
        assert assistant.recommend_sdlc("project")["confidence"] == 1.0

    def test_configured_default_confidence(self):
        assistant, _, _ = make_assistant(
            '{"model": "Scrum", "why": "Sprints"}', default_confidence=0.25
        )
        assert assistant.recommend_sdlc("project")["confidence"] == 0.25

    def test_constraints_are_included_in_prompt(self):
        assistant, client, _ = make_assistant('{"model": "Kanban", "why": "Flow"}')

        assistant.recommend_sdlc("project", constraints={"team_size": 3})

        assert "Constraints:\n" + json.dumps({"team_size": 3}, indent=2) in client.prompts[0]

    def test_unknown_model_is_rejected(self):
        assistant, _, log = make_assistant('{"model": "RAD", "why": "Fast"}')

        with pytest.raises(DomainInvariantViolation, match=MSG_INVALID_SDLC_MODEL):
            assistant.recommend_sdlc("project")

        assert log.records == []

    def test_missing_why_retries_then_fails(self):
        assistant, client, _ = make_assistant('{"model": "Agile"}', '{"model": "Agile"}')

        with pytest.raises(SchemaViolationError):
            assistant.recommend_sdlc("project")

        assert client.calls == 2
        assert client.prompts[1].endswith("Project: project")

    def test_blank_project_is_rejected_without_calls(self):
        assistant, client, _ = make_assistant()

        with pytest.raises(InvalidRequestError):
            assistant.recommend_sdlc("   ")

        assert client.calls == 0


@pytest.mark.unit
class TestGeneratePlan:
    def test_valid_plan_is_returned(self):
        assistant, _, log = make_assistant(json.dumps(PLAN))

        assert assistant.generate_plan("A bakery ordering site") == PLAN
        assert log.records[0][0] == "plan.generate"

    def test_invalid_plan_is_retried_once(self):
        assistant, client, _ = make_assistant('{"milestones": []}', json.dumps(PLAN))

        assert assistant.generate_plan("project") == PLAN
        assert client.calls == 2

    def test_plan_requires_project_text(self):
        assistant, _, _ = make_assistant()
        with pytest.raises(InvalidRequestError):
            assistant.generate_plan("")


@pytest.mark.unit
class TestDesign:
    def test_system_design_json_is_returned(self):
        assistant, client, log = make_assistant('```json\n{"architecture": "layered"}\n```')

        result = assistant.design_system("The system shall...", {"cloud": "gcp"})

        assert result == {"architecture": "layered"}
        assert '"cloud": "gcp"' in client.prompts[0]
        operation, prompt, _, _ = log.records[0]
        assert operation == "design.system"
        assert prompt.endswith("...")

    def test_system_design_falls_back_to_raw_text(self):
        assistant, _, _ = make_assistant("A layered architecture with three tiers.")

        result = assistant.design_system("The system shall...")

        assert result == {"design_text": "A layered architecture with three tiers."}

    def test_non_object_json_falls_back(self):
        assistant, _, _ = make_assistant('["a", "b"]')
        assert assistant.design_schema("Orders have items") == {"schema_text": '["a", "b"]'}

    @pytest.mark.parametrize("method", ["design_system", "design_schema"])
    def test_raw_file_data_is_rejected(self, method):
        assistant, client, _ = make_assistant()

        with pytest.raises(InvalidRequestError):
            getattr(assistant, method)("data:application/pdf;base64,JVBERi0")

        assert client.calls == 0

    def test_schema_prompt_uses_output_format_and_context(self):
        assistant, client, _ = make_assistant('{"tables": []}')

        assistant.design_schema("Orders have items", output_format="sql", context_text="Postgres 16")

        assert "sql" in client.prompts[0]
        assert "Postgres 16" in client.prompts[0]


@pytest.mark.unit
class TestGenerateDiagram:
    def test_mermaid_is_repaired(self):
        assistant, _, log = make_assistant("```mermaid\ngraph TD\n    A & C --> B: uses\n```")

        result = assistant.generate_diagram("dataflow", project_info="Bakery")

        assert result["diagram_type"] == "dataflow"
        assert "C -->|uses| B" in result["mermaid_code"]
        assert log.records[0][0] == "design.diagram"
        assert log.records[0][3] == {"diagram_type": "dataflow"}

    def test_unknown_type_is_rejected(self):
        assistant, _, _ = make_assistant()
        with pytest.raises(InvalidRequestError, match="Must be one of"):
            assistant.generate_diagram("gantt", project_info="Bakery")

    def test_some_input_is_required(self):
        assistant, _, _ = make_assistant()
        with pytest.raises(InvalidRequestError):
            assistant.generate_diagram("er", project_info="  ")

    def test_selected_file_and_context_are_combined(self):
        assistant, client, _ = make_assistant("erDiagram\n    user {\n    }")

        assistant.generate_diagram(
            "er",
            project_info="Bakery",
            selected_file_content="Orders table",
            context_text="Use UUID keys",
        )

        assert "Bakery\n\n---\nAdditional context from selected file:\nOrders table" in client.prompts[0]
        assert "\n\n---\nAdditional context:\nUse UUID keys" in client.prompts[0]

    def test_empty_diagram_is_a_domain_failure(self):
        assistant, _, _ = make_assistant("```mermaid\n```")
        with pytest.raises(DomainInvariantViolation):
            assistant.generate_diagram("sequence", project_info="Bakery")


@pytest.mark.unit
class TestCodeOperations:
    def test_generate_code(self):
        assistant, client, log = make_assistant('{"code": "print(1)", "summary": "prints"}')

        result = assistant.generate_code("print one", "Python", include_tests=True)

        assert result["code"] == "print(1)"
        assert result["language"] == "Python"
        assert log.records[0][0] == "code.generate"

    def test_generate_code_requires_inputs(self):
        assistant, _, _ = make_assistant()
        with pytest.raises(InvalidRequestError):
            assistant.generate_code("", "Python")

    def test_translate_code(self):
        assistant, _, _ = make_assistant('{"code": "console.log(1)"}')
        result = assistant.translate_code("Python", "JavaScript", "print(1)")
        assert result["target_language"] == "JavaScript"

    def test_test_code_without_fix(self):
        assistant, _, _ = make_assistant('{"tests": [], "improved_code": "x"}')
        assert assistant.test_code("def f(): ...")["improved_code"] is None

    def test_review_code(self):
        assistant, _, log = make_assistant('{"summary": "Good", "findings": []}')

        assert assistant.review_code("def f(): ...")["summary"] == "Good"
        assert log.records[0][0] == "code.review"

    def test_unparseable_code_reply(self):
        assistant, _, _ = make_assistant("Sorry, I can't help with that.")
        with pytest.raises(MalformedResponseError):
            assistant.review_code("def f(): ...")


@pytest.mark.unit
class TestSuggestEdit:
    def test_prose_edit(self):
        assistant, client, log = make_assistant(
            '{"suggestion_text": "The system shall respond in 2 s.", "explanation": "Tighter", "confidence": 0.9}'
        )

        result = assistant.suggest_edit("The system should be fast.", "Make it measurable")

        assert result["suggestion_text"] == "The system shall respond in 2 s."
        assert result["explanation"] == "Tighter"
        assert result["confidence"] == 0.9
        assert CODE_PROMPT_SUFFIX not in client.prompts[0]
        assert log.records[0][0] == "srs.edit"

    def test_empty_suggestion_is_rejected(self):
        assistant, _, _ = make_assistant('{"suggestion_text": "  "}')
        with pytest.raises(DomainInvariantViolation, match=MSG_EMPTY_SUGGESTION):
            assistant.suggest_edit("Some text.", "Rewrite")

    def test_code_selection_allows_comment_changes(self):
        assistant, client, _ = make_assistant(
            '{"suggestion_text": "const x = 1; // the answer", "explanation": "Clarified"}'
        )

        result = assistant.suggest_edit("const x = 1; // x", "Improve the comment")

        assert client.prompts[0].endswith(CODE_PROMPT_SUFFIX)
        assert result["explanation"] == NOTE_CODE_SELECTION + "Clarified"
        assert result["confidence"] == 0.5

    def test_code_selection_rejects_structural_changes(self):
        assistant, _, _ = make_assistant('{"suggestion_text": "const y = 2;"}')

        with pytest.raises(DomainInvariantViolation, match=MSG_STRUCTURE_MODIFIED) as exc_info:
            assistant.suggest_edit("const x = 1;", "Tidy this up")

        assert exc_info.value.kind is ErrorKind.DOMAIN_INVARIANT

    def test_code_change_requests_skip_the_guard(self):
        assistant, _, _ = make_assistant('{"suggestion_text": "const y = 2;"}')
        result = assistant.suggest_edit("const x = 1;", "Implement the new constant")
        assert result["suggestion_text"] == "const y = 2;"

    def test_long_selection_is_narrowed_to_midpoint_paragraph(self):
        first = " ".join(["alpha"] * 100)
        second = " ".join(["omega"] * 450)
        selection = f"{first}\n\n{second}"
        assistant, client, _ = make_assistant('{"suggestion_text": "Shorter.", "explanation": "Cut"}')

        result = assistant.suggest_edit(selection, "Shorten", selection_start=5000, selection_end=5000 + len(selection))

        assert result["explanation"] == NOTE_LONG_SELECTION + "Cut"
        prompt = client.prompts[0]
        # Midpoint is measured within the selection, landing in the second paragraph.
        assert second in prompt
        assert first not in prompt


@pytest.mark.unit
class TestSrsDrafting:
    def test_questions_require_sections_list(self):
        assistant, _, _ = make_assistant('{"sections": "none"}')
        with pytest.raises(DomainInvariantViolation, match=MSG_INVALID_QUESTIONS):
            assistant.generate_srs_questions("Bakery")

    def test_questions_are_returned(self):
        sections = {"sections": [{"section_id": "1_introduction", "subsections": []}]}
        assistant, _, log = make_assistant(json.dumps(sections))

        assert assistant.generate_srs_questions("Bakery") == sections
        assert log.records[0][0] == "srs.generate_questions"

    def test_content_prompt_lists_qa_pairs(self):
        assistant, client, log = make_assistant('{"content": "The purpose is..."}')

        result = assistant.generate_srs_content(
            "1. Introduction",
            "1.1 Purpose",
            [{"question": "Who uses it?", "answer": "Bakers"}],
        )

        assert result == {"content": "The purpose is..."}
        assert "Q1: Who uses it?\nA1: Bakers" in client.prompts[0]
        assert log.records[0][0] == "srs.generate_content"

    def test_content_requires_qa_list(self):
        assistant, _, _ = make_assistant()
        with pytest.raises(InvalidRequestError):
            assistant.generate_srs_content("1. Introduction", "1.1 Purpose", "not a list")

    def test_empty_content_is_rejected(self):
        assistant, _, _ = make_assistant('{"content": ""}')
        with pytest.raises(DomainInvariantViolation):
            assistant.generate_srs_content("1. Introduction", "1.1 Purpose", [])

    def test_format_qa_pairs(self):
        assert format_qa_pairs(
            [{"question": "A?", "answer": "a"}, {"question": "B?"}]
        ) == "Q1: A?\nA1: a\n\nQ2: B?\nA2: "


@pytest.mark.unit
def test_operations_work_without_interaction_log():
    assistant = RequirementsAssistant(ScriptedClient('{"model": "Spiral", "why": "Risk"}'))
    assert assistant.recommend_sdlc("project")["model"] == "Spiral"
