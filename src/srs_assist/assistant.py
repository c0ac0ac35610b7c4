"""Transport-agnostic assistant operations.

``RequirementsAssistant`` holds the per-operation logic for SRS drafting:
build the prompt, run it through the client (schema-validated where a schema
exists), normalize the result, hand the exchange to an optional
``InteractionLog`` and return a plain dict. It knows nothing about HTTP or
storage; a web layer maps the raised ``SRSAssistError`` kinds to responses.
"""

from collections.abc import Mapping, Sequence
import json
import logging
from typing import Any, Protocol

from .constants import DEFAULT_CONFIDENCE, LOG_PROMPT_EXCERPT, LOG_RESPONSE_EXCERPT
from .exceptions import (
    DomainInvariantViolation,
    InvalidRequestError,
    MalformedResponseError,
)
from .normalizers import (
    DIAGRAM_TYPES,
    SDLC_MODELS,
    ensure_structure_preserved,
    extract_relevant_paragraph,
    is_code_block,
    is_long_selection,
    repair_diagram,
    require_allowed,
    require_fields,
    require_list,
    shape_generated_code,
    shape_review,
    shape_test_report,
    shape_translated_code,
    with_normalized_confidence,
)
from .prompts import build_schema_retry_prompt, format_context_block, render_prompt
from .response import RetryPolicy, StructuredGenerator, TextGenerator, parse_llm_json
from .schemas import PLAN_REQUIREMENTS, SDLC_RECOMMENDATION, load_schema
from .telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

LARGE_DOCUMENT_CHARS = 100_000

MSG_MISSING_SDLC_FIELDS = "Missing required fields in LLM response"
MSG_INVALID_SDLC_MODEL = "Invalid SDLC model in response"
MSG_EMPTY_SUGGESTION = "Invalid or empty suggestion received"
MSG_INVALID_QUESTIONS = "Invalid response structure from LLM"
MSG_NO_CONTENT = "No content generated"

NOTE_LONG_SELECTION = "Note: Due to length, only processing the relevant paragraph. "
NOTE_CODE_SELECTION = "Contains code blocks - preserving code structure unless explicitly requested. "
CODE_PROMPT_SUFFIX = (
    "\nNote: The text contains code blocks. Unless specifically requested, "
    "preserve code structure and only modify comments or documentation."
)
SELECTED_FILE_DIVIDER = "\n\n---\nAdditional context from selected file:\n"
CONTEXT_DIVIDER = "\n\n---\nAdditional context:\n"


class InteractionLog(Protocol):
    """Sink for prompt/response pairs; persistence is the implementer's concern."""

    def record(
        self, operation: str, prompt: str, raw_response: str, parsed: Any
    ) -> None: ...  # noqa: D102


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(message)
    return value


def _reject_data_uri(text: str, message: str) -> None:
    if text.startswith("data:"):
        raise InvalidRequestError(message)


def format_qa_pairs(qa_pairs: Sequence[Mapping[str, Any]]) -> str:
    """``Q1: ...\\nA1: ...`` blocks separated by blank lines."""
    return "\n\n".join(
        f"Q{i}: {qa.get('question', '')}\nA{i}: {qa.get('answer', '')}"
        for i, qa in enumerate(qa_pairs, 1)
    )


class RequirementsAssistant:
    """Every SRS-assistant operation over one text-generation client."""

    def __init__(
        self,
        client: TextGenerator,
        interaction_log: InteractionLog | None = None,
        *,
        policy: RetryPolicy | None = None,
        default_confidence: float = DEFAULT_CONFIDENCE,
        telemetry_context: TelemetryContextProtocol | None = None,
    ):
        self.client = client
        self.generator = StructuredGenerator(client, policy, telemetry_context)
        self.interaction_log = interaction_log
        self.default_confidence = default_confidence

    # --- Planning ---

    def recommend_sdlc(
        self, project_text: str, constraints: Any | None = None
    ) -> dict[str, Any]:
        """Recommend one of the known SDLC models for a project."""
        _require_text(project_text, "Project description is required")

        project = f"{project_text}\n"
        if constraints:
            project += f"Constraints:\n{json.dumps(constraints, indent=2)}"
        prompt = render_prompt("sdlc_prompt.txt", USER_PROJECT=project)

        schema = load_schema(SDLC_RECOMMENDATION)
        validated = self.generator.generate_validated(
            prompt,
            schema,
            lambda: build_schema_retry_prompt(schema, project_text),
        )
        result = require_fields(validated.value, ("model", "why"), MSG_MISSING_SDLC_FIELDS)
        require_allowed(result["model"], SDLC_MODELS, MSG_INVALID_SDLC_MODEL)
        result = with_normalized_confidence(result, default=self.default_confidence)

        self._record("sdlc.recommend", prompt, validated.raw_text, result)
        return result

    def generate_plan(self, project_text: str) -> dict[str, Any]:
        """Break a project into milestones with durations and deliverables."""
        _require_text(project_text, "Project description is required")
        prompt = render_prompt("plan_prompt.txt", USER_PROJECT=project_text)

        schema = load_schema(PLAN_REQUIREMENTS)
        validated = self.generator.generate_validated(
            prompt,
            schema,
            lambda: build_schema_retry_prompt(schema, project_text),
        )
        self._record("plan.generate", prompt, validated.raw_text, validated.value)
        return validated.value

    # --- Design ---

    def design_system(self, srs_text: str, context: Any | None = None) -> dict[str, Any]:
        """Propose an architecture; falls back to ``{"design_text": raw}`` for non-JSON replies."""
        _require_text(srs_text, "srs_text is required and must be a string")
        _reject_data_uri(
            srs_text,
            "Document content must be extracted as text before sending. "
            "Please ensure PDFs are processed correctly.",
        )
        if len(srs_text) > LARGE_DOCUMENT_CHARS:
            log.warning("Large SRS content: %d characters", len(srs_text))

        prompt = render_prompt(
            "system_design_prompt.txt",
            SRS_CONTENT=srs_text,
            CONTEXT_JSON=json.dumps(context or {}, indent=2),
        )
        raw = self.client.generate(prompt)
        result = self._parse_object_or_fallback(raw, "design_text")
        self._record("design.system", prompt, raw, result, truncate=True)
        return result

    def design_schema(
        self,
        requirements_text: str,
        output_format: str = "auto",
        context_text: str | None = None,
    ) -> dict[str, Any]:
        """Derive a database schema; falls back to ``{"schema_text": raw}``."""
        _require_text(requirements_text, "requirements_text is required and must be a string")
        _reject_data_uri(
            requirements_text,
            "Send extracted text, not raw file data. Please extract text first.",
        )

        prompt = render_prompt(
            "database_schema_prompt.txt",
            OUTPUT_FORMAT=output_format or "auto",
            REQUIREMENTS_TEXT=requirements_text,
            CONTEXT_TEXT=format_context_block(context_text),
        )
        raw = self.client.generate(prompt)
        result = self._parse_object_or_fallback(raw, "schema_text")
        self._record("design.schema", prompt, raw, result, truncate=True)
        return result

    def generate_diagram(
        self,
        diagram_type: str,
        project_info: str | None = None,
        context_text: str | None = None,
        selected_file_content: str | None = None,
    ) -> dict[str, Any]:
        """Generate repaired Mermaid source for one of ``DIAGRAM_TYPES``."""
        if not isinstance(diagram_type, str) or not diagram_type:
            raise InvalidRequestError("diagram_type is required and must be a string")
        if diagram_type not in DIAGRAM_TYPES:
            raise InvalidRequestError(
                f"Invalid diagram_type. Must be one of: {', '.join(DIAGRAM_TYPES)}"
            )

        combined = project_info or ""
        if isinstance(selected_file_content, str) and selected_file_content:
            combined = (
                f"{combined}{SELECTED_FILE_DIVIDER}{selected_file_content}"
                if combined
                else selected_file_content
            )
        if isinstance(context_text, str) and context_text:
            combined = f"{combined}{CONTEXT_DIVIDER}{context_text}" if combined else context_text
        if not combined.strip():
            raise InvalidRequestError(
                "Either project_info, context_text, or selected_file_content must be provided"
            )

        prompt = render_prompt(
            "diagram_generation_prompt.txt",
            DIAGRAM_TYPE=diagram_type,
            PROJECT_INFO=combined,
            CONTEXT_TEXT=format_context_block(context_text),
        )
        raw = self.client.generate(prompt)
        mermaid_code = repair_diagram(raw, diagram_type)
        result = {"diagram_type": diagram_type, "mermaid_code": mermaid_code}
        self._record(
            "design.diagram",
            prompt,
            f"Mermaid code generated ({len(mermaid_code)} chars)",
            {"diagram_type": diagram_type},
            truncate=True,
        )
        return result

    # --- Implementation lab ---

    def generate_code(
        self,
        description: str,
        target_language: str,
        style: str | None = None,
        context: Any | None = None,
        include_tests: bool = False,
    ) -> dict[str, Any]:
        if not description or not target_language:
            raise InvalidRequestError("description and target_language are required")

        prompt = render_prompt(
            "code_generate_prompt.txt",
            TARGET_LANGUAGE=target_language,
            DESCRIPTION=description,
            CONTEXT_BLOCK=format_context_block(context),
            STYLE=style or "none provided",
            INCLUDE_TESTS="yes" if include_tests else "no",
        )
        raw = self.client.generate(prompt)
        result = shape_generated_code(parse_llm_json(raw), target_language)
        self._record("code.generate", prompt, raw, result, truncate=True)
        return result

    def translate_code(
        self,
        source_language: str,
        target_language: str,
        source_code: str,
        instructions: str | None = None,
        context: Any | None = None,
    ) -> dict[str, Any]:
        if not source_language or not target_language or not source_code:
            raise InvalidRequestError(
                "source_language, target_language, and source_code are required"
            )

        prompt = render_prompt(
            "code_translate_prompt.txt",
            SOURCE_LANGUAGE=source_language,
            TARGET_LANGUAGE=target_language,
            SOURCE_CODE=source_code,
            INSTRUCTIONS=instructions or "none",
            CONTEXT_BLOCK=format_context_block(context),
        )
        raw = self.client.generate(prompt)
        result = shape_translated_code(parse_llm_json(raw), target_language)
        self._record("code.translate", prompt, raw, result, truncate=True)
        return result

    def test_code(
        self,
        code: str,
        language: str | None = None,
        instructions: str | None = None,
        context: Any | None = None,
        want_fix: bool = False,
    ) -> dict[str, Any]:
        """Have the model design tests for ``code`` and report their expected outcome."""
        if not code:
            raise InvalidRequestError("code is required")

        prompt = render_prompt(
            "code_test_prompt.txt",
            LANGUAGE=language or "unspecified",
            CODE=code,
            CONTEXT_BLOCK=format_context_block(context),
            INSTRUCTIONS=instructions
            or "comprehensive testing with all quality metrics and scalability tests",
            WANT_FIX="yes" if want_fix else "no",
        )
        raw = self.client.generate(prompt)
        result = shape_test_report(parse_llm_json(raw), want_fix)
        self._record("code.test", prompt, raw, result, truncate=True)
        return result

    def review_code(
        self,
        code: str,
        language: str | None = None,
        context: Any | None = None,
        focus: str | None = None,
    ) -> dict[str, Any]:
        if not code:
            raise InvalidRequestError("code is required")

        prompt = render_prompt(
            "code_review_prompt.txt",
            LANGUAGE=language or "unspecified",
            CODE=code,
            CONTEXT_BLOCK=format_context_block(context),
            FOCUS=focus or "general best practices",
        )
        raw = self.client.generate(prompt)
        result = shape_review(parse_llm_json(raw))
        self._record("code.review", prompt, raw, result, truncate=True)
        return result

    # --- SRS editor ---

    def suggest_edit(
        self,
        selected_text: str,
        instruction: str,
        selection_start: int | None = None,
        selection_end: int | None = None,
    ) -> dict[str, Any]:
        """Suggest a rewrite of an SRS selection.

        Long selections are narrowed to the paragraph at their midpoint.
        Selections that look like code must keep their comment-free text
        unchanged unless the instruction asks for code changes.
        """
        _require_text(selected_text, "selected_text is required")
        _require_text(instruction, "instruction is required")

        text = selected_text
        note = ""
        if is_long_selection(selected_text):
            if selection_start is not None and selection_end is not None:
                midpoint = (selection_end - selection_start) // 2
            else:
                midpoint = len(selected_text) // 2
            text = extract_relevant_paragraph(selected_text, midpoint)
            note = NOTE_LONG_SELECTION

        is_code = is_code_block(text)
        if is_code:
            note += NOTE_CODE_SELECTION

        prompt = render_prompt("edit_prompt.txt", USER_INSTRUCTION=instruction, SELECTED_TEXT=text)
        if is_code:
            prompt += CODE_PROMPT_SUFFIX

        raw = self.client.generate(prompt)
        parsed = parse_llm_json(raw)
        suggestion = parsed.get("suggestion_text") if isinstance(parsed, dict) else None
        if not isinstance(suggestion, str) or not suggestion.strip():
            raise DomainInvariantViolation(MSG_EMPTY_SUGGESTION)

        if is_code:
            ensure_structure_preserved(text, suggestion, instruction)

        result = dict(parsed)
        if note:
            result["explanation"] = f"{note}{parsed.get('explanation') or ''}"
        result = with_normalized_confidence(result, default=self.default_confidence)

        self._record("srs.edit", prompt, raw, result)
        return result

    def generate_srs_questions(self, project_description: str) -> dict[str, Any]:
        """Stakeholder questions for every SRS subsection."""
        _require_text(project_description, "Project description is required")
        prompt = render_prompt("srs_generate_prompt.txt", PROJECT_DESCRIPTION=project_description)
        raw = self.client.generate(prompt)
        result = require_list(parse_llm_json(raw), "sections", MSG_INVALID_QUESTIONS)
        self._record("srs.generate_questions", prompt, raw, result)
        return result

    def generate_srs_content(
        self,
        section_title: str,
        subsection_title: str,
        qa_pairs: Sequence[Mapping[str, Any]],
    ) -> dict[str, Any]:
        """Draft one subsection from stakeholder answers."""
        if not section_title or not subsection_title or qa_pairs is None:
            raise InvalidRequestError("Section details and Q&A pairs are required")
        if isinstance(qa_pairs, str | bytes) or not isinstance(qa_pairs, Sequence):
            raise InvalidRequestError("qa_pairs must be a list of question/answer objects")

        prompt = render_prompt(
            "srs_content_prompt.txt",
            SECTION_TITLE=section_title,
            SUBSECTION_TITLE=subsection_title,
            QA_PAIRS=format_qa_pairs(qa_pairs),
        )
        raw = self.client.generate(prompt)
        result = require_fields(parse_llm_json(raw), ("content",), MSG_NO_CONTENT)
        self._record("srs.generate_content", prompt, raw, result)
        return result

    # --- Helpers ---

    def _parse_object_or_fallback(self, raw: str, fallback_key: str) -> dict[str, Any]:
        try:
            parsed = parse_llm_json(raw)
        except MalformedResponseError as e:
            log.warning("Reply was not valid JSON, returning raw text: %s", e.message)
            return {fallback_key: raw}
        if not isinstance(parsed, dict):
            log.warning("Reply was JSON but not an object, returning raw text")
            return {fallback_key: raw}
        return parsed

    def _record(
        self,
        operation: str,
        prompt: str,
        raw_response: str,
        parsed: Any,
        truncate: bool = False,
    ) -> None:
        if self.interaction_log is None:
            return
        if truncate:
            prompt = prompt[:LOG_PROMPT_EXCERPT] + "..."
            raw_response = raw_response[:LOG_RESPONSE_EXCERPT]
        self.interaction_log.record(operation, prompt, raw_response, parsed)
