"""Repair of model-written Mermaid diagram source.

Models routinely wrap diagrams in fences, label flowchart edges with
sequence-diagram colons, fan edges out with ``&`` and paste SQL column types
into ER diagrams. ``repair_diagram`` rewrites those into syntax Mermaid
renders, without trying to validate the diagram as a whole.

Diagrams whose first statement is ``sequenceDiagram`` skip edge relabeling
and ``&`` expansion entirely. There ``A-->B: text`` is a valid message, and
rewriting it into a flowchart pipe label would break the diagram.
"""

import re

from ..exceptions import DomainInvariantViolation

DIAGRAM_TYPES = ("sequence", "er", "dataflow", "usecase", "architecture")

MSG_EMPTY_DIAGRAM = "LLM did not return valid Mermaid code"

_MERMAID_FENCE_OPEN = re.compile(r"^```mermaid\s*", re.IGNORECASE)
_FENCE_OPEN = re.compile(r"^```\s*")
_FENCE_CLOSE = re.compile(r"```\s*$")

# "A --> B: label"
_COLON_LABEL = re.compile(r"([A-Za-z0-9_]+)\s*-->\s*([A-Za-z0-9_]+)\s*:\s*([^\n]+)")
# "A -- label --> B"
_DASH_LABEL = re.compile(r"([A-Za-z0-9_]+)\s*--\s*([^>\n]+?)\s*-->\s*([A-Za-z0-9_]+)")
_PIPE_LABEL = re.compile(r"^\|\s*([^|]+?)\s*\|\s*(.+)$")
_MERMAID_COMMENT = re.compile(r"%%.*")
_INDENT = re.compile(r"^(\s*)")

_ER_TYPE_RULES = (
    (re.compile(r"\b(SERIAL|INT|INTEGER)\s+", re.IGNORECASE), "int "),
    (
        re.compile(r"\b(VARCHAR\([^)]+\)|CHAR\([^)]+\)|TEXT|STRING)\s+", re.IGNORECASE),
        "string ",
    ),
    (re.compile(r"\b(DATE|DATETIME|TIMESTAMP)\s+", re.IGNORECASE), "date "),
    (
        re.compile(
            r"\b(NUMERIC\([^)]+\)|DECIMAL\([^)]+\)|FLOAT|DOUBLE|REAL)\s+",
            re.IGNORECASE,
        ),
        "number ",
    ),
    (re.compile(r"\b(BOOLEAN|BOOL)\s+", re.IGNORECASE), "boolean "),
)
_ER_FIRST_ENTITY = re.compile(r"erDiagram\s*\n\s*(\w+)")
_ER_ENTITY_BLOCK = re.compile(r"^(\s*)([A-Za-z_][A-Za-z0-9_]*)\s*\{", re.MULTILINE)
_ER_RELATIONSHIP = re.compile(
    r"([A-Za-z_][A-Za-z0-9_]*)\s*(\|\|--[o|]?\{|\}o--o\{)\s*([A-Za-z_][A-Za-z0-9_]*)(\s*:\s*[^\n]*)?"
)


def strip_mermaid_fences(text: str) -> str:
    code = text.strip()
    code = _FENCE_CLOSE.sub("", _MERMAID_FENCE_OPEN.sub("", code))
    code = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", code))
    return code.strip()


def is_sequence_diagram(code: str) -> bool:
    for line in code.splitlines():
        line = line.strip()
        if line and not line.startswith("%%"):
            return line.startswith("sequenceDiagram")
    return False


def relabel_edges(code: str) -> str:
    """Rewrite colon and dashed edge labels into ``A -->|label| B``."""
    code = _COLON_LABEL.sub(lambda m: f"{m[1]} -->|{m[3].strip()}| {m[2]}", code)
    return _DASH_LABEL.sub(lambda m: f"{m[1]} -->|{m[2].strip()}| {m[3]}", code)


def _split_ampersands(text: str) -> list[str]:
    """Split on ``&`` outside brackets and quotes; drop empty parts."""
    parts, current, depth, quote = [], [], 0, None
    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([{":
            depth += 1
        elif char in ")]}":
            depth = max(0, depth - 1)
        elif char == "&" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def _expand_edge_line(line: str) -> list[str]:
    if "-->" not in line or "&" not in line:
        return [line]

    lhs, _, rhs = line.partition("-->")
    lhs = _MERMAID_COMMENT.sub("", lhs).strip()
    rhs = _MERMAID_COMMENT.sub("", rhs).strip()
    # Chained edges (A --> B --> C) are left for Mermaid to handle.
    if not lhs or not rhs or "-->" in rhs:
        return [line]

    label = ""
    target = rhs
    labelled = _PIPE_LABEL.match(rhs)
    if labelled:
        label, target = labelled[1].strip(), labelled[2].strip()

    sources = _split_ampersands(lhs)
    targets = _split_ampersands(target)
    if not sources or not targets or (len(sources) == 1 and len(targets) == 1):
        return [line]

    indent = _INDENT.match(line)[1]
    label_segment = f"|{label}|" if label else ""
    return [f"{indent}{s} -->{label_segment} {t}" for s in sources for t in targets]


def expand_multi_edges(code: str) -> str:
    """Expand ``A & B --> C & D`` into one edge per source/target pair."""
    lines = []
    for line in code.split("\n"):
        lines.extend(_expand_edge_line(line))
    return "\n".join(lines)


def normalize_er_diagram(code: str) -> str:
    """Map SQL column types onto Mermaid's vocabulary and upper-case entities."""
    for pattern, replacement in _ER_TYPE_RULES:
        code = pattern.sub(replacement, code)

    code = _ER_FIRST_ENTITY.sub(lambda m: f"erDiagram\n    {m[1].upper()}", code)
    code = _ER_ENTITY_BLOCK.sub(lambda m: f"{m[1]}{m[2].upper()} {{", code)
    return _ER_RELATIONSHIP.sub(
        lambda m: f"{m[1].upper()} {m[2]} {m[3].upper()}{m[4] or ''}", code
    )


def repair_diagram(raw_text: str, diagram_type: str) -> str:
    """Turn a raw completion into renderable Mermaid source.

    Raises:
        DomainInvariantViolation: Nothing is left once fences are removed.
    """
    code = strip_mermaid_fences(raw_text or "")
    if not code:
        raise DomainInvariantViolation(MSG_EMPTY_DIAGRAM)

    code = code.replace("\u00a0", " ")

    if diagram_type == "er":
        return normalize_er_diagram(code)
    # Sequence messages use "A-->B: text" legitimately.
    if is_sequence_diagram(code):
        return code
    return expand_multi_edges(relabel_edges(code))
