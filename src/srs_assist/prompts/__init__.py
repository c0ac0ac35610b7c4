"""Prompt templates for every assistant operation."""

from .loader import (
    NO_CONTEXT,
    build_schema_retry_prompt,
    fill_template,
    format_context_block,
    load_prompt,
    render_prompt,
)

__all__ = [
    "NO_CONTEXT",
    "build_schema_retry_prompt",
    "fill_template",
    "format_context_block",
    "load_prompt",
    "render_prompt",
]
