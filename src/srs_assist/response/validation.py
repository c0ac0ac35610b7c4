"""Structural validation of parsed model output against JSON Schema."""

from typing import Any

from jsonschema import Draft7Validator


def schema_errors(schema: dict[str, Any], value: Any) -> list[str]:
    """Every violation of ``schema`` by ``value``, as readable messages.

    Empty when the value conforms.
    """
    validator = Draft7Validator(schema)
    messages = []
    for error in sorted(validator.iter_errors(value), key=lambda e: [str(p) for p in e.path]):
        location = "/".join(str(p) for p in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages


def is_valid(schema: dict[str, Any], value: Any) -> bool:
    return Draft7Validator(schema).is_valid(value)
