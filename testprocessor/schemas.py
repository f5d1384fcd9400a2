"""JSON Schemas for test case, test suite and step library documents."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

from .errors import DefinitionError

_SCALAR = {"type": ["string", "number", "boolean"]}
_STRING_LIST = {"type": ["array", "null"], "items": {"type": "string"}}

TEST_CASE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "description": {"type": ["string", "null"]},
        "tags": {"type": ["array", "null"], "items": _SCALAR},
        "steps": {"type": ["array", "null"]},
    },
}

TEST_SUITE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": ["string", "null"]},
        "description": {"type": ["string", "null"]},
        "tags": {"type": ["array", "null"], "items": _SCALAR},
        "test-cases": {"type": ["array", "null"]},
        "pre-actions": _STRING_LIST,
        "post-actions": _STRING_LIST,
    },
}

STEP_LIBRARY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "description": {"type": ["string", "null"]},
        "parameters": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": ["string", "null"]},
                    "default": {"type": ["string", "number", "boolean", "null"]},
                },
            },
        },
        "steps": {"type": ["array", "null"]},
    },
}

_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "test case": TEST_CASE_SCHEMA,
    "test suite": TEST_SUITE_SCHEMA,
    "step library": STEP_LIBRARY_SCHEMA,
}

_validators: Dict[str, Draft7Validator] = {}


def _get_validator(kind: str) -> Draft7Validator:
    """Get (and cache) the validator for a document kind."""
    if kind not in _validators:
        _validators[kind] = Draft7Validator(_SCHEMAS[kind])
    return _validators[kind]


def _format_validation_error(error: Any) -> str:
    """Format a jsonschema ValidationError into a readable message."""
    path = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "root"
    return f"{path}: {error.message}"


def validate_document(kind: str, data: Any, source: Optional[str] = None) -> None:
    """Validate a parsed YAML document.

    Args:
        kind: One of "test case", "test suite", "step library"
        data: Parsed document
        source: File name for error messages

    Raises:
        DefinitionError: If the document is empty or violates the schema
    """
    if data is None:
        raise DefinitionError("Invalid YAML content", source=source)

    problems: List[str] = [
        _format_validation_error(error)
        for error in sorted(_get_validator(kind).iter_errors(data), key=str)
    ]
    if problems:
        raise DefinitionError(f"Invalid {kind}", source=source, problems=problems)
