"""JSON Schema helpers shared by snapshot and config loading."""

import json
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft7Validator, ValidationError

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


def load_schema(name: str) -> Dict[str, Any]:
    return json.loads((SCHEMAS_DIR / name).read_text(encoding="utf-8"))


def format_validation_error(error: ValidationError) -> str:
    """Format a jsonschema error as a one-line message with its document path."""
    path = " -> ".join([str(p) for p in error.absolute_path]) if error.absolute_path else "root"

    if error.validator == "required":
        missing_props = error.message.split("'")[1::2]
        return f"Missing required field(s) at '{path}': {', '.join(missing_props)}"
    if error.validator == "type":
        return f"Type error at '{path}': expected {error.validator_value}, got {type(error.instance).__name__}"
    if error.validator == "enum":
        return f"Invalid value at '{path}': '{error.instance}' not in allowed values {error.validator_value}"
    if error.validator in ("minimum", "maximum", "exclusiveMinimum"):
        return f"Range error at '{path}': {error.instance} violates {error.validator} {error.validator_value}"
    return f"Validation error at '{path}': {error.message}"


def validate_document(document: Any, schema: Dict[str, Any]) -> List[str]:
    """Return formatted schema errors for a document, sorted for stable output."""
    validator = Draft7Validator(schema)
    return [format_validation_error(error) for error in sorted(validator.iter_errors(document), key=str)]
