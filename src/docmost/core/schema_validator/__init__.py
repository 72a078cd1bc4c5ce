"""
Schema Validator - Validates payloads against JSON Schemas.

Responsibilities:
- Reject malformed schemas when a method is registered
- Validate params before any handler runs
- Produce clear, path-qualified error messages
- Never execute or transform anything
"""

from collections.abc import Mapping
from typing import Any

from jsonschema import Draft7Validator


class ValidationError(Exception):
    """Schema validation error."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Schema validation failed: {', '.join(errors)}")


class SchemaValidator:
    """
    JSON Schema validator bound to one schema.

    Uses jsonschema Draft 7. The schema itself is checked on construction so
    a broken method definition fails at startup, not on first call.
    """

    def __init__(self, schema: Mapping[str, Any]):
        Draft7Validator.check_schema(schema)
        self.schema = schema
        self._validator = Draft7Validator(schema)

    def validate(self, data: Any) -> None:
        """
        Validate data against the bound schema.

        Raises:
            ValidationError: If validation fails
        """
        errors = sorted(self._validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])

        if errors:
            raise ValidationError([_format_error(error) for error in errors])


def _format_error(error) -> str:
    path = ".".join(str(p) for p in error.path)
    return f"{path}: {error.message}" if path else error.message


__all__ = ["SchemaValidator", "ValidationError"]
