"""Custom exceptions for the formknobs package.

This module defines exception types for form validation,
built on the common exception framework from dataknobs_common.
"""

from __future__ import annotations

from typing import Any

from dataknobs_common import (
    ConfigurationError,
    DataknobsError,
    NotFoundError,
    ValidationError,
)

# Package-level alias so callers can catch every formknobs failure at once
FormknobsError = DataknobsError


class SchemaNotFoundError(NotFoundError):
    """Raised when a schema name has not been registered."""

    def __init__(self, schema_name: str, available: list[str] | None = None):
        self.schema_name = schema_name
        self.available = available or []
        super().__init__(
            f"No schema defined for form '{schema_name}'",
            context={"schema_name": schema_name, "available": self.available},
        )


class FieldNotFoundError(NotFoundError):
    """Raised when a field is not declared in a schema."""

    def __init__(self, schema_name: str, field_name: str):
        self.schema_name = schema_name
        self.field_name = field_name
        super().__init__(
            f"Field '{field_name}' is not declared in schema '{schema_name}'",
            context={"schema_name": schema_name, "field_name": field_name},
        )


class TypeMismatchError(ValidationError):
    """Raised when a rule is applied to a value it cannot measure.

    Length rules need a value with ``len()`` and pattern rules need a
    string. Anything else points at a schema-authoring or caller bug, so it
    is raised instead of being reported as a field violation.
    """

    def __init__(self, rule_kind: str, value: Any, expected: str):
        self.rule_kind = rule_kind
        self.value = value
        self.expected = expected
        actual = type(value).__name__
        super().__init__(
            f"Rule '{rule_kind}' expects {expected}, got {actual}",
            context={"rule_kind": rule_kind, "expected": expected, "actual_type": actual},
        )


class UnknownRuleKindError(ValidationError):
    """Raised in strict mode when a rule kind is not recognized."""

    def __init__(self, rule_kind: str):
        self.rule_kind = rule_kind
        super().__init__(f"Unknown rule type: {rule_kind}", context={"rule_kind": rule_kind})


class RuleDefinitionError(ConfigurationError):
    """Raised when an encoded rule cannot be parsed."""

    def __init__(self, definition: Any, message: str):
        self.definition = definition
        super().__init__(
            f"Invalid rule definition {definition!r}: {message}",
            context={"definition": repr(definition)},
        )


__all__ = [
    "FormknobsError",
    "SchemaNotFoundError",
    "FieldNotFoundError",
    "TypeMismatchError",
    "UnknownRuleKindError",
    "RuleDefinitionError",
]
