"""Validation result types for single fields and whole forms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationResult:
    """Outcome of evaluating one field's rules against its value.

    ``errors`` holds the violation messages in rule order; an empty list
    means the field is valid. ``warnings`` holds non-fatal diagnostics
    (such as rules of an unknown kind that were skipped) and never affects
    validity.
    """

    field: str | None
    value: Any
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when no rule reported a violation."""
        return not self.errors

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def add_error(self, error: str) -> ValidationResult:
        """Add a violation message (fluent API).

        Args:
            error: Message to add

        Returns:
            Self for chaining
        """
        self.errors.append(error)
        return self

    def add_warning(self, warning: str) -> ValidationResult:
        """Add a warning without affecting validity (fluent API).

        Args:
            warning: Warning message to add

        Returns:
            Self for chaining
        """
        self.warnings.append(warning)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "field": self.field,
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class FormReport:
    """Aggregated validation outcome across all fields of one schema.

    ``results`` preserves the schema's field declaration order. Every
    declared field has an entry, valid or not.
    """

    schema_name: str
    results: dict[str, ValidationResult] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        """True iff every field's error list is empty."""
        return all(result.valid for result in self.results.values())

    def __bool__(self) -> bool:
        return self.valid

    def __getitem__(self, field_name: str) -> ValidationResult:
        return self.results[field_name]

    def __contains__(self, field_name: object) -> bool:
        return field_name in self.results

    @property
    def errors(self) -> dict[str, list[str]]:
        """Violation messages for every field, keyed by field name."""
        return {name: list(result.errors) for name, result in self.results.items()}

    @property
    def invalid_fields(self) -> list[str]:
        """Names of fields with at least one violation, in schema order."""
        return [name for name, result in self.results.items() if not result.valid]

    @property
    def warnings(self) -> list[str]:
        """All warnings across fields, prefixed with the field name."""
        return [
            f"{name}: {warning}"
            for name, result in self.results.items()
            for warning in result.warnings
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert report to dictionary representation.

        Returns:
            Dictionary with the schema name, overall validity and per-field errors
        """
        return {
            "schema": self.schema_name,
            "valid": self.valid,
            "errors": self.errors,
        }
