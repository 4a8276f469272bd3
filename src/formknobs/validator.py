"""Form-level validation across every field of a registered schema.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .evaluator import EvaluationPolicy, RuleEvaluator
from .exceptions import FieldNotFoundError
from .registry import SchemaRegistry
from .result import FormReport, ValidationResult
from .schema import Schema
from .settings import ValidatorSettings

if TYPE_CHECKING:
    from dataknobs_config import Config

logger = logging.getLogger(__name__)


class FormValidator:
    """Validates submitted values against registered schemas.

    The validator owns its schema registry; there is no process-wide
    registry. Each call builds a fresh report and keeps no state between
    calls, so repeated calls with the same inputs give equal reports.

    Example:
        ```python
        validator = FormValidator()
        validator.define_schema("signup", {
            "username": [Required(), MinLength(3), MaxLength(20)],
            "email": [Required(), Pattern(EMAIL_PATTERN)],
        })
        report = validator.validate("signup", {"username": "ab", "email": "bad"})
        report.valid   # False
        report.errors  # {"username": ["Minimum length is 3."], "email": ["Invalid format."]}
        ```
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        settings: ValidatorSettings | None = None,
        evaluator: RuleEvaluator | None = None,
    ):
        """Initialize the validator.

        Args:
            registry: Schema registry to read from (a new one by default)
            settings: Policies and strictness (defaults when omitted)
            evaluator: Rule evaluator; built from ``settings.strict`` when omitted
        """
        self.registry = registry if registry is not None else SchemaRegistry()
        self.settings = settings or ValidatorSettings()
        self.evaluator = evaluator or RuleEvaluator(strict=self.settings.strict)

    @classmethod
    def from_config(cls, source: Config | dict[str, Any] | str | Path) -> FormValidator:
        """Build a validator and its schemas from configuration.

        See ``formknobs.factory.load_validator``.
        """
        from .factory import load_validator

        return load_validator(source)

    def define_schema(self, name: str, schema: Schema | Mapping[str, Any]) -> Schema:
        """Register a schema under ``name``, replacing any previous one."""
        return self.registry.define_schema(name, schema)

    def get_schema(self, name: str) -> Schema:
        """Look up a registered schema; raises SchemaNotFoundError if absent."""
        return self.registry.get_schema(name)

    def validate(
        self,
        schema_name: str,
        values: Mapping[str, Any] | None,
        policy: EvaluationPolicy | str | None = None,
    ) -> FormReport:
        """Validate every declared field of a schema.

        Args:
            schema_name: Registered schema name
            values: Field name to submitted value; missing fields count as None
            policy: Per-field policy; defaults to ``settings.default_policy``

        Returns:
            FormReport with one ValidationResult per declared field

        Raises:
            SchemaNotFoundError: If the schema is not registered
        """
        schema = self.registry.get_schema(schema_name)
        policy = EvaluationPolicy.coerce(policy or self.settings.default_policy)
        values = values or {}

        report = FormReport(schema_name=schema_name)
        for spec in schema:
            report.results[spec.name] = self.evaluator.evaluate(
                values.get(spec.name), spec.rules, policy, field=spec.name
            )

        if report.valid:
            logger.debug(f"Schema '{schema_name}': all {len(report.results)} field(s) valid")
        else:
            logger.debug(f"Schema '{schema_name}': invalid fields {report.invalid_fields}")
        return report

    def evaluate_field(
        self,
        schema_name: str,
        field_name: str,
        value: Any,
        policy: EvaluationPolicy | str | None = None,
    ) -> ValidationResult:
        """Re-check a single field, typically on an input or blur event.

        Args:
            schema_name: Registered schema name
            field_name: Field declared in the schema
            value: Current field value
            policy: Defaults to ``settings.live_policy``

        Returns:
            ValidationResult for the field

        Raises:
            SchemaNotFoundError: If the schema is not registered
            FieldNotFoundError: If the field is not declared in the schema
        """
        schema = self.registry.get_schema(schema_name)
        spec = schema.get_field(field_name)
        if spec is None:
            raise FieldNotFoundError(schema_name, field_name)

        policy = EvaluationPolicy.coerce(policy or self.settings.live_policy)
        return self.evaluator.evaluate(value, spec.rules, policy, field=field_name)
