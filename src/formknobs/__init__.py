"""formknobs - declarative, rule-based validation for form input.

This package validates submitted field values against named schemas:
- Immutable rule variants (Required, MinLength, MaxLength, Pattern, Custom)
- Short-circuit and accumulate evaluation policies
- An explicit schema registry owned by each FormValidator
- Structured per-field results aggregated into a FormReport
- Live per-field state tracking for event-driven UIs
- Schemas and validators built from dataknobs configuration

Example:
    ```python
    from formknobs import FormValidator, MinLength, Required

    validator = FormValidator()
    validator.define_schema("signup", {"username": [Required(), MinLength(3)]})
    report = validator.validate("signup", {"username": "ab"})
    report.errors  # {"username": ["Minimum length is 3."]}
    ```
"""

from .evaluator import EvaluationPolicy, RuleEvaluator
from .exceptions import (
    FieldNotFoundError,
    FormknobsError,
    RuleDefinitionError,
    SchemaNotFoundError,
    TypeMismatchError,
    UnknownRuleKindError,
)
from .factory import (
    FormValidatorFactory,
    SchemaFactory,
    load_validator,
    schema_factory,
    validator_factory,
)
from .live import FIELD_STATE_TRANSITIONS, FieldState, LiveValidationSession
from .registry import SchemaRegistry
from .result import FormReport, ValidationResult
from .rules import (
    EMAIL_PATTERN,
    Custom,
    MaxLength,
    MinLength,
    Pattern,
    Required,
    Rule,
    RuleKind,
    RuleOutcome,
    UnknownRule,
    parse_rule,
    parse_rules,
)
from .schema import FieldSpec, Schema
from .settings import ValidatorSettings
from .validator import FormValidator

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Rules
    "Rule",
    "RuleKind",
    "RuleOutcome",
    "Required",
    "MinLength",
    "MaxLength",
    "Pattern",
    "Custom",
    "UnknownRule",
    "EMAIL_PATTERN",
    "parse_rule",
    "parse_rules",
    # Schema and registry
    "FieldSpec",
    "Schema",
    "SchemaRegistry",
    # Evaluation
    "EvaluationPolicy",
    "RuleEvaluator",
    "FormValidator",
    "ValidatorSettings",
    # Results
    "ValidationResult",
    "FormReport",
    # Live validation
    "FieldState",
    "FIELD_STATE_TRANSITIONS",
    "LiveValidationSession",
    # Factories
    "SchemaFactory",
    "FormValidatorFactory",
    "schema_factory",
    "validator_factory",
    "load_validator",
    # Exceptions
    "FormknobsError",
    "SchemaNotFoundError",
    "FieldNotFoundError",
    "TypeMismatchError",
    "UnknownRuleKindError",
    "RuleDefinitionError",
]
