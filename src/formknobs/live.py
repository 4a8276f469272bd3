"""Per-field state tracking for event-driven (live) validation.

A UI layer creates one session per rendered form and forwards its input,
blur and submit events. Each field moves through:

    pristine -> validating -> valid | invalid -> validating -> ...

There is no terminal state; a field can be re-checked for the life of the
form.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from dataknobs_common.transitions import TransitionValidator

from .evaluator import EvaluationPolicy
from .exceptions import FieldNotFoundError
from .result import FormReport, ValidationResult
from .validator import FormValidator

logger = logging.getLogger(__name__)


class FieldState(str, Enum):
    """Live validation state of one field."""

    PRISTINE = "pristine"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


FIELD_STATE_TRANSITIONS = TransitionValidator(
    "field_state",
    {
        FieldState.PRISTINE.value: {FieldState.VALIDATING.value},
        FieldState.VALIDATING.value: {FieldState.VALID.value, FieldState.INVALID.value},
        FieldState.VALID.value: {FieldState.VALIDATING.value},
        FieldState.INVALID.value: {FieldState.VALIDATING.value},
    },
)


class LiveValidationSession:
    """Tracks field states for one form while the user edits it.

    Input and blur events re-check a single field with the live policy
    (short-circuit by default). Submit checks every field with the submit
    policy (accumulate by default) and updates all states.
    """

    def __init__(
        self,
        validator: FormValidator,
        schema_name: str,
        live_policy: EvaluationPolicy | str | None = None,
        submit_policy: EvaluationPolicy | str | None = None,
    ):
        """Initialize a session.

        Args:
            validator: Validator holding the form's schema
            schema_name: Name of the form's schema
            live_policy: Policy for input/blur re-checks
            submit_policy: Policy for submit checks

        Raises:
            SchemaNotFoundError: If the schema is not registered
        """
        self.validator = validator
        self.schema_name = schema_name
        self.live_policy = EvaluationPolicy.coerce(live_policy or validator.settings.live_policy)
        self.submit_policy = EvaluationPolicy.coerce(submit_policy or validator.settings.default_policy)

        schema = validator.get_schema(schema_name)
        self._states: dict[str, FieldState] = {name: FieldState.PRISTINE for name in schema.field_names}
        self._results: dict[str, ValidationResult] = {}

    def on_input(self, field_name: str, value: Any) -> ValidationResult:
        """Handle a value change for a field."""
        return self._recheck(field_name, value)

    def on_blur(self, field_name: str, value: Any) -> ValidationResult:
        """Handle a field losing focus."""
        return self._recheck(field_name, value)

    def submit(self, values: Mapping[str, Any] | None) -> FormReport:
        """Validate the whole form and update every field's state.

        Returns:
            The FormReport; the host blocks submission when it is invalid
        """
        report = self.validator.validate(self.schema_name, values, self.submit_policy)
        for field_name, result in report.results.items():
            self._states.setdefault(field_name, FieldState.PRISTINE)
            self._transition(field_name, FieldState.VALIDATING)
            self._settle(field_name, result)
        logger.debug(f"Submit of '{self.schema_name}': valid={report.valid}")
        return report

    def state(self, field_name: str) -> FieldState:
        """Current state of a field."""
        if field_name not in self._states:
            raise FieldNotFoundError(self.schema_name, field_name)
        return self._states[field_name]

    def states(self) -> dict[str, FieldState]:
        return dict(self._states)

    def result(self, field_name: str) -> ValidationResult | None:
        """Most recent result for a field, or None if never checked."""
        return self._results.get(field_name)

    def reset(self) -> None:
        """Return every field to pristine and forget previous results."""
        self._states = {name: FieldState.PRISTINE for name in self._states}
        self._results.clear()

    def _recheck(self, field_name: str, value: Any) -> ValidationResult:
        previous = self.state(field_name)
        self._transition(field_name, FieldState.VALIDATING)
        try:
            result = self.validator.evaluate_field(self.schema_name, field_name, value, self.live_policy)
        except Exception:
            self._states[field_name] = previous
            raise
        self._settle(field_name, result)
        return result

    def _settle(self, field_name: str, result: ValidationResult) -> None:
        self._transition(field_name, FieldState.VALID if result.valid else FieldState.INVALID)
        self._results[field_name] = result

    def _transition(self, field_name: str, target: FieldState) -> None:
        current = self._states[field_name]
        FIELD_STATE_TRANSITIONS.validate(current.value, target.value)
        self._states[field_name] = target
