"""Rule evaluation for a single field value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from .exceptions import TypeMismatchError, UnknownRuleKindError
from .result import ValidationResult
from .rules import Custom, MaxLength, MinLength, Pattern, Required, Rule, RuleOutcome

logger = logging.getLogger(__name__)


class EvaluationPolicy(str, Enum):
    """How a field's rule list is walked.

    SHORT_CIRCUIT stops at the first failing rule and reports only its
    message, which suits live re-checks that show one error at a time.
    ACCUMULATE runs every rule and reports every failure, which suits
    whole-form submission summaries.
    """

    SHORT_CIRCUIT = "short_circuit"
    ACCUMULATE = "accumulate"

    @classmethod
    def coerce(cls, policy: EvaluationPolicy | str) -> EvaluationPolicy:
        """Accept a policy or its name ("accumulate", "short-circuit", ...)."""
        if isinstance(policy, cls):
            return policy
        normalized = str(policy).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError as e:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown evaluation policy '{policy}'. Expected one of: {allowed}") from e


def _rule_kind(rule: Any) -> str:
    kind = getattr(rule, "kind", None)
    return str(kind) if kind else type(rule).__name__


class RuleEvaluator:
    """Evaluates an ordered rule list against one value.

    Evaluation never raises for faults inside a single rule: a custom
    predicate that throws becomes a violation message, and a rule of an
    unknown kind is skipped with a warning. Two conditions are raised:

    - ``TypeMismatchError`` when a length or pattern rule receives a value
      it cannot measure
    - ``UnknownRuleKindError`` for unknown kinds when ``strict`` is set
    """

    def __init__(self, strict: bool = False):
        """Initialize the evaluator.

        Args:
            strict: If True, unknown rule kinds raise instead of being skipped
        """
        self.strict = strict

    def evaluate(
        self,
        value: Any,
        rules: Iterable[Rule],
        policy: EvaluationPolicy | str = EvaluationPolicy.ACCUMULATE,
        field: str | None = None,
    ) -> ValidationResult:
        """Evaluate rules in declared order.

        Args:
            value: Raw field value (None when the field was not submitted)
            rules: Ordered rules for the field
            policy: Short-circuit or accumulate
            field: Field name, used in the result and in diagnostics

        Returns:
            ValidationResult with the failing rules' messages
        """
        policy = EvaluationPolicy.coerce(policy)
        result = ValidationResult(field=field, value=value)

        for rule in rules:
            try:
                outcome = self.check(value, rule)
            except UnknownRuleKindError as e:
                if self.strict:
                    raise
                logger.warning(f"Unknown rule type: {e.rule_kind} (field '{field}'); treating as valid")
                result.add_warning(f"Unknown rule type '{e.rule_kind}' was ignored")
                continue

            if not outcome.valid:
                result.add_error(outcome.message)
                if policy is EvaluationPolicy.SHORT_CIRCUIT:
                    break

        logger.debug(f"Field '{field}': {len(result.errors)} violation(s) under {policy.value}")
        return result

    def check(self, value: Any, rule: Rule) -> RuleOutcome:
        """Check a single rule.

        Args:
            value: Raw field value
            rule: Rule to apply

        Returns:
            RuleOutcome for the rule

        Raises:
            TypeMismatchError: If the value cannot be measured by the rule
            UnknownRuleKindError: If the rule's kind is not implemented
        """
        if isinstance(rule, Required):
            valid = value is not None and not (isinstance(value, str) and not value.strip())
            return RuleOutcome(valid, rule.error_message())

        if isinstance(rule, MinLength):
            length = self._length(value, rule)
            return RuleOutcome(length is None or length >= rule.value, rule.error_message())

        if isinstance(rule, MaxLength):
            length = self._length(value, rule)
            return RuleOutcome(length is None or length <= rule.value, rule.error_message())

        if isinstance(rule, Pattern):
            if value is None:
                return RuleOutcome(True, rule.error_message())
            if not isinstance(value, str):
                raise TypeMismatchError(rule.kind, value, "a string")
            return RuleOutcome(rule.regex.fullmatch(value) is not None, rule.error_message())

        if isinstance(rule, Custom):
            return self._check_custom(value, rule)

        raise UnknownRuleKindError(_rule_kind(rule))

    def _length(self, value: Any, rule: Rule) -> int | None:
        # Absence is Required's concern
        if value is None:
            return None
        if not hasattr(value, "__len__"):
            raise TypeMismatchError(rule.kind, value, "a value with a length")
        return len(value)

    def _check_custom(self, value: Any, rule: Custom) -> RuleOutcome:
        name = getattr(rule.validator, "__name__", repr(rule.validator))
        try:
            returned = rule.validator(value)
        except Exception as e:
            logger.warning(f"Custom validator '{name}' raised {type(e).__name__}: {e}", exc_info=True)
            return RuleOutcome(False, f"Custom validation error: {e!s}")

        if isinstance(returned, RuleOutcome):
            return RuleOutcome(returned.valid, returned.message or rule.error_message())
        if isinstance(returned, bool):
            return RuleOutcome(returned, rule.error_message())
        if isinstance(returned, tuple) and len(returned) == 2:
            valid, message = returned
            return RuleOutcome(bool(valid), message or rule.error_message())
        if isinstance(returned, Mapping):
            for key in ("valid", "is_valid", "isValid"):
                if key in returned:
                    return RuleOutcome(bool(returned[key]), returned.get("message") or rule.error_message())

        logger.warning(f"Custom validator '{name}' returned unexpected type {type(returned).__name__}")
        return RuleOutcome(False, f"Custom validator returned unexpected type: {type(returned).__name__}")
