"""Rule variants and the parser for encoded rule definitions.

Rules are immutable values. Each variant carries the parameter its kind
needs plus an optional override message:

- ``Required()``
- ``MinLength(3)`` / ``MaxLength(20)``
- ``Pattern(r"^[a-zA-Z0-9_]+$")``
- ``Custom(predicate)``

Schemas may also be written with encoded rules, which ``parse_rule``
turns into the same variants:

    ```python
    parse_rule("minLength:3")                       # MinLength(3)
    parse_rule({"type": "pattern", "value": "^a"})  # Pattern("^a")
    parse_rule("email")                             # Pattern(EMAIL_PATTERN, ...)
    ```

Kinds the parser does not recognize become ``UnknownRule`` so that schemas
written for newer rule kinds still load; the evaluator decides what to do
with them.
"""

from __future__ import annotations

import importlib
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from re import Pattern as RegexPattern
from typing import Any, ClassVar

from .exceptions import RuleDefinitionError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class RuleKind(str, Enum):
    """Tags of the built-in rule variants."""

    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RuleOutcome:
    """Validity flag and message produced by checking a single rule."""

    valid: bool
    message: str = ""


class Rule:
    """Base class for all rule variants."""

    kind: ClassVar[str] = ""
    default_message: ClassVar[str] = "Invalid value."
    message: str | None = None

    def error_message(self) -> str:
        """Message reported when this rule fails."""
        return self.message or self.default_message


@dataclass(frozen=True)
class Required(Rule):
    """Value must be present and, for strings, not blank."""

    kind: ClassVar[str] = RuleKind.REQUIRED.value
    default_message: ClassVar[str] = "This field is required."

    message: str | None = None


@dataclass(frozen=True)
class MinLength(Rule):
    """Value length must be at least ``value`` characters."""

    kind: ClassVar[str] = RuleKind.MIN_LENGTH.value

    value: int
    message: str | None = None

    def __post_init__(self) -> None:
        _check_bound(self.kind, self.value)

    def error_message(self) -> str:
        return self.message or f"Minimum length is {self.value}."


@dataclass(frozen=True)
class MaxLength(Rule):
    """Value length must be at most ``value`` characters."""

    kind: ClassVar[str] = RuleKind.MAX_LENGTH.value

    value: int
    message: str | None = None

    def __post_init__(self) -> None:
        _check_bound(self.kind, self.value)

    def error_message(self) -> str:
        return self.message or f"Maximum length is {self.value}."


@dataclass(frozen=True)
class Pattern(Rule):
    """String value must match a regular expression in full."""

    kind: ClassVar[str] = RuleKind.PATTERN.value
    default_message: ClassVar[str] = "Invalid format."

    value: str | RegexPattern
    message: str | None = None
    regex: RegexPattern = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.value, RegexPattern):
            regex = self.value
        elif isinstance(self.value, str):
            try:
                regex = re.compile(self.value)
            except re.error as e:
                raise ValueError(f"Invalid regular expression {self.value!r}: {e}") from e
        else:
            raise ValueError(f"pattern must be a string or compiled regex, got {type(self.value).__name__}")
        object.__setattr__(self, "regex", regex)

    @property
    def pattern_str(self) -> str:
        return self.regex.pattern


@dataclass(frozen=True)
class Custom(Rule):
    """Delegates validity to a predicate.

    The predicate receives the raw value and returns a ``RuleOutcome``, a
    ``(valid, message)`` tuple, a mapping with ``valid`` (or ``is_valid``
    or ``isValid``) and ``message`` keys, or a plain ``bool``. The rule's own message
    is used whenever the predicate does not supply one.
    """

    kind: ClassVar[str] = RuleKind.CUSTOM.value

    validator: Callable[[Any], RuleOutcome | tuple[bool, str] | bool]
    message: str | None = None

    def __post_init__(self) -> None:
        if not callable(self.validator):
            raise ValueError(f"Custom rule validator must be callable, got {type(self.validator).__name__}")


@dataclass(frozen=True)
class UnknownRule(Rule):
    """A rule whose kind this version does not implement."""

    rule_type: str
    params: Mapping[str, Any] = dataclass_field(default_factory=dict)
    message: str | None = None

    @property  # type: ignore[misc]
    def kind(self) -> str:  # type: ignore[override]
        return self.rule_type


def _check_bound(kind: str, bound: Any) -> None:
    if isinstance(bound, bool) or not isinstance(bound, int):
        raise ValueError(f"{kind} bound must be an integer, got {type(bound).__name__}")
    if bound < 0:
        raise ValueError(f"{kind} bound cannot be negative: {bound}")


def _normalize_kind(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def _parse_bound(definition: Any, kind: str, raw: Any) -> int:
    if raw is None:
        raise RuleDefinitionError(definition, f"'{kind}' requires a length bound")
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise RuleDefinitionError(definition, f"'{kind}' bound is not an integer: {raw!r}")
    try:
        bound = int(raw)
    except (TypeError, ValueError) as e:
        raise RuleDefinitionError(definition, f"'{kind}' bound is not an integer: {raw!r}") from e
    if bound < 0:
        raise RuleDefinitionError(definition, f"'{kind}' bound cannot be negative: {bound}")
    return bound


def load_callable(path: str) -> Callable[..., Any]:
    """Import a callable from a dotted path such as ``"os.path.isabs"``.

    Args:
        path: Full dotted path to the callable

    Returns:
        The imported callable

    Raises:
        RuleDefinitionError: If the path cannot be imported or is not callable
    """
    if "." not in path:
        raise RuleDefinitionError(path, "validator path must be a dotted module path")

    module_path, attr_name = path.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise RuleDefinitionError(path, f"failed to import {module_path}: {e}") from e

    target = getattr(module, attr_name, None)
    if target is None or not callable(target):
        raise RuleDefinitionError(path, f"{attr_name} is not a callable in {module_path}")
    return target


def _build_rule(definition: Any, kind_name: str, param: Any, message: str | None, extra: dict[str, Any]) -> Rule:
    kind = _normalize_kind(kind_name)

    if kind == "required":
        return Required(message=message)

    if kind == "minlength":
        return MinLength(_parse_bound(definition, RuleKind.MIN_LENGTH.value, param), message=message)

    if kind == "maxlength":
        return MaxLength(_parse_bound(definition, RuleKind.MAX_LENGTH.value, param), message=message)

    if kind in ("pattern", "regex"):
        if param is None or param == "":
            raise RuleDefinitionError(definition, "'pattern' requires a regular expression")
        try:
            return Pattern(param, message=message)
        except ValueError as e:
            raise RuleDefinitionError(definition, str(e)) from e

    if kind == "email":
        return Pattern(EMAIL_PATTERN, message=message or "Invalid email format.")

    if kind == "custom":
        validator = load_callable(param) if isinstance(param, str) else param
        if validator is None or not callable(validator):
            raise RuleDefinitionError(definition, "'custom' requires a callable validator")
        return Custom(validator, message=message)

    logger.debug(f"Keeping unrecognized rule type '{kind_name}' as UnknownRule")
    return UnknownRule(kind_name, params=extra, message=message)


def parse_rule(definition: Rule | str | Mapping[str, Any] | Callable[[Any], Any]) -> Rule:
    """Convert an encoded rule into a Rule variant.

    Accepted encodings:
        - a ``Rule`` instance, returned unchanged
        - a string token ``"kind"`` or ``"kind:param"`` (``"minLength:3"``)
        - a mapping with ``type`` plus ``value``/``pattern``/``validator``
          (or ``validate``) and an optional ``message``
        - a bare callable, wrapped as ``Custom``

    Args:
        definition: Encoded rule

    Returns:
        The equivalent Rule

    Raises:
        RuleDefinitionError: If the definition is malformed
    """
    if isinstance(definition, Rule):
        return definition

    if isinstance(definition, str):
        kind_name, _, param = definition.partition(":")
        kind_name = kind_name.strip()
        if not kind_name:
            raise RuleDefinitionError(definition, "rule type is empty")
        extra = {"args": param} if param else {}
        return _build_rule(definition, kind_name, param or None, None, extra)

    if isinstance(definition, Mapping):
        kind_name = definition.get("type")
        if not isinstance(kind_name, str) or not kind_name:
            raise RuleDefinitionError(definition, "rule mapping needs a 'type'")
        param = None
        for key in ("value", "pattern", "regex", "validator", "validate", "length"):
            if definition.get(key) is not None:
                param = definition[key]
                break
        extra = {k: v for k, v in definition.items() if k not in ("type", "message")}
        return _build_rule(definition, kind_name, param, definition.get("message"), extra)

    if callable(definition):
        return Custom(definition)

    raise RuleDefinitionError(definition, f"unsupported rule encoding {type(definition).__name__}")


def parse_rules(definitions: Any) -> tuple[Rule, ...]:
    """Parse an ordered collection of encoded rules."""
    if definitions is None:
        return ()
    if isinstance(definitions, (str, Mapping, Rule)) or callable(definitions):
        definitions = [definitions]
    return tuple(parse_rule(definition) for definition in definitions)


__all__ = [
    "EMAIL_PATTERN",
    "RuleKind",
    "RuleOutcome",
    "Rule",
    "Required",
    "MinLength",
    "MaxLength",
    "Pattern",
    "Custom",
    "UnknownRule",
    "load_callable",
    "parse_rule",
    "parse_rules",
]
