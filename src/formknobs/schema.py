"""Schema definition with fluent API for form validation.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from types import MappingProxyType
from typing import Any

from .rules import Rule, parse_rules


@dataclass(frozen=True)
class FieldSpec:
    """Rules and presentation metadata for one form field.

    The metadata (``error_element``, ``input_selector`` and the like) is
    never read by the validator. It is handed back to the presentation
    layer so it knows where to render the field's messages.
    """

    name: str
    rules: tuple[Rule, ...] = ()
    metadata: Mapping[str, Any] = dataclass_field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "rules": [rule.kind for rule in self.rules],
            **dict(self.metadata),
        }


class Schema:
    """Ordered mapping of field name to FieldSpec.

    Field declaration order is evaluation order. Build a schema fluently
    and register it; the registry keeps its own snapshot, so later changes
    to the builder do not leak into a registered schema.

    Example:
        ```python
        schema = (
            Schema("registration")
            .field("username", [Required(), MinLength(3)], error_element="#username-error")
            .field("email", ["required", "email"])
        )
        ```
    """

    def __init__(self, name: str | None = None, description: str | None = None):
        """Initialize schema.

        Args:
            name: Schema name for identification
            description: Optional human-readable description
        """
        self.name = name
        self.description = description
        self._fields: dict[str, FieldSpec] = {}

    def field(self, name: str, rules: Any = None, **metadata: Any) -> Schema:
        """Add or replace a field definition (fluent API).

        Args:
            name: Field name
            rules: Rules in evaluation order; Rule objects or encoded rules
            **metadata: Presentation metadata passed through unmodified

        Returns:
            Self for chaining
        """
        self._fields[name] = FieldSpec(name=name, rules=parse_rules(rules), metadata=metadata)
        return self

    def add(self, spec: FieldSpec) -> Schema:
        """Add a prebuilt FieldSpec (fluent API)."""
        self._fields[spec.name] = spec
        return self

    def with_description(self, description: str) -> Schema:
        """Set schema description (fluent API)."""
        self.description = description
        return self

    @property
    def fields(self) -> Mapping[str, FieldSpec]:
        """Read-only view of the field specifications."""
        return MappingProxyType(self._fields)

    @property
    def field_names(self) -> list[str]:
        return list(self._fields)

    def get_field(self, name: str) -> FieldSpec | None:
        return self._fields.get(name)

    def copy(self, name: str | None = None) -> Schema:
        """Return a snapshot of this schema, optionally under a new name."""
        snapshot = Schema(name if name is not None else self.name, self.description)
        # FieldSpecs own their rules and metadata, so a shallow copy isolates the snapshot
        snapshot._fields = dict(self._fields)
        return snapshot

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(list(self._fields.values()))

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, fields={self.field_names})"

    def to_dict(self) -> dict[str, Any]:
        """Convert schema to dictionary representation.

        Rules are listed by kind only; custom predicates have no portable
        representation.
        """
        return {
            "name": self.name,
            "description": self.description,
            "fields": {name: spec.to_dict() for name, spec in self._fields.items()},
        }

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Any], name: str | None = None) -> Schema:
        """Create a schema from a plain field mapping.

        Each value may be a FieldSpec, a mapping with a ``rules`` entry plus
        metadata, or a bare list of rules:

            ```python
            Schema.from_mapping({
                "username": {"rules": ["required", "minLength:3"], "error_element": "#u-err"},
                "email": [Required(), Pattern(EMAIL_PATTERN)],
            })
            ```

        Args:
            fields: Mapping of field name to field definition
            name: Optional schema name

        Returns:
            Schema instance
        """
        schema = cls(name)
        for field_name, definition in fields.items():
            if isinstance(definition, FieldSpec):
                schema.add(definition if definition.name == field_name else
                           FieldSpec(field_name, definition.rules, definition.metadata))
            elif isinstance(definition, Mapping):
                metadata = {k: v for k, v in definition.items() if k not in ("name", "rules")}
                schema.field(field_name, definition.get("rules"), **metadata)
            else:
                schema.field(field_name, definition)
        return schema
