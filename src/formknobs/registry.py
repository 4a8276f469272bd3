"""Registry of named form schemas.

Example:
    ```python
    registry = SchemaRegistry()
    registry.define_schema("registration", {
        "username": {"rules": [Required(), MinLength(3)]},
    })
    schema = registry.get_schema("registration")
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dataknobs_common.registry import Registry

from .exceptions import SchemaNotFoundError
from .schema import Schema

logger = logging.getLogger(__name__)


class SchemaRegistry(Registry[Schema]):
    """Named schemas, one per logical form.

    Registering a name that already exists replaces the stored schema in a
    single step; a schema is never visible half-built. Each call is guarded
    by the base registry's lock, but a re-registration is not coordinated
    with a validation already running against the same name. Hosts that
    validate from several threads while redefining schemas must serialize
    those calls themselves.
    """

    def __init__(self, name: str = "schemas"):
        super().__init__(name, enable_metrics=True)

    def define_schema(self, name: str, schema: Schema | Mapping[str, Any]) -> Schema:
        """Store a schema under ``name``, replacing any previous one.

        Rule kinds and parameters are not checked here. Encoded rules are
        parsed, but unknown kinds are kept and only surface when a value is
        evaluated.

        Args:
            name: Schema (form) name
            schema: Schema instance or plain field mapping

        Returns:
            The stored snapshot
        """
        if isinstance(schema, Schema):
            snapshot = schema.copy(name=name)
        else:
            snapshot = Schema.from_mapping(schema, name=name)

        replaced = self.has(name)
        self.register(name, snapshot, metadata={"fields": snapshot.field_names}, allow_overwrite=True)
        logger.info(f"{'Replaced' if replaced else 'Defined'} schema '{name}' with {len(snapshot)} field(s)")
        return snapshot

    def get_schema(self, name: str) -> Schema:
        """Look up a schema by name.

        Raises:
            SchemaNotFoundError: If no schema is registered under ``name``
        """
        schema = self.get_optional(name)
        if schema is None:
            raise SchemaNotFoundError(name, self.list_keys())
        return schema

    def has_schema(self, name: str) -> bool:
        return self.has(name)

    def schema_names(self) -> list[str]:
        return self.list_keys()
