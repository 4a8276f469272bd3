"""Factory classes for building schemas and validators from configuration."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dataknobs_config import Config, FactoryBase

from .schema import Schema
from .settings import ValidatorSettings
from .validator import FormValidator

logger = logging.getLogger(__name__)


class SchemaFactory(FactoryBase):
    """Factory for creating form schemas from configuration.

    Configuration Options:
        name (str): Schema (form) name
        description (str): Optional schema description
        fields (list): List of field definitions

    Field Definition Options:
        name (str): Field name
        rules (list): Rules in evaluation order, as string tokens
            (``"minLength:3"``) or mappings (``{"type": "pattern", "value": ...}``)
        Any other key is kept as presentation metadata.

    Example Configuration:
        schemas:
          - name: registration
            description: User registration form
            fields:
              - name: username
                error_element: "#username-error"
                rules:
                  - type: required
                    message: Username is required.
                  - type: minLength
                    value: 3
                  - type: pattern
                    value: "^[a-zA-Z0-9_]+$"
              - name: email
                rules: [required, email]
    """

    def create(self, **config) -> Schema:
        """Create a Schema instance from configuration.

        Args:
            **config: Schema configuration

        Returns:
            Schema instance
        """
        name = config.get("name", "unnamed_schema")
        description = config.get("description")

        logger.info(f"Creating schema: {name}")

        schema = Schema(name, description)

        fields = config.get("fields", [])
        if isinstance(fields, Mapping):
            fields = [{"name": field_name, **self._field_body(body)} for field_name, body in fields.items()]

        for field_config in fields:
            self._add_field_to_schema(schema, field_config)

        return schema

    @staticmethod
    def _field_body(body: Any) -> dict[str, Any]:
        if isinstance(body, Mapping):
            return dict(body)
        return {"rules": body}

    def _add_field_to_schema(self, schema: Schema, field_config: dict[str, Any]) -> None:
        """Add a field to the schema based on configuration.

        Args:
            schema: Schema to add field to
            field_config: Field configuration
        """
        field_name = field_config.get("name")
        if not field_name:
            logger.warning("Field configuration missing 'name', skipping")
            return

        metadata = {k: v for k, v in field_config.items() if k not in ("name", "rules")}
        schema.field(field_name, field_config.get("rules", []), **metadata)


class FormValidatorFactory(FactoryBase):
    """Factory for creating a FormValidator with its schemas.

    Configuration Options:
        strict (bool): Raise on unknown rule kinds (default: False)
        default_policy (str): "accumulate" or "short_circuit" for submit checks
        live_policy (str): Policy for single-field re-checks
        schemas (list): Schema configurations (see SchemaFactory)
    """

    def create(self, **config) -> FormValidator:
        """Create a FormValidator instance from configuration.

        Args:
            **config: Validator configuration

        Returns:
            FormValidator with every configured schema registered
        """
        settings = ValidatorSettings.from_dict(config)
        validator = FormValidator(settings=settings)
        logger.info(f"Creating FormValidator: {settings.to_dict()}")

        for schema_config in config.get("schemas", []):
            register_schema(validator, schema_config)

        return validator


def register_schema(validator: FormValidator, schema_config: dict[str, Any]) -> Schema:
    """Build a schema from configuration and register it under its name."""
    schema = schema_factory.create(**schema_config)
    return validator.define_schema(schema.name, schema)


def load_validator(source: Config | dict[str, Any] | str | Path) -> FormValidator:
    """Build a FormValidator from a dataknobs Config.

    The configuration may hold one ``validator`` entry with settings and any
    number of ``schemas`` entries:

        ```yaml
        validator:
          strict: false
          default_policy: accumulate
        schemas:
          - name: registration
            fields: [...]
        ```

    Args:
        source: Config instance, configuration dictionary, or YAML/JSON path

    Returns:
        FormValidator with every configured schema registered
    """
    config = source if isinstance(source, Config) else Config(source)
    types = config.get_types()

    settings = ValidatorSettings.from_dict(config.get("validator") if "validator" in types else None)
    validator = FormValidator(settings=settings)

    if "schemas" in types:
        for name in config.get_names("schemas"):
            register_schema(validator, config.get("schemas", name))
    else:
        logger.warning("Configuration defines no schemas")

    return validator


# Create singleton instances for registration
schema_factory = SchemaFactory()
validator_factory = FormValidatorFactory()
