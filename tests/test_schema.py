"""Tests for schema definitions and the schema registry."""

import pytest

from dataknobs_common import NotFoundError

from formknobs import (
    FieldSpec,
    MaxLength,
    MinLength,
    Required,
    Schema,
    SchemaNotFoundError,
    SchemaRegistry,
    UnknownRule,
)


class TestSchema:
    """Test fluent schema construction."""

    def test_fluent_fields_keep_order(self):
        schema = (
            Schema("registration")
            .field("username", [Required(), MinLength(3)], error_element="#username-error")
            .field("email", ["required", "email"])
            .field("bio")
        )

        assert schema.field_names == ["username", "email", "bio"]
        assert len(schema) == 3
        assert "email" in schema
        assert [spec.name for spec in schema] == ["username", "email", "bio"]
        assert schema.get_field("bio").rules == ()

    def test_metadata_is_passed_through(self):
        schema = Schema().field("username", ["required"], error_element="#err", field_element=".wrap")
        spec = schema.get_field("username")
        assert dict(spec.metadata) == {"error_element": "#err", "field_element": ".wrap"}

    def test_metadata_is_read_only(self):
        metadata = {"error_element": "#err"}
        spec = FieldSpec("username", (), metadata)
        metadata["error_element"] = "#other"

        assert spec.metadata == {"error_element": "#err"}
        with pytest.raises(TypeError):
            spec.metadata["error_element"] = "#changed"

    def test_field_replaces_existing(self):
        schema = Schema().field("a", ["required"]).field("a", ["minLength:2"])
        assert schema.get_field("a").rules == (MinLength(2),)

    def test_fields_view_is_read_only(self):
        schema = Schema().field("a")
        with pytest.raises(TypeError):
            schema.fields["b"] = FieldSpec("b")

    def test_from_mapping_encodings(self):
        """Plain mappings accept rule lists, dicts and FieldSpecs."""
        schema = Schema.from_mapping({
            "username": {
                "rules": [{"type": "required"}, "minLength:3", "maxLength:15"],
                "errorElement": "#username-error",
            },
            "password": ["required", "minLength:6"],
            "nickname": FieldSpec("ignored", (MaxLength(10),)),
        }, name="signup")

        assert schema.name == "signup"
        assert schema.get_field("username").rules == (Required(), MinLength(3), MaxLength(15))
        assert schema.get_field("username").metadata == {"errorElement": "#username-error"}
        assert schema.get_field("password").rules == (Required(), MinLength(6))
        assert schema.get_field("nickname").name == "nickname"

    def test_unknown_rules_load(self):
        """Registration does not reject unknown kinds."""
        schema = Schema().field("card", ["creditCard"])
        assert isinstance(schema.get_field("card").rules[0], UnknownRule)

    def test_to_dict(self):
        schema = Schema("s", "Sign up").field("username", ["required", "minLength:3"], error_element="#e")
        assert schema.to_dict() == {
            "name": "s",
            "description": "Sign up",
            "fields": {
                "username": {"rules": ["required", "minLength"], "error_element": "#e"},
            },
        }

    def test_copy_is_isolated(self):
        schema = Schema("a").field("x")
        snapshot = schema.copy(name="b")
        schema.field("y")

        assert snapshot.name == "b"
        assert snapshot.field_names == ["x"]


class TestSchemaRegistry:
    """Test schema registration and lookup."""

    def test_define_and_get(self):
        registry = SchemaRegistry()
        registry.define_schema("signup", {"username": ["required"]})

        schema = registry.get_schema("signup")
        assert schema.name == "signup"
        assert schema.field_names == ["username"]
        assert registry.has_schema("signup")
        assert "signup" in registry
        assert registry.schema_names() == ["signup"]

    def test_missing_schema(self):
        registry = SchemaRegistry()
        registry.define_schema("signup", {})

        with pytest.raises(SchemaNotFoundError) as exc_info:
            registry.get_schema("login")

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.schema_name == "login"
        assert exc_info.value.context["available"] == ["signup"]

    def test_redefine_replaces(self):
        registry = SchemaRegistry()
        registry.define_schema("signup", {"username": ["required"]})
        registry.define_schema("signup", {"email": ["required", "email"]})

        assert len(registry) == 1
        assert registry.get_schema("signup").field_names == ["email"]

    def test_registered_schema_is_a_snapshot(self):
        """Mutating the builder after registration does not change the stored schema."""
        registry = SchemaRegistry()
        builder = Schema("draft").field("username", ["required"])
        registry.define_schema("signup", builder)
        builder.field("email", ["required"])

        stored = registry.get_schema("signup")
        assert stored.name == "signup"
        assert stored.field_names == ["username"]

    def test_registered_metadata_is_isolated(self):
        registry = SchemaRegistry()
        raw = {"username": {"rules": ["required"], "error_element": "#username-error"}}
        registry.define_schema("signup", raw)
        raw["username"]["error_element"] = "#elsewhere"

        stored = registry.get_schema("signup").get_field("username")
        assert stored.metadata == {"error_element": "#username-error"}

    def test_metrics_record_fields(self):
        registry = SchemaRegistry()
        registry.define_schema("signup", {"username": [], "email": []})
        metrics = registry.get_metrics("signup")
        assert metrics["metadata"] == {"fields": ["username", "email"]}
