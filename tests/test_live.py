"""Tests for live per-field validation state."""

import pytest

from dataknobs_common.transitions import InvalidTransitionError

from formknobs import (
    FIELD_STATE_TRANSITIONS,
    FieldNotFoundError,
    FieldState,
    FormValidator,
    LiveValidationSession,
    MinLength,
    SchemaNotFoundError,
    TypeMismatchError,
)


@pytest.fixture
def session(validator):
    return LiveValidationSession(validator, "signup")


class TestFieldStateGraph:
    """Test the allowed state transitions."""

    def test_allowed_transitions(self):
        FIELD_STATE_TRANSITIONS.validate("pristine", "validating")
        FIELD_STATE_TRANSITIONS.validate("validating", "valid")
        FIELD_STATE_TRANSITIONS.validate("validating", "invalid")
        FIELD_STATE_TRANSITIONS.validate("valid", "validating")
        FIELD_STATE_TRANSITIONS.validate("invalid", "validating")

    def test_no_terminal_state(self):
        for state in FieldState:
            assert FIELD_STATE_TRANSITIONS.get_reachable(state.value)

    @pytest.mark.parametrize("current,target", [
        ("pristine", "valid"),
        ("valid", "invalid"),
        ("validating", "pristine"),
    ])
    def test_rejected_transitions(self, current, target):
        with pytest.raises(InvalidTransitionError):
            FIELD_STATE_TRANSITIONS.validate(current, target)


class TestLiveValidationSession:
    """Test event handling in a live session."""

    def test_fields_start_pristine(self, session):
        assert session.states() == {
            "username": FieldState.PRISTINE,
            "email": FieldState.PRISTINE,
        }
        assert session.result("username") is None

    def test_state_walk(self, session):
        """pristine -> invalid -> valid as the user types."""
        result = session.on_input("username", "a")
        assert result.errors == ["Minimum length is 3."]
        assert session.state("username") is FieldState.INVALID

        result = session.on_input("username", "alice")
        assert result.valid
        assert session.state("username") is FieldState.VALID
        assert session.result("username") is result
        assert session.state("email") is FieldState.PRISTINE

    def test_blur_checks_field(self, session):
        result = session.on_blur("email", "")
        assert result.errors == ["This field is required."]
        assert session.state("email") is FieldState.INVALID

    def test_live_checks_show_one_error(self, session):
        result = session.on_input("username", "")
        assert result.errors == ["This field is required."]

    def test_submit_updates_all_states(self, session):
        report = session.submit({"username": "", "email": "a@b.com"})

        assert not report.valid
        assert report.errors["username"] == ["This field is required.", "Minimum length is 3."]
        assert session.states() == {
            "username": FieldState.INVALID,
            "email": FieldState.VALID,
        }

        report = session.submit({"username": "alice", "email": "a@b.com"})
        assert report.valid
        assert session.state("username") is FieldState.VALID

    def test_reset(self, session):
        session.on_input("username", "alice")
        session.reset()
        assert session.state("username") is FieldState.PRISTINE
        assert session.result("username") is None

    def test_unknown_field(self, session):
        with pytest.raises(FieldNotFoundError):
            session.on_input("phone", "555")

    def test_unknown_schema(self, validator):
        with pytest.raises(SchemaNotFoundError):
            LiveValidationSession(validator, "login")

    def test_failed_check_restores_state(self):
        validator = FormValidator()
        validator.define_schema("order", {"quantity": [MinLength(1)]})
        session = LiveValidationSession(validator, "order")

        with pytest.raises(TypeMismatchError):
            session.on_input("quantity", 3)
        assert session.state("quantity") is FieldState.PRISTINE

        session.on_input("quantity", "3")
        assert session.state("quantity") is FieldState.VALID
