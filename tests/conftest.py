"""Pytest configuration for formknobs tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from formknobs import (  # noqa: E402
    EMAIL_PATTERN,
    FormValidator,
    MaxLength,
    MinLength,
    Pattern,
    Required,
)


@pytest.fixture
def signup_schema():
    """The username/email schema used by the end-to-end scenarios."""
    return {
        "username": {
            "rules": [Required(), MinLength(3), MaxLength(20)],
            "error_element": "#username-error",
        },
        "email": {
            "rules": [Required(), Pattern(EMAIL_PATTERN)],
            "error_element": "#email-error",
        },
    }


@pytest.fixture
def validator(signup_schema):
    """FormValidator with the signup schema registered."""
    validator = FormValidator()
    validator.define_schema("signup", signup_schema)
    return validator
