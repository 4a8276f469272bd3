"""Validator settings loaded from configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .evaluator import EvaluationPolicy

logger = logging.getLogger(__name__)

# Keys dataknobs_config adds to every atomic configuration
_CONFIG_METADATA_KEYS = ("name", "type")


@dataclass
class ValidatorSettings:
    """Behavior switches for a FormValidator.

    Attributes:
        strict: Raise on unknown rule kinds instead of skipping them
        default_policy: Policy for whole-form ``validate`` calls
        live_policy: Policy for single-field ``evaluate_field`` calls
    """

    strict: bool = False
    default_policy: EvaluationPolicy = EvaluationPolicy.ACCUMULATE
    live_policy: EvaluationPolicy = EvaluationPolicy.SHORT_CIRCUIT

    def __post_init__(self) -> None:
        self.default_policy = EvaluationPolicy.coerce(self.default_policy)
        self.live_policy = EvaluationPolicy.coerce(self.live_policy)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ValidatorSettings:
        """Create settings from a configuration dictionary.

        Unrecognized keys are ignored.
        """
        data = data or {}
        known = {"strict", "default_policy", "live_policy"}
        ignored = set(data) - known - set(_CONFIG_METADATA_KEYS) - {"schemas"}
        if ignored:
            logger.debug(f"Ignoring unknown validator settings: {', '.join(sorted(ignored))}")
        return cls(**{key: data[key] for key in known if key in data})

    def to_dict(self) -> dict[str, Any]:
        return {
            "strict": self.strict,
            "default_policy": self.default_policy.value,
            "live_policy": self.live_policy.value,
        }
