"""
Parameter Set - Deck-level Scheduling Configuration

An immutable, validated bundle of weights and policy knobs. One instance may
be shared by any number of decks and threads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from srs_core.fsrs.constants import (
    DECAY,
    DEFAULT_EASY_INTERVAL,
    DEFAULT_ENABLE_FUZZ,
    DEFAULT_GRADUATING_INTERVAL,
    DEFAULT_LEARNING_STEPS,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_RELEARNING_STEPS,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_WEIGHTS,
    FACTOR,
    WEIGHT_COUNT,
)
from srs_core.fsrs.errors import InvalidParameters


# Deck settings in the wild use either naming style
_MAPPING_KEYS = {
    "weights": "weights",
    "w": "weights",
    "request_retention": "request_retention",
    "requestRetention": "request_retention",
    "maximum_interval": "maximum_interval",
    "maximumInterval": "maximum_interval",
    "enable_fuzz": "enable_fuzz",
    "enableFuzz": "enable_fuzz",
    "learning_steps": "learning_steps",
    "learningSteps": "learning_steps",
    "relearning_steps": "relearning_steps",
    "relearningSteps": "relearning_steps",
    "graduating_interval": "graduating_interval",
    "graduatingInterval": "graduating_interval",
    "easy_interval": "easy_interval",
    "easyInterval": "easy_interval",
}


@dataclass(frozen=True)
class ParameterSet:
    """
    Scheduling weights and policy for one deck (or the global default).

    Attributes:
        weights: 17 model weights, treated as an opaque block by callers
        request_retention: Target recall probability used to size intervals
        maximum_interval: Cap on any scheduled interval (days)
        enable_fuzz: Spread review intervals slightly to avoid clustering
        learning_steps: Step ladder for new cards (minutes)
        relearning_steps: Step ladder after a lapse (minutes)
        graduating_interval: Interval when Good finishes the learning ladder (days)
        easy_interval: Interval when Easy skips the learning ladder (days)

    Raises:
        InvalidParameters: On construction with malformed values
    """
    weights: Sequence[float] = DEFAULT_WEIGHTS
    request_retention: float = DEFAULT_REQUEST_RETENTION
    maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL
    enable_fuzz: bool = DEFAULT_ENABLE_FUZZ
    learning_steps: Sequence[float] = DEFAULT_LEARNING_STEPS
    relearning_steps: Sequence[float] = DEFAULT_RELEARNING_STEPS
    graduating_interval: int = DEFAULT_GRADUATING_INTERVAL
    easy_interval: int = DEFAULT_EASY_INTERVAL

    def __post_init__(self):
        weights = _as_float_tuple("weights", self.weights)
        if len(weights) != WEIGHT_COUNT:
            raise InvalidParameters(
                f"weights must have {WEIGHT_COUNT} values, got {len(weights)}"
            )

        retention = _as_float("request_retention", self.request_retention)
        if not 0.0 < retention < 1.0:
            raise InvalidParameters(
                f"request_retention must be in (0, 1), got {retention}"
            )

        maximum_interval = _as_int("maximum_interval", self.maximum_interval)
        if maximum_interval < 1:
            raise InvalidParameters(
                f"maximum_interval must be >= 1, got {maximum_interval}"
            )

        learning_steps = _as_steps("learning_steps", self.learning_steps)
        relearning_steps = _as_steps("relearning_steps", self.relearning_steps)

        graduating = _as_int("graduating_interval", self.graduating_interval)
        easy = _as_int("easy_interval", self.easy_interval)
        if graduating < 1 or easy < 1:
            raise InvalidParameters("graduating_interval and easy_interval must be >= 1")
        if easy < graduating:
            raise InvalidParameters(
                f"easy_interval ({easy}) must not be shorter than "
                f"graduating_interval ({graduating})"
            )

        if not isinstance(self.enable_fuzz, bool):
            raise InvalidParameters(f"enable_fuzz must be a bool, got {self.enable_fuzz!r}")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "weights", weights)
        object.__setattr__(self, "request_retention", retention)
        object.__setattr__(self, "maximum_interval", maximum_interval)
        object.__setattr__(self, "learning_steps", learning_steps)
        object.__setattr__(self, "relearning_steps", relearning_steps)
        object.__setattr__(self, "graduating_interval", graduating)
        object.__setattr__(self, "easy_interval", easy)

    @property
    def decay(self) -> float:
        """Forgetting-curve exponent (fixed for the 17-weight model)."""
        return DECAY

    @property
    def factor(self) -> float:
        return FACTOR

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ParameterSet":
        """
        Build a ParameterSet from a deck-configuration mapping.

        Accepts snake_case or camelCase keys; unknown keys are ignored and
        missing keys take the defaults.

        Args:
            mapping: Deck settings, e.g. {"requestRetention": 0.9, "learningSteps": [1, 10]}

        Returns:
            Validated ParameterSet
        """
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _MAPPING_KEYS.get(key)
            if name is not None and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "weights": list(self.weights),
            "request_retention": self.request_retention,
            "maximum_interval": self.maximum_interval,
            "enable_fuzz": self.enable_fuzz,
            "learning_steps": list(self.learning_steps),
            "relearning_steps": list(self.relearning_steps),
            "graduating_interval": self.graduating_interval,
            "easy_interval": self.easy_interval,
        }


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidParameters(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameters(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidParameters(f"{name} must be finite, got {value!r}")
    return number


def _as_int(name: str, value: Any) -> int:
    number = _as_float(name, value)
    if not number.is_integer():
        raise InvalidParameters(f"{name} must be a whole number of days, got {value!r}")
    return int(number)


def _as_float_tuple(name: str, values: Any) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)):
        raise InvalidParameters(f"{name} must be a sequence of numbers")
    try:
        items = list(values)
    except TypeError as exc:
        raise InvalidParameters(f"{name} must be a sequence of numbers") from exc
    return tuple(_as_float(f"{name}[{i}]", v) for i, v in enumerate(items))


def _as_steps(name: str, values: Any) -> tuple[float, ...]:
    steps = _as_float_tuple(name, values)
    for step in steps:
        if step <= 0:
            raise InvalidParameters(f"{name} must be positive minutes, got {step}")
    return steps


DEFAULT_PARAMETERS = ParameterSet()
