"""
Configuration - default ParameterSet from the environment.

Reads FSRS_* variables (optionally from a .env file) and builds the
ParameterSet used when a deck has no settings of its own.

    FSRS_WEIGHTS               17 numbers, space- or comma-separated
    FSRS_REQUEST_RETENTION     e.g. 0.9
    FSRS_MAXIMUM_INTERVAL      days, e.g. 36500
    FSRS_ENABLE_FUZZ           true/false
    FSRS_LEARNING_STEPS        minutes, e.g. "1 10"
    FSRS_RELEARNING_STEPS      minutes, e.g. "10"
    FSRS_GRADUATING_INTERVAL   days
    FSRS_EASY_INTERVAL         days
"""

from __future__ import annotations

import os
import re
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from srs_core.fsrs.errors import InvalidParameters
from srs_core.fsrs.parameters import ParameterSet

ENV_PREFIX = "FSRS_"

_LIST_KEYS = ("weights", "learning_steps", "relearning_steps")
_SCALAR_KEYS = (
    "request_retention",
    "maximum_interval",
    "graduating_interval",
    "easy_interval",
)
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_list(name: str, raw: str) -> list[float]:
    parts = [p for p in re.split(r"[,\s]+", raw.strip()) if p]
    try:
        return [float(p) for p in parts]
    except ValueError as exc:
        raise InvalidParameters(f"{name} must be a list of numbers, got {raw!r}") from exc


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidParameters(f"{name} must be true or false, got {raw!r}")


def parameters_from_env(env: Mapping[str, str]) -> ParameterSet:
    """
    Build a ParameterSet from FSRS_* entries of a mapping.

    Args:
        env: Environment-like mapping

    Returns:
        Validated ParameterSet; unset keys keep their defaults

    Raises:
        InvalidParameters: If a value cannot be parsed or fails validation
    """
    kwargs: dict[str, Any] = {}

    for key in _LIST_KEYS:
        name = ENV_PREFIX + key.upper()
        raw = env.get(name)
        if raw is not None and raw.strip():
            kwargs[key] = _parse_list(name, raw)
        elif raw is not None and key != "weights":
            # An empty ladder is a valid choice
            kwargs[key] = []

    for key in _SCALAR_KEYS:
        raw = env.get(ENV_PREFIX + key.upper())
        if raw is not None and raw.strip():
            kwargs[key] = raw.strip()

    raw_fuzz = env.get(ENV_PREFIX + "ENABLE_FUZZ")
    if raw_fuzz is not None and raw_fuzz.strip():
        kwargs["enable_fuzz"] = _parse_bool(ENV_PREFIX + "ENABLE_FUZZ", raw_fuzz)

    return ParameterSet(**kwargs)


def load_parameters(env: Optional[Mapping[str, str]] = None) -> ParameterSet:
    """
    Load the default ParameterSet from the process environment.

    A .env file in the working directory is loaded first (existing
    variables win). Pass `env` to read from a mapping instead.
    """
    if env is None:
        load_dotenv()
        env = os.environ
    return parameters_from_env(env)
