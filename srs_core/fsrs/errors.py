"""
Scheduler errors.

InvalidParameters and InvalidRating reach the caller. NumericDegenerate is
raised and caught inside the memory model, where the value is clamped.
"""

from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for scheduler errors."""


class InvalidParameters(SchedulerError):
    """A ParameterSet (or a value meant for one) is malformed."""


class InvalidRating(SchedulerError):
    """A rating outside Again/Hard/Good/Easy."""


class NumericDegenerate(SchedulerError):
    """A computation produced a non-finite or out-of-range value."""

    def __init__(self, quantity: str, value: float):
        super().__init__(f"degenerate {quantity}: {value!r}")
        self.quantity = quantity
        self.value = value
