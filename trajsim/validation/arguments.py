"""
Argument Validation

Checks simulation arguments before any random draw or allocation.

PRINCIPLE: "Check before compute, not after failure"

Usage:
    from trajsim.validation import check_positive, InvalidArgument

    try:
        check_positive('freq', freq)
    except InvalidArgument as e:
        print(f"Bad argument: {e}")
"""

import math
from numbers import Integral, Real
from typing import Any, Iterable, Optional, Sequence


class SimulationError(Exception):
    """Base class for every error raised by trajsim."""


class InvalidType(SimulationError, ValueError):
    """Raised when a generator tag is not one of the recognized types."""

    def __init__(self, value: Any, valid: Sequence[str]):
        self.value = value
        self.valid = list(valid)
        super().__init__(
            f"Unknown simulation type {value!r}. "
            f"Type must be one of: {', '.join(self.valid)}"
        )


class MultipleTypesError(SimulationError, ValueError):
    """Raised when more than one generator tag is passed in a single call."""

    def __init__(self, values: Sequence[Any]):
        self.values = list(values)
        super().__init__(
            f"Only one type of simulation can be generated at once, got {self.values}. "
            "To combine types, call the driver once per type and concatenate the outputs."
        )


class MissingParameter(SimulationError, TypeError):
    """Raised when a generator is called without one of its required extras."""

    def __init__(self, generator: str, parameter: str):
        self.generator = generator
        self.parameter = parameter
        super().__init__(f"{generator}() requires the '{parameter}' argument")


class InvalidArgument(SimulationError, ValueError):
    """Raised when an argument has the right name but an unusable value."""


def check_count(name: str, value: Any) -> int:
    """Require a positive integer (bools are rejected)."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    if value <= 0:
        raise InvalidArgument(f"{name} must be > 0, got {value}")
    return int(value)


def _check_real(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgument(f"{name} must be finite, got {value}")
    return value


def check_positive(name: str, value: Any) -> float:
    """Require a finite real > 0."""
    value = _check_real(name, value)
    if value <= 0:
        raise InvalidArgument(f"{name} must be > 0, got {value}")
    return value


def check_non_negative(name: str, value: Any) -> float:
    """Require a finite real >= 0."""
    value = _check_real(name, value)
    if value < 0:
        raise InvalidArgument(f"{name} must be >= 0, got {value}")
    return value


def check_real(name: str, value: Any) -> float:
    """Require any finite real."""
    return _check_real(name, value)


def check_noises(noises: Optional[Iterable[Any]]) -> list:
    """Validate a sequence of noise levels, returning them as floats."""
    if noises is None:
        return []
    if isinstance(noises, (str, bytes)):
        raise InvalidArgument(f"noises must be a sequence of numbers, got {noises!r}")
    if isinstance(noises, Real):
        noises = [noises]
    return [check_non_negative('noise', v) for v in noises]


def check_extras(generator: str, extra: dict, accepted: Iterable[str]) -> None:
    """Reject keyword arguments a generator does not understand."""
    accepted = set(accepted)
    unknown = sorted(k for k in extra if k not in accepted)
    if unknown:
        allowed = ', '.join(sorted(accepted)) or 'none'
        raise InvalidArgument(
            f"Unexpected argument(s) for {generator}: {', '.join(unknown)}. "
            f"Accepted extras: {allowed}"
        )
