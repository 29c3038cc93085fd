"""
Parameter containers for generators and simulation runs.

Generators own their extras (damping, slope, stimulation); a simulation run
bundles one generator type with its noise levels and grid settings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from trajsim.validation.arguments import (
    InvalidArgument,
    check_count,
    check_non_negative,
    check_noises,
    check_positive,
    check_real,
)


@dataclass(frozen=True)
class DampParams:
    """Damping envelope A * exp(-L * t)."""
    amplitude: float
    decay: float

    def envelope(self, t: np.ndarray) -> np.ndarray:
        """Evaluate the envelope at times t."""
        return self.amplitude * np.exp(-self.decay * t)

    @classmethod
    def coerce(cls, value: Union['DampParams', Sequence[float]]) -> 'DampParams':
        """
        Build from a DampParams or any (A, L) pair.

        Raises:
            InvalidArgument: value is not a pair of finite reals
        """
        if isinstance(value, cls):
            return value
        try:
            values = list(value)
        except TypeError:
            raise InvalidArgument(
                f"damp_params must be a pair (amplitude, decay), got {value!r}"
            ) from None
        if len(values) != 2:
            raise InvalidArgument(
                f"damp_params must have exactly 2 elements (amplitude, decay), got {len(values)}"
            )
        return cls(
            amplitude=check_real('damp_params[0]', values[0]),
            decay=check_real('damp_params[1]', values[1]),
        )


@dataclass
class SimulationConfig:
    """One multi-noise simulation run: generator type, noise levels, grid, extras."""
    type: str
    noises: List[float] = field(default_factory=list)
    n: int = 10
    freq: float = 0.2
    end: float = 50
    seed: Optional[int] = None
    params: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> 'SimulationConfig':
        """Check grid settings and noise levels. Returns self."""
        check_count('n', self.n)
        check_positive('freq', self.freq)
        check_positive('end', self.end)
        self.noises = check_noises(self.noises)
        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0:
                raise InvalidArgument(f"seed must be a non-negative integer, got {self.seed!r}")
        return self

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for generate_multi (seed excluded)."""
        return {
            'type': self.type,
            'noises': list(self.noises),
            'n': self.n,
            'freq': self.freq,
            'end': self.end,
            **self.params,
        }


def check_stim_params(interval_stim: float, lambda_: float) -> None:
    """Stimulation interval must be > 0, decay rate >= 0."""
    check_positive('interval_stim', interval_stim)
    check_non_negative('lambda_', lambda_)
