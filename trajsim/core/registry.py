"""
Generator Registry - maps simulation type tags to generators.

The registry provides:
1. The closed set of type tags (SimType)
2. A dispatch table from tag to matrix generator and its accepted extras
3. Tag resolution with the InvalidType / MultipleTypesError contract
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, Sequence, Union

import polars as pl

from trajsim.core import generators
from trajsim.core.perturbation import RandomSource
from trajsim.core.table import to_long
from trajsim.validation.arguments import InvalidType, MultipleTypesError, check_extras


class SimType(str, Enum):
    """Simulation archetypes."""
    PS = "ps"        # Phase-Shifted sinusoids
    PST = "pst"      # Phase-Shifted with fixed Trend
    PSD = "psd"      # Phase-Shifted Damped
    NA = "na"        # Noisy Amplitude
    NAD = "nad"      # Noisy Amplitude Damped
    EDLS = "edls"    # Exponential Decay, Lag-Shifted stimulations


@dataclass(frozen=True)
class GeneratorSpec:
    """A registered generator and the extra keyword arguments it accepts."""
    sim_type: SimType
    simulate: Callable
    extras: FrozenSet[str]
    description: str


GENERATORS: Dict[SimType, GeneratorSpec] = {
    SimType.PS: GeneratorSpec(
        SimType.PS, generators.simulate_phase_shifted,
        frozenset(), "Phase-shifted sinusoids",
    ),
    SimType.PST: GeneratorSpec(
        SimType.PST, generators.simulate_phase_shifted_with_fixed_trend,
        frozenset({'slope'}), "Phase-shifted sinusoids with linear trend",
    ),
    SimType.PSD: GeneratorSpec(
        SimType.PSD, generators.simulate_phase_shifted_damped,
        frozenset({'damp_params'}), "Damped phase-shifted sinusoids (chirp)",
    ),
    SimType.NA: GeneratorSpec(
        SimType.NA, generators.simulate_noisy_amplitude,
        frozenset(), "Sinusoids with Gaussian amplitude noise",
    ),
    SimType.NAD: GeneratorSpec(
        SimType.NAD, generators.simulate_noisy_amplitude_damped,
        frozenset({'damp_params'}), "Damped sinusoids with Gaussian amplitude noise",
    ),
    SimType.EDLS: GeneratorSpec(
        SimType.EDLS, generators.simulate_expodecay_lagged_stim,
        frozenset({'interval_stim', 'lambda_'}), "Lagged exponential decays",
    ),
}


def list_types() -> list:
    """All type tags, in declaration order."""
    return [t.value for t in SimType]


def resolve_type(sim_type: Union[str, SimType, Sequence[Any]]) -> SimType:
    """
    Resolve a type tag.

    Accepts a tag string, a SimType, or a one-element sequence (list, tuple,
    array, ...) of either.

    Raises:
        MultipleTypesError: More than one tag was given
        InvalidType: The tag is not recognized
    """
    if isinstance(sim_type, Iterable) and not isinstance(sim_type, str):
        tags = list(sim_type)
        if len(tags) > 1:
            raise MultipleTypesError(tags)
        if not tags:
            raise InvalidType(sim_type, list_types())
        sim_type = tags[0]

    if isinstance(sim_type, SimType):
        return sim_type
    try:
        return SimType(sim_type)
    except ValueError:
        raise InvalidType(sim_type, list_types()) from None


def get_generator(sim_type: Union[str, SimType, Sequence[Any]]) -> GeneratorSpec:
    """Look up the registered generator for a tag."""
    return GENERATORS[resolve_type(sim_type)]


def simulate(
    sim_type: Union[str, SimType],
    n: int,
    noise: float,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
    **extra: Any,
):
    """Dispatch to a matrix generator. Returns (tvec, values)."""
    spec = get_generator(sim_type)
    check_extras(spec.simulate.__name__, extra, spec.extras)
    return spec.simulate(n, noise, freq=freq, end=end, rng=rng, **extra)


def generate(
    type: Union[str, SimType],
    n: int,
    noise: float,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
    **extra: Any,
) -> pl.DataFrame:
    """
    Generate one batch of n trajectories of the given type.

    Args:
        type: One of 'ps', 'pst', 'psd', 'na', 'nad', 'edls'
        n: Number of trajectories
        noise: Noise level (generator-specific standard deviation)
        freq: Spacing between two time points
        end: End of the time grid (exclusive)
        rng: Random source (None = process default)
        **extra: Generator extras (slope, damp_params, interval_stim, lambda_)

    Returns:
        Long-format DataFrame with Time, variable, value columns

    Example:
        df = generate("ps", n=10, noise=0.5, freq=0.5, end=30)
        # 600 rows, Time in 0, 0.5, ..., 29.5
    """
    return to_long(*simulate(type, n, noise, freq=freq, end=end, rng=rng, **extra))
