"""
Multi-Noise Driver
==================

Generates one simulation type at several noise levels and stacks the batches
into a single long-format table with a ``noise`` column.

The noise-free batch is always generated first and tagged ``noise=0``; the
requested levels follow in order. Trajectory ids (V1..Vn) repeat in every
batch and are disambiguated only by the noise column.

The output is sized once ((len(noises) + 1) * n * m rows) and each batch is
written into its slice.
"""

import logging
import warnings
from typing import Any, Iterable, Union

import numpy as np
import polars as pl

from trajsim.core.perturbation import RandomSource, get_rng
from trajsim.core.registry import SimType, get_generator
from trajsim.core.table import (
    ID_COL,
    NOISE_COL,
    SCHEMA,
    TIME_COL,
    VALUE_COL,
    long_columns,
    melt_values,
)
from trajsim.validation.arguments import check_extras, check_noises

logger = logging.getLogger(__name__)


def generate_multi(
    type: Union[str, SimType, Iterable[Any]],
    noises: Iterable[float],
    n: int,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
    **extra: Any,
) -> pl.DataFrame:
    """
    Generate trajectories of one type at several noise levels.

    Do not pass 0 in ``noises``: the noise-free batch is generated by default.
    A 0 entry only warns and yields a duplicate noise-free batch.

    Args:
        type: One simulation type ('ps', 'pst', 'psd', 'na', 'nad', 'edls')
        noises: Noise levels; meaning depends on the type (phase-shift std for
            ps*, amplitude-noise std for na*, stimulation-lag std for edls).
            Typical values range from 0 to 2.
        n: Number of trajectories per noise level
        freq: Spacing between two time points
        end: End of the time grid (exclusive)
        rng: Random source shared by all batches (None = process default)
        **extra: Generator extras (slope, damp_params, interval_stim, lambda_)

    Returns:
        DataFrame with Time, variable, value, noise columns

    Raises:
        MultipleTypesError: More than one type was given
        InvalidType: The type is not recognized
        InvalidArgument: Bad n/freq/end/noise or unknown extras
        MissingParameter: A required extra is missing for the type

    Example:
        df = generate_multi("ps", noises=[0.5, 1.0, 1.5, 2.0], n=10, freq=0.5, end=30)
        plot(df)
    """
    spec = get_generator(type)
    check_extras(spec.simulate.__name__, extra, spec.extras)
    levels = [0.0] + check_noises(noises)
    rng = get_rng(rng)

    # Noise-free batch: draws nothing, validates every remaining argument
    tvec, batch = spec.simulate(n, 0.0, freq=freq, end=end, rng=rng, **extra)

    if 0 in levels[1:]:
        warnings.warn(
            "Trajectories without noise are already generated by default.",
            UserWarning,
            stacklevel=2,
        )

    batch_rows = batch.size
    values = np.empty(len(levels) * batch_rows, dtype=np.float64)
    values[:batch_rows] = melt_values(batch)

    for k, noise in enumerate(levels[1:], start=1):
        _, batch = spec.simulate(n, noise, freq=freq, end=end, rng=rng, **extra)
        values[k * batch_rows:(k + 1) * batch_rows] = melt_values(batch)
        logger.debug("%s: batch %d/%d noise=%g", spec.sim_type.value, k + 1, len(levels), noise)

    times, ids = long_columns(tvec, n)
    return pl.DataFrame(
        {
            TIME_COL: np.tile(times, len(levels)),
            ID_COL: np.tile(ids, len(levels)).tolist(),
            VALUE_COL: values,
            NOISE_COL: np.repeat(np.asarray(levels, dtype=np.float64), batch_rows),
        },
        schema={**SCHEMA, NOISE_COL: pl.Float64},
    )
