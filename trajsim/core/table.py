"""
Long-format table assembly.

A (m, n) matrix of values over a shared time grid becomes n*m rows of
(Time, variable, value), trajectory-major: all times of V1, then V2, ...
"""

from typing import List

import numpy as np
import polars as pl


TIME_COL = 'Time'
ID_COL = 'variable'
VALUE_COL = 'value'
NOISE_COL = 'noise'

SCHEMA = {
    TIME_COL: pl.Float64,
    ID_COL: pl.Utf8,
    VALUE_COL: pl.Float64,
}


def trajectory_ids(n: int) -> List[str]:
    """Ids V1 .. Vn."""
    return [f'V{i + 1}' for i in range(n)]


def long_columns(tvec: np.ndarray, n: int) -> tuple:
    """Time and id columns for n trajectories over tvec, trajectory-major."""
    m = len(tvec)
    times = np.tile(np.asarray(tvec, dtype=np.float64), n)
    ids = np.repeat(np.array(trajectory_ids(n), dtype=object), m)
    return times, ids


def melt_values(values: np.ndarray) -> np.ndarray:
    """Flatten an (m, n) matrix column by column."""
    return np.asarray(values, dtype=np.float64).ravel(order='F')


def to_long(tvec: np.ndarray, values: np.ndarray) -> pl.DataFrame:
    """
    Build the long-format table for one batch.

    Args:
        tvec: Shared time grid, length m
        values: Trajectory values, shape (m, n)

    Returns:
        DataFrame with Time, variable, value columns (n*m rows)
    """
    values = np.asarray(values, dtype=np.float64)
    if values.ndim != 2 or values.shape[0] != len(tvec):
        raise ValueError(
            f"values must have shape ({len(tvec)}, n), got {values.shape}"
        )

    times, ids = long_columns(tvec, values.shape[1])
    return pl.DataFrame(
        {
            TIME_COL: times,
            ID_COL: ids.tolist(),
            VALUE_COL: melt_values(values),
        },
        schema=SCHEMA,
    )
