"""
Centered Rolling Windows.

Two transforms over a single numeric sequence:

    detect_peak(x, window, mode)     local max/min flags, null near the edges
    rolling_mean_extended(x, k)      centered rolling mean, edges extrapolated

Window convention (odd and even widths):
    the window of width w around position i covers
    [i - (w - 1) // 2, i + w // 2]. The first and last w // 2 positions are
    treated as edges.
"""

from enum import Enum
from typing import Tuple, Union

import numpy as np
import polars as pl
from numpy.lib.stride_tricks import sliding_window_view

from trajsim.validation.arguments import InvalidArgument, check_count


class PeakMode(str, Enum):
    """Which extremum detect_peak looks for."""
    MAX = "max"
    MIN = "min"


def _as_sequence(values) -> np.ndarray:
    values = np.asarray(values, dtype=np.float64)
    if values.ndim != 1:
        values = values.flatten()
    return values


def centered_windows(values: np.ndarray, window: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    All full windows of a sequence and the position each one is centered on.

    Args:
        values: 1D array
        window: Window width

    Returns:
        (centers, windows) where windows has shape (len(centers), window).
        Empty when the sequence is shorter than the window.
    """
    n = len(values)
    if n < window:
        return np.empty(0, dtype=np.int64), np.empty((0, window))
    windows = sliding_window_view(values, window)
    centers = np.arange(windows.shape[0]) + (window - 1) // 2
    return centers, windows


def detect_peak(
    x,
    window: int,
    mode: Union[str, PeakMode] = PeakMode.MAX,
) -> pl.Series:
    """
    Flag local extrema with a centered rolling window.

    A point is a peak iff it equals the max (mode='max') or min (mode='min')
    of the window of width ``window`` centered on it.

    Args:
        x: Numeric sequence
        window: Window width (> 0)
        mode: 'max' or 'min'

    Returns:
        Boolean Series of len(x); the first and last window // 2 positions,
        and NaN inputs, are null

    Example:
        detect_peak([0, 1, 0], window=3)             # [null, true, null]
        detect_peak([0, 1, 0], window=3, mode='min') # [null, false, null]
    """
    window = check_count('window', window)
    try:
        mode = PeakMode(mode)
    except ValueError:
        raise InvalidArgument(f"mode must be 'max' or 'min', got {mode!r}") from None

    values = _as_sequence(x)
    n = len(values)
    flags = [None] * n

    centers, windows = centered_windows(values, window)
    if len(centers):
        reduce = np.max if mode is PeakMode.MAX else np.min
        extrema = reduce(windows, axis=1)
        is_peak = values[centers] == extrema

        half = window // 2
        for c, hit in zip(centers, is_peak):
            if half <= c < n - half and not np.isnan(values[c]):
                flags[c] = bool(hit)

    return pl.Series('peak', flags, dtype=pl.Boolean)


def rolling_mean_extended(x, k: int) -> np.ndarray:
    """
    Centered rolling mean with linearly extrapolated edges.

    The interior is the plain rolling mean of width k. The k // 2 positions at
    each edge continue the line through the two nearest interior means.

    Short sequences degrade instead of failing: with a single interior mean
    the edges repeat it, and with no interior position (fewer than
    2 * (k // 2) + 1 values) every position is the mean of the whole sequence.

    Args:
        x: Numeric sequence
        k: Window width (> 0); k == 1 returns a copy of x

    Returns:
        Array of len(x)
    """
    k = check_count('k', k)
    values = _as_sequence(x)
    n = len(values)

    if k == 1 or n == 0:
        return values.copy()

    half = k // 2
    first, last = half, n - 1 - half

    # No interior position: fewer than 2 * (k // 2) + 1 values
    if last < first:
        return np.full(n, values.mean())

    out = np.full(n, np.nan)
    centers, windows = centered_windows(values, k)
    out[centers] = windows.mean(axis=1)

    # Slopes of the lines through the two nearest interior means (flat if only one)
    left_slope = out[first + 1] - out[first] if last > first else 0.0
    right_slope = out[last] - out[last - 1] if last > first else 0.0

    idx = np.arange(first)
    out[idx] = out[first] - left_slope * (first - idx)

    idx = np.arange(last + 1, n)
    out[idx] = out[last] + right_slope * (idx - last)

    return out
