"""
Time grid shared by all trajectories of one generator call.
"""

import math

import numpy as np

# Rounding applied to end/freq before ceil, so 50 / 0.2 gives 250 and not 251.
_RATIO_DECIMALS = 9


def n_steps(extent: float, step: float) -> int:
    """Number of multiples of ``step`` in [0, extent)."""
    return int(math.ceil(round(extent / step, _RATIO_DECIMALS)))


def time_grid(freq: float = 0.2, end: float = 50) -> np.ndarray:
    """
    Evenly spaced times 0, freq, 2*freq, ... covering [0, end).

    Args:
        freq: Step between two time points (> 0)
        end: Extent of the grid (> 0)

    Returns:
        Read-only float array of length ceil(end / freq)
    """
    tvec = np.arange(n_steps(end, freq), dtype=np.float64) * freq
    tvec.flags.writeable = False
    return tvec


def stimulation_times(interval: float, end: float) -> np.ndarray:
    """Nominal stimulation times interval, 2*interval, ... strictly below end."""
    k = n_steps(end, interval)
    return np.arange(1, k, dtype=np.float64) * interval
