"""
Signal Generators
=================

Six archetypes of oscillating trajectories, sampled on a shared time grid:

    ps    Phase-Shifted sinusoids            sin(t + shift)
    psd   Phase-Shifted Damped sinusoids     sin(t + shift) * A * exp(-L * (t + shift))
    pst   Phase-Shifted with fixed Trend     sin(t + shift) + slope * t
    na    Noisy Amplitude sinusoids          sin(t) + e(t)
    nad   Noisy Amplitude Damped sinusoids   sin(t) * A * exp(-L * t) + e(t)
    edls  Exponential Decay, Lag-Shifted stimulations

The noise level is the standard deviation of:
    - ps*: the per-trajectory phase shift
    - na*: the per-(time, trajectory) additive amplitude noise
    - edls: the non-negative lag between nominal and effective stimulation

Each archetype has a matrix form ``simulate_*`` returning ``(tvec, values)``
with ``values.shape == (len(tvec), n)``, and a table form ``sim_*`` returning
the long-format DataFrame. All arguments are validated before any draw.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import polars as pl

from trajsim.core.base import DampParams, check_stim_params
from trajsim.core.grid import stimulation_times, time_grid
from trajsim.core.perturbation import RandomSource, draw_gaussian, draw_lag
from trajsim.core.table import to_long
from trajsim.validation.arguments import (
    MissingParameter,
    check_count,
    check_non_negative,
    check_positive,
    check_real,
)

logger = logging.getLogger(__name__)

Matrix = Tuple[np.ndarray, np.ndarray]
DampLike = Union[DampParams, Sequence[float]]


def _check_common(n: int, noise: float, freq: float, end: float) -> Tuple[int, float]:
    n = check_count('n', n)
    noise = check_non_negative('noise', noise)
    check_positive('freq', freq)
    check_positive('end', end)
    return n, noise


def _require_damping(generator: str, damp_params: Optional[DampLike]) -> DampParams:
    if damp_params is None:
        raise MissingParameter(generator, 'damp_params')
    return DampParams.coerce(damp_params)


def _shifted_times(
    n: int,
    noise: float,
    freq: float,
    end: float,
    rng: RandomSource,
) -> Matrix:
    """Grid plus a (m, n) matrix of times shifted by one draw per trajectory."""
    tvec = time_grid(freq, end)
    shifts = draw_gaussian(n, noise, rng=rng)
    return tvec, tvec[:, None] + shifts[None, :]


# =============================================================================
# PHASE-SHIFTED
# =============================================================================

def simulate_phase_shifted(
    n: int,
    noise: float,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
) -> Matrix:
    """Phase-shifted sinusoids: sin(t + shift), shift ~ N(0, noise) per trajectory."""
    n, noise = _check_common(n, noise, freq, end)
    tvec, shifted = _shifted_times(n, noise, freq, end, rng)
    logger.debug("ps: n=%d noise=%g m=%d", n, noise, len(tvec))
    return tvec, np.sin(shifted)


def simulate_phase_shifted_damped(
    n: int,
    noise: float,
    damp_params: Optional[DampLike] = None,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
) -> Matrix:
    """
    Damped phase-shifted sinusoids (chirp).

    The damping envelope is evaluated at the shifted time, so a trajectory
    shifted by s is the noise-free curve translated by s.

    Args:
        damp_params: (initial amplitude A, decay rate L), required
    """
    damping = _require_damping('sim_phase_shifted_damped', damp_params)
    n, noise = _check_common(n, noise, freq, end)
    tvec, shifted = _shifted_times(n, noise, freq, end, rng)
    logger.debug("psd: n=%d noise=%g m=%d damping=%s", n, noise, len(tvec), damping)
    return tvec, np.sin(shifted) * damping.envelope(shifted)


def simulate_phase_shifted_with_fixed_trend(
    n: int,
    noise: float,
    slope: Optional[float] = None,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
) -> Matrix:
    """
    Phase-shifted sinusoids plus a linear trend slope * t.

    The trend uses the unshifted grid time: it is shared by every trajectory.

    Args:
        slope: Change of mean value per unit of time, required
    """
    if slope is None:
        raise MissingParameter('sim_phase_shifted_with_fixed_trend', 'slope')
    slope = check_real('slope', slope)
    n, noise = _check_common(n, noise, freq, end)
    tvec, shifted = _shifted_times(n, noise, freq, end, rng)
    logger.debug("pst: n=%d noise=%g m=%d slope=%g", n, noise, len(tvec), slope)
    return tvec, np.sin(shifted) + (slope * tvec)[:, None]


# =============================================================================
# NOISY AMPLITUDE
# =============================================================================

def simulate_noisy_amplitude(
    n: int,
    noise: float,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
) -> Matrix:
    """Sinusoids with Gaussian white noise: sin(t) + e(t), e ~ N(0, noise)."""
    n, noise = _check_common(n, noise, freq, end)
    tvec = time_grid(freq, end)
    # One column of draws per trajectory
    e = draw_gaussian((n, len(tvec)), noise, rng=rng).T
    logger.debug("na: n=%d noise=%g m=%d", n, noise, len(tvec))
    return tvec, np.sin(tvec)[:, None] + e


def simulate_noisy_amplitude_damped(
    n: int,
    noise: float,
    damp_params: Optional[DampLike] = None,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
) -> Matrix:
    """
    Damped sinusoids with Gaussian white noise: sin(t) * A * exp(-L * t) + e(t).

    Args:
        damp_params: (initial amplitude A, decay rate L), required
    """
    damping = _require_damping('sim_noisy_amplitude_damped', damp_params)
    n, noise = _check_common(n, noise, freq, end)
    tvec = time_grid(freq, end)
    e = draw_gaussian((n, len(tvec)), noise, rng=rng).T
    logger.debug("nad: n=%d noise=%g m=%d damping=%s", n, noise, len(tvec), damping)
    clean = np.sin(tvec) * damping.envelope(tvec)
    return tvec, clean[:, None] + e


# =============================================================================
# EXPONENTIAL DECAY WITH LAGGED STIMULATION
# =============================================================================

def stimulation_mask(
    tvec: np.ndarray,
    stim_times: np.ndarray,
) -> np.ndarray:
    """
    Boolean (m, n) mask of grid points hit by a stimulation.

    Each stimulation lands on the first grid point with time >= stim time.
    Stimulations past the last grid point are dropped. Events sharing an
    index collapse onto the same True.

    Args:
        tvec: Time grid, length m
        stim_times: Effective stimulation times, shape (n_stim, n)

    Returns:
        Boolean mask, shape (m, n)
    """
    m = len(tvec)
    n = stim_times.shape[1]
    mask = np.zeros((m, n), dtype=bool)

    idx = np.searchsorted(tvec, stim_times, side='left')
    for col in range(n):
        hits = idx[:, col]
        mask[hits[hits < m], col] = True
    return mask


def decay_from_stimulations(mask: np.ndarray, factor: float) -> np.ndarray:
    """
    Exponential decay recurrence over the grid.

    Stimulated points are 1, everything else starts at 0 and becomes
    ``previous * factor``. Sequential in time, vectorized across trajectories.
    """
    values = mask.astype(np.float64)
    for row in range(1, values.shape[0]):
        values[row] = np.where(mask[row], 1.0, values[row - 1] * factor)
    return values


def simulate_expodecay_lagged_stim(
    n: int,
    noise: float,
    interval_stim: float = 5,
    lambda_: float = 0.2,
    freq: float = 0.2,
    end: float = 50,
    rng: RandomSource = None,
) -> Matrix:
    """
    Exponential decays triggered by periodic, randomly lagged stimulations.

    A stimulation takes the trajectory to 1; relaxation follows
    y(t) = exp(-lambda_ * (t - t_stim)), computed step by step from the
    previous grid value. Nominal stimulations occur every ``interval_stim``
    (first one at ``interval_stim``, strictly before ``end``); each is delayed
    by an independent |N(0, noise)| lag per trajectory.

    Args:
        interval_stim: Time between two nominal stimulations (> 0)
        lambda_: Decay rate (>= 0)
    """
    n, noise = _check_common(n, noise, freq, end)
    check_stim_params(interval_stim, lambda_)

    tvec = time_grid(freq, end)
    nominal = stimulation_times(interval_stim, end)

    # One column of lags per trajectory, lag >= 0
    lags = draw_lag((n, len(nominal)), noise, rng=rng).T
    effective = nominal[:, None] + lags

    mask = stimulation_mask(tvec, effective)
    values = decay_from_stimulations(mask, np.exp(-lambda_ * freq))

    logger.debug(
        "edls: n=%d noise=%g m=%d stimulations=%d", n, noise, len(tvec), len(nominal)
    )
    return tvec, values


# =============================================================================
# TABLE FORMS
# =============================================================================

def sim_phase_shifted(n, noise, freq=0.2, end=50, rng=None) -> pl.DataFrame:
    """Phase-shifted sinusoids as a long-format table."""
    return to_long(*simulate_phase_shifted(n, noise, freq=freq, end=end, rng=rng))


def sim_phase_shifted_damped(n, noise, damp_params=None, freq=0.2, end=50, rng=None) -> pl.DataFrame:
    """Damped phase-shifted sinusoids as a long-format table."""
    return to_long(*simulate_phase_shifted_damped(
        n, noise, damp_params=damp_params, freq=freq, end=end, rng=rng,
    ))


def sim_phase_shifted_with_fixed_trend(n, noise, slope=None, freq=0.2, end=50, rng=None) -> pl.DataFrame:
    """Phase-shifted sinusoids with linear trend as a long-format table."""
    return to_long(*simulate_phase_shifted_with_fixed_trend(
        n, noise, slope=slope, freq=freq, end=end, rng=rng,
    ))


def sim_noisy_amplitude(n, noise, freq=0.2, end=50, rng=None) -> pl.DataFrame:
    """Sinusoids with amplitude noise as a long-format table."""
    return to_long(*simulate_noisy_amplitude(n, noise, freq=freq, end=end, rng=rng))


def sim_noisy_amplitude_damped(n, noise, damp_params=None, freq=0.2, end=50, rng=None) -> pl.DataFrame:
    """Damped sinusoids with amplitude noise as a long-format table."""
    return to_long(*simulate_noisy_amplitude_damped(
        n, noise, damp_params=damp_params, freq=freq, end=end, rng=rng,
    ))


def sim_expodecay_lagged_stim(
    n, noise, interval_stim=5, lambda_=0.2, freq=0.2, end=50, rng=None,
) -> pl.DataFrame:
    """Lagged exponential decays as a long-format table."""
    return to_long(*simulate_expodecay_lagged_stim(
        n, noise, interval_stim=interval_stim, lambda_=lambda_,
        freq=freq, end=end, rng=rng,
    ))
