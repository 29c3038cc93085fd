"""
trajsim Core
============

Simulation engine and numeric helpers. DataFrames and arrays in,
DataFrames and arrays out, no file I/O.

Structure:
    perturbation.py - Seedable Gaussian draws (shifts, amplitude noise, lags)
    grid.py         - Shared time grid and stimulation schedule
    generators.py   - The six trajectory archetypes (matrix and table forms)
    registry.py     - SimType tags and the dispatch table
    multi.py        - Multi-noise driver
    table.py        - Long-format table assembly
    base.py         - Parameter dataclasses (DampParams, SimulationConfig)
    rolling.py      - Peak detection and extended rolling mean
    spline.py       - Cubic-spline resampling
"""

from trajsim.core.perturbation import seed, get_rng, draw_gaussian, draw_lag
from trajsim.core.grid import time_grid, stimulation_times
from trajsim.core.base import DampParams, SimulationConfig
from trajsim.core.generators import (
    sim_phase_shifted,
    sim_phase_shifted_damped,
    sim_phase_shifted_with_fixed_trend,
    sim_noisy_amplitude,
    sim_noisy_amplitude_damped,
    sim_expodecay_lagged_stim,
)
from trajsim.core.registry import SimType, GENERATORS, generate, resolve_type, list_types
from trajsim.core.multi import generate_multi
from trajsim.core.rolling import PeakMode, detect_peak, rolling_mean_extended
from trajsim.core.spline import spline_resample

__all__ = [
    # Random source
    'seed',
    'get_rng',
    'draw_gaussian',
    'draw_lag',
    # Grid
    'time_grid',
    'stimulation_times',
    # Parameters
    'DampParams',
    'SimulationConfig',
    # Generators
    'sim_phase_shifted',
    'sim_phase_shifted_damped',
    'sim_phase_shifted_with_fixed_trend',
    'sim_noisy_amplitude',
    'sim_noisy_amplitude_damped',
    'sim_expodecay_lagged_stim',
    # Dispatch
    'SimType',
    'GENERATORS',
    'generate',
    'resolve_type',
    'list_types',
    'generate_multi',
    # Numeric helpers
    'PeakMode',
    'detect_peak',
    'rolling_mean_extended',
    'spline_resample',
]
