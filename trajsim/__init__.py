"""
trajsim: synthetic oscillating trajectories for exploratory time-series analysis.

Public API:
    from trajsim import generate, generate_multi, plot

    df = generate_multi("ps", noises=[0.5, 1.0, 1.5, 2.0], n=10, freq=0.5, end=30)
    fig = plot(df)

Layers:
    trajsim.core        Engine: generators, dispatch, multi-noise driver,
                        numeric helpers (arrays/DataFrames in and out)
    trajsim.viz         plotly rendering of long-format tables
    trajsim.validation  Error kinds, argument checks, table validation
    trajsim.io          manifest.yaml loading
    trajsim.run         Command-line runner (python -m trajsim)

Six simulation types:
    ps    Phase-shifted sinusoids
    pst   Phase-shifted sinusoids with linear trend      (slope)
    psd   Damped phase-shifted sinusoids                 (damp_params)
    na    Sinusoids with amplitude noise
    nad   Damped sinusoids with amplitude noise          (damp_params)
    edls  Lagged exponential decays                      (interval_stim, lambda_)
"""

from trajsim.core import (
    seed,
    generate,
    generate_multi,
    SimType,
    DampParams,
    sim_phase_shifted,
    sim_phase_shifted_damped,
    sim_phase_shifted_with_fixed_trend,
    sim_noisy_amplitude,
    sim_noisy_amplitude_damped,
    sim_expodecay_lagged_stim,
    detect_peak,
    rolling_mean_extended,
    spline_resample,
)
from trajsim.viz import plot
from trajsim.validation import (
    SimulationError,
    InvalidType,
    MultipleTypesError,
    MissingParameter,
    InvalidArgument,
)

__version__ = "0.1.0"

__all__ = [
    "seed",
    "generate",
    "generate_multi",
    "SimType",
    "DampParams",
    "sim_phase_shifted",
    "sim_phase_shifted_damped",
    "sim_phase_shifted_with_fixed_trend",
    "sim_noisy_amplitude",
    "sim_noisy_amplitude_damped",
    "sim_expodecay_lagged_stim",
    "detect_peak",
    "rolling_mean_extended",
    "spline_resample",
    "plot",
    "SimulationError",
    "InvalidType",
    "MultipleTypesError",
    "MissingParameter",
    "InvalidArgument",
]
