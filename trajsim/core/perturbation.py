"""
Random Perturbation Source
==========================

Gaussian draws used by every generator: phase shifts, amplitude noise and
stimulation lags.

A zero standard deviation returns zeros WITHOUT touching the generator, so
the noise-free batch is exactly reproducible and does not shift the stream
seen by the noisy batches that follow it.

The process-wide default generator is shared mutable state and is not
thread-safe. Threads pass their own ``rng``.
"""

from typing import Optional, Tuple, Union

import numpy as np


RandomSource = Union[None, int, np.random.Generator]
Shape = Union[int, Tuple[int, ...]]

_default_rng: np.random.Generator = np.random.default_rng()


def seed(value: Optional[int] = None) -> None:
    """Reseed the process-wide default generator."""
    global _default_rng
    _default_rng = np.random.default_rng(value)


def get_rng(rng: RandomSource = None) -> np.random.Generator:
    """
    Resolve a random source.

    Args:
        rng: None (process default), an int seed, or a Generator

    Returns:
        numpy Generator
    """
    if rng is None:
        return _default_rng
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def draw_gaussian(
    size: Shape,
    sigma: float,
    rng: RandomSource = None,
    mean: float = 0.0,
) -> np.ndarray:
    """
    Independent N(mean, sigma) draws.

    Args:
        size: Number of draws, or output shape
        sigma: Standard deviation (>= 0)
        rng: Random source
        mean: Distribution mean

    Returns:
        Array of draws; exactly ``mean`` everywhere when sigma == 0
    """
    if sigma == 0:
        return np.full(size, float(mean))
    return get_rng(rng).normal(loc=mean, scale=sigma, size=size)


def draw_lag(size: Shape, sigma: float, rng: RandomSource = None) -> np.ndarray:
    """Non-negative lags |N(0, sigma)|."""
    return np.abs(draw_gaussian(size, sigma, rng=rng))
