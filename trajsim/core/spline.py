"""
Spline resampling of a sampled curve onto an even grid.
"""

from typing import Tuple

import numpy as np
from scipy.interpolate import CubicSpline

from trajsim.validation.arguments import InvalidArgument, check_count


def spline_resample(x, y, n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Resample (x, y) at n evenly spaced points with a cubic spline.

    Samples are sorted by x and y-values sharing an x are averaged before
    fitting, so unsorted input and ties are accepted.

    Args:
        x: Sample positions
        y: Sample values, same length as x
        n: Number of output points (> 0)

    Returns:
        (xs, ys): xs spans [min(x), max(x)] inclusive, ys = spline(xs)

    Raises:
        InvalidArgument: length mismatch, non-finite input, or fewer than two
            distinct x-values
    """
    n = check_count('n', n)
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()

    if len(x) != len(y):
        raise InvalidArgument(f"x and y must have the same length, got {len(x)} and {len(y)}")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise InvalidArgument("x and y must be finite")

    knots, inverse = np.unique(x, return_inverse=True)
    if len(knots) < 2:
        raise InvalidArgument("spline_resample needs at least two distinct x-values")

    # Mean of y per distinct x
    sums = np.bincount(inverse, weights=y)
    counts = np.bincount(inverse)
    values = sums / counts

    spline = CubicSpline(knots, values)
    xs = np.linspace(knots[0], knots[-1], n)
    return xs, spline(xs)
