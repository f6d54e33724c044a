"""
Numeric helpers shared by the entropy and sampling components.
"""

import math
from typing import Any, Sequence, Union

import numpy as np

ArrayLike = Union[float, Sequence[float], np.ndarray]


def sinc(x: ArrayLike) -> Union[float, np.ndarray]:
    """
    Normalized sinc: sin(pi*x) / (pi*x), with sinc(0) = 1.

    Scalars return a Python float, arrays return an ndarray.
    """
    result = np.sinc(np.asarray(x, dtype=float))
    if np.ndim(result) == 0:
        return float(result)
    return result


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into [lower, upper]."""
    return max(lower, min(upper, value))


def signal_values(signal: Any) -> np.ndarray:
    """
    Extract the value column of a signal as a float array.

    Accepts a sequence of points exposing ``.value`` (e.g. SignalPoint) or a
    plain sequence / ndarray of numbers.
    """
    if isinstance(signal, np.ndarray):
        return signal.astype(float, copy=False).ravel()

    items = list(signal)
    if not items:
        return np.empty(0, dtype=float)
    if hasattr(items[0], 'value'):
        return np.fromiter((point.value for point in items), dtype=float, count=len(items))
    return np.asarray(items, dtype=float).ravel()


def evenly_spaced(start: float, end: float, num_points: int) -> np.ndarray:
    """
    ``num_points`` evenly spaced values covering [start, end] inclusive.

    Raises:
        ValueError: if fewer than two points are requested
    """
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}")
    return np.linspace(start, end, num_points)


def sample_grid(start: float, end: float, period: float) -> np.ndarray:
    """
    Time grid start + k*period for every k with t <= end + period/2.

    Grid points are computed by multiplication rather than repeated addition
    so the final point does not drift. ``period`` must already be validated
    as positive.
    """
    if end + period / 2 < start:
        return np.empty(0, dtype=float)
    count = int(math.floor((end + period / 2 - start) / period)) + 1
    grid = start + np.arange(count, dtype=float) * period
    # floor() can overshoot by one on boundary rounding
    return grid[grid <= end + period / 2]
