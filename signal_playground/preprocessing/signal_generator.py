"""
SignalGenerator: synthetic noisy signals for the entropy exercise.

Produces a one-period sine pattern with additive uniform noise, clamped to the
display range. Randomness comes only from an injectable numpy Generator so
that callers can make output reproducible.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..config.settings import Settings
from ..core.numeric import clamp
from ..utils.logger import SystemLogger


@dataclass(frozen=True)
class SignalPoint:
    """One realization x_i of the process, tagged with its 1-based index."""
    index: int
    value: float


class SignalGenerator:
    """
    Generate noisy signals whose values lie inside the display range.
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the SignalGenerator.

        Args:
            settings: Configuration settings (uses defaults if None)
            rng: Random generator (fresh unseeded generator if None)
        """
        self.settings = settings or Settings()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.logger = SystemLogger()
        self.logger.configure(log_dir=self.settings.logs_dir, level=self.settings.log_level)

    def generate(self,
                 n: int,
                 noise_variance: Optional[float] = None,
                 value_range: Optional[Sequence[float]] = None) -> List[SignalPoint]:
        """
        Generate N points of 0.5*sin(2*pi*i/N) plus uniform noise.

        The noise is uniform on [-sqrt(var), sqrt(var)] and every value is
        clamped to ``value_range`` after the noise is added.

        Args:
            n: Number of points (0 gives an empty signal)
            noise_variance: Noise scale (settings default if None)
            value_range: Clamp interval (settings default if None)

        Returns:
            List of SignalPoint with indices 1..N

        Raises:
            ValueError: on negative n or negative noise variance
        """
        noise_variance = self.settings.noise_variance if noise_variance is None else noise_variance
        lo, hi = self.settings.value_range if value_range is None else value_range
        lo, hi = float(lo), float(hi)

        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        if noise_variance < 0:
            raise ValueError(f"noise_variance must be non-negative, got {noise_variance}")
        if n == 0:
            return []

        indices = np.arange(1, n + 1)
        base = np.sin(indices / n * 2 * np.pi) * 0.5
        noise = (self.rng.random(n) - 0.5) * 2 * math.sqrt(noise_variance)
        points = [
            SignalPoint(int(i), clamp(float(v), lo, hi))
            for i, v in zip(indices, base + noise)
        ]

        self.logger.debug(
            "Signal generated",
            {"n": n, "noise_variance": noise_variance,
             "min": min(p.value for p in points), "max": max(p.value for p in points)}
        )

        return points


def generate_signal(n: int,
                    noise_variance: float = 0.5,
                    rng: Optional[np.random.Generator] = None) -> List[SignalPoint]:
    """Module-level shortcut for SignalGenerator(rng=rng).generate()."""
    return SignalGenerator(rng=rng).generate(n, noise_variance)
