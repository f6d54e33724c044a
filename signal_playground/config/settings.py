"""
Central configuration for the signal playground engine.

Dataclass-based settings with validation. The reference-signal constants live
in a frozen SignalConfig so that sampling output stays reproducible.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..utils.logger import LogLevel


@dataclass(frozen=True)
class SignalConfig:
    """
    Tones of the reference signal used by the sampling exercise.

    x(t) = cos(2*pi*f1*t) + sin(2*pi*f2*t) + cos(2*pi*f3*t + pi/4) + dc
    """

    f1: float = 50.0
    f2: float = 100.0
    f3: float = 250.0
    dc: float = 7.0

    def __post_init__(self):
        for name in ('f1', 'f2', 'f3'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite, non-negative frequency, got {value}")
        if not math.isfinite(self.dc):
            raise ValueError(f"dc must be finite, got {self.dc}")

    @property
    def f_max(self) -> float:
        """Highest component frequency in Hz."""
        return max(self.f1, self.f2, self.f3)

    @property
    def nyquist_rate(self) -> float:
        """Minimum sampling rate permitting perfect reconstruction."""
        return 2.0 * self.f_max


@dataclass
class Settings:
    """
    Engine configuration with validation.

    All parameters overridable via initialization.
    """

    num_bins: int = 20
    value_range: Tuple[float, float] = (-2.0, 2.0)
    noise_variance: float = 0.5

    signal: SignalConfig = field(default_factory=SignalConfig)
    window_radius: int = 20
    nyquist_tolerance: float = 1.0
    time_window: Tuple[float, float] = (0.0, 0.02)
    continuous_points: int = 500

    show_progress: bool = True

    log_level: str = "INFO"
    logs_dir: Optional[str] = None

    def __post_init__(self):
        """Validate settings."""
        if self.num_bins < 1:
            raise ValueError(f"num_bins must be at least 1, got {self.num_bins}")

        lo, hi = self.value_range
        if not (math.isfinite(lo) and math.isfinite(hi)) or hi <= lo:
            raise ValueError(f"value_range must satisfy lo < hi, got {self.value_range}")
        self.value_range = (float(lo), float(hi))

        if self.noise_variance < 0:
            raise ValueError(f"noise_variance must be non-negative, got {self.noise_variance}")
        if self.window_radius < 1:
            raise ValueError(f"window_radius must be at least 1, got {self.window_radius}")
        if self.nyquist_tolerance <= 0:
            raise ValueError("nyquist_tolerance must be positive")

        start, end = self.time_window
        if end <= start:
            raise ValueError(f"time_window must satisfy start < end, got {self.time_window}")
        self.time_window = (float(start), float(end))

        if self.continuous_points < 2:
            raise ValueError("continuous_points must be at least 2")

        if str(self.log_level).upper() not in {level.value for level in LogLevel}:
            raise ValueError(f"Unknown log_level: {self.log_level}")

    def to_dict(self) -> dict:
        """
        Convert settings to dictionary for logging.

        Returns:
            Dictionary representation of settings
        """
        return {
            'num_bins': self.num_bins,
            'value_range': list(self.value_range),
            'noise_variance': self.noise_variance,
            'frequencies_hz': [self.signal.f1, self.signal.f2, self.signal.f3],
            'dc': self.signal.dc,
            'nyquist_rate': self.signal.nyquist_rate,
            'window_radius': self.window_radius,
            'time_window': list(self.time_window),
            'continuous_points': self.continuous_points
        }

    def __str__(self) -> str:
        """String representation of settings."""
        return (
            f"Settings(\n"
            f"  Entropy: bins={self.num_bins}, range={self.value_range}\n"
            f"  Signal: f=({self.signal.f1}, {self.signal.f2}, {self.signal.f3}) Hz, dc={self.signal.dc}\n"
            f"  Nyquist: {self.signal.nyquist_rate} Hz (tolerance {self.nyquist_tolerance} Hz)\n"
            f"  Reconstruction: window_radius={self.window_radius}, time_window={self.time_window}\n"
            f")"
        )


# Default settings instance
default_settings = Settings()
