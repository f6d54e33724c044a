"""
Sampling and sinc reconstruction of a fixed multi-tone reference signal.

Illustrates the Nyquist-Shannon theorem: the reference signal is sampled at a
caller-chosen rate and rebuilt with a windowed Whittaker-Shannon sum

    x(t) ~= sum_n x[n] * sinc((t - t_n) / Ts)

using only the samples nearest to t. Truncating the sum keeps each
evaluation independent of the total sample count, at the cost of larger
error near the edges of the sampled interval.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from .exceptions import InvalidRateError
from .numeric import evenly_spaced, sample_grid, sinc
from ..config.settings import Settings
from ..utils.logger import SystemLogger


@dataclass(frozen=True)
class Sample:
    """Reference signal value at one sampling instant."""
    time: float
    amplitude: float


class SamplingStatus(str, Enum):
    """Sampling rate relative to the Nyquist rate."""
    ADEQUATE = "adequate"
    AT_NYQUIST = "at-Nyquist"
    INSUFFICIENT = "insufficient"


@dataclass(frozen=True)
class SamplingClassification:
    status: SamplingStatus
    message: str


@dataclass
class SimulationResult:
    """Everything needed to draw one sampling scenario."""
    sampling_rate: float
    samples: List[Sample]
    curve: pd.DataFrame
    classification: SamplingClassification
    rms_error: float
    window_radius: int = 20
    time_window: Tuple[float, float] = field(default=(0.0, 0.02))

    def interior_error(self, margin: float = 0.25) -> float:
        """
        RMS reconstruction error excluding both edges of the time window.

        Args:
            margin: Fraction of the window dropped at each end (0 <= margin < 0.5)

        Returns:
            RMS error over the interior points
        """
        if not 0 <= margin < 0.5:
            raise ValueError(f"margin must be in [0, 0.5), got {margin}")
        start, end = self.time_window
        span = end - start
        mask = ((self.curve['time'] >= start + margin * span)
                & (self.curve['time'] <= end - margin * span))
        interior = self.curve[mask]
        return reconstruction_error(interior['original'].to_numpy(),
                                    interior['reconstructed'].to_numpy())


def _format_hz(value: float) -> str:
    return f"{value:.10g}"


def _validate_rate(value: float, name: str = "sampling rate") -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        raise InvalidRateError(value, name)
    return float(value)


def _sample_arrays(samples: Sequence[Sample]) -> Tuple[np.ndarray, np.ndarray]:
    times = np.fromiter((s.time for s in samples), dtype=float, count=len(samples))
    amplitudes = np.fromiter((s.amplitude for s in samples), dtype=float, count=len(samples))
    return times, amplitudes


def _window_bounds(center: int, count: int, window_radius: int) -> Tuple[int, int]:
    # center == count means t lies beyond the last sample
    if center >= count:
        return max(0, count - window_radius), count
    return max(0, center - window_radius), min(count, center + window_radius)


def _windowed_sum(t: float,
                  times: np.ndarray,
                  amplitudes: np.ndarray,
                  ts: float,
                  window_radius: int) -> float:
    if times.size == 0:
        return 0.0
    center = int(np.searchsorted(times, t, side='left'))
    lo, hi = _window_bounds(center, times.size, window_radius)
    weights = sinc((t - times[lo:hi]) / ts)
    return float(np.dot(amplitudes[lo:hi], weights))


def reconstruction_error(original: Sequence[float], reconstructed: Sequence[float]) -> float:
    """
    Root-mean-square difference between two equally long curves.

    Returns inf when the lengths differ and 0.0 for empty input.
    """
    original = np.asarray(original, dtype=float)
    reconstructed = np.asarray(reconstructed, dtype=float)
    if original.shape != reconstructed.shape:
        return math.inf
    if original.size == 0:
        return 0.0
    return float(np.sqrt(np.mean((original - reconstructed) ** 2)))


class SamplingSimulator:
    """
    Samples the reference signal and reconstructs it by sinc interpolation.

    All methods are pure; the simulator only holds configuration.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the SamplingSimulator.

        Args:
            settings: Configuration settings (uses defaults if None)
        """
        self.settings = settings or Settings()
        self.config = self.settings.signal
        self.logger = SystemLogger()
        self.logger.configure(log_dir=self.settings.logs_dir, level=self.settings.log_level)
        self.logger.debug(
            "SamplingSimulator initialized",
            {
                "frequencies_hz": [self.config.f1, self.config.f2, self.config.f3],
                "nyquist_rate": self.config.nyquist_rate,
                "window_radius": self.settings.window_radius
            }
        )

    @property
    def nyquist_rate(self) -> float:
        return self.config.nyquist_rate

    def evaluate_reference(self, t: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Reference signal value at time t (seconds).

        Args:
            t: Scalar time or array of times

        Returns:
            float for scalar input, ndarray otherwise
        """
        c = self.config
        t_arr = np.asarray(t, dtype=float)
        value = (np.cos(2 * np.pi * c.f1 * t_arr)
                 + np.sin(2 * np.pi * c.f2 * t_arr)
                 + np.cos(2 * np.pi * c.f3 * t_arr + np.pi / 4)
                 + c.dc)
        if np.ndim(value) == 0:
            return float(value)
        return value

    def sample_times(self, start: float, end: float, fs: float) -> np.ndarray:
        """
        Sampling instants start + k/fs up to end (plus half a period).

        Raises:
            InvalidRateError: if fs is not a positive finite number
        """
        try:
            fs = _validate_rate(fs)
        except InvalidRateError as e:
            self.logger.error(
                "Rejected sampling rate",
                exception=e,
                context={"fs": fs, "start": start, "end": end}
            )
            raise
        return sample_grid(start, end, 1.0 / fs)

    def sample(self, start: float, end: float, fs: float) -> List[Sample]:
        """
        Sample the reference signal on a uniform grid.

        The grid runs from ``start`` in steps of 1/fs and includes every point
        up to ``end + Ts/2``, so floating-point error never drops the final
        intended sample.

        Args:
            start: First sampling instant (seconds)
            end: Last intended sampling instant (seconds)
            fs: Sampling rate in Hz

        Returns:
            Ordered list of Sample

        Raises:
            InvalidRateError: if fs <= 0 or not finite
        """
        times = self.sample_times(start, end, fs)
        amplitudes = self.evaluate_reference(times)
        self.logger.debug("Reference signal sampled", {"fs": fs, "num_samples": int(times.size)})
        return [Sample(float(t), float(a)) for t, a in zip(times, amplitudes)]

    def reconstruct(self,
                    t: float,
                    samples: Sequence[Sample],
                    ts: float,
                    window_radius: Optional[int] = None) -> float:
        """
        Windowed Whittaker-Shannon interpolation at time t.

        The window is centred on the first sample with time >= t and spans
        ``window_radius`` samples on each side, clipped to the available
        samples. When t lies past the last sample, the trailing
        ``window_radius`` samples are used. An empty sample list gives 0.0.

        Args:
            t: Time at which to reconstruct (seconds)
            samples: Time-ordered samples
            ts: Sampling period (seconds)
            window_radius: Samples per side (settings default if None)

        Returns:
            Reconstructed amplitude

        Raises:
            InvalidRateError: if ts is not a positive finite number
            ValueError: if window_radius < 1
        """
        window_radius = self._check_window(ts, window_radius)
        times, amplitudes = _sample_arrays(samples)
        return _windowed_sum(t, times, amplitudes, ts, window_radius)

    def reconstruct_many(self,
                         times: Iterable[float],
                         samples: Sequence[Sample],
                         ts: float,
                         window_radius: Optional[int] = None) -> np.ndarray:
        """Reconstruct at every time in ``times``; same rule as reconstruct()."""
        window_radius = self._check_window(ts, window_radius)
        sample_times, amplitudes = _sample_arrays(samples)
        return np.array([
            _windowed_sum(float(t), sample_times, amplitudes, ts, window_radius)
            for t in times
        ], dtype=float)

    def _check_window(self, ts: float, window_radius: Optional[int]) -> int:
        _validate_rate(ts, "sampling period")
        window_radius = self.settings.window_radius if window_radius is None else window_radius
        if window_radius < 1:
            raise ValueError(f"window_radius must be at least 1, got {window_radius}")
        return int(window_radius)

    def classify_sampling_rate(self, fs: float) -> SamplingClassification:
        """
        Compare fs against the Nyquist rate.

        Rates within the tolerance (1 Hz by default) of the Nyquist rate are
        the boundary case; rates at or below ``nyquist - tolerance`` are
        insufficient, as is a NaN rate; everything else is adequate.
        """
        nyquist = self.nyquist_rate
        tolerance = self.settings.nyquist_tolerance

        if math.isnan(fs):
            return SamplingClassification(
                SamplingStatus.INSUFFICIENT,
                f"Invalid sampling rate ({fs} Hz) - no samples can be taken"
            )
        if abs(fs - nyquist) < tolerance:
            return SamplingClassification(
                SamplingStatus.AT_NYQUIST,
                f"Nyquist rate ({_format_hz(fs)} Hz = {_format_hz(nyquist)} Hz)"
            )
        if fs < nyquist:
            return SamplingClassification(
                SamplingStatus.INSUFFICIENT,
                f"Insufficient sampling ({_format_hz(fs)} Hz < {_format_hz(nyquist)} Hz) "
                f"- Aliasing occurs!"
            )
        return SamplingClassification(
            SamplingStatus.ADEQUATE,
            f"Adequate sampling ({_format_hz(fs)} Hz > {_format_hz(nyquist)} Hz)"
        )

    def continuous_time_points(self,
                               start: float,
                               end: float,
                               num_points: int = 1000) -> np.ndarray:
        """Dense, evenly spaced time axis for drawing the analog signal."""
        return evenly_spaced(start, end, num_points)

    def simulate(self,
                 fs: float,
                 start: Optional[float] = None,
                 end: Optional[float] = None,
                 num_points: Optional[int] = None,
                 window_radius: Optional[int] = None) -> SimulationResult:
        """
        Sample, reconstruct and score one sampling rate.

        Args:
            fs: Sampling rate in Hz
            start: Window start (settings time_window if None)
            end: Window end (settings time_window if None)
            num_points: Points on the continuous curve
            window_radius: Reconstruction window per side

        Returns:
            SimulationResult whose ``curve`` DataFrame has columns
            time, original, reconstructed
        """
        default_start, default_end = self.settings.time_window
        start = default_start if start is None else start
        end = default_end if end is None else end
        num_points = self.settings.continuous_points if num_points is None else num_points
        window_radius = self.settings.window_radius if window_radius is None else window_radius

        samples = self.sample(start, end, fs)
        curve_times = self.continuous_time_points(start, end, num_points)
        original = self.evaluate_reference(curve_times)
        reconstructed = self.reconstruct_many(curve_times, samples, 1.0 / fs, window_radius)

        curve = pd.DataFrame({
            'time': curve_times,
            'original': original,
            'reconstructed': reconstructed
        })
        rms_error = reconstruction_error(original, reconstructed)
        classification = self.classify_sampling_rate(fs)

        self.logger.debug(
            "Sampling simulation complete",
            {"fs": fs, "status": classification.status.value,
             "num_samples": len(samples), "rms_error": rms_error}
        )

        return SimulationResult(
            sampling_rate=float(fs),
            samples=samples,
            curve=curve,
            classification=classification,
            rms_error=rms_error,
            window_radius=int(window_radius),
            time_window=(float(start), float(end))
        )

    def sweep_sampling_rates(self,
                             rates: Iterable[float],
                             margin: float = 0.25,
                             **simulate_kwargs) -> pd.DataFrame:
        """
        Run simulate() over several rates and tabulate the outcome.

        Args:
            rates: Sampling rates in Hz
            margin: Edge fraction excluded from the interior error
            **simulate_kwargs: Forwarded to simulate()

        Returns:
            DataFrame with columns sampling_rate, status, num_samples,
            rms_error, interior_rms_error
        """
        rates = list(rates)
        start_time = self.logger.start_operation("Sampling rate sweep")

        rows = []
        for fs in tqdm(rates, desc="Sweeping sampling rates", unit="rate",
                       disable=not self.settings.show_progress):
            result = self.simulate(fs, **simulate_kwargs)
            rows.append({
                'sampling_rate': result.sampling_rate,
                'status': result.classification.status.value,
                'num_samples': len(result.samples),
                'rms_error': result.rms_error,
                'interior_rms_error': result.interior_error(margin)
            })

        self.logger.end_operation("Sampling rate sweep", start_time, {"rates": len(rates)})

        return pd.DataFrame(rows, columns=['sampling_rate', 'status', 'num_samples',
                                           'rms_error', 'interior_rms_error'])


_default_simulator: Optional[SamplingSimulator] = None


def _simulator() -> SamplingSimulator:
    global _default_simulator
    if _default_simulator is None:
        _default_simulator = SamplingSimulator()
    return _default_simulator


def evaluate_reference(t: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    return _simulator().evaluate_reference(t)


def sample(start: float, end: float, fs: float) -> List[Sample]:
    return _simulator().sample(start, end, fs)


def reconstruct(t: float, samples: Sequence[Sample], ts: float, window_radius: int = 20) -> float:
    return _simulator().reconstruct(t, samples, ts, window_radius)


def classify_sampling_rate(fs: float) -> SamplingClassification:
    return _simulator().classify_sampling_rate(fs)
