"""
Signal Playground
=================

Deterministic signal-analysis routines behind the information-theory
playground: histogram-based Shannon entropy of a finite signal, and
sampling / sinc reconstruction of a band-limited reference signal to
illustrate the Nyquist-Shannon theorem.
"""

from .config.settings import Settings, SignalConfig, default_settings
from .core.entropy_estimator import (
    DerivationStep,
    DetailedExplanation,
    EntropyEstimator,
    EntropyResult,
    discretize,
    estimate_entropy,
    format_formula,
    histogram,
)
from .core.exceptions import InvalidBinningError, InvalidRateError, PlaygroundError
from .core.numeric import sinc
from .core.sampling_simulator import (
    Sample,
    SamplingClassification,
    SamplingSimulator,
    SamplingStatus,
    SimulationResult,
    classify_sampling_rate,
    evaluate_reference,
    reconstruct,
    reconstruction_error,
    sample,
)
from .preprocessing.signal_generator import SignalGenerator, SignalPoint, generate_signal

__version__ = "1.0.0"
