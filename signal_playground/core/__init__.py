"""
Core module: entropy estimation and sampling/reconstruction.
"""

from .entropy_estimator import (
    DerivationStep,
    DetailedExplanation,
    EntropyEstimator,
    EntropyResult,
    estimate_entropy,
    format_formula,
)
from .exceptions import InvalidBinningError, InvalidRateError, PlaygroundError
from .sampling_simulator import (
    Sample,
    SamplingClassification,
    SamplingSimulator,
    SamplingStatus,
    SimulationResult,
    reconstruction_error,
)

__all__ = [
    'DerivationStep', 'DetailedExplanation', 'EntropyEstimator', 'EntropyResult',
    'estimate_entropy', 'format_formula',
    'InvalidBinningError', 'InvalidRateError', 'PlaygroundError',
    'Sample', 'SamplingClassification', 'SamplingSimulator', 'SamplingStatus',
    'SimulationResult', 'reconstruction_error',
]
