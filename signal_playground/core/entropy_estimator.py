"""
Histogram-based Shannon entropy estimator for finite signals.

The entropy rate of a stochastic process is defined over the N-dimensional
joint density p(x_1, ..., x_N). This estimator approximates it with the 1-D
marginal histogram of the sample values, and returns a step-by-step
derivation trace alongside the numeric result for display.
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .exceptions import InvalidBinningError
from .numeric import signal_values
from ..config.settings import Settings
from ..utils.logger import SystemLogger


@dataclass(frozen=True)
class DetailedExplanation:
    """Long-form prose for one derivation step."""
    title: str
    substeps: List[str]
    formula: Optional[str] = None


@dataclass(frozen=True)
class DerivationStep:
    """One entry of the derivation trace."""
    step: str
    value: float
    description: str
    detailed_explanation: Optional[DetailedExplanation] = None


@dataclass
class EntropyResult:
    """Entropy estimate with its distribution and derivation trace."""
    entropy: float
    probabilities: List[float] = field(default_factory=list)
    steps: List[DerivationStep] = field(default_factory=list)
    counts: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def steps_frame(self) -> pd.DataFrame:
        """
        Derivation trace as a DataFrame (one row per step).

        Returns:
            DataFrame with columns step, value, description, title, formula
        """
        rows = []
        for item in self.steps:
            details = item.detailed_explanation
            rows.append({
                'step': item.step,
                'value': item.value,
                'description': item.description,
                'title': details.title if details else None,
                'formula': details.formula if details else None
            })
        return pd.DataFrame(rows, columns=['step', 'value', 'description', 'title', 'formula'])


def _validate_binning(num_bins: int, value_range: Sequence[float]) -> Tuple[float, float]:
    if isinstance(num_bins, bool) or int(num_bins) != num_bins or num_bins < 1:
        raise InvalidBinningError(f"num_bins must be a positive integer, got {num_bins}")
    lo, hi = value_range
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidBinningError(f"value_range bounds must be finite, got {value_range}")
    if hi <= lo:
        raise InvalidBinningError(f"value_range must satisfy lo < hi, got {value_range}")
    return float(lo), float(hi)


def discretize(values: Any,
               num_bins: int = 20,
               value_range: Sequence[float] = (-2.0, 2.0)) -> np.ndarray:
    """
    Map each sample to a bin index in [0, num_bins - 1].

    Values outside value_range are attributed to the nearest edge bin, so
    every sample lands in exactly one bin.

    Raises:
        InvalidBinningError: on a non-positive bin count or empty range
    """
    lo, hi = _validate_binning(num_bins, value_range)
    data = signal_values(values)
    bin_width = (hi - lo) / num_bins
    indices = np.floor((data - lo) / bin_width)
    return np.clip(indices, 0, num_bins - 1).astype(int)


def histogram(values: Any,
              num_bins: int = 20,
              value_range: Sequence[float] = (-2.0, 2.0)) -> np.ndarray:
    """Bin counts of ``values``; the counts always sum to len(values)."""
    bins = discretize(values, num_bins, value_range)
    return np.bincount(bins, minlength=int(num_bins))


def format_formula(n: int, entropy: float) -> str:
    """LaTeX headline formula for an N-sample entropy estimate."""
    return f"H_{n} = E\\{{-\\log_2[p(x_1, x_2, \\ldots, x_{n})]\\}} = {entropy:.4f}"


class EntropyEstimator:
    """
    Shannon entropy of a finite signal via histogram discretization.

    Stateless apart from its configuration; each call builds and returns its
    own result.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the EntropyEstimator.

        Args:
            settings: Configuration settings (uses defaults if None)
        """
        self.settings = settings or Settings()
        self.logger = SystemLogger()
        self.logger.configure(log_dir=self.settings.logs_dir, level=self.settings.log_level)
        self.logger.debug(
            "EntropyEstimator initialized",
            {"num_bins": self.settings.num_bins, "value_range": list(self.settings.value_range)}
        )

    def estimate_entropy(self,
                         signal: Any,
                         num_bins: Optional[int] = None,
                         value_range: Optional[Sequence[float]] = None) -> EntropyResult:
        """
        Estimate H = -sum(p_i * log2(p_i)) over the histogram of ``signal``.

        An empty signal is a defined degenerate case and yields entropy 0 with
        empty probabilities and steps.

        Args:
            signal: Sequence of SignalPoint, sequence of floats, or ndarray
            num_bins: Number of histogram bins (settings default if None)
            value_range: (lo, hi) interval covered by the bins

        Returns:
            EntropyResult with entropy, per-bin probabilities and trace

        Raises:
            InvalidBinningError: on a non-positive bin count or empty range
        """
        num_bins = self.settings.num_bins if num_bins is None else num_bins
        value_range = self.settings.value_range if value_range is None else value_range

        try:
            _validate_binning(num_bins, value_range)
        except InvalidBinningError as e:
            self.logger.error(
                "Rejected entropy configuration",
                exception=e,
                context={"num_bins": num_bins, "value_range": list(value_range)}
            )
            raise

        values = signal_values(signal)
        n = len(values)
        if n == 0:
            return EntropyResult(entropy=0.0)
        if not np.all(np.isfinite(values)):
            raise ValueError("signal contains NaN or infinite values")

        counts = histogram(values, num_bins, value_range)
        probabilities = counts / n

        # 0 * log2(0) := 0, so empty bins are skipped
        occupied = probabilities[probabilities > 0]
        contributions = -occupied * np.log2(occupied)
        entropy = max(0.0, float(np.sum(contributions)))

        steps = self._derivation_steps(n, int(occupied.size), num_bins, entropy)

        self.logger.debug(
            "Entropy estimate computed",
            {"n": n, "num_bins": num_bins, "occupied_bins": int(occupied.size), "entropy": entropy}
        )

        return EntropyResult(
            entropy=entropy,
            probabilities=probabilities.tolist(),
            steps=steps,
            counts=counts.tolist()
        )

    def _derivation_steps(self,
                          n: int,
                          occupied_bins: int,
                          num_bins: int,
                          entropy: float) -> List[DerivationStep]:
        rounded = round(entropy, 4)
        return [
            DerivationStep(
                step='1',
                value=float(n),
                description=f"Signal length N = {n} samples",
                detailed_explanation=DetailedExplanation(
                    title="Understanding Signal Length",
                    substeps=[
                        "A stochastic process is represented as a sequence of N random variable realizations",
                        f"In this case, we have {n} samples: x₁, x₂, ..., x_{n}",
                        "Each sample x_i represents a measurement at time index i",
                        "The length N determines the dimensionality of the joint probability distribution",
                        "Longer signals contain more information, potentially increasing entropy"
                    ],
                    formula=f"\\mathbf{{x}} = x_1, x_2, \\ldots, x_{n}"
                )
            ),
            DerivationStep(
                step='2',
                value=float(occupied_bins),
                description="Discretize signal into bins and count occurrences",
                detailed_explanation=DetailedExplanation(
                    title="Discretization Process",
                    substeps=[
                        "Computing the full N-dimensional joint PDF is expensive, so the marginal "
                        "distribution of the values is used instead",
                        f"The signal value range is divided into {num_bins} equal-width bins",
                        "Each signal value is assigned to a bin based on its magnitude; values outside "
                        "the range fall into the nearest edge bin",
                        "Counting the samples in each bin gives a histogram approximation of the distribution",
                        f"Currently, {occupied_bins} bins contain samples (non-zero probability)",
                        "The probability of each bin is p_i = (number of samples in bin) / (total samples)"
                    ],
                    formula="p_i = \\frac{\\text{count in bin } i}{N}"
                )
            ),
            DerivationStep(
                step='3',
                value=rounded,
                description="Calculate H_N = -Σ p_i · log₂(p_i) for each bin",
                detailed_explanation=DetailedExplanation(
                    title="Shannon Entropy Calculation",
                    substeps=[
                        "For each bin i with probability p_i > 0, the information content is -log₂(p_i)",
                        "Less probable values carry more information (surprise effect)",
                        "The entropy contribution from bin i is -p_i · log₂(p_i); empty bins contribute nothing",
                        "Summing all contributions gives the total entropy",
                        f"H_N = -Σ_{{i=1}}^{{{num_bins}}} p_i · log₂(p_i)",
                        "The result is the average information content (in bits) per sample"
                    ],
                    formula="H_N = -\\sum_{i=1}^{M} p_i \\log_2(p_i)"
                )
            ),
            DerivationStep(
                step='4',
                value=rounded,
                description=f"Final entropy H_N = {entropy:.4f} bits",
                detailed_explanation=DetailedExplanation(
                    title="Interpreting the Result",
                    substeps=[
                        f"The final entropy value is H_N = {entropy:.4f} bits",
                        "Higher entropy means more uncertainty and less predictability",
                        "Lower entropy indicates more regular, predictable patterns",
                        "Adding noise to the signal typically increases entropy",
                        f"The upper bound for {num_bins} bins is log₂({num_bins}) = {math.log2(num_bins):.4f} bits",
                        "The theoretical formula uses the full joint PDF; this histogram approximation "
                        "gives a practical estimate"
                    ],
                    formula=f"H_N = {entropy:.4f} \\text{{ bits}}"
                )
            )
        ]


_default_estimator: Optional[EntropyEstimator] = None


def estimate_entropy(signal: Any,
                     num_bins: int = 20,
                     value_range: Sequence[float] = (-2.0, 2.0)) -> EntropyResult:
    """Module-level shortcut for EntropyEstimator().estimate_entropy()."""
    global _default_estimator
    if _default_estimator is None:
        _default_estimator = EntropyEstimator()
    return _default_estimator.estimate_entropy(signal, num_bins, value_range)
