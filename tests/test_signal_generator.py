"""
Tests for the synthetic signal generator feeding the entropy exercise.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from signal_playground.preprocessing.signal_generator import (
    SignalGenerator,
    SignalPoint,
    generate_signal,
)


class TestGenerateSignal:

    def test_zero_length(self):
        assert generate_signal(0) == []

    def test_indices_are_one_based_and_ordered(self):
        signal = generate_signal(12, rng=np.random.default_rng(0))
        assert [p.index for p in signal] == list(range(1, 13))
        assert all(isinstance(p, SignalPoint) for p in signal)

    def test_values_within_display_range(self):
        signal = generate_signal(200, noise_variance=25.0, rng=np.random.default_rng(1))
        values = [p.value for p in signal]
        assert min(values) >= -2.0
        assert max(values) <= 2.0
        # large noise must hit the clamp
        assert -2.0 in values and 2.0 in values

    def test_seeded_generator_is_reproducible(self):
        first = generate_signal(30, rng=np.random.default_rng(42))
        second = generate_signal(30, rng=np.random.default_rng(42))
        assert first == second

    def test_zero_noise_is_pure_sine(self):
        n = 16
        signal = generate_signal(n, noise_variance=0.0, rng=np.random.default_rng(0))
        expected = 0.5 * np.sin(np.arange(1, n + 1) / n * 2 * np.pi)
        np.testing.assert_allclose([p.value for p in signal], expected)

    def test_noise_bounded_by_sqrt_variance(self):
        n = 100
        signal = generate_signal(n, noise_variance=0.04, rng=np.random.default_rng(9))
        base = 0.5 * np.sin(np.arange(1, n + 1) / n * 2 * np.pi)
        deviation = np.abs(np.array([p.value for p in signal]) - base)
        assert deviation.max() <= 0.2 + 1e-12

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError):
            generate_signal(-1)

    def test_negative_variance_rejected(self):
        with pytest.raises(ValueError):
            generate_signal(5, noise_variance=-0.1)

    def test_clamped_values_are_float_bounds(self):
        generator = SignalGenerator(rng=np.random.default_rng(2))
        signal = generator.generate(100, noise_variance=100.0, value_range=(-1, 1))
        clamped = [p.value for p in signal if abs(p.value) == 1]
        assert clamped
        assert all(isinstance(v, float) for v in clamped)

    def test_custom_value_range(self):
        generator = SignalGenerator(rng=np.random.default_rng(4))
        signal = generator.generate(50, noise_variance=4.0, value_range=(-1.0, 1.0))
        assert all(-1.0 <= p.value <= 1.0 for p in signal)
