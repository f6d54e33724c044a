"""
Upstream signal generation for the entropy exercise.
"""

from .signal_generator import SignalGenerator, SignalPoint, generate_signal

__all__ = ['SignalGenerator', 'SignalPoint', 'generate_signal']
