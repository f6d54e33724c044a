"""
Exceptions raised for invalid engine configuration.

Degenerate-but-valid inputs (empty signals, empty sample sets) never raise;
only configuration that cannot produce a meaningful result does.
"""


class PlaygroundError(Exception):
    """Base class for signal playground errors."""


class InvalidRateError(PlaygroundError, ValueError):
    """Raised when a sampling rate or period is not a positive finite number."""

    def __init__(self, rate: float, name: str = "sampling rate"):
        self.rate = rate
        super().__init__(f"{name} must be a positive finite number, got {rate}")


class InvalidBinningError(PlaygroundError, ValueError):
    """Raised when a histogram bin count or value range is unusable."""
