"""
Tests for configuration and logging setup.
"""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from signal_playground.config.settings import Settings, SignalConfig, default_settings
from signal_playground.core.entropy_estimator import EntropyEstimator
from signal_playground.core.exceptions import InvalidBinningError, InvalidRateError
from signal_playground.core.sampling_simulator import SamplingSimulator
from signal_playground.preprocessing.signal_generator import SignalGenerator
from signal_playground.utils.logger import LogLevel, SystemLogger


class TestSignalConfig:

    def test_reference_constants(self):
        config = SignalConfig()
        assert (config.f1, config.f2, config.f3, config.dc) == (50.0, 100.0, 250.0, 7.0)
        assert config.f_max == 250.0
        assert config.nyquist_rate == 500.0

    def test_negative_frequency_rejected(self):
        with pytest.raises(ValueError):
            SignalConfig(f2=-1.0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            SignalConfig().f1 = 10.0


class TestSettings:

    def test_defaults(self):
        assert default_settings.num_bins == 20
        assert default_settings.value_range == (-2.0, 2.0)
        assert default_settings.window_radius == 20
        assert default_settings.nyquist_tolerance == 1.0
        assert default_settings.time_window == (0.0, 0.02)

    @pytest.mark.parametrize("kwargs", [
        {"num_bins": 0},
        {"value_range": (2.0, -2.0)},
        {"value_range": (1.0, 1.0)},
        {"noise_variance": -1.0},
        {"window_radius": 0},
        {"nyquist_tolerance": 0.0},
        {"time_window": (0.02, 0.0)},
        {"continuous_points": 1},
        {"log_level": "LOUD"},
    ])
    def test_invalid_settings_rejected(self, kwargs):
        with pytest.raises(ValueError):
            Settings(**kwargs)

    def test_to_dict(self):
        data = Settings().to_dict()
        assert data['nyquist_rate'] == 500.0
        assert data['frequencies_hz'] == [50.0, 100.0, 250.0]

    def test_str(self):
        assert "Nyquist: 500.0 Hz" in str(Settings())


class TestSystemLogger:

    def test_singleton(self):
        assert SystemLogger() is SystemLogger()

    def test_context_formatting(self):
        formatted = SystemLogger()._format_context({"fs": 500})
        assert formatted.startswith("\nContext:")
        assert '"fs": 500' in formatted

    def test_empty_context(self):
        assert SystemLogger()._format_context(None) == ""

    def test_set_level(self):
        logger = SystemLogger()
        logger.set_level(LogLevel.WARNING)
        try:
            console = [h for h in logger.logger.handlers if not isinstance(h, logging.FileHandler)]
            assert all(h.level == logging.WARNING for h in console)
        finally:
            logger.set_level("INFO")

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            SystemLogger().set_level("LOUD")

    def test_configure_same_file_twice_keeps_one_handler(self, file_logger, tmp_path):
        file_logger.configure(log_dir=tmp_path)
        file_logger.configure(log_dir=tmp_path)
        handlers = [h for h in file_logger.logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(handlers) == 1

    def test_error_includes_exception_details(self, file_logger, tmp_path):
        file_logger.configure(log_dir=tmp_path)
        try:
            raise InvalidRateError(-5)
        except InvalidRateError as e:
            file_logger.error("Rejected sampling rate", exception=e, context={"fs": -5})
        text = _log_text(file_logger, tmp_path)
        assert "ERROR" in text
        assert '"exception_type": "InvalidRateError"' in text
        assert '"fs": -5' in text

    def test_error_without_exception(self, file_logger, tmp_path):
        file_logger.configure(log_dir=tmp_path)
        file_logger.error("Plain failure")
        assert "Plain failure" in _log_text(file_logger, tmp_path)


def _log_text(logger: SystemLogger, log_dir: Path) -> str:
    for handler in logger.logger.handlers:
        handler.flush()
    return (log_dir / "signal_playground.log").read_text()


@pytest.fixture
def file_logger():
    """Shared logger, restored to console-only INFO after the test."""
    logger = SystemLogger()
    yield logger
    for handler in list(logger.logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.logger.removeHandler(handler)
            handler.close()
    logger.log_dir = None
    logger.log_file = None
    logger.set_level("INFO")


# ===================================================================
# Components apply the logging settings they are given
# ===================================================================

class TestComponentLogging:

    @pytest.mark.parametrize("component", [EntropyEstimator, SamplingSimulator, SignalGenerator])
    def test_settings_level_and_directory_applied(self, file_logger, tmp_path, component):
        component(Settings(log_level="ERROR", logs_dir=str(tmp_path)))
        console = [h for h in file_logger.logger.handlers
                   if not isinstance(h, logging.FileHandler)]
        assert all(h.level == logging.ERROR for h in console)
        assert (tmp_path / "signal_playground.log").exists()

    def test_rejected_sampling_rate_logged_as_error(self, file_logger, tmp_path):
        simulator = SamplingSimulator(Settings(logs_dir=str(tmp_path)))
        with pytest.raises(InvalidRateError):
            simulator.sample(0, 0.01, -5)
        text = _log_text(file_logger, tmp_path)
        assert "Rejected sampling rate" in text
        assert '"exception_type": "InvalidRateError"' in text

    def test_rejected_binning_logged_as_error(self, file_logger, tmp_path):
        estimator = EntropyEstimator(Settings(logs_dir=str(tmp_path)))
        with pytest.raises(InvalidBinningError):
            estimator.estimate_entropy([0.0], num_bins=0)
        text = _log_text(file_logger, tmp_path)
        assert "Rejected entropy configuration" in text
        assert '"exception_type": "InvalidBinningError"' in text
