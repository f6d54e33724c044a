"""
SystemLogger: contextual logging for the signal playground engine.

Wraps the standard ``logging`` module with JSON-formatted context blocks,
exception capture and lightweight operation timing for batch work such as
sampling-rate sweeps.
"""

import logging
import json
import time
import traceback
from pathlib import Path
from typing import Optional, Dict, Any, Union
from enum import Enum


class LogLevel(Enum):
    """Enumeration of available log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SystemLogger:
    """
    Singleton logger with contextual information support.

    Console output is always attached. A file handler is attached only when
    a log directory is given, so importing the engine never touches disk
    unless asked to.
    """

    _instance: Optional['SystemLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs) -> 'SystemLogger':
        """Singleton pattern to ensure single logger instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self,
                 log_dir: Optional[Union[str, Path]] = None,
                 log_file: str = "signal_playground.log",
                 level: Union[str, LogLevel] = LogLevel.INFO):
        """
        Initialize the SystemLogger.

        Args:
            log_dir: Directory for log files (console only if None)
            log_file: Name of the log file
            level: Console log level
        """
        if SystemLogger._initialized:
            return

        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.log_file = self.log_dir / log_file if self.log_dir is not None else None

        self.logger = logging.getLogger("signal_playground")
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(self._resolve_level(level))
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%H:%M:%S'
        ))
        self.logger.addHandler(console_handler)

        if self.log_file is not None:
            self._attach_file_handler()

        SystemLogger._initialized = True

        self.debug("SystemLogger initialized", {
            "log_file": str(self.log_file) if self.log_file else None
        })

    def _attach_file_handler(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(self.log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(module)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        self.logger.addHandler(file_handler)

    def configure(self,
                  log_dir: Optional[Union[str, Path]] = None,
                  log_file: str = "signal_playground.log",
                  level: Optional[Union[str, LogLevel]] = None) -> None:
        """
        Reconfigure the shared logger after construction.

        Args:
            log_dir: Directory for log files (leaves file logging unchanged if None)
            log_file: Name of the log file
            level: Console log level (unchanged if None)
        """
        if level is not None:
            self.set_level(level)

        if log_dir is None:
            return

        target = Path(log_dir) / log_file
        if target == self.log_file and any(
                isinstance(h, logging.FileHandler) for h in self.logger.handlers):
            return

        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler):
                self.logger.removeHandler(handler)
                handler.close()

        self.log_dir = Path(log_dir)
        self.log_file = target
        self._attach_file_handler()
        self.info("File logging enabled", {"log_file": str(self.log_file)})

    @staticmethod
    def _resolve_level(level: Union[str, LogLevel]) -> int:
        name = level.value if isinstance(level, LogLevel) else str(level).upper()
        resolved = logging.getLevelName(name)
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved

    def set_level(self, level: Union[str, LogLevel]) -> None:
        """
        Change the console handler level at runtime.

        Args:
            level: New log level name or LogLevel member
        """
        resolved = self._resolve_level(level)
        for handler in self.logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(resolved)

    def _format_context(self, context: Optional[Dict[str, Any]]) -> str:
        """
        Format context dictionary for logging.

        Args:
            context: Dictionary of contextual information

        Returns:
            Formatted context string
        """
        if not context:
            return ""

        try:
            formatted = json.dumps(context, indent=2, default=str)
            return f"\nContext:\n{formatted}"
        except (TypeError, ValueError):
            return f"\nContext: {str(context)}"

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with optional context."""
        self.logger.debug(f"{message}{self._format_context(context)}")

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with optional context."""
        self.logger.info(f"{message}{self._format_context(context)}")

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with optional context."""
        self.logger.warning(f"{message}{self._format_context(context)}")

    def error(self,
              message: str,
              exception: Optional[Exception] = None,
              context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log error message with optional exception and context.

        Args:
            message: Error message
            exception: Optional exception object
            context: Optional contextual information
        """
        details: Dict[str, Any] = {}

        if exception:
            details["exception_type"] = type(exception).__name__
            details["exception_message"] = str(exception)
            details["traceback"] = traceback.format_exc()

        if context:
            details.update(context)

        self.logger.error(f"{message}{self._format_context(details)}")

    def log_performance(self,
                        operation: str,
                        duration_ms: float,
                        metadata: Optional[Dict[str, Any]] = None) -> None:
        """
        Log performance metrics for operations.

        Args:
            operation: Name of the operation
            duration_ms: Duration in milliseconds
            metadata: Additional performance metadata
        """
        perf_context = {
            "operation": operation,
            "duration_ms": round(duration_ms, 2),
            "duration_seconds": round(duration_ms / 1000, 3)
        }

        if metadata:
            perf_context.update(metadata)

        self.info(f"Performance: {operation}", perf_context)

    def start_operation(self, operation: str) -> float:
        """
        Log the start of an operation and return timestamp.

        Args:
            operation: Name of the operation

        Returns:
            Start timestamp
        """
        start_time = time.perf_counter()
        self.debug(f"Starting operation: {operation}")
        return start_time

    def end_operation(self,
                      operation: str,
                      start_time: float,
                      metadata: Optional[Dict[str, Any]] = None) -> float:
        """
        Log the end of an operation with duration.

        Args:
            operation: Name of the operation
            start_time: Start timestamp from start_operation()
            metadata: Additional performance metadata

        Returns:
            Duration in milliseconds
        """
        duration_ms = (time.perf_counter() - start_time) * 1000
        self.log_performance(operation, duration_ms, metadata)
        return duration_ms


# Global logger instance
logger = SystemLogger()
