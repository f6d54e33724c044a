"""
Utility modules for logging.
"""

from .logger import SystemLogger, LogLevel

__all__ = ['SystemLogger', 'LogLevel']
