# bettificator/utils/__init__.py
"""
Utils module - logging helpers
"""

from .logger import configure_logging, get_logger, RunLogger

__all__ = [
    'configure_logging',
    'get_logger',
    'RunLogger',
]
