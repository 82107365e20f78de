# bettificator/core/__init__.py
"""
Core module - configuration, errors, source client and database sink
"""

from .config import Config
from .errors import BettificatorError, ConfigurationError, ParseFailure, PersistFailure
from .client import SofaClient
from .database import DatabaseClient

__all__ = [
    'Config',
    'BettificatorError',
    'ConfigurationError',
    'ParseFailure',
    'PersistFailure',
    'SofaClient',
    'DatabaseClient',
]
