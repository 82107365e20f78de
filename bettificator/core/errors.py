# bettificator/core/errors.py
from __future__ import annotations

from typing import Any


class BettificatorError(Exception):
    """Base class for every failure that aborts a retrieve run."""

    # partial RunOutcome, set when the error ends a run
    outcome: Any = None


class ConfigurationError(BettificatorError):
    """Bad arguments or unusable database settings, raised before any work starts."""


class ParseFailure(BettificatorError):
    """The page parser could not produce records for one unit of work."""

    def __init__(self, key: Any, message: str):
        self.key = key
        self.message = message
        super().__init__(f"parse failed for {key}: {message}")


class PersistFailure(BettificatorError):
    """The persistence sink rejected or could not perform an insert."""

    def __init__(self, table: str, message: str):
        self.table = table
        self.message = message
        super().__init__(f"insert into {table} failed: {message}")
