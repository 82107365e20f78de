from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.errors import ConfigurationError

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str, name: str = "date") -> date:
    """Parse a YYYY-MM-DD argument; anything else is a ConfigurationError."""
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ConfigurationError(f"{name} must be a calendar date in YYYY-MM-DD format, got {value!r}") from None


def date_range(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, both included; empty when start > end."""
    for offset in range(count_days(start, end)):
        yield start + timedelta(days=offset)


def count_days(start: date, end: date) -> int:
    return max(0, (end - start).days + 1)
