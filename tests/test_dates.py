"""Tests for the date range enumerator and date argument parsing."""

from datetime import date, timedelta

import pytest

from bettificator.core.errors import ConfigurationError
from bettificator.pipeline.dates import count_days, date_range, parse_date


class TestDateRange:
    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2020, 1, 1), date(2020, 1, 3)),
            (date(2020, 1, 5), date(2020, 1, 5)),
            (date(2019, 12, 30), date(2020, 1, 2)),
            (date(2020, 2, 27), date(2020, 3, 1)),
            (date(2009, 1, 31), date(2020, 12, 31)),
        ],
    )
    def test_inclusive_and_contiguous(self, start, end):
        days = list(date_range(start, end))
        assert len(days) == (end - start).days + 1
        assert days[0] == start
        assert days[-1] == end
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_leap_day_included(self):
        days = list(date_range(date(2020, 2, 28), date(2020, 3, 1)))
        assert date(2020, 2, 29) in days
        assert len(days) == 3

    def test_start_after_end_is_empty(self):
        assert list(date_range(date(2020, 1, 3), date(2020, 1, 1))) == []
        assert count_days(date(2020, 1, 3), date(2020, 1, 1)) == 0

    def test_restartable(self):
        """Same inputs give the same sequence every time."""
        start, end = date(2020, 1, 1), date(2020, 2, 15)
        assert list(date_range(start, end)) == list(date_range(start, end))

    def test_lazy(self):
        gen = date_range(date(2000, 1, 1), date(2100, 1, 1))
        assert next(gen) == date(2000, 1, 1)
        assert next(gen) == date(2000, 1, 2)

    def test_count_days_matches_enumeration(self):
        start, end = date(2019, 6, 1), date(2020, 6, 1)
        assert count_days(start, end) == len(list(date_range(start, end))) == 367


class TestParseDate:
    def test_valid(self):
        assert parse_date("2020-01-05") == date(2020, 1, 5)

    @pytest.mark.parametrize("value", ["2020-13-01", "2020-02-30", "01/05/2020", "", "tomorrow"])
    def test_invalid_is_configuration_error(self, value):
        with pytest.raises(ConfigurationError, match="--start-date"):
            parse_date(value, "--start-date")


class TestCalendarEdges:
    def test_last_representable_day(self):
        assert list(date_range(date(9999, 12, 30), date.max)) == [date(9999, 12, 30), date(9999, 12, 31)]

    def test_single_last_day(self):
        assert list(date_range(date.max, date.max)) == [date.max]

    def test_parse_last_day(self):
        assert parse_date("9999-12-31") == date.max
