# tests/test_leap_count.py

import random
from datetime import date

import pytest

from leaptime import CalendarValue
from leaptime.engines.leap_count import (
    days_in_month,
    is_leap_year,
    leap_days_before,
    leap_days_between,
    leap_days_between_years,
    leap_seconds_before,
    leap_seconds_between_offsets,
    seconds_between_epochs,
)


@pytest.mark.parametrize("year,expected", [
    (1900, False), (2000, True), (2019, False), (2020, True), (2100, False), (2400, True),
])
def test_is_leap_year(year, expected):
    assert is_leap_year(year) is expected


def test_days_in_month():
    assert days_in_month(2020, 2) == 29
    assert days_in_month(2019, 2) == 28
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2019, 4) == 30
    assert days_in_month(2019, 12) == 31


def test_leap_days_between_years_known():
    assert leap_days_between_years(2000, 2001) == 1
    # 1900 is divisible by 100 but not by 400
    assert leap_days_between_years(1900, 1901) == 0
    assert leap_days_between_years(1900, 2000) == 24
    assert leap_days_between_years(2001, 2000) == -1


def test_leap_days_between_years_against_datetime():
    for y0 in range(1890, 1910):
        for y1 in range(y0, y0 + 130, 7):
            span = (date(y1, 1, 1) - date(y0, 1, 1)).days
            assert leap_days_between_years(y0, y1) == span - 365 * (y1 - y0)


def test_leap_day_not_counted_before_it_is_passed():
    start = CalendarValue(2020, 1, 1)
    assert leap_days_between(start, CalendarValue(2020, 2, 29)) == 0
    assert leap_days_between(start, CalendarValue(2020, 3, 1)) == 1
    assert leap_days_between(CalendarValue(2020, 3, 1), start) == -1


def test_leap_days_between_random_dates():
    random.seed(42)
    for _ in range(2000):
        a = date.fromordinal(random.randint(date(1600, 1, 1).toordinal(), date(2400, 12, 31).toordinal()))
        b = date.fromordinal(random.randint(date(1600, 1, 1).toordinal(), date(2400, 12, 31).toordinal()))
        feb29 = sum(
            1 for y in range(min(a, b).year, max(a, b).year + 1)
            if is_leap_year(y) and min(a, b) <= date(y, 2, 29) < max(a, b)
        )
        expected = feb29 if b >= a else -feb29
        assert leap_days_between(CalendarValue(a.year, a.month, a.day), CalendarValue(b.year, b.month, b.day)) == expected


def test_leap_days_before_is_closed_form():
    assert leap_days_before(2000, 3, 1) - leap_days_before(2000, 2, 29) == 1
    assert leap_days_before(2001, 1, 1) == 2000 // 4 - 2000 // 100 + 2000 // 400


def test_seconds_between_epochs():
    assert seconds_between_epochs(1900, 1970) == 2208988800
    assert seconds_between_epochs(1900, 1972) == 2272060800
    assert seconds_between_epochs(1970, 1970) == 0


def test_leap_seconds_between_offsets_directional():
    deltas = (100, 200, 300)
    assert leap_seconds_between_offsets(deltas, 0, 1000) == 3
    assert leap_seconds_between_offsets(deltas, 1000, 0) == -3
    assert leap_seconds_between_offsets(deltas, 150, 250) == 1
    assert leap_seconds_between_offsets(deltas, 250, 150) == -1
    assert leap_seconds_between_offsets(deltas, 200, 200) == 0


def test_leap_seconds_between_offsets_inclusive_endpoints():
    deltas = (100,)
    assert leap_seconds_between_offsets(deltas, 99, 100) == 1
    assert leap_seconds_between_offsets(deltas, 100, 101) == 1
    assert leap_seconds_between_offsets(deltas, 100, 99) == -1
    assert leap_seconds_between_offsets(deltas, 101, 100) == -1
    assert leap_seconds_between_offsets(deltas, 101, 200) == 0


def test_leap_seconds_before_excludes_calendar_equal():
    leap = CalendarValue(2016, 12, 31, 23, 59, 60)
    assert leap_seconds_before([leap], CalendarValue(2016, 12, 31, 23, 59, 59, 0.9)) == 0
    assert leap_seconds_before([leap], leap) == 0
    assert leap_seconds_before([leap], CalendarValue(2016, 12, 31, 23, 59, 60, 0.5)) == 0
    assert leap_seconds_before([leap], CalendarValue(2017, 1, 1)) == 1
