# tests/test_normalize.py

import random
from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from leaptime import CalendarValue
from leaptime.engines import normalize
from leaptime.engines.normalize import PIPELINE


def _dt(v: CalendarValue) -> datetime:
    return datetime(v.year, v.month, v.day, v.hour, v.minute, v.second)


def _cv(dt: datetime) -> CalendarValue:
    return CalendarValue(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)


def test_pipeline_order():
    assert [s.__name__ for s in PIPELINE] == [
        "fix_month", "fix_day", "fix_hour", "fix_minute", "fix_second", "fix_fraction",
    ]


def test_scenario_a_no_leap_in_window(system1900):
    """Epoch 1900; 2012-03-05 14:30:00 plus 200 seconds."""
    t = CalendarValue(2012, 3, 5, 14, 30, 0, 0.0).shifted(seconds=200)
    assert not system1900.is_valid(t)
    assert system1900.adjust(t) == CalendarValue(2012, 3, 5, 14, 33, 20, 0.0)


def test_scenario_b_steps_through_leap_second(system1900):
    t = CalendarValue(2016, 12, 31, 23, 59, 59)
    # second 60 exists in this minute
    assert system1900.adjust(t.shifted(seconds=1)) == CalendarValue(2016, 12, 31, 23, 59, 60)
    assert system1900.adjust(t.shifted(seconds=2)) == CalendarValue(2017, 1, 1, 0, 0, 0)
    assert system1900.adjust(t.shifted(seconds=3)) == CalendarValue(2017, 1, 1, 0, 0, 1)


def test_scenario_b_backward(system1900):
    t = CalendarValue(2017, 1, 1, 0, 0, 0)
    assert system1900.adjust(t.shifted(seconds=-1)) == CalendarValue(2016, 12, 31, 23, 59, 60)
    assert system1900.adjust(t.shifted(seconds=-2)) == CalendarValue(2016, 12, 31, 23, 59, 59)
    t = CalendarValue(2017, 1, 1, 0, 0, 10)
    assert system1900.adjust(t.shifted(seconds=-20)) == CalendarValue(2016, 12, 31, 23, 59, 51)


def test_large_jump_across_leap_second(system1900):
    t = CalendarValue(2016, 12, 31, 23, 58, 0).shifted(seconds=180)
    assert system1900.adjust(t) == CalendarValue(2017, 1, 1, 0, 0, 59)


def test_second_60_outside_leap_minute_rolls_over(system1900):
    t = CalendarValue(2016, 12, 30, 23, 59, 60)
    assert not system1900.is_valid(t)
    assert system1900.adjust(t) == CalendarValue(2016, 12, 31, 0, 0, 0)


def test_leap_day_boundary(system1900):
    assert system1900.is_valid(CalendarValue(2020, 2, 29))
    bad = CalendarValue(2019, 2, 29)
    assert not system1900.is_valid(bad)
    assert system1900.adjust(bad) == CalendarValue(2019, 3, 1)


def test_day_back_into_leap_day(system1900):
    t = CalendarValue(2020, 3, 1).shifted(days=-1)
    assert system1900.adjust(t) == CalendarValue(2020, 2, 29)


def test_month_carry(system1900):
    assert system1900.adjust(CalendarValue(2019, 13, 1)) == CalendarValue(2020, 1, 1)
    assert system1900.adjust(CalendarValue(2019, 0, 1)) == CalendarValue(2018, 12, 1)
    assert system1900.adjust(CalendarValue(2019, -23, 15)) == CalendarValue(2017, 1, 15)
    # month carry may leave the day out of range for the new month
    assert system1900.adjust(CalendarValue(2019, 14, 30)) == CalendarValue(2020, 3, 1)


def test_fraction_carry(system1900):
    t = CalendarValue(2016, 12, 31, 23, 59, 59, 0.5).shifted(fraction=1.0)
    assert system1900.adjust(t) == CalendarValue(2016, 12, 31, 23, 59, 60, 0.5)
    t = CalendarValue(2017, 1, 1, 0, 0, 0, 0.25).shifted(fraction=-1.0)
    assert system1900.adjust(t) == CalendarValue(2016, 12, 31, 23, 59, 60, 0.25)
    t = CalendarValue(2012, 3, 5, 14, 30, 0, 0.0).shifted(fraction=-2.5)
    assert system1900.adjust(t) == CalendarValue(2012, 3, 5, 14, 29, 57, 0.5)


def test_fraction_rounding_to_one_is_carried(system1900):
    t = replace(CalendarValue(2012, 3, 5, 14, 30, 0), fraction=-1e-20)
    out = system1900.adjust(t)
    assert system1900.is_valid(out)
    assert out == CalendarValue(2012, 3, 5, 14, 30, 0, 0.0)


def test_valid_value_is_untouched(system1900):
    t = CalendarValue(2016, 12, 31, 23, 59, 60, 0.75)
    assert system1900.adjust(t) is t


def test_stages_are_noops_in_range(system1900):
    t = CalendarValue(2012, 3, 5, 14, 30, 0, 0.5)
    for stage in PIPELINE:
        assert stage(system1900, t) is t


def test_coarse_day_then_exact_day(system1900):
    """The coarse step alone drifts by the leap days it walks through; the exact step removes them."""
    start = CalendarValue(2000, 1, 1)
    # 3652 days later is 2009-12-31; 2000, 2004 and 2008 each add a Feb 29
    t = start.shifted(days=3652)
    coarse = normalize.coarse_day(system1900, t)
    assert (coarse.year, coarse.month, coarse.day) == (2010, 1, 3)
    exact = normalize.exact_day(system1900, start, coarse)
    assert exact == _cv(_dt(start) + timedelta(days=3652))


@pytest.mark.parametrize("field,scale", [("days", 86400), ("hours", 3600), ("minutes", 60), ("seconds", 1)])
def test_random_shifts_match_datetime_without_leaps(field, scale):
    """With no leap seconds tabulated, adjust() must agree with datetime arithmetic."""
    import leaptime
    system = leaptime.initialize_from_offsets(1900, [])
    random.seed(42)
    for _ in range(1500):
        base = datetime(1900, 1, 1) + timedelta(seconds=random.randint(0, 200 * 365 * 86400))
        n = random.randint(-20000, 20000) * (random.choice([1, 1000]) if field != "days" else 1)
        shift = timedelta(seconds=n * scale)
        # shifts landing before the epoch would also leave datetime's range
        if shift < datetime(1900, 1, 1) - base:
            continue
        expected = base + shift
        got = system.adjust(_cv(base).shifted(**{field: n}))
        assert got == _cv(expected), (base, field, n)


def test_random_month_shifts():
    import leaptime
    system = leaptime.initialize_from_offsets(1900, [])
    random.seed(7)
    for _ in range(1000):
        y, m = random.randint(1950, 2050), random.randint(1, 12)
        dm = random.randint(-500, 500)
        got = system.adjust(CalendarValue(y, m, 1).shifted(months=dm))
        idx = (y * 12 + (m - 1)) + dm
        assert (got.year, got.month, got.day) == (idx // 12, idx % 12 + 1, 1)


def test_idempotence_on_wild_fields(system1900):
    random.seed(1234)
    for _ in range(500):
        t = CalendarValue(
            random.randint(1950, 2050),
            random.randint(-40, 40),
            random.randint(-1000, 1000),
            random.randint(-100, 100),
            random.randint(-5000, 5000),
            random.randint(-10 ** 6, 10 ** 6),
            random.uniform(-5.0, 5.0),
        )
        once = system1900.adjust(t)
        assert system1900.is_valid(once), t
        assert system1900.adjust(once) == once


def test_out_of_range_year_is_left_alone(system1900):
    t = CalendarValue(1850, 6, 1)
    assert not system1900.is_valid(t)
    assert system1900.adjust(t) == t
    assert system1900.adjust(system1900.adjust(t)) == t
