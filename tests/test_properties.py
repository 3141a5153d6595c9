# tests/test_properties.py

from datetime import date, timedelta

import pytest

import tibdate
from tibdate import TibetanDate
from tibdate.core.time import date_to_jdn, jdn_to_date

ENGINES = ["phugpa", "mongol", "bhutan"]


def _days(start: date, end: date):
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


@pytest.mark.parametrize("engine", ENGINES)
def test_gregorian_round_trip(engine):
    for d in _days(date(2010, 1, 1), date(2013, 12, 31)):
        t = tibdate.from_date(d, engine=engine)
        assert t.to_gregorian() == d, (engine, d, t)


@pytest.mark.parametrize("engine", ENGINES)
def test_sampled_round_trip_over_centuries(engine):
    d = date(1700, 1, 1)
    while d < date(2300, 1, 1):
        t = tibdate.from_date(d, engine=engine)
        assert t.to_gregorian() == d, (engine, d, t)
        d += timedelta(days=37)


@pytest.mark.parametrize("engine", ENGINES)
def test_tibetan_round_trip(engine):
    eng = tibdate.get_engine(engine)
    for Y in (2012, 2016, 2019):
        for rec in tibdate.months_in_year(Y, engine=engine):
            cycle, year = eng.month.cycle_from_year(Y)
            for day in range(1, 31):
                t = TibetanDate(cycle, year, rec["M"], rec["is_leap_month"], day, False, engine=engine)
                jdn = t.to_jdn()
                back = eng.from_jdn(jdn)
                if back.leap_day:
                    # first of a repeated pair: the plain label is the second day
                    back = eng.from_jdn(jdn + 1)
                if back != t:
                    # skipped label: lands on the day carrying the next label
                    assert eng.resolve(jdn)[1] == day % 30 + 1, (t, back)
                    assert eng.resolve(jdn - 1)[1] == (day - 2) % 30 + 1, (t, back)


@pytest.mark.parametrize("engine", ENGINES)
def test_leap_day_round_trip(engine):
    for d in _days(date(2012, 1, 1), date(2012, 12, 31)):
        t = tibdate.from_date(d, engine=engine)
        if t.leap_day:
            second = t.with_fields(t.cycle, t.year, t.month, t.leap_month, t.day, False)
            assert second.to_gregorian() == d + timedelta(days=1)
            assert tibdate.from_date(d + timedelta(days=1), engine=engine) == second


@pytest.mark.parametrize("engine", ENGINES)
def test_month_monotonic(engine):
    for Y in (2012, 2013):
        for rec in tibdate.months_in_year(Y, engine=engine):
            cycle, year = tibdate.get_engine(engine).month.cycle_from_year(Y)
            jdns = [
                TibetanDate(cycle, year, rec["M"], rec["is_leap_month"], day, False, engine=engine).to_jdn()
                for day in range(1, 31)
            ]
            steps = [b - a for a, b in zip(jdns, jdns[1:])]
            assert all(s in (0, 1, 2) for s in steps), steps


@pytest.mark.parametrize("engine", ENGINES)
def test_at_most_one_leap_month(engine):
    for Y in range(1950, 2050):
        leaps = [rec["M"] for rec in tibdate.months_in_year(Y, engine=engine) if rec["is_leap_month"]]
        assert len(leaps) <= 1
        n_months = len(tibdate.months_in_year(Y, engine=engine))
        assert n_months == 12 + len(leaps)


@pytest.mark.parametrize("engine", ENGINES)
def test_civil_days_cover_months_without_gaps(engine):
    eng = tibdate.get_engine(engine)
    n0 = eng.month.first_lunation(2012)
    prev_last = None
    for n in range(n0, n0 + 14):
        first, last = eng.month_bounds_n(n)
        assert 29 <= last - first + 1 <= 30
        if prev_last is not None:
            assert first == prev_last + 1
        prev_last = last


def test_jdn_helpers_agree_with_datetime():
    for d in _days(date(1999, 12, 25), date(2000, 3, 5)):
        assert jdn_to_date(date_to_jdn(d)) == d
