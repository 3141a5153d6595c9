# tests/test_calendar_phugpa.py
#
# Reference data: Janson, "Tibetan calendar mathematics", Tables 7, 8 and 9.

from datetime import date, datetime, timedelta, timezone

import pytest

import tibdate
from tibdate import TibetanDate

LHASA = timezone(timedelta(hours=6, minutes=4))

GREGORIAN_CASES = [
    ((2007, 2, 19), (17, 21, 1, False, 2, False)),
    # Table 9: New Year
    ((2000, 2, 6), (17, 14, 1, True, 1, False)),
    ((2001, 2, 24), (17, 15, 1, False, 1, False)),
    ((2002, 2, 13), (17, 16, 1, False, 1, False)),
    ((2003, 3, 3), (17, 17, 1, False, 1, False)),
    ((2004, 2, 21), (17, 18, 1, False, 1, False)),
    ((2005, 2, 9), (17, 19, 1, False, 1, False)),
    ((2006, 2, 28), (17, 20, 1, False, 1, False)),
    ((2007, 2, 18), (17, 21, 1, False, 1, False)),
    ((2008, 2, 7), (17, 22, 1, False, 1, False)),
    ((2009, 2, 25), (17, 23, 1, False, 1, False)),
    ((2010, 2, 14), (17, 24, 1, False, 1, False)),
    ((2011, 3, 5), (17, 25, 1, False, 1, False)),
    ((2012, 2, 22), (17, 26, 1, False, 1, False)),
    ((2013, 2, 11), (17, 27, 1, False, 1, False)),
    ((2014, 3, 2), (17, 28, 1, False, 1, False)),
    ((2015, 2, 19), (17, 29, 1, False, 1, False)),
    ((2016, 2, 9), (17, 30, 1, False, 1, False)),
    ((2017, 2, 27), (17, 31, 1, False, 1, False)),
    ((2018, 2, 16), (17, 32, 1, False, 1, False)),
    ((2019, 2, 5), (17, 33, 1, True, 1, False)),
    ((2020, 2, 24), (17, 34, 1, False, 1, False)),
    ((2021, 2, 12), (17, 35, 1, False, 1, False)),
    ((2022, 3, 3), (17, 36, 1, False, 1, False)),
    ((2023, 2, 21), (17, 37, 1, False, 1, False)),
    ((2024, 2, 10), (17, 38, 1, False, 1, False)),
    ((2025, 2, 28), (17, 39, 1, False, 1, False)),
    ((2026, 2, 18), (17, 40, 1, False, 1, False)),
    ((2027, 2, 7), (17, 41, 1, False, 1, False)),
    ((2028, 2, 26), (17, 42, 1, False, 1, False)),
    ((2029, 2, 14), (17, 43, 1, False, 1, False)),
    ((2030, 3, 5), (17, 44, 1, False, 1, False)),
    # Table 7: leap months
    ((2016, 5, 6), (17, 30, 3, False, 30, False)),
    ((2016, 5, 7), (17, 30, 4, True, 1, False)),
    ((2016, 6, 6), (17, 30, 4, False, 1, False)),
    ((2019, 2, 4), (17, 32, 12, False, 30, False)),
    ((2019, 2, 5), (17, 33, 1, True, 1, False)),
    ((2019, 3, 7), (17, 33, 1, False, 1, False)),
    # Table 8: repeated and skipped days
    ((2012, 2, 25), (17, 26, 1, False, 4, False)),
    ((2012, 2, 26), (17, 26, 1, False, 5, True)),
    ((2012, 2, 27), (17, 26, 1, False, 5, False)),
    ((2012, 2, 28), (17, 26, 1, False, 6, False)),
    ((2012, 3, 11), (17, 26, 1, False, 18, False)),
    ((2012, 3, 12), (17, 26, 1, False, 20, False)),
    ((2012, 12, 24), (17, 26, 11, False, 12, False)),
    ((2012, 12, 25), (17, 26, 11, False, 13, True)),
    ((2012, 12, 26), (17, 26, 11, False, 13, False)),
    ((2012, 12, 27), (17, 26, 11, False, 14, False)),
    ((2013, 1, 8), (17, 26, 11, False, 26, False)),
    ((2013, 1, 9), (17, 26, 11, False, 28, False)),
    ((2013, 1, 27), (17, 26, 12, False, 16, False)),
    ((2013, 1, 28), (17, 26, 12, False, 17, True)),
    ((2013, 1, 29), (17, 26, 12, False, 17, False)),
    ((2013, 1, 30), (17, 26, 12, False, 18, False)),
    ((2013, 2, 1), (17, 26, 12, False, 20, False)),
    ((2013, 2, 2), (17, 26, 12, False, 22, False)),
]

DATETIME_CASES = [
    (datetime(2025, 5, 16, 5, 0, tzinfo=LHASA), (17, 39, 3, False, 19, False)),
    (datetime(2007, 2, 19, 5, 0, tzinfo=LHASA), (17, 21, 1, False, 2, False)),
    (datetime(1980, 12, 3, 5, 0, tzinfo=LHASA), (16, 54, 10, False, 26, False)),
    (datetime(2017, 1, 28, 5, 0, tzinfo=LHASA), (17, 30, 12, False, 1, False)),
]


@pytest.mark.parametrize("ymd, tib", GREGORIAN_CASES)
def test_from_gregorian(ymd, tib):
    assert TibetanDate.from_gregorian(*ymd).as_tuple() == tib


@pytest.mark.parametrize("ymd, tib", GREGORIAN_CASES)
def test_to_gregorian(ymd, tib):
    assert TibetanDate(*tib).to_gregorian() == date(*ymd)


@pytest.mark.parametrize("dt, tib", DATETIME_CASES)
def test_from_datetime(dt, tib):
    assert TibetanDate.from_datetime(dt).as_tuple() == tib


@pytest.mark.parametrize("dt, tib", DATETIME_CASES)
def test_to_datetime_is_start_of_civil_day(dt, tib):
    assert TibetanDate(*tib).to_datetime() == dt


@pytest.mark.parametrize("dt, tib", DATETIME_CASES)
def test_timestamp_round_trip(dt, tib):
    ts = TibetanDate(*tib).to_timestamp()
    assert ts == dt.timestamp()
    assert TibetanDate.from_timestamp(ts).as_tuple() == tib


def test_civil_day_starts_at_5am_local():
    # 04:59 local still belongs to the previous civil day
    before = datetime(2007, 2, 19, 4, 59, tzinfo=LHASA)
    assert TibetanDate.from_datetime(before).as_tuple() == (17, 21, 1, False, 1, False)


def test_from_jd():
    # 2007-02-19 00:00 UTC is 06:04 in Lhasa
    assert tibdate.from_jd(2454150.5).as_tuple() == (17, 21, 1, False, 2, False)
    # 2007-02-18 21:36 UTC is 03:40 in Lhasa, still 2007-02-18
    assert tibdate.from_jd(2454150.4).as_tuple() == (17, 21, 1, False, 1, False)


def test_to_jdn():
    assert TibetanDate(17, 21, 1, False, 2, False).to_jdn() == 2454151


def test_gregorian_year_hint():
    t = TibetanDate(17, 21, 1, False, 2, False)
    assert t.to_gregorian(gregorian_year=2007) == date(2007, 2, 19)
    # the hint overrides the year implied by (cycle, year)
    assert 350 <= t.to_jdn(gregorian_year=2008) - t.to_jdn() <= 390


def test_skipped_label_maps_to_following_day():
    # day 19 of 2012 month 1 is skipped: it resolves to the day labelled 20
    assert TibetanDate(17, 26, 1, False, 19, False).to_gregorian() == date(2012, 3, 12)


def test_repeated_day_without_leap_flag_is_second():
    assert TibetanDate(17, 26, 1, False, 5, False).to_gregorian() == date(2012, 2, 27)
    assert TibetanDate(17, 26, 1, False, 5, True).to_gregorian() == date(2012, 2, 26)


def test_strict_mode():
    # valid leap flags pass
    assert TibetanDate(17, 26, 1, False, 5, True).to_jdn(strict=True) == TibetanDate(17, 26, 1, False, 5, False).to_jdn() - 1
    assert TibetanDate(17, 30, 4, True, 1, False).to_gregorian(strict=True) == date(2016, 5, 7)
    with pytest.raises(tibdate.InvalidLeapFlagError):
        TibetanDate(17, 21, 1, True, 2, False).to_jdn(strict=True)
    with pytest.raises(tibdate.InvalidLeapFlagError):
        TibetanDate(17, 21, 1, False, 2, True).to_jdn(strict=True)
