from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from fractions import Fraction
from typing import Union

NumT = Union[int, float, Fraction]

_JD_UNIX_EPOCH = Fraction(4881175, 2)  # JD at 1970-01-01 00:00:00 UTC
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_US_PER_DAY = 86_400_000_000


def to_fraction(x: NumT) -> Fraction:
    """
    Exact conversion of a numeric input to Fraction.

    Floats go through their shortest decimal repr, so 2454150.7 becomes
    exactly 24541507/10 rather than the nearest binary double.
    """
    if isinstance(x, Fraction):
        return x
    if isinstance(x, bool):
        raise TypeError("expected a number, got bool")
    if isinstance(x, int):
        return Fraction(x, 1)
    if isinstance(x, float):
        if not math.isfinite(x):
            raise ValueError(f"expected a finite number, got {x!r}")
        return Fraction(repr(x))
    return Fraction(x)


# ============================================================
# JD <-> JDN
# ============================================================

def jd_to_jdn(jd: NumT) -> int:
    """
    Julian Date (days from noon) -> Julian Day Number of the civil day.
      JDN = floor(JD + 0.5)
    """
    return math.floor(to_fraction(jd) + Fraction(1, 2))


def jdn_to_jd(jdn: int) -> Fraction:
    """JD at midnight UTC starting the civil day JDN."""
    return Fraction(jdn, 1) - Fraction(1, 2)


# ============================================================
# Gregorian calendar date <-> JDN  (Fliegel–Van Flandern)
# ============================================================

def ymd_to_jdn(year: int, month: int, day: int) -> int:
    """Proleptic Gregorian (year, month, day) -> JDN."""
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def date_to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    return ymd_to_jdn(d.year, d.month, d.day)


def jdn_to_date(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of date_to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)


def gregorian_to_jd(year: int, month: int, day: int) -> Fraction:
    """JD at 0h UT of a proleptic Gregorian civil date (always ends in .5)."""
    return jdn_to_jd(ymd_to_jdn(year, month, day))


def jd_to_gregorian(jd: NumT) -> date:
    """Civil (UTC) date containing the instant JD."""
    return jdn_to_date(jd_to_jdn(jd))


# ============================================================
# datetime / POSIX timestamp <-> JD (UTC)
# ============================================================

def datetime_to_jd(dt: datetime) -> Fraction:
    """
    datetime -> JD (UTC), exact to the microsecond. Requires a timezone-aware datetime.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    delta = dt - _UNIX_EPOCH
    return (
        _JD_UNIX_EPOCH
        + Fraction(delta.days, 1)
        + Fraction(delta.seconds, 86400)
        + Fraction(delta.microseconds, _US_PER_DAY)
    )


def jd_to_datetime(jd: NumT) -> datetime:
    """JD (UTC) -> timezone-aware datetime in UTC, rounded to the microsecond."""
    us = round((to_fraction(jd) - _JD_UNIX_EPOCH) * _US_PER_DAY)
    return _UNIX_EPOCH + timedelta(microseconds=us)


def timestamp_to_jd(ts: NumT) -> Fraction:
    """POSIX timestamp (seconds since the Unix epoch) -> JD (UTC)."""
    return _JD_UNIX_EPOCH + to_fraction(ts) / 86400


def jd_to_timestamp(jd: NumT) -> float:
    """JD (UTC) -> POSIX timestamp."""
    return float((to_fraction(jd) - _JD_UNIX_EPOCH) * 86400)
